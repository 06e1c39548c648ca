# blog/views.py
from __future__ import annotations

from django.conf import settings
from django.core.paginator import Paginator
from django.shortcuts import get_object_or_404, render

from .models import Blog
from .services import published_with_tag, related_posts, search_published


def blog_list(request):
    q = request.GET.get("q", "").strip()
    page = Paginator(search_published(q), settings.CLUB_BLOGS_PER_PAGE).get_page(request.GET.get("page"))
    return render(request, "blog/blog_list.html", {"page": page, "q": q, "tag": None})


def blog_tag(request, tag: str):
    page = Paginator(published_with_tag(tag), settings.CLUB_BLOGS_PER_PAGE).get_page(request.GET.get("page"))
    return render(request, "blog/blog_list.html", {"page": page, "q": "", "tag": tag})


def blog_detail(request, slug: str):
    # Drafts are invisible on the public site
    blog = get_object_or_404(Blog, slug=slug, status=Blog.Status.PUBLISHED)
    return render(request, "blog/blog_detail.html", {"blog": blog, "related": related_posts(blog)})
