from __future__ import annotations

import logging

from django.http import JsonResponse

from backoffice.api import ApiError, ApiView, apply_fields, full_clean, get_or_404, json_body
from backoffice.models import save_unique
from backoffice.utils import generate_slug

from .models import Blog
from .services import normalize_tags

logger = logging.getLogger(__name__)

FIELDS = {"title": "title", "content": "content", "img": "img", "status": "status"}
TEXT = ("title", "slug", "content", "img", "image", "status")


def blog_to_dict(blog: Blog) -> dict:
    return {
        "id": blog.pk,
        "title": blog.title,
        "slug": blog.slug,
        "content": blog.content,
        "img": blog.img,
        "tags": blog.tags or [],
        "status": blog.status,
        "createdAt": blog.created_at,
        "updatedAt": blog.updated_at,
    }


def _payload(request) -> dict:
    data = json_body(request, text=TEXT)
    if data.get("image") and not data.get("img"):
        data["img"] = data.pop("image")
    data.pop("image", None)
    if "title" in data and isinstance(data["title"], str):
        data["title"] = data["title"].strip()
    return data


class BlogApiView(ApiView):
    def get(self, request):
        raw_id = request.GET.get("id")
        if raw_id:
            blog = get_or_404(Blog.objects.all(), raw_id, "Blog")
            return JsonResponse(blog_to_dict(blog))
        qs = Blog.objects.order_by("-created_at")
        if request.GET.get("status"):
            qs = qs.filter(status=request.GET["status"])
        limit = request.GET.get("limit")
        if limit:
            if not limit.isdigit() or int(limit) < 1:
                raise ApiError("limit must be a positive integer", 400)
            qs = qs[: int(limit)]
        return JsonResponse([blog_to_dict(b) for b in qs], safe=False)

    def post(self, request):
        data = _payload(request)
        blog = Blog()
        apply_fields(blog, data, FIELDS)
        blog.tags = normalize_tags(data.get("tags"))
        blog.slug = generate_slug(data.get("slug") or "") or blog.refresh_slug()
        full_clean(blog)
        save_unique(blog, conflict_message="A blog with this title already exists")
        logger.info("Created blog %s (%s) as %s", blog.pk, blog.slug, blog.status)
        return JsonResponse({"message": "Blog created successfully", "blog": blog_to_dict(blog)}, status=201)

    def put(self, request):
        blog = get_or_404(Blog.objects.all(), request.GET.get("id"), "Blog")
        data = _payload(request)
        apply_fields(blog, data, FIELDS)
        if "tags" in data:
            blog.tags = normalize_tags(data["tags"])
        if data.get("slug"):
            blog.slug = generate_slug(data["slug"])
        full_clean(blog)
        save_unique(blog, conflict_message="Another blog with this slug already exists")
        logger.info("Updated blog %s (%s)", blog.pk, blog.slug)
        return JsonResponse({"message": "Blog updated successfully", "blog": blog_to_dict(blog)})

    def delete(self, request):
        blog = get_or_404(Blog.objects.all(), request.GET.get("id"), "Blog")
        blog_id = blog.pk
        blog.delete()
        logger.info("Deleted blog %s", blog_id)
        return JsonResponse({"message": "Blog deleted successfully"})
