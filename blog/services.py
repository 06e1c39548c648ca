# blog/services.py
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db.models import Q, QuerySet

from .models import Blog

RELATED_LIMIT = 3


def normalize_tags(raw) -> list[str]:
    """List or comma string -> trimmed tags, blanks and repeats dropped."""
    if raw in (None, ""):
        return []
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        items = raw
    else:
        raise ValidationError({"tags": "tags must be a list or a comma-separated string"})
    out: list[str] = []
    seen: set[str] = set()
    for item in items:
        tag = str(item).strip()
        if tag and tag.lower() not in seen:
            seen.add(tag.lower())
            out.append(tag)
    return out


def published() -> QuerySet:
    return Blog.objects.filter(status=Blog.Status.PUBLISHED).order_by("-created_at")


def _ids_with_tags(qs: QuerySet, match) -> list[int]:
    # Tags live in a JSON list; matching happens here so every backend agrees
    return [pk for pk, tags in qs.values_list("pk", "tags") if any(match(str(t).lower()) for t in tags or [])]


def search_published(q: str | None) -> QuerySet:
    """Published posts whose title, content or any tag contains `q` (any case)."""
    qs = published()
    q = (q or "").strip()
    if not q:
        return qs
    needle = q.lower()
    tagged = _ids_with_tags(qs, lambda tag: needle in tag)
    return qs.filter(Q(title__icontains=q) | Q(content__icontains=q) | Q(pk__in=tagged))


def published_with_tag(tag: str) -> QuerySet:
    wanted = (tag or "").strip().lower()
    qs = published()
    return qs.filter(pk__in=_ids_with_tags(qs, lambda t: t == wanted))


def related_posts(blog: Blog, limit: int = RELATED_LIMIT) -> list[Blog]:
    """Published posts sharing a tag with `blog`, topped up with the newest others."""
    others = published().exclude(pk=blog.pk)
    wanted = {str(t).lower() for t in blog.tags or []}
    picked: list[Blog] = []
    if wanted:
        ids = _ids_with_tags(others, lambda t: t in wanted)
        picked = list(others.filter(pk__in=ids)[:limit])
    if len(picked) < limit:
        picked += list(others.exclude(pk__in=[b.pk for b in picked])[: limit - len(picked)])
    return picked
