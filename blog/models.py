# blog/models.py
from __future__ import annotations

from django.db import models

from backoffice.models import SluggedModel


class Blog(SluggedModel):
    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PUBLISHED = "published", "Published"

    slug_source = "title"

    title = models.CharField(max_length=100)
    content = models.TextField()
    img = models.CharField(max_length=255, blank=True)
    tags = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.DRAFT, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["status", "created_at"], name="blog_status_created_idx")]

    def __str__(self) -> str:
        return self.title

    @property
    def is_published(self) -> bool:
        return self.status == self.Status.PUBLISHED

    def has_tag(self, tag: str) -> bool:
        wanted = (tag or "").strip().lower()
        return any(str(t).lower() == wanted for t in self.tags or [])
