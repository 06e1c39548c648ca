from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import IntegrityError, models, transaction

from .utils import generate_slug


class SlugConflict(Exception):
    """Raised when a save trips the unique slug constraint."""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.status = status


class SluggedModel(models.Model):
    """
    Base for every content record: a unique slug derived from `slug_source`
    plus created/updated timestamps.
    """
    slug_source = "name"

    slug = models.SlugField(max_length=140, unique=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def refresh_slug(self) -> str:
        self.slug = generate_slug(getattr(self, self.slug_source, ""))
        return self.slug

    def clean(self):
        super().clean()
        if not self.slug:
            self.refresh_slug()
        if not self.slug:
            raise ValidationError({self.slug_source: "Must contain at least one letter or digit."})

    def save(self, *args, **kwargs):
        if not self.slug:
            self.refresh_slug()
        super().save(*args, **kwargs)


def save_unique(obj: SluggedModel, *, conflict_message: str, status: int = 400) -> SluggedModel:
    """
    Insert/update relying on the unique constraint instead of a prior lookup,
    so two concurrent writers can't both claim a slug.
    """
    try:
        with transaction.atomic():
            obj.save()
    except IntegrityError as exc:
        raise SlugConflict(conflict_message, status=status) from exc
    return obj
