from __future__ import annotations

import time

from django import forms
from django.conf import settings
from django.core.files.storage import default_storage

INVALID_TYPE = "Invalid file type. Only JPEG, PNG, and GIF are allowed."


def _max_bytes() -> int:
    return settings.CLUB_UPLOAD_MAX_BYTES


class ImageUploadForm(forms.Form):
    # Pillow sniffs the real format, so a renamed .exe won't pass as .png
    file = forms.ImageField(
        error_messages={
            "required": "No file uploaded",
            "invalid_image": INVALID_TYPE,
            "invalid_extension": INVALID_TYPE,
            "invalid": "No file uploaded",
            "missing": "No file uploaded",
            "empty": "No file uploaded",
        }
    )

    def clean_file(self):
        f = self.cleaned_data["file"]
        if getattr(f, "content_type", None) not in settings.CLUB_UPLOAD_ALLOWED_TYPES:
            raise forms.ValidationError(INVALID_TYPE)
        limit = _max_bytes()
        if f.size > limit:
            raise forms.ValidationError(f"File size must be less than {limit // (1024 * 1024)}MB")
        return f


def upload_filename(original_name: str, now_ms: int | None = None) -> str:
    """`<epoch millis>.<original extension>`; extension-less files become .bin"""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    base = (original_name or "").rsplit("/", 1)[-1]
    ext = base.rsplit(".", 1)[-1].lower() if "." in base else ""
    return f"{stamp}.{ext or 'bin'}"


def store_image(upload) -> str:
    """Write the upload under CLUB_UPLOAD_DIR and return its public URL path."""
    name = default_storage.save(
        f"{settings.CLUB_UPLOAD_DIR}/{upload_filename(upload.name)}", upload
    )
    return default_storage.url(name)


def check_image(upload):
    """Run a page's file input through the same rules as /api/upload."""
    form = ImageUploadForm(files={"file": upload})
    if not form.is_valid():
        raise forms.ValidationError(form.errors["file"][0])
    return form.cleaned_data["file"]
