from __future__ import annotations

import io
import json
import os

from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image


def send_json(client, method: str, url: str, data=None):
    body = json.dumps(data) if data is not None else ""
    return getattr(client, method)(url, data=body, content_type="application/json")


def image_bytes(fmt: str = "PNG", size=(8, 8), noise: bool = False) -> bytes:
    if noise:
        img = Image.frombytes("RGB", size, os.urandom(size[0] * size[1] * 3))
    else:
        img = Image.new("RGB", size, (200, 30, 30))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def image_upload(name: str = "photo.png", fmt: str = "PNG", content_type: str = "image/png", **kw) -> SimpleUploadedFile:
    return SimpleUploadedFile(name, image_bytes(fmt, **kw), content_type=content_type)
