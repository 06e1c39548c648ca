"""
Shared plumbing for the JSON endpoints under /api/.

Handlers raise; `ApiView.dispatch` turns the exception into a response:
  - ApiError            -> its own status
  - SlugConflict        -> 400/409 duplicate
  - ValidationError     -> 400 with field-level messages
  - anything else       -> 500 with the raw message (logged with traceback)
"""
from __future__ import annotations

import json
import logging

from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .models import SlugConflict
from .uploads import ImageUploadForm, store_image

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.status = status


def error_response(message: str, status: int, **extra) -> JsonResponse:
    return JsonResponse({"error": message, **extra}, status=status)


def validation_response(exc: ValidationError) -> JsonResponse:
    if hasattr(exc, "error_dict"):
        fields = {
            key: [str(m) for m in ValidationError(errors).messages]
            for key, errors in exc.error_dict.items()
        }
        messages = [m for msgs in fields.values() for m in msgs]
        payload = {k: v[0] for k, v in fields.items() if k != NON_FIELD_ERRORS}
        return error_response(" ".join(messages), 400, fields=payload)
    return error_response(" ".join(exc.messages), 400)


def json_body(request, text: tuple[str, ...] = ()) -> dict:
    """Decode the JSON object body; keys listed in `text` must hold strings when present."""
    if not request.body:
        data = {}
    else:
        try:
            data = json.loads(request.body)
        except (ValueError, UnicodeDecodeError):
            raise ApiError("Invalid JSON body", 400)
        if not isinstance(data, dict):
            raise ApiError("Request body must be a JSON object", 400)
    wrong = {
        key: f"{key} must be a string"
        for key in text
        if data.get(key) is not None and not isinstance(data[key], str)
    }
    if wrong:
        raise ValidationError(wrong)
    return data


def parse_pk(value) -> int | None:
    """Database ids arrive as strings in query params and JSON alike."""
    try:
        pk = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return pk if pk > 0 else None


def require_pk(value, label: str) -> int:
    if value in (None, ""):
        raise ApiError(f"{label} ID is required", 400)
    pk = parse_pk(value)
    if pk is None:
        raise ApiError(f"{label} not found", 404)
    return pk


def get_or_404(queryset, pk, label: str):
    obj = queryset.filter(pk=require_pk(pk, label)).first()
    if obj is None:
        raise ApiError(f"{label} not found", 404)
    return obj


def related_or_400(queryset, value, label: str):
    """Resolve a reference sent in a payload, as an id or as `{"id": ...}`."""
    if isinstance(value, dict):
        value = value.get("id") or value.get("_id")
    if value in (None, ""):
        raise ApiError(f"{label} is required", 400)
    pk = parse_pk(value)
    obj = queryset.filter(pk=pk).first() if pk else None
    if obj is None:
        raise ApiError(f"{label} not found", 400)
    return obj


def apply_fields(obj, data: dict, mapping: dict[str, str]) -> list[str]:
    """Copy camelCase payload keys onto model attributes; returns touched attrs."""
    touched = []
    for key, attr in mapping.items():
        if key in data:
            setattr(obj, attr, data[key])
            touched.append(attr)
    return touched


def full_clean(obj) -> None:
    # Uniqueness is left to the database constraint (see save_unique).
    obj.full_clean(validate_unique=False, validate_constraints=False)


@method_decorator(csrf_exempt, name="dispatch")
class ApiView(View):
    http_method_names = ["get", "post", "put", "delete", "options"]

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except ApiError as exc:
            return error_response(exc.message, exc.status)
        except SlugConflict as exc:
            return error_response(str(exc), exc.status)
        except ValidationError as exc:
            return validation_response(exc)
        except Exception as exc:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            return error_response(str(exc), 500)

    def http_method_not_allowed(self, request, *args, **kwargs):
        return error_response("Method not allowed", 405)


class UploadApiView(ApiView):
    http_method_names = ["post"]

    def post(self, request):
        form = ImageUploadForm(files=request.FILES)
        if not form.is_valid():
            raise ApiError(form.errors["file"][0], 400)
        image_url = store_image(form.cleaned_data["file"])
        return JsonResponse({"imageUrl": image_url}, status=200)
