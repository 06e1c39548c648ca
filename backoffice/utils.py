import re
from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.http import HttpResponseForbidden

from .permissions import is_admin_like

_NON_WORD = re.compile(r"[^\w\s-]", re.ASCII)
_SPACES = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def generate_slug(text: str) -> str:
    """
    URL-safe identifier: lower-case, ASCII word chars only, whitespace and
    hyphen runs collapsed to a single underscore. Idempotent.
    """
    slug = (text or "").lower().strip()
    slug = _NON_WORD.sub("", slug)
    slug = _SPACES.sub("_", slug)
    return _HYPHENS.sub("_", slug)


def staff_or_admin_required(view_func):
    """Allow users flagged as staff or with role=admin/staff to access backoffice."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        if is_admin_like(request.user):
            return view_func(request, *args, **kwargs)
        return HttpResponseForbidden("You do not have permission to access the backoffice.")
    return _wrapped
