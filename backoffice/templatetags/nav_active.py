from django import template
from django.urls import Resolver404, resolve

register = template.Library()


@register.simple_tag(takes_context=True)
def active(context, url_name: str, cls="active"):
    """`cls` when the current page was served by `url_name` (namespaced)."""
    request = context.get("request")
    if request is None:
        return ""
    try:
        match = resolve(request.path_info)
    except Resolver404:
        return ""
    return cls if match.view_name == url_name else ""
