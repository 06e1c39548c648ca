from django.urls import reverse

from .permissions import is_admin_like


def menu_context(request):
    """
    Inject a gated menu to templates. base.html iterates this.
    """
    user = request.user
    staff = is_admin_like(user)
    items = [
        {"label": "Blog", "url": reverse("blog:blog_list"), "name": "blog:blog_list", "visible": True},
        {"label": "Dashboard", "url": reverse("backoffice:dashboard"), "name": "backoffice:dashboard", "visible": staff},
        {"label": "Sports", "url": reverse("sports:sport_list"), "name": "sports:sport_list", "visible": staff},
        {"label": "New Player", "url": reverse("players:player_new"), "name": "players:player_new", "visible": staff},
        {"label": "Login", "url": reverse("accounts:login"), "name": "accounts:login", "visible": not user.is_authenticated},
    ]
    return {"nav_items": [i for i in items if i["visible"]]}
