from django.db.models import Count, Q
from django.shortcuts import render
from django.utils import timezone

from blog.models import Blog
from events.models import Event
from players.models import Player, Team
from sports.models import Sport

from .utils import staff_or_admin_required

RECENT_PLAYERS = 5


@staff_or_admin_required
def dashboard(request):
    now = timezone.now()
    blogs = Blog.objects.aggregate(
        total=Count("id"),
        published=Count("id", filter=Q(status=Blog.Status.PUBLISHED)),
    )

    context = {
        "now": now,
        "kpi": {
            "sports": Sport.objects.count(),
            "teams": Team.objects.count(),
            "players": Player.objects.count(),
            "events": Event.objects.count(),
            "upcoming_events": Event.objects.filter(start_date__gte=now).exclude(status=Event.Status.CANCELLED).count(),
            "blogs": blogs["total"],
            "published_blogs": blogs["published"],
        },
        "recent_players": Player.objects.select_related("team", "sport").order_by("-created_at")[:RECENT_PLAYERS],
    }
    return render(request, "backoffice/dashboard.html", context)
