from __future__ import annotations

import logging

from django.http import JsonResponse

from backoffice.api import ApiError, ApiView, apply_fields, full_clean, get_or_404, json_body, parse_pk, related_or_400
from backoffice.models import save_unique
from backoffice.utils import generate_slug
from players.api import team_summary
from players.models import Team
from sports.api import sport_summary
from sports.models import Sport

from .models import END_BEFORE_START, Event
from .services import derive_status, event_feed, parse_when

logger = logging.getLogger(__name__)

FIELDS = {
    "name": "name",
    "description": "description",
    "imageUrl": "image_url",
    "location": "location",
}
TEXT = (*FIELDS, "slug")


def event_to_dict(event: Event) -> dict:
    return {
        "id": event.pk,
        "name": event.name,
        "slug": event.slug,
        "description": event.description,
        "imageUrl": event.image_url,
        "location": event.location,
        "startDate": event.start_date,
        "endDate": event.end_date,
        "status": event.status,
        "sport": sport_summary(event.sport),
        "teams": [team_summary(t) for t in event.teams.all()],
        "createdAt": event.created_at,
        "updatedAt": event.updated_at,
    }


def _teams(value) -> list[Team]:
    if value in (None, ""):
        return []
    if not isinstance(value, list):
        raise ApiError("teams must be a list of team ids", 400)
    return [related_or_400(Team.objects.all(), item, "Team") for item in value]


def _sport(value) -> Sport | None:
    if value in (None, ""):
        return None
    return related_or_400(Sport.objects.all(), value, "Sport")


def _check_range(event: Event) -> None:
    if event.start_date and event.end_date and event.end_date < event.start_date:
        raise ApiError(END_BEFORE_START, 400)


class EventAdminApiView(ApiView):
    def get(self, request):
        qs = Event.objects.select_related("sport").prefetch_related("teams")
        if request.GET.get("id"):
            pk = parse_pk(request.GET["id"])
            qs = qs.filter(pk=pk) if pk else qs.none()
        if request.GET.get("slug"):
            qs = qs.filter(slug=request.GET["slug"])
        return JsonResponse([event_to_dict(e) for e in qs.order_by("-created_at")], safe=False)

    def post(self, request):
        data = json_body(request, text=TEXT)
        event = Event(sport=_sport(data.get("sport")))
        apply_fields(event, data, FIELDS)
        event.start_date = parse_when(data.get("startDate"), "startDate")
        event.end_date = parse_when(data.get("endDate"), "endDate")
        _check_range(event)
        event.status = derive_status(event.start_date, event.end_date)
        event.slug = generate_slug(data.get("slug") or "") or event.refresh_slug()
        teams = _teams(data.get("teams"))

        full_clean(event)
        save_unique(event, conflict_message="An event with this name already exists", status=409)
        event.teams.set(teams)
        logger.info("Created event %s (%s), status %s", event.pk, event.slug, event.status)
        return JsonResponse({"message": "Event created successfully", "event": event_to_dict(event)}, status=201)

    def put(self, request):
        data = json_body(request, text=TEXT)
        event = get_or_404(Event.objects.select_related("sport"), data.get("id"), "Event")
        apply_fields(event, {k: v for k, v in data.items() if k != "name"}, FIELDS)
        if "startDate" in data:
            event.start_date = parse_when(data["startDate"], "startDate")
        if "endDate" in data:
            event.end_date = parse_when(data["endDate"], "endDate")
        _check_range(event)
        if "status" in data:
            event.status = data["status"]
        if "sport" in data:
            event.sport = _sport(data["sport"])
        if data.get("name") and data["name"] != event.name:
            event.name = data["name"]
            event.refresh_slug()
        if data.get("slug"):
            event.slug = generate_slug(data["slug"])
        teams = _teams(data["teams"]) if "teams" in data else None

        full_clean(event)
        save_unique(event, conflict_message="Another event with this name already exists", status=409)
        if teams is not None:
            event.teams.set(teams)
        logger.info("Updated event %s (%s)", event.pk, event.slug)
        return JsonResponse({"message": "Event updated successfully", "event": event_to_dict(event)})

    def delete(self, request):
        event = get_or_404(Event.objects.all(), request.GET.get("id"), "Event")
        event_id = event.pk
        event.delete()
        logger.info("Deleted event %s", event_id)
        return JsonResponse({"message": "Event deleted successfully"})


class EventFeedApiView(ApiView):
    http_method_names = ["get", "options"]

    def get(self, request):
        page = event_feed(request.GET)
        response = JsonResponse([event_to_dict(e) for e in page.events], safe=False)
        for header, value in page.headers().items():
            response[header] = value
        return response
