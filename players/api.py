from __future__ import annotations

import logging

from django.http import JsonResponse

from backoffice.api import ApiView, apply_fields, full_clean, get_or_404, json_body, parse_pk, related_or_400
from backoffice.models import save_unique
from sports.api import sport_summary
from sports.models import Sport

from .models import Player, Team
from .services import carry_over_stale, snapshot_additional_fields

logger = logging.getLogger(__name__)

TEAM_FIELDS = {"name": "name", "description": "description", "imageUrl": "image_url", "coach": "coach"}
TEAM_TEXT = tuple(TEAM_FIELDS)
PLAYER_FIELDS = {
    "name": "name",
    "description": "description",
    "age": "age",
    "imageUrl": "image_url",
    "contact": "contact",
}
PLAYER_TEXT = ("name", "description", "imageUrl", "contact")


def _filter_pk(qs, raw, field="pk"):
    # A malformed id matches nothing rather than erroring
    pk = parse_pk(raw)
    return qs.filter(**{field: pk}) if pk else qs.none()


def team_summary(team: Team | None) -> dict | None:
    if team is None:
        return None
    return {"id": team.pk, "name": team.name, "slug": team.slug, "coach": team.coach}


def team_to_dict(team: Team) -> dict:
    return {
        "id": team.pk,
        "name": team.name,
        "slug": team.slug,
        "description": team.description,
        "imageUrl": team.image_url,
        "coach": team.coach,
        "sport": sport_summary(team.sport),
        "createdAt": team.created_at,
        "updatedAt": team.updated_at,
    }


def player_to_dict(player: Player) -> dict:
    return {
        "id": player.pk,
        "name": player.name,
        "slug": player.slug,
        "description": player.description,
        "age": player.age,
        "imageUrl": player.image_url,
        "contact": player.contact,
        "team": team_summary(player.team),
        "sport": sport_summary(player.sport),
        "additionalFields": player.additional_fields or {},
        "createdAt": player.created_at,
        "updatedAt": player.updated_at,
    }


class TeamApiView(ApiView):
    def get(self, request):
        qs = Team.objects.select_related("sport")
        params = request.GET
        if params.get("sportId"):
            qs = _filter_pk(qs, params["sportId"], "sport_id")
        if params.get("slug"):
            qs = qs.filter(slug=params["slug"])
        raw_id = params.get("teamId") or params.get("id")
        if raw_id:
            qs = _filter_pk(qs, raw_id)
        return JsonResponse([team_to_dict(t) for t in qs.order_by("-created_at")], safe=False)

    def post(self, request):
        data = json_body(request, text=TEAM_TEXT)
        team = Team(sport=related_or_400(Sport.objects.all(), data.get("sport"), "Sport"))
        apply_fields(team, data, TEAM_FIELDS)
        team.refresh_slug()
        full_clean(team)
        save_unique(team, conflict_message="A team with this name already exists")
        logger.info("Created team %s (%s) for sport %s", team.pk, team.slug, team.sport_id)
        return JsonResponse({"message": "Team created successfully", "team": team_to_dict(team)}, status=201)

    def put(self, request):
        data = json_body(request, text=TEAM_TEXT)
        team = get_or_404(Team.objects.select_related("sport"), data.get("id"), "Team")
        apply_fields(team, {k: v for k, v in data.items() if k != "name"}, TEAM_FIELDS)
        if "sport" in data:
            team.sport = related_or_400(Sport.objects.all(), data["sport"], "Sport")
        if data.get("name") and data["name"] != team.name:
            team.name = data["name"]
            team.refresh_slug()
        full_clean(team)
        save_unique(team, conflict_message="Another team with this name already exists")
        logger.info("Updated team %s (%s)", team.pk, team.slug)
        return JsonResponse({"message": "Team updated successfully", "team": team_to_dict(team)})

    def delete(self, request):
        team = get_or_404(Team.objects.all(), request.GET.get("id"), "Team")
        team_id = team.pk
        team.delete()
        logger.info("Deleted team %s", team_id)
        return JsonResponse({"message": "Team deleted successfully"})


class PlayerApiView(ApiView):
    def get(self, request):
        qs = Player.objects.select_related("team", "sport")
        params = request.GET
        if params.get("teamId"):
            qs = _filter_pk(qs, params["teamId"], "team_id")
        raw_id = params.get("playerId") or params.get("id")
        if raw_id:
            qs = _filter_pk(qs, raw_id)
        if params.get("slug"):
            qs = qs.filter(slug=params["slug"])
        return JsonResponse([player_to_dict(p) for p in qs.order_by("-created_at")], safe=False)

    def post(self, request):
        data = json_body(request, text=PLAYER_TEXT)
        player = Player(
            team=related_or_400(Team.objects.all(), data.get("team"), "Team"),
            sport=related_or_400(Sport.objects.all(), data.get("sport"), "Sport"),
        )
        apply_fields(player, data, PLAYER_FIELDS)
        player.additional_fields = snapshot_additional_fields(player.sport, data.get("additionalFields"))
        player.refresh_slug()
        full_clean(player)
        save_unique(player, conflict_message="A player with this name already exists")
        logger.info(
            "Created player %s (%s) on team %s with %d extra field(s)",
            player.pk, player.slug, player.team_id, len(player.additional_fields),
        )
        return JsonResponse({"message": "Player created successfully", "player": player_to_dict(player)}, status=201)

    def put(self, request):
        data = json_body(request, text=PLAYER_TEXT)
        player = get_or_404(Player.objects.select_related("team", "sport"), data.get("id"), "Player")
        stored_sport_id, stored = player.sport_id, player.additional_fields

        apply_fields(player, {k: v for k, v in data.items() if k != "name"}, PLAYER_FIELDS)
        if "team" in data:
            player.team = related_or_400(Team.objects.all(), data["team"], "Team")
        if "sport" in data:
            player.sport = related_or_400(Sport.objects.all(), data["sport"], "Sport")
        if "additionalFields" in data:
            fresh = snapshot_additional_fields(player.sport, data["additionalFields"], keep_unknown=True)
            same_sport = player.sport_id == stored_sport_id
            player.additional_fields = carry_over_stale(stored if same_sport else None, player.sport, fresh)
        if data.get("name") and data["name"] != player.name:
            player.name = data["name"]
            player.refresh_slug()

        full_clean(player)
        save_unique(player, conflict_message="Another player with this name already exists")
        logger.info("Updated player %s (%s)", player.pk, player.slug)
        return JsonResponse({"message": "Player updated successfully", "player": player_to_dict(player)})

    def delete(self, request):
        player = get_or_404(Player.objects.all(), request.GET.get("id"), "Player")
        player_id = player.pk
        player.delete()
        logger.info("Deleted player %s", player_id)
        return JsonResponse({"message": "Player deleted successfully"})
