from __future__ import annotations

import logging

from django.http import JsonResponse

from backoffice.api import ApiView, apply_fields, full_clean, get_or_404, json_body, parse_pk
from backoffice.models import save_unique

from .models import Sport

logger = logging.getLogger(__name__)

FIELDS = {"name": "name", "description": "description", "imageUrl": "image_url"}
TEXT = tuple(FIELDS)


def sport_to_dict(sport: Sport) -> dict:
    return {
        "id": sport.pk,
        "name": sport.name,
        "slug": sport.slug,
        "description": sport.description,
        "imageUrl": sport.image_url,
        "formConfig": sport.form_config or [],
        "createdAt": sport.created_at,
        "updatedAt": sport.updated_at,
    }


def sport_summary(sport: Sport | None) -> dict | None:
    if sport is None:
        return None
    return {"id": sport.pk, "name": sport.name, "slug": sport.slug}


class SportApiView(ApiView):
    def get(self, request):
        qs = Sport.objects.all()
        params = request.GET
        raw_id = params.get("id") or params.get("_id")
        if raw_id:
            pk = parse_pk(raw_id)
            qs = qs.filter(pk=pk) if pk else qs.none()
        if params.get("name"):
            qs = qs.filter(name=params["name"])
        if params.get("slug"):
            qs = qs.filter(slug=params["slug"])
        return JsonResponse([sport_to_dict(s) for s in qs.order_by("-created_at")], safe=False)

    def post(self, request):
        data = json_body(request, text=TEXT)
        sport = Sport()
        apply_fields(sport, data, FIELDS)
        sport.set_form_config(data.get("formConfig"))
        sport.refresh_slug()
        full_clean(sport)
        save_unique(sport, conflict_message="A sport with this name already exists")
        logger.info("Created sport %s (%s) with %d form field(s)", sport.pk, sport.slug, len(sport.form_config))
        return JsonResponse({"message": "Sport created successfully", "sport": sport_to_dict(sport)}, status=201)

    def put(self, request):
        data = json_body(request, text=TEXT)
        sport = get_or_404(Sport.objects.all(), data.get("id"), "Sport")
        apply_fields(sport, {k: v for k, v in data.items() if k != "name"}, FIELDS)
        if "formConfig" in data:
            sport.set_form_config(data["formConfig"])
        if data.get("name") and data["name"] != sport.name:
            sport.name = data["name"]
            sport.refresh_slug()
        full_clean(sport)
        save_unique(sport, conflict_message="Another sport with this name already exists")
        logger.info("Updated sport %s (%s)", sport.pk, sport.slug)
        return JsonResponse({"message": "Sport updated successfully", "sport": sport_to_dict(sport)})

    def delete(self, request):
        sport = get_or_404(Sport.objects.all(), request.GET.get("id"), "Sport")
        sport_id = sport.pk
        sport.delete()
        logger.info("Deleted sport %s", sport_id)
        return JsonResponse({"message": "Sport deleted successfully"})
