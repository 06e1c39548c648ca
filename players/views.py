from __future__ import annotations

import logging

from django.contrib import messages
from django.shortcuts import get_object_or_404, redirect, render
from django.views import View

from backoffice.api import parse_pk
from backoffice.models import SlugConflict, save_unique
from backoffice.permissions import StaffRequiredMixin
from backoffice.uploads import store_image
from sports.formconfig import initial_from_additional_fields
from sports.forms import DynamicFieldsForm
from sports.models import Sport

from .forms import PlayerForm
from .models import Player
from .services import carry_over_stale

logger = logging.getLogger(__name__)

EXTRA_PREFIX = "extra"
MAIN_FIELDS = ("sport", "team", "name", "age", "contact", "description", "image_url")


class PlayerEditorView(StaffRequiredMixin, View):
    """
    Player create/edit page. The sport picked in the main form decides which
    extra fields are shown; `action=refresh` re-renders after changing it.
    """
    template_name = "players/player_form.html"

    def get_object(self, pk):
        return get_object_or_404(Player.objects.select_related("sport", "team"), pk=pk) if pk else None

    def pick_sport(self, raw, player):
        pk = parse_pk(raw)
        if pk:
            sport = Sport.objects.filter(pk=pk).first()
            if sport:
                return sport
        return player.sport if player else None

    def extra_form(self, sport, data=None, initial=None):
        descriptors = sport.descriptors if sport else []
        return DynamicFieldsForm(data, descriptors=descriptors, initial=initial, prefix=EXTRA_PREFIX)

    def render_page(self, request, form, extra, sport, player):
        return render(
            request,
            self.template_name,
            {
                "form": form,
                "extra_form": extra,
                "sport": sport,
                "player": player,
                "heading": "Edit Player" if player else "New Player",
            },
        )

    def get(self, request, pk=None):
        player = self.get_object(pk)
        sport = self.pick_sport(request.GET.get("sport"), player)
        initial = {"sport": sport.pk} if sport else {}
        form = PlayerForm(instance=player, initial=initial)
        extra_initial = None
        if player and sport and sport.pk == player.sport_id:
            extra_initial = initial_from_additional_fields(sport.descriptors, player.additional_fields)
        return self.render_page(request, form, self.extra_form(sport, initial=extra_initial), sport, player)

    def post(self, request, pk=None):
        player = self.get_object(pk)
        sport = self.pick_sport(request.POST.get("sport"), player)

        if request.POST.get("action") == "refresh":
            form = PlayerForm(instance=player, initial={k: request.POST.get(k, "") for k in MAIN_FIELDS})
            return self.render_page(request, form, self.extra_form(sport), sport, player)

        stored_sport_id = player.sport_id if player else None
        stored = player.additional_fields if player else None
        form = PlayerForm(request.POST, request.FILES, instance=player)
        extra = self.extra_form(sport, data=request.POST)
        form_ok = form.is_valid()
        extra_ok = extra.is_valid()
        if not (form_ok and extra_ok):
            return self.render_page(request, form, extra, sport, player)

        obj = form.save(commit=False)
        same_sport = stored_sport_id == obj.sport_id
        obj.additional_fields = carry_over_stale(stored if same_sport else None, obj.sport, extra.additional_fields())
        if player is None or "name" in form.changed_data:
            obj.refresh_slug()
        conflict = "Another player with this name already exists" if player else "A player with this name already exists"
        try:
            save_unique(obj, conflict_message=conflict)
        except SlugConflict as exc:
            form.add_error("name", str(exc))
            return self.render_page(request, form, extra, sport, player)

        # The file is written only once the slug is secured
        upload = form.cleaned_data.get("image")
        if upload:
            obj.image_url = store_image(upload)
            obj.save(update_fields=["image_url", "updated_at"])

        logger.info("Saved player %s (%s) from the editor page", obj.pk, obj.slug)
        messages.success(request, f"Player “{obj.name}” saved.")
        return redirect("backoffice:dashboard")
