from __future__ import annotations

import logging

from django.contrib import messages
from django.db.models import Count
from django.shortcuts import get_object_or_404, redirect, render
from django.views import View
from django.views.generic import ListView

from backoffice.models import SlugConflict, save_unique
from backoffice.permissions import StaffRequiredMixin
from backoffice.uploads import store_image

from .formconfig import dump_form_config, move_field
from .forms import FieldDescriptorFormSet, SportForm, builder_initial
from .models import Sport

logger = logging.getLogger(__name__)

BUILDER_PREFIX = "fields"


class SportListView(StaffRequiredMixin, ListView):
    template_name = "sports/sport_list.html"
    context_object_name = "sports"
    paginate_by = 20

    def get_queryset(self):
        return Sport.objects.annotate(
            team_count=Count("teams", distinct=True),
            player_count=Count("players", distinct=True),
        ).order_by("name")


class SportBuilderView(StaffRequiredMixin, View):
    """
    Sport create/edit page hosting the form builder.

    Buttons post back to this view:
      action=add        -> keep the rows typed so far, append a blank row
      move=<id>:up|down -> reorder one row
      action=save       -> validate and persist the sport with its fields
    """
    template_name = "sports/sport_form.html"

    def get_object(self, pk):
        return get_object_or_404(Sport, pk=pk) if pk else None

    def render_page(self, request, form, formset, sport):
        return render(
            request,
            self.template_name,
            {"form": form, "formset": formset, "sport": sport, "heading": "Edit Sport" if sport else "New Sport"},
        )

    def get(self, request, pk=None):
        sport = self.get_object(pk)
        form = SportForm(instance=sport)
        initial = builder_initial(sport.descriptors) if sport else []
        formset = FieldDescriptorFormSet(initial=initial, prefix=BUILDER_PREFIX)
        return self.render_page(request, form, formset, sport)

    def post(self, request, pk=None):
        sport = self.get_object(pk)
        form = SportForm(request.POST, request.FILES, instance=sport)
        formset = FieldDescriptorFormSet(request.POST, prefix=BUILDER_PREFIX)
        if not formset.is_valid():
            return self.render_page(request, form, formset, sport)

        descriptors = formset.descriptors()
        move = request.POST.get("move", "")
        if move or request.POST.get("action") == "add":
            field_id, _, direction = move.rpartition(":")
            if direction in ("up", "down"):
                descriptors = move_field(descriptors, field_id, direction)
            # Builder round-trip: keep what was typed, don't flag the sport form yet
            form = SportForm(
                instance=sport,
                initial={k: request.POST.get(k, "") for k in ("name", "description", "image_url")},
            )
            formset = FieldDescriptorFormSet(initial=builder_initial(descriptors), prefix=BUILDER_PREFIX)
            return self.render_page(request, form, formset, sport)

        if not form.is_valid():
            return self.render_page(request, form, formset, sport)

        obj = form.save(commit=False)
        obj.form_config = dump_form_config(descriptors)
        if sport is None or "name" in form.changed_data:
            obj.refresh_slug()
        conflict = "Another sport with this name already exists" if sport else "A sport with this name already exists"
        try:
            save_unique(obj, conflict_message=conflict)
        except SlugConflict as exc:
            form.add_error("name", str(exc))
            return self.render_page(request, form, formset, sport)

        # The file is written only once the slug is secured
        upload = form.cleaned_data.get("image")
        if upload:
            obj.image_url = store_image(upload)
            obj.save(update_fields=["image_url", "updated_at"])

        logger.info("Saved sport %s (%s) with %d form field(s) from the builder", obj.pk, obj.slug, len(descriptors))
        messages.success(request, f"Sport “{obj.name}” saved.")
        return redirect("sports:sport_list")
