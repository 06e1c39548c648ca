from django.contrib import admin

from .models import Player, Team


class PlayerInline(admin.TabularInline):
    model = Player
    fields = ["name", "age", "contact", "sport"]
    extra = 0
    show_change_link = True


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ["name", "sport", "coach", "slug", "created_at"]
    list_filter = ["sport"]
    search_fields = ["name", "coach", "slug"]
    readonly_fields = ["slug", "created_at", "updated_at"]
    inlines = [PlayerInline]


@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    list_display = ["name", "team", "sport", "age", "created_at"]
    list_filter = ["sport", "team"]
    search_fields = ["name", "contact", "slug"]
    readonly_fields = ["slug", "created_at", "updated_at"]
    list_select_related = ["team", "sport"]
