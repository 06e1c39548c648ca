from django.contrib import admin

from .models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ("name", "sport", "location", "start_date", "end_date", "status")
    list_filter = ("status", "sport", "start_date")
    search_fields = ("name", "location", "slug")
    readonly_fields = ("slug", "created_at", "updated_at")
    filter_horizontal = ("teams",)
    date_hierarchy = "start_date"
