from django.contrib import admin

from .models import Blog


@admin.register(Blog)
class BlogAdmin(admin.ModelAdmin):
    list_display = ("title", "status", "slug", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("title", "content", "slug")
    readonly_fields = ("slug", "created_at", "updated_at")
    actions = ["publish", "unpublish"]

    @admin.action(description="Publish selected posts")
    def publish(self, request, queryset):
        count = queryset.update(status=Blog.Status.PUBLISHED)
        self.message_user(request, f"Published {count} post(s).")

    @admin.action(description="Move selected posts back to draft")
    def unpublish(self, request, queryset):
        count = queryset.update(status=Blog.Status.DRAFT)
        self.message_user(request, f"Moved {count} post(s) to draft.")
