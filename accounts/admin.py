# accounts/admin.py
from django.contrib import admin, messages
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.utils.translation import gettext_lazy as _

User = get_user_model()

# Only superusers hand out roles
GUARDED_FIELDS = ["role", "is_superuser", "user_permissions"]


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ("username", "email", "role", "backoffice_access", "is_active", "last_login")
    list_filter = ("role", "is_staff", "is_superuser", "is_active")
    search_fields = ("username", "email", "first_name", "last_name", "phone")
    ordering = ("username",)

    fieldsets = (
        (None, {"fields": ("username", "password")}),
        (_("Contact"), {"fields": ("first_name", "last_name", "email", "phone", "avatar_url")}),
        (_("Club role"), {"fields": ("role",)}),
        (_("Permissions"), {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        (_("Important dates"), {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("username", "email", "role", "password1", "password2")}),
    )

    @admin.display(boolean=True, description="Back-office")
    def backoffice_access(self, obj):
        return obj.is_admin_like()

    def get_readonly_fields(self, request, obj=None):
        ro = ["last_login", "date_joined"]
        if obj is not None and not request.user.is_superuser:
            ro += GUARDED_FIELDS
        return ro

    def delete_model(self, request, obj):
        if obj.is_superuser and not User.objects.filter(is_superuser=True, is_active=True).exclude(pk=obj.pk).exists():
            self.message_user(request, "The last active superuser can't be deleted.", level=messages.ERROR)
            return
        super().delete_model(request, obj)
