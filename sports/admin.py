from django import forms
from django.contrib import admin

from backoffice.utils import generate_slug

from .formconfig import dump_form_config, parse_form_config
from .models import Sport


class SportAdminForm(forms.ModelForm):
    class Meta:
        model = Sport
        fields = "__all__"

    def clean_form_config(self):
        # Whatever JSON was typed into the textarea goes through the builder's rules
        return dump_form_config(parse_form_config(self.cleaned_data.get("form_config")))

    def clean(self):
        cleaned = super().clean()
        name = cleaned.get("name")
        if name and (self.instance.pk is None or "name" in self.changed_data):
            taken = Sport.objects.filter(slug=generate_slug(name)).exclude(pk=self.instance.pk)
            if taken.exists():
                self.add_error("name", "A sport with this name already exists")
        return cleaned


@admin.register(Sport)
class SportAdmin(admin.ModelAdmin):
    form = SportAdminForm
    list_display = ["name", "slug", "field_count", "created_at"]
    search_fields = ["name", "slug"]
    readonly_fields = ["slug", "created_at", "updated_at"]

    @admin.display(description="Form fields")
    def field_count(self, obj):
        return len(obj.form_config or [])

    def save_model(self, request, obj, form, change):
        if not change or "name" in form.changed_data:
            obj.refresh_slug()
        super().save_model(request, obj, form, change)
