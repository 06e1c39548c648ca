from __future__ import annotations

from django import forms

from backoffice.forms import bootstrap_fields
from backoffice.uploads import check_image
from sports.models import Sport

from .models import Player, Team


class PlayerForm(forms.ModelForm):
    image = forms.FileField(required=False, label="Upload photo")

    class Meta:
        model = Player
        fields = ["sport", "team", "name", "age", "contact", "description", "image_url"]
        labels = {"image_url": "Image URL"}
        widgets = {"description": forms.Textarea(attrs={"rows": 3})}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["sport"].queryset = Sport.objects.order_by("name")
        self.fields["team"].queryset = Team.objects.select_related("sport").order_by("name")
        self.fields["image_url"].required = False
        bootstrap_fields(self)

    def clean_image(self):
        upload = self.cleaned_data.get("image")
        return check_image(upload) if upload else None

    def clean(self):
        cleaned = super().clean()
        if not cleaned.get("image") and not cleaned.get("image_url"):
            self.add_error("image_url", "Upload a photo or give an image URL.")
        return cleaned
