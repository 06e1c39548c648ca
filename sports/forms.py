from __future__ import annotations

from django import forms
from django.core.exceptions import ValidationError

from backoffice.forms import bootstrap_fields
from backoffice.uploads import check_image

from .formconfig import (
    CHOICE_TYPES,
    FieldDescriptor,
    FieldType,
    clean_values,
    new_field_id,
    parse_options,
    required_message,
    to_additional_fields,
)
from .models import Sport


class SportForm(forms.ModelForm):
    image = forms.FileField(required=False, label="Upload image")

    class Meta:
        model = Sport
        fields = ["name", "description", "image_url"]
        labels = {"image_url": "Image URL"}
        widgets = {"description": forms.Textarea(attrs={"rows": 4})}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["image_url"].required = False
        bootstrap_fields(self)

    def clean_image(self):
        upload = self.cleaned_data.get("image")
        return check_image(upload) if upload else None

    def clean(self):
        cleaned = super().clean()
        if not cleaned.get("image") and not cleaned.get("image_url"):
            raise ValidationError("Upload an image or give an image URL.")
        return cleaned


# ---------------------------------------------------------------------------
# Form builder: one FieldDescriptorForm per descriptor, order = list order
# ---------------------------------------------------------------------------

OPTIONS_REQUIRED = "Options are required for select, checkbox and radio fields."


class FieldDescriptorForm(forms.Form):
    id = forms.CharField(required=False, widget=forms.HiddenInput)
    type = forms.ChoiceField(choices=FieldType.choices, initial=FieldType.TEXT, label="Field Type")
    label = forms.CharField(required=False, max_length=100, label="Field Label")
    placeholder = forms.CharField(required=False, max_length=200)
    required = forms.BooleanField(required=False)
    options = forms.CharField(
        required=False,
        label="Options",
        help_text="Comma-separated, e.g. Goalkeeper, Defender, Forward",
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        bootstrap_fields(self)

    def clean(self):
        cleaned = super().clean()
        if not (cleaned.get("label") or "").strip():
            self.add_error("label", "Label is required.")
        options = parse_options(cleaned.get("options"))
        if cleaned.get("type") in CHOICE_TYPES and not options:
            self.add_error("options", OPTIONS_REQUIRED)
        cleaned["options"] = options
        return cleaned


class BaseFieldDescriptorFormSet(forms.BaseFormSet):
    def _live_forms(self):
        for form in self.forms:
            if not form.cleaned_data or self._should_delete_form(form):
                continue
            yield form

    def clean(self):
        if any(self.errors):
            return
        seen = set()
        for form in self._live_forms():
            label = form.cleaned_data["label"].strip()
            if label in seen:
                raise ValidationError(f"Each field needs its own label; “{label}” is used twice.")
            seen.add(label)

    def descriptors(self) -> list[FieldDescriptor]:
        """Call after is_valid(). New rows get timestamp ids."""
        taken = {form.cleaned_data.get("id") for form in self._live_forms()} - {""}
        out: list[FieldDescriptor] = []
        for form in self._live_forms():
            data = form.cleaned_data
            field_id = data.get("id") or new_field_id(taken)
            taken.add(field_id)
            out.append(
                FieldDescriptor(
                    id=field_id,
                    type=data["type"],
                    label=data["label"].strip(),
                    placeholder=(data.get("placeholder") or "").strip(),
                    required=bool(data.get("required")),
                    options=tuple(data["options"]) if data["type"] in CHOICE_TYPES else (),
                )
            )
        return out


FieldDescriptorFormSet = forms.formset_factory(
    FieldDescriptorForm,
    formset=BaseFieldDescriptorFormSet,
    extra=1,
    can_delete=True,
)


def builder_initial(descriptors) -> list[dict]:
    return [
        {
            "id": d.id,
            "type": d.type,
            "label": d.label,
            "placeholder": d.placeholder,
            "required": d.required,
            "options": ", ".join(d.options),
        }
        for d in descriptors
    ]


# ---------------------------------------------------------------------------
# Rendering a sport's fields on the player pages
# ---------------------------------------------------------------------------

def build_field(d: FieldDescriptor) -> forms.Field:
    """Pick the control for one descriptor."""
    attrs = {"placeholder": d.placeholder} if d.placeholder else {}
    messages = {"required": required_message(d)}
    common = {"label": d.label, "required": d.required}
    choices = [(opt, opt) for opt in d.options]
    one_of = f"{d.label} must be one of: {', '.join(d.options)}"

    if d.type == FieldType.TEXTAREA:
        return forms.CharField(widget=forms.Textarea(attrs={**attrs, "rows": 3}), error_messages=messages, **common)
    if d.type == FieldType.NUMBER:
        return forms.FloatField(
            widget=forms.NumberInput(attrs={**attrs, "step": "any"}),
            error_messages={**messages, "invalid": f"{d.label} must be a number"},
            **common,
        )
    if d.type == FieldType.SELECT:
        return forms.ChoiceField(
            choices=[("", d.placeholder or "Select an option"), *choices],
            widget=forms.Select,
            error_messages={**messages, "invalid_choice": one_of},
            **common,
        )
    if d.type == FieldType.RADIO:
        return forms.ChoiceField(
            choices=choices,
            widget=forms.RadioSelect,
            error_messages={**messages, "invalid_choice": one_of},
            **common,
        )
    if d.type == FieldType.CHECKBOX:
        return forms.MultipleChoiceField(
            choices=choices,
            widget=forms.CheckboxSelectMultiple,
            error_messages={**messages, "invalid_choice": one_of},
            **common,
        )
    if d.type == FieldType.DATE:
        return forms.DateField(
            widget=forms.DateInput(attrs={"type": "date"}, format="%Y-%m-%d"),
            error_messages={**messages, "invalid": f"{d.label} must be a date (YYYY-MM-DD)"},
            **common,
        )
    return forms.CharField(widget=forms.TextInput(attrs=attrs), error_messages=messages, **common)


class DynamicFieldsForm(forms.Form):
    """
    The sport-specific part of the player form: one control per descriptor,
    named by descriptor id, in descriptor order.
    """

    def __init__(self, *args, descriptors, **kwargs):
        super().__init__(*args, **kwargs)
        self.descriptors = list(descriptors)
        self._values: dict = {}
        for d in self.descriptors:
            self.fields[d.id] = build_field(d)
        bootstrap_fields(self)

    def clean(self):
        cleaned = super().clean()
        try:
            self._values = clean_values(self.descriptors, cleaned)
        except ValidationError as exc:
            for key, errors in exc.error_dict.items():
                if key not in self.errors:
                    self.add_error(key, errors)
        return cleaned

    def additional_fields(self) -> dict:
        """label -> value, ready for Player.additional_fields. Call after is_valid()."""
        return to_additional_fields(self.descriptors, self._values)
