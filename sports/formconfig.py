"""
Sport-level form configuration.

A sport carries an ordered list of field descriptors (`Sport.form_config`).
Player pages render one control per descriptor, keyed by descriptor id, and
the submitted values are stored on the player keyed by descriptor *label*
(`Player.additional_fields`). Everything here is plain data in, plain data
out; the Django forms in `sports.forms` and the API in `players.api` both go
through these functions so the page and the API agree on what is valid.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.dateparse import parse_date, parse_datetime


class FieldType(models.TextChoices):
    TEXT = "text", "Text Input"
    TEXTAREA = "textarea", "Text Area"
    NUMBER = "number", "Number Input"
    SELECT = "select", "Dropdown Select"
    CHECKBOX = "checkbox", "Checkboxes"
    RADIO = "radio", "Radio Buttons"
    DATE = "date", "Date Picker"


CHOICE_TYPES = frozenset({FieldType.SELECT.value, FieldType.CHECKBOX.value, FieldType.RADIO.value})


@dataclass(frozen=True)
class FieldDescriptor:
    id: str
    type: str
    label: str
    placeholder: str = ""
    required: bool = False
    options: tuple[str, ...] = ()

    @property
    def has_options(self) -> bool:
        return self.type in CHOICE_TYPES

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, field_id: str | None = None) -> "FieldDescriptor":
        if not isinstance(data, Mapping):
            raise ValidationError("Each form field must be an object.")

        label = str(data.get("label") or "").strip()
        if not label:
            raise ValidationError("Field label is required.")

        ftype = str(data.get("type") or FieldType.TEXT).strip()
        if ftype not in FieldType.values:
            raise ValidationError(f"{label}: unknown field type “{ftype}”.")

        options: tuple[str, ...] = ()
        if ftype in CHOICE_TYPES:
            options = tuple(parse_options(data.get("options")))
            if not options:
                raise ValidationError(f"{label}: options are required for select, checkbox and radio fields.")

        return cls(
            id=str(field_id or data.get("id") or "").strip(),
            type=ftype,
            label=label,
            placeholder=str(data.get("placeholder") or "").strip(),
            required=bool(data.get("required", False)),
            options=options,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "label": self.label,
            "required": self.required,
        }
        if self.placeholder:
            out["placeholder"] = self.placeholder
        if self.has_options:
            out["options"] = list(self.options)
        return out


def parse_options(raw) -> list[str]:
    """'A, B, ,C' -> ['A', 'B', 'C']. Lists are trimmed the same way."""
    if raw is None:
        return []
    if isinstance(raw, str):
        items: Iterable = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        items = raw
    else:
        raise ValidationError("Options must be a comma-separated string or a list.")
    return [s for s in (str(item).strip() for item in items) if s]


def new_field_id(taken: Iterable[str] = ()) -> str:
    """Millisecond timestamp, bumped until it doesn't clash with `taken`."""
    taken = set(taken)
    stamp = int(time.time() * 1000)
    while str(stamp) in taken:
        stamp += 1
    return str(stamp)


def parse_form_config(raw) -> list[FieldDescriptor]:
    """
    Validate a whole descriptor list (as stored, or as posted to the API).
    Missing ids are generated; duplicate ids or labels are rejected.
    """
    if raw in (None, ""):
        return []
    if not isinstance(raw, (list, tuple)):
        raise ValidationError("formConfig must be a list of fields.")

    errors: list[ValidationError] = []
    parsed: list[FieldDescriptor] = []
    for item in raw:
        try:
            parsed.append(FieldDescriptor.from_dict(item))
        except ValidationError as exc:
            errors.append(exc)
    if errors:
        raise ValidationError(errors)

    taken = {d.id for d in parsed if d.id}
    descriptors: list[FieldDescriptor] = []
    seen_ids: set[str] = set()
    seen_labels: set[str] = set()
    for d in parsed:
        if not d.id:
            d = replace(d, id=new_field_id(taken))
            taken.add(d.id)
        if d.id in seen_ids:
            errors.append(ValidationError(f"Duplicate field id “{d.id}”."))
        if d.label in seen_labels:
            errors.append(ValidationError(f"Duplicate field label “{d.label}”."))
        seen_ids.add(d.id)
        seen_labels.add(d.label)
        descriptors.append(d)
    if errors:
        raise ValidationError(errors)
    return descriptors


def dump_form_config(descriptors: Iterable[FieldDescriptor]) -> list[dict[str, Any]]:
    return [d.to_dict() for d in descriptors]


def move_field(descriptors: list[FieldDescriptor], field_id: str, direction: str) -> list[FieldDescriptor]:
    """Swap with the neighbour above/below. Unknown id or edge moves are no-ops."""
    if direction not in ("up", "down"):
        raise ValueError(f"direction must be 'up' or 'down', not {direction!r}")
    fields = list(descriptors)
    index = next((i for i, d in enumerate(fields) if d.id == field_id), -1)
    if index == -1:
        return fields
    target = index - 1 if direction == "up" else index + 1
    if target < 0 or target >= len(fields):
        return fields
    fields[index], fields[target] = fields[target], fields[index]
    return fields


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------

def is_empty(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def required_message(descriptor: FieldDescriptor) -> str:
    return f"{descriptor.label} is required"


def missing_required(descriptors: Iterable[FieldDescriptor], values: Mapping[str, Any], *, by: str = "id") -> dict[str, str]:
    """{descriptor id: "<label> is required"} for every required field left empty."""
    return {
        d.id: required_message(d)
        for d in descriptors
        if d.required and is_empty(values.get(getattr(d, by)))
    }


def _number(value):
    if isinstance(value, bool):
        raise ValueError
    if isinstance(value, int):
        return value
    try:
        num = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError
    if not num.is_finite():
        raise ValueError
    return int(num) if num == num.to_integral_value() else float(num)


def _date(value) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    parsed = parse_date(text[:10]) if len(text) >= 10 else None
    if parsed is None:
        dt = parse_datetime(text.replace("Z", "+00:00"))
        if dt is None:
            raise ValueError
        parsed = dt.date()
    return parsed.isoformat()


def coerce_value(descriptor: FieldDescriptor, value):
    """
    Normalise one submitted value for storage, by descriptor type:
      text/textarea -> str, number -> int|float, select/radio -> one option,
      checkbox -> list of options (option order), date -> 'YYYY-MM-DD'.
    Raises ValidationError carrying a message that names the field.
    """
    label = descriptor.label
    ftype = descriptor.type

    if ftype in (FieldType.TEXT, FieldType.TEXTAREA):
        return value.strip() if isinstance(value, str) else str(value)

    if ftype == FieldType.NUMBER:
        try:
            return _number(value)
        except ValueError:
            raise ValidationError(f"{label} must be a number")

    if ftype in (FieldType.SELECT, FieldType.RADIO):
        choice = str(value).strip()
        if choice not in descriptor.options:
            raise ValidationError(f"{label} must be one of: {', '.join(descriptor.options)}")
        return choice

    if ftype == FieldType.CHECKBOX:
        if isinstance(value, str):
            picked = [value]
        elif isinstance(value, (list, tuple, set)):
            picked = list(value)
        else:
            raise ValidationError(f"{label} must be a list of options")
        picked = {str(p).strip() for p in picked}
        unknown = picked.difference(descriptor.options)
        if unknown:
            raise ValidationError(f"{label} has unknown option(s): {', '.join(sorted(unknown))}")
        return [opt for opt in descriptor.options if opt in picked]

    if ftype == FieldType.DATE:
        try:
            return _date(value)
        except ValueError:
            raise ValidationError(f"{label} must be a date (YYYY-MM-DD)")

    raise ValidationError(f"{label}: unsupported field type “{ftype}”.")


def clean_values(descriptors: Iterable[FieldDescriptor], values: Mapping[str, Any], *, by: str = "id") -> dict[str, Any]:
    """
    Validate a submission against the descriptors.

    `values` is keyed by descriptor id (pages) or label (API), per `by`.
    Returns {descriptor id: stored value}, dropping empty optional fields.
    Raises ValidationError({descriptor id: message}) on any failure.
    """
    descriptors = list(descriptors)
    errors: dict[str, str] = missing_required(descriptors, values, by=by)
    cleaned: dict[str, Any] = {}
    for d in descriptors:
        if d.id in errors:
            continue
        raw = values.get(getattr(d, by))
        if is_empty(raw):
            continue
        try:
            cleaned[d.id] = coerce_value(d, raw)
        except ValidationError as exc:
            errors[d.id] = exc.messages[0]
    if errors:
        raise ValidationError(errors)
    return cleaned


def to_additional_fields(descriptors: Iterable[FieldDescriptor], cleaned: Mapping[str, Any]) -> dict[str, Any]:
    """Re-key cleaned values from descriptor id to descriptor label, in form order."""
    return {d.label: cleaned[d.id] for d in descriptors if d.id in cleaned}


def initial_from_additional_fields(descriptors: Iterable[FieldDescriptor], stored: Mapping[str, Any] | None) -> dict[str, Any]:
    """Inverse of `to_additional_fields` for pre-filling an edit form."""
    stored = stored or {}
    return {d.id: stored[d.label] for d in descriptors if d.label in stored}
