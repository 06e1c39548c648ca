"""
Player-side use of a sport's form configuration: turning a label-keyed
submission into the stored `additional_fields` snapshot.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping

from django.core.exceptions import ValidationError

from sports.formconfig import FieldDescriptor, clean_values, to_additional_fields

logger = logging.getLogger(__name__)


def _rekey_by_label(exc: ValidationError, descriptors: list[FieldDescriptor]) -> ValidationError:
    labels = {d.id: d.label for d in descriptors}
    return ValidationError({labels.get(key, key): errors for key, errors in exc.error_dict.items()})


def snapshot_additional_fields(sport, submitted, *, keep_unknown: bool = False) -> dict:
    """
    Validate `submitted` (label -> value) against `sport`'s current fields and
    return the map to store. Errors are keyed by label.

    Labels the sport doesn't define are rejected unless `keep_unknown`, in
    which case they are passed through as given.
    """
    if submitted in (None, ""):
        submitted = {}
    if not isinstance(submitted, Mapping):
        raise ValidationError({"additionalFields": "additionalFields must be an object keyed by field label."})

    descriptors = sport.descriptors
    labels = {d.label for d in descriptors}
    unknown = [key for key in submitted if key not in labels]
    if unknown and not keep_unknown:
        raise ValidationError({key: f"{key} is not a field of {sport.name}" for key in unknown})

    try:
        cleaned = clean_values(descriptors, submitted, by="label")
    except ValidationError as exc:
        raise _rekey_by_label(exc, descriptors) from None

    snapshot = to_additional_fields(descriptors, cleaned)
    for key in unknown:
        snapshot[key] = submitted[key]
    return snapshot


def carry_over_stale(stored: dict | None, sport, fresh: dict) -> dict:
    """
    On edit, keep stored values whose label `sport` no longer defines; they
    were captured under an older form config. Callers pass `stored=None`
    when the player switches sport.
    """
    labels = {d.label for d in sport.descriptors}
    stale = {k: v for k, v in (stored or {}).items() if k not in labels and k not in fresh}
    if stale:
        logger.debug("Keeping %d stale field(s): %s", len(stale), ", ".join(stale))
    return {**fresh, **stale}
