# events/services.py
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from backoffice.api import parse_pk

from .models import Event

SORT_KEYS = {
    "startDate": "start_date",
    "endDate": "end_date",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "name": "name",
}
MAX_LIMIT = 100


def derive_status(start: datetime, end: datetime, now: datetime | None = None) -> str:
    """Where `now` falls relative to [start, end]."""
    now = now or timezone.now()
    if start > now:
        return Event.Status.UPCOMING
    if end >= now:
        return Event.Status.ONGOING
    return Event.Status.COMPLETED


def parse_when(value, field: str) -> datetime:
    """
    ISO date or datetime (a trailing Z is fine) -> aware datetime.
    Bare dates mean midnight; naive values are read in the current timezone.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    else:
        text = str(value or "").strip()
        try:
            parsed = parse_datetime(text.replace("Z", "+00:00"))
            if parsed is None:
                day = parse_date(text)
                parsed = datetime.combine(day, time.min) if day else None
        except ValueError:
            parsed = None
        if parsed is None:
            raise ValidationError({field: f"{field} must be an ISO date or datetime"})
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def _positive_int(raw, default: int, field: str) -> int:
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError({field: f"{field} must be a positive integer"})
    if value < 1:
        raise ValidationError({field: f"{field} must be a positive integer"})
    return value


@dataclass(frozen=True)
class FeedPage:
    events: list
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def headers(self) -> dict[str, str]:
        return {
            "X-Total-Count": str(self.total),
            "X-Page": str(self.page),
            "X-Limit": str(self.limit),
            "X-Total-Pages": str(self.total_pages),
        }


def filter_feed(params, qs: QuerySet | None = None) -> QuerySet:
    """Apply the public feed filters (status, sportId, teamId) to `qs`."""
    qs = Event.objects.all() if qs is None else qs
    status = params.get("status")
    if status:
        qs = qs.filter(status=status)
        if status == Event.Status.UPCOMING:
            # A stale "upcoming" row whose start has passed is left out
            qs = qs.filter(start_date__gte=timezone.now())
    if params.get("sportId"):
        pk = parse_pk(params["sportId"])
        qs = qs.filter(sport_id=pk) if pk else qs.none()
    if params.get("teamId"):
        pk = parse_pk(params["teamId"])
        qs = qs.filter(teams__id=pk).distinct() if pk else qs.none()
    return qs


def event_feed(params) -> FeedPage:
    """
    Public events listing: filter, sort and page.
    `sort=startDate` (default) runs ascending, every other key descending.
    """
    sort = params.get("sort") or "startDate"
    if sort not in SORT_KEYS:
        raise ValidationError({"sort": f"sort must be one of: {', '.join(SORT_KEYS)}"})
    page = _positive_int(params.get("page"), 1, "page")
    limit = min(_positive_int(params.get("limit"), settings.CLUB_EVENTS_PAGE_SIZE, "limit"), MAX_LIMIT)

    order = SORT_KEYS[sort] if sort == "startDate" else f"-{SORT_KEYS[sort]}"
    qs = filter_feed(params).order_by(order, "pk")
    total = qs.count()
    offset = (page - 1) * limit
    # Pages past the end are empty; never hand the database an offset beyond `total`
    events = []
    if offset < total:
        events = list(qs.select_related("sport").prefetch_related("teams")[offset:offset + limit])
    return FeedPage(events=events, total=total, page=page, limit=limit)
