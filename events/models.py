from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q

from backoffice.models import SluggedModel

END_BEFORE_START = "End date cannot be before start date"


class Event(SluggedModel):
    class Status(models.TextChoices):
        UPCOMING = "upcoming", "Upcoming"
        ONGOING = "ongoing", "Ongoing"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    name = models.CharField(max_length=120)
    description = models.TextField()
    image_url = models.CharField(max_length=255)
    location = models.CharField(max_length=200)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.UPCOMING, db_index=True)

    sport = models.ForeignKey(
        "sports.Sport", on_delete=models.SET_NULL, null=True, blank=True, related_name="events"
    )
    teams = models.ManyToManyField("players.Team", blank=True, related_name="events")

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(condition=Q(end_date__gte=F("start_date")), name="event_end_not_before_start"),
        ]
        indexes = [
            models.Index(fields=["start_date"], name="event_start_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.start_date:%Y-%m-%d})" if self.start_date else self.name

    def clean(self):
        super().clean()
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({"end_date": END_BEFORE_START})
