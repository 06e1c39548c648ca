from __future__ import annotations

from django.db import models

from backoffice.models import SluggedModel


class Team(SluggedModel):
    """Team tied to a sport. The coach is free text, not a user account."""
    sport = models.ForeignKey("sports.Sport", on_delete=models.CASCADE, related_name="teams")
    name = models.CharField(max_length=100)
    description = models.TextField()
    image_url = models.CharField(max_length=255)
    coach = models.CharField(max_length=100)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} ({self.sport.name})"


class Player(SluggedModel):
    """
    A registered player. `sport` is stored alongside `team` and is not forced
    to match `team.sport`; the sport decides which extra fields were asked.

    `additional_fields` is a label -> value snapshot of the sport's form
    fields taken at registration; later edits to the sport's form config do
    not rewrite it.
    """
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="players")
    sport = models.ForeignKey("sports.Sport", on_delete=models.CASCADE, related_name="players")
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    age = models.PositiveSmallIntegerField()
    image_url = models.CharField(max_length=255)
    contact = models.CharField(max_length=100)
    additional_fields = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["team", "created_at"], name="player_team_created_idx"),
        ]

    def __str__(self) -> str:
        return self.name
