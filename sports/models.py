from __future__ import annotations

from django.db import models

from backoffice.models import SluggedModel

from .formconfig import FieldDescriptor, dump_form_config, parse_form_config


class Sport(SluggedModel):
    """
    A sport the club runs. `form_config` is the ordered list of extra fields
    collected when registering a player of this sport (see sports.formconfig).
    """
    name = models.CharField(max_length=100)
    description = models.TextField()
    image_url = models.CharField(max_length=255)
    form_config = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Sport"
        verbose_name_plural = "Sports"

    def __str__(self) -> str:
        return self.name

    @property
    def descriptors(self) -> list[FieldDescriptor]:
        return parse_form_config(self.form_config)

    def set_form_config(self, raw) -> list[FieldDescriptor]:
        descriptors = parse_form_config(raw)
        self.form_config = dump_form_config(descriptors)
        return descriptors
