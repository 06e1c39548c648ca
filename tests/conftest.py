from __future__ import annotations

import pytest
from django.test import Client

from players.models import Player, Team
from sports.models import Sport

JERSEY = {"id": "jerseyNumber", "type": "number", "label": "Jersey Number", "required": True}


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "media"
    return settings.MEDIA_ROOT


@pytest.fixture
def staff_user(django_user_model):
    return django_user_model.objects.create_user("coach", "Coach@Example.com", "secret-pass", role="staff")


@pytest.fixture
def member_user(django_user_model):
    return django_user_model.objects.create_user("fan", "fan@example.com", "secret-pass")


@pytest.fixture
def staff_client(staff_user):
    c = Client()
    c.force_login(staff_user)
    return c


@pytest.fixture
def member_client(member_user):
    c = Client()
    c.force_login(member_user)
    return c


@pytest.fixture
def football(db):
    sport = Sport(name="Football", description="Eleven a side.", image_url="/media/football.png")
    sport.set_form_config([JERSEY])
    sport.save()
    return sport


@pytest.fixture
def eagles(football):
    return Team.objects.create(
        name="Eagles", sport=football, description="First team.", image_url="/media/eagles.png", coach="Maria Lopez"
    )


@pytest.fixture
def player_payload(football, eagles):
    return {
        "name": "Alex Smith",
        "age": 21,
        "imageUrl": "/media/alex.png",
        "contact": "alex@example.com",
        "team": eagles.pk,
        "sport": football.pk,
    }


@pytest.fixture
def striker(football, eagles):
    return Player.objects.create(
        name="Sam Striker",
        age=24,
        image_url="/media/sam.png",
        contact="sam@example.com",
        team=eagles,
        sport=football,
        additional_fields={"Jersey Number": 9},
    )
