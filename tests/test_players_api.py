import pytest

from players.models import Player, Team
from sports.models import Sport
from tests.helpers import send_json

pytestmark = pytest.mark.django_db

TEAMS = "/api/admin/teams"
PLAYERS = "/api/admin/players"


# --- teams ---

def test_create_team(client, football):
    resp = send_json(
        client, "post", TEAMS,
        {"name": "Red Lions", "description": "U18", "imageUrl": "/x.png", "coach": "Ken Adams", "sport": football.pk},
    )
    assert resp.status_code == 201
    team = resp.json()["team"]
    assert team["slug"] == "red_lions"
    assert team["sport"] == {"id": football.pk, "name": "Football", "slug": "football"}


def test_team_needs_a_known_sport(client):
    body = {"name": "Red Lions", "description": "U18", "imageUrl": "/x.png", "coach": "Ken"}
    resp = send_json(client, "post", TEAMS, body)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Sport is required"
    resp = send_json(client, "post", TEAMS, {**body, "sport": 12345})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Sport not found"


def test_duplicate_team(client, eagles):
    body = {"name": "Eagles", "description": "B team", "imageUrl": "/x.png", "coach": "Ken", "sport": eagles.sport_id}
    resp = send_json(client, "post", TEAMS, body)
    assert resp.status_code == 400
    assert resp.json()["error"] == "A team with this name already exists"


def test_team_filters(client, eagles):
    rugby = Sport.objects.create(name="Rugby", description="Oval", image_url="/r.png")
    Team.objects.create(name="Bulls", sport=rugby, description="-", image_url="/b.png", coach="Jon")
    assert [t["name"] for t in client.get(TEAMS).json()] == ["Bulls", "Eagles"]
    assert [t["name"] for t in client.get(TEAMS, {"sportId": eagles.sport_id}).json()] == ["Eagles"]
    assert [t["name"] for t in client.get(TEAMS, {"teamId": eagles.pk}).json()] == ["Eagles"]
    assert [t["name"] for t in client.get(TEAMS, {"slug": "bulls"}).json()] == ["Bulls"]
    assert client.get(TEAMS, {"sportId": "zzz"}).json() == []


def test_update_and_delete_team(client, eagles):
    resp = send_json(client, "put", TEAMS, {"id": eagles.pk, "name": "Golden Eagles", "coach": "Aisha Khan"})
    assert resp.status_code == 200
    assert resp.json()["team"]["slug"] == "golden_eagles"
    assert resp.json()["team"]["coach"] == "Aisha Khan"
    assert client.delete(f"{TEAMS}?id={eagles.pk}").status_code == 200
    assert client.delete(f"{TEAMS}?id={eagles.pk}").status_code == 404


# --- players: dynamic fields ---

def test_player_without_required_field_is_rejected(client, player_payload):
    resp = send_json(client, "post", PLAYERS, player_payload)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Jersey Number is required"
    assert resp.json()["fields"] == {"Jersey Number": "Jersey Number is required"}
    assert not Player.objects.exists()


def test_player_with_required_field_is_stored_by_label(client, player_payload):
    resp = send_json(client, "post", PLAYERS, {**player_payload, "additionalFields": {"Jersey Number": 10}})
    assert resp.status_code == 201
    assert resp.json()["player"]["additionalFields"] == {"Jersey Number": 10}
    assert Player.objects.get().additional_fields == {"Jersey Number": 10}


def test_numeric_strings_are_stored_as_numbers(client, player_payload):
    resp = send_json(client, "post", PLAYERS, {**player_payload, "additionalFields": {"Jersey Number": "7"}})
    assert resp.status_code == 201
    assert Player.objects.get().additional_fields == {"Jersey Number": 7}


def test_non_numeric_value_is_rejected(client, player_payload):
    resp = send_json(client, "post", PLAYERS, {**player_payload, "additionalFields": {"Jersey Number": "ten"}})
    assert resp.status_code == 400
    assert resp.json()["fields"] == {"Jersey Number": "Jersey Number must be a number"}


def test_unknown_label_is_rejected_on_create(client, player_payload):
    fields = {"Jersey Number": 4, "Shoe Size": 44}
    resp = send_json(client, "post", PLAYERS, {**player_payload, "additionalFields": fields})
    assert resp.status_code == 400
    assert "Shoe Size" in resp.json()["fields"]


def test_labels_are_the_storage_keys(client, eagles):
    sport = Sport(name="Futsal", description="Five a side", image_url="/f.png")
    sport.set_form_config(
        [
            {"id": "jerseyNumber", "type": "number", "label": "jerseyNumber"},
            {"id": "position", "type": "text", "label": "position"},
        ]
    )
    sport.save()
    body = {
        "name": "Kai Ito", "age": 19, "imageUrl": "/k.png", "contact": "kai@example.com",
        "team": eagles.pk, "sport": sport.pk,
        "additionalFields": {"jerseyNumber": 7, "position": "Forward"},
    }
    resp = send_json(client, "post", PLAYERS, body)
    assert resp.status_code == 201
    assert Player.objects.get(slug="kai_ito").additional_fields == {"jerseyNumber": 7, "position": "Forward"}


def test_additional_fields_are_a_snapshot(client, football, striker):
    football.set_form_config([{"id": "shirt", "type": "number", "label": "Shirt Number"}])
    football.save()
    player = client.get(PLAYERS, {"playerId": striker.pk}).json()[0]
    assert player["additionalFields"] == {"Jersey Number": 9}


def test_update_keeps_values_for_retired_labels(client, football, striker):
    football.set_form_config([{"id": "shirt", "type": "number", "label": "Shirt Number"}])
    football.save()
    resp = send_json(client, "put", PLAYERS, {"id": striker.pk, "additionalFields": {"Shirt Number": "11"}})
    assert resp.status_code == 200
    striker.refresh_from_db()
    assert striker.additional_fields == {"Shirt Number": 11, "Jersey Number": 9}


def test_update_validates_current_fields(client, striker):
    resp = send_json(client, "put", PLAYERS, {"id": striker.pk, "additionalFields": {"Jersey Number": ""}})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Jersey Number is required"


# --- players: plumbing ---

def test_player_listing_embeds_team_and_sport(client, striker):
    rows = client.get(PLAYERS, {"teamId": striker.team_id}).json()
    assert len(rows) == 1
    assert rows[0]["team"] == {"id": striker.team_id, "name": "Eagles", "slug": "eagles", "coach": "Maria Lopez"}
    assert rows[0]["sport"] == {"id": striker.sport_id, "name": "Football", "slug": "football"}
    assert rows[0]["slug"] == "sam_striker"


def test_malformed_ids_match_nothing(client, striker):
    assert client.get(PLAYERS, {"playerId": "abc"}).json() == []
    assert client.get(PLAYERS, {"teamId": "-1"}).json() == []
    assert len(client.get(PLAYERS, {"id": striker.pk}).json()) == 1


def test_duplicate_player_name(client, player_payload, striker):
    body = {**player_payload, "name": "Sam  Striker", "additionalFields": {"Jersey Number": 1}}
    resp = send_json(client, "post", PLAYERS, body)
    assert resp.status_code == 400
    assert resp.json()["error"] == "A player with this name already exists"


def test_player_needs_existing_team(client, player_payload):
    body = {**player_payload, "team": 9999, "additionalFields": {"Jersey Number": 1}}
    resp = send_json(client, "post", PLAYERS, body)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Team not found"


def test_bad_age_is_reported(client, player_payload):
    body = {**player_payload, "age": "old", "additionalFields": {"Jersey Number": 1}}
    resp = send_json(client, "post", PLAYERS, body)
    assert resp.status_code == 400
    assert "age" in resp.json()["fields"]


def test_delete_player(client, striker):
    resp = client.delete(f"{PLAYERS}?id={striker.pk}")
    assert resp.status_code == 200
    assert not Player.objects.exists()
