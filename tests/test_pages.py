import pytest
from django.urls import reverse

from players.models import Player
from sports.forms import OPTIONS_REQUIRED
from sports.models import Sport
from tests.helpers import image_upload

pytestmark = pytest.mark.django_db

BACKOFFICE_PAGES = ["backoffice:dashboard", "sports:sport_list", "sports:sport_new", "players:player_new"]


def _builder_post(name="Tennis", rows=(), **extra):
    data = {
        "name": name,
        "description": "Racquet sport.",
        "image_url": "/media/tennis.png",
        "fields-TOTAL_FORMS": str(len(rows)),
        "fields-INITIAL_FORMS": "0",
    }
    for i, row in enumerate(rows):
        for key, value in row.items():
            data[f"fields-{i}-{key}"] = value
    data.update(extra)
    return data


@pytest.mark.parametrize("url_name", BACKOFFICE_PAGES)
def test_anonymous_is_sent_to_login(client, url_name):
    resp = client.get(reverse(url_name))
    assert resp.status_code == 302
    assert resp["Location"].startswith(reverse("accounts:login"))


@pytest.mark.parametrize("url_name", BACKOFFICE_PAGES)
def test_members_are_forbidden(member_client, url_name):
    assert member_client.get(reverse(url_name)).status_code == 403


def test_dashboard_counts(staff_client, striker):
    resp = staff_client.get(reverse("backoffice:dashboard"))
    assert resp.status_code == 200
    kpi = resp.context["kpi"]
    assert (kpi["sports"], kpi["teams"], kpi["players"]) == (1, 1, 1)
    assert list(resp.context["recent_players"]) == [striker]


def test_sport_list_annotates_counts(staff_client, striker):
    resp = staff_client.get(reverse("sports:sport_list"))
    sport = resp.context["sports"][0]
    assert (sport.name, sport.team_count, sport.player_count) == ("Football", 1, 1)


# --- sport builder ---

def test_builder_saves_sport_with_fields(staff_client):
    rows = [
        {"type": "select", "label": "Grip", "options": "Eastern, Western", "required": "on"},
        {"type": "number", "label": "Ranking", "placeholder": "e.g. 12"},
    ]
    resp = staff_client.post(reverse("sports:sport_new"), _builder_post(rows=rows, action="save"))
    assert resp.status_code == 302
    assert resp["Location"] == reverse("sports:sport_list")
    sport = Sport.objects.get(slug="tennis")
    labels = [(d.label, d.type, d.required) for d in sport.descriptors]
    assert labels == [("Grip", "select", True), ("Ranking", "number", False)]
    assert sport.descriptors[0].options == ("Eastern", "Western")
    assert sport.descriptors[1].placeholder == "e.g. 12"
    assert all(d.id for d in sport.descriptors)


def test_builder_move_reorders_rows(staff_client):
    rows = [{"id": "a", "type": "text", "label": "First"}, {"id": "b", "type": "text", "label": "Second"}]
    resp = staff_client.post(reverse("sports:sport_new"), _builder_post(rows=rows, move="a:down"))
    assert resp.status_code == 200
    assert [row["label"] for row in resp.context["formset"].initial] == ["Second", "First"]
    assert resp.context["form"].initial["name"] == "Tennis"
    assert not Sport.objects.exists()


def test_builder_add_appends_blank_row(staff_client):
    rows = [{"id": "a", "type": "text", "label": "First"}]
    resp = staff_client.post(reverse("sports:sport_new"), _builder_post(name="", rows=rows, action="add"))
    assert resp.status_code == 200
    formset = resp.context["formset"]
    assert len(formset.forms) == 2
    assert not resp.context["form"].is_bound


def test_builder_rejects_choice_field_without_options(staff_client):
    rows = [{"type": "radio", "label": "Hand"}]
    resp = staff_client.post(reverse("sports:sport_new"), _builder_post(rows=rows, action="save"))
    assert resp.status_code == 200
    assert resp.context["formset"].forms[0].errors["options"] == [OPTIONS_REQUIRED]
    assert not Sport.objects.exists()


def test_builder_duplicate_name_is_a_form_error(staff_client, football):
    resp = staff_client.post(reverse("sports:sport_new"), _builder_post(name="Football", action="save"))
    assert resp.status_code == 200
    assert resp.context["form"].errors["name"] == ["A sport with this name already exists"]


def test_builder_edit_keeps_slug_when_name_unchanged(staff_client, football):
    football.slug = "footy"
    football.save()
    rows = [{"id": "jerseyNumber", "type": "number", "label": "Jersey Number", "required": "on"}]
    data = _builder_post(name="Football", rows=rows, action="save")
    resp = staff_client.post(reverse("sports:sport_edit", args=[football.pk]), data)
    assert resp.status_code == 302
    football.refresh_from_db()
    assert football.slug == "footy"
    assert football.description == "Racquet sport."


# --- player editor ---

def _player_post(football, eagles, **extra):
    data = {
        "sport": football.pk,
        "team": eagles.pk,
        "name": "Jo Keeper",
        "age": "19",
        "contact": "jo@example.com",
        "image_url": "/media/jo.png",
        "action": "save",
    }
    data.update(extra)
    return data


def test_player_editor_renders_sport_fields(staff_client, football):
    resp = staff_client.get(reverse("players:player_new"), {"sport": football.pk})
    assert resp.status_code == 200
    assert 'name="extra-jerseyNumber"' in resp.content.decode()


def test_player_editor_without_sport_has_no_extra_fields(staff_client, football):
    resp = staff_client.get(reverse("players:player_new"))
    assert resp.status_code == 200
    assert resp.context["sport"] is None
    assert "extra-jerseyNumber" not in resp.content.decode()


def test_player_editor_requires_sport_fields(staff_client, football, eagles):
    resp = staff_client.post(reverse("players:player_new"), _player_post(football, eagles))
    assert resp.status_code == 200
    assert resp.context["extra_form"].errors["jerseyNumber"] == ["Jersey Number is required"]
    assert not Player.objects.exists()


def test_player_editor_saves_by_label(staff_client, football, eagles):
    resp = staff_client.post(reverse("players:player_new"), _player_post(football, eagles, **{"extra-jerseyNumber": "10"}))
    assert resp.status_code == 302
    assert resp["Location"] == reverse("backoffice:dashboard")
    player = Player.objects.get()
    assert player.additional_fields == {"Jersey Number": 10}
    assert player.slug == "jo_keeper"


def test_player_editor_prefills_edit_form(staff_client, striker):
    resp = staff_client.get(reverse("players:player_edit", args=[striker.pk]))
    assert resp.status_code == 200
    assert resp.context["extra_form"].initial == {"jerseyNumber": 9}


def test_player_editor_refresh_keeps_typed_values(staff_client, football, eagles):
    resp = staff_client.post(reverse("players:player_new"), _player_post(football, eagles, action="refresh"))
    assert resp.status_code == 200
    assert resp.context["form"].initial["name"] == "Jo Keeper"
    assert list(resp.context["extra_form"].fields) == ["jerseyNumber"]
    assert not Player.objects.exists()


def test_builder_conflict_leaves_no_stored_upload(staff_client, football, media_root):
    data = _builder_post(name="Football", action="save")
    data["image"] = image_upload("kit.png")
    resp = staff_client.post(reverse("sports:sport_new"), data)
    assert resp.status_code == 200
    assert resp.context["form"].errors["name"] == ["A sport with this name already exists"]
    assert not (media_root / "uploads").exists()


def test_player_editor_stores_upload_after_save(staff_client, football, eagles, media_root):
    data = _player_post(football, eagles, image_url="", **{"extra-jerseyNumber": "4"})
    data["image"] = image_upload("jo.png")
    resp = staff_client.post(reverse("players:player_new"), data)
    assert resp.status_code == 302
    player = Player.objects.get()
    assert player.image_url.startswith("/media/uploads/")
    assert len(list((media_root / "uploads").iterdir())) == 1


def test_player_editor_conflict_leaves_no_stored_upload(staff_client, football, eagles, striker, media_root):
    data = _player_post(football, eagles, name="Sam Striker", image_url="", **{"extra-jerseyNumber": "4"})
    data["image"] = image_upload("sam.png")
    resp = staff_client.post(reverse("players:player_new"), data)
    assert resp.status_code == 200
    assert resp.context["form"].errors["name"] == ["A player with this name already exists"]
    assert not (media_root / "uploads").exists()
