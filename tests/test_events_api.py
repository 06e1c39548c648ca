from datetime import timedelta

import pytest
from django.utils import timezone

from events.models import Event
from events.services import derive_status, parse_when
from tests.helpers import send_json

pytestmark = pytest.mark.django_db

ADMIN = "/api/admin/events"
FEED = "/api/events"


def _iso(delta: timedelta) -> str:
    return (timezone.now() + delta).isoformat()


def _body(**overrides):
    data = {
        "name": "Spring Cup",
        "description": "Annual tournament.",
        "imageUrl": "/media/cup.png",
        "location": "Main Stadium",
        "startDate": _iso(timedelta(days=3)),
        "endDate": _iso(timedelta(days=4)),
    }
    data.update(overrides)
    return data


def _event(name, start_days, hours=2, status=Event.Status.UPCOMING, **extra):
    start = timezone.now() + timedelta(days=start_days)
    return Event.objects.create(
        name=name, description="-", image_url="/e.png", location="Hall",
        start_date=start, end_date=start + timedelta(hours=hours), status=status, **extra,
    )


def test_derive_status():
    now = timezone.now()
    hour = timedelta(hours=1)
    assert derive_status(now + hour, now + 2 * hour, now) == Event.Status.UPCOMING
    assert derive_status(now - hour, now + hour, now) == Event.Status.ONGOING
    assert derive_status(now - 2 * hour, now - hour, now) == Event.Status.COMPLETED


def test_parse_when_accepts_dates_and_zulu_times():
    assert parse_when("2025-06-01T10:00:00Z", "startDate").isoformat() == "2025-06-01T10:00:00+00:00"
    assert parse_when("2025-06-01", "startDate").hour == 0
    assert timezone.is_aware(parse_when("2025-06-01", "startDate"))


@pytest.mark.parametrize(
    "start, end, status",
    [
        (timedelta(days=3), timedelta(days=4), "upcoming"),
        (timedelta(hours=-1), timedelta(hours=1), "ongoing"),
        (timedelta(days=-4), timedelta(days=-3), "completed"),
    ],
)
def test_create_derives_status(client, start, end, status):
    resp = send_json(client, "post", ADMIN, _body(startDate=_iso(start), endDate=_iso(end), status="cancelled"))
    assert resp.status_code == 201
    assert resp.json()["event"]["status"] == status
    assert resp.json()["event"]["slug"] == "spring_cup"


def test_end_before_start_is_rejected(client):
    resp = send_json(client, "post", ADMIN, _body(startDate=_iso(timedelta(days=4)), endDate=_iso(timedelta(days=3))))
    assert resp.status_code == 400
    assert resp.json()["error"] == "End date cannot be before start date"
    assert not Event.objects.exists()


def test_unparseable_date(client):
    resp = send_json(client, "post", ADMIN, _body(startDate="next tuesday"))
    assert resp.status_code == 400
    assert "startDate" in resp.json()["fields"]


def test_duplicate_event_is_a_conflict(client):
    send_json(client, "post", ADMIN, _body())
    resp = send_json(client, "post", ADMIN, _body(name="Spring  Cup"))
    assert resp.status_code == 409
    assert resp.json()["error"] == "An event with this name already exists"


def test_explicit_slug_and_teams(client, eagles):
    resp = send_json(client, "post", ADMIN, _body(slug="Spring Cup 2025", sport=eagles.sport_id, teams=[eagles.pk]))
    assert resp.status_code == 201
    event = resp.json()["event"]
    assert event["slug"] == "spring_cup_2025"
    assert event["sport"]["slug"] == "football"
    assert [t["slug"] for t in event["teams"]] == ["eagles"]


def test_update_checks_range_and_id(client):
    event = _event("Derby", 2)
    resp = send_json(client, "put", ADMIN, {"name": "x"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Event ID is required"
    resp = send_json(
        client, "put", ADMIN,
        {"id": event.pk, "startDate": _iso(timedelta(days=5)), "endDate": _iso(timedelta(days=1))},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "End date cannot be before start date"
    resp = send_json(client, "put", ADMIN, {"id": event.pk, "status": "cancelled", "location": "North Field"})
    assert resp.status_code == 200
    event.refresh_from_db()
    assert (event.status, event.location) == ("cancelled", "North Field")


def test_update_rejects_unknown_status(client):
    event = _event("Derby", 2)
    resp = send_json(client, "put", ADMIN, {"id": event.pk, "status": "postponed"})
    assert resp.status_code == 400
    assert "status" in resp.json()["fields"]


def test_admin_listing_and_delete(client):
    first = _event("Alpha", 1)
    _event("Beta", 2)
    assert [e["name"] for e in client.get(ADMIN).json()] == ["Beta", "Alpha"]
    assert [e["name"] for e in client.get(ADMIN, {"slug": "alpha"}).json()] == ["Alpha"]
    assert client.delete(f"{ADMIN}?id={first.pk}").json() == {"message": "Event deleted successfully"}
    assert client.delete(f"{ADMIN}?id={first.pk}").status_code == 404


# --- public feed ---

def test_feed_pages_with_headers(client):
    for i in range(5):
        _event(f"Game {i}", i + 1)
    resp = client.get(FEED, {"limit": 2, "page": 2})
    assert resp.status_code == 200
    assert [e["name"] for e in resp.json()] == ["Game 2", "Game 3"]
    assert resp["X-Total-Count"] == "5"
    assert resp["X-Page"] == "2"
    assert resp["X-Limit"] == "2"
    assert resp["X-Total-Pages"] == "3"


def test_feed_defaults(client, settings):
    settings.CLUB_EVENTS_PAGE_SIZE = 10
    for i in range(12):
        _event(f"Game {i:02d}", i + 1)
    resp = client.get(FEED)
    assert len(resp.json()) == 10
    assert resp.json()[0]["name"] == "Game 00"
    assert resp["X-Page"] == "1"
    assert resp["X-Total-Pages"] == "2"


def test_feed_other_sort_keys_run_descending(client):
    _event("Bravo", 1)
    _event("Alpha", 2)
    _event("Charlie", 3)
    assert [e["name"] for e in client.get(FEED, {"sort": "name"}).json()] == ["Charlie", "Bravo", "Alpha"]
    assert client.get(FEED, {"sort": "colour"}).status_code == 400


def test_upcoming_also_requires_future_start(client):
    _event("Stale", -1, hours=1)  # still flagged upcoming, but already started
    _event("Soon", 1)
    _event("Finished", -3, status=Event.Status.COMPLETED)
    names = [e["name"] for e in client.get(FEED, {"status": "upcoming"}).json()]
    assert names == ["Soon"]
    assert [e["name"] for e in client.get(FEED, {"status": "completed"}).json()] == ["Finished"]


def test_feed_filters_by_sport_and_team(client, eagles):
    with_team = _event("Cup Final", 1, sport=eagles.sport)
    with_team.teams.add(eagles)
    _event("Friendly", 2)
    assert [e["name"] for e in client.get(FEED, {"teamId": eagles.pk}).json()] == ["Cup Final"]
    assert [e["name"] for e in client.get(FEED, {"sportId": eagles.sport_id}).json()] == ["Cup Final"]
    assert client.get(FEED, {"sportId": "nope"}).json() == []


def test_feed_is_read_only(client):
    assert client.post(FEED, data="{}", content_type="application/json").status_code == 405


def test_non_string_slug_is_a_400(client):
    resp = send_json(client, "post", ADMIN, _body(slug=5))
    assert resp.status_code == 400
    assert resp.json()["fields"] == {"slug": "slug must be a string"}
    assert not Event.objects.exists()


def test_feed_page_past_the_end_is_empty(client):
    _event("Only One", 2)
    resp = client.get(FEED, {"page": str(10**20), "limit": "5"})
    assert resp.status_code == 200
    assert resp.json() == []
    assert resp["X-Total-Count"] == "1"
    assert resp["X-Total-Pages"] == "1"
