# tests/api/v1/test_events_e2e.py

from datetime import datetime, timedelta, timezone

from community_events.models.event_participant import EventParticipant
from tests.utils.auth import get_user_authentication_headers
from tests.utils.event import create_random_event
from tests.utils.user import create_user


def _future(days: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def test_event_lifecycle_as_admin(test_client_e2e, db_session_e2e):
    """
    Tests the full lifecycle of an event: Create, Read, Update, Delete.
    """
    create_user(db_session_e2e, "admin", role="admin", first_name="Ada")
    headers = get_user_authentication_headers("admin")

    # 1. CREATE a draft
    event_data = {
        "title": "Quarterly Meetup",
        "description": "Talks and pizza",
        "date": _future(14),
        "capacity": 2,
        "location": "Community Hall",
    }
    response = test_client_e2e.post("/api/v1/events", headers=headers, json=event_data)
    assert response.status_code == 201
    created = response.json()
    event_id = created["id"]
    assert created["status"] == "draft"
    assert created["available_spots"] == 2
    assert created["organizer_user_id"] == "admin"

    # 2. READ: drafts are hidden from members and visitors
    member = get_user_authentication_headers("member")
    assert test_client_e2e.get(f"/api/v1/events/{event_id}").status_code == 404
    assert test_client_e2e.get(f"/api/v1/events/{event_id}", headers=member).status_code == 404
    response = test_client_e2e.get(f"/api/v1/events/{event_id}", headers=headers)
    assert response.status_code == 200
    assert response.json()["organizer"]["first_name"] == "Ada"

    # 3. UPDATE: publish it
    response = test_client_e2e.patch(
        f"/api/v1/events/{event_id}", headers=headers, json={"is_published": True}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "upcoming"
    assert test_client_e2e.get(f"/api/v1/events/{event_id}").status_code == 200

    # 4. DELETE removes participant records too
    test_client_e2e.post(f"/api/v1/events/{event_id}/participants", headers=member)
    response = test_client_e2e.delete(f"/api/v1/events/{event_id}", headers=headers)
    assert response.status_code == 204
    assert test_client_e2e.get(f"/api/v1/events/{event_id}", headers=headers).status_code == 404
    db_session_e2e.expire_all()
    assert db_session_e2e.query(EventParticipant).count() == 0

    response = test_client_e2e.delete(f"/api/v1/events/{event_id}", headers=headers)
    assert response.status_code == 404


def test_members_cannot_manage_events(test_client_e2e, db_session_e2e):
    event = create_random_event(db_session_e2e)
    headers = get_user_authentication_headers("member")

    response = test_client_e2e.post(
        "/api/v1/events", headers=headers, json={"title": "Mine", "date": _future(3)}
    )
    assert response.status_code == 403
    assert (
        test_client_e2e.patch(
            f"/api/v1/events/{event.id}", headers=headers, json={"title": "Renamed"}
        ).status_code
        == 403
    )
    assert test_client_e2e.delete(f"/api/v1/events/{event.id}", headers=headers).status_code == 403
    assert (
        test_client_e2e.post(
            "/api/v1/events", json={"title": "Mine", "date": _future(3)}
        ).status_code
        == 401
    )


def test_event_validation(test_client_e2e, db_session_e2e):
    create_user(db_session_e2e, "admin", role="admin")
    headers = get_user_authentication_headers("admin")

    response = test_client_e2e.post(
        "/api/v1/events",
        headers=headers,
        json={"title": "Bad", "date": _future(3), "capacity": 0},
    )
    assert response.status_code == 422

    response = test_client_e2e.post(
        "/api/v1/events",
        headers=headers,
        json={"title": "Bad", "date": _future(3), "rsvp_deadline": _future(5)},
    )
    assert response.status_code == 422


def test_list_events_hides_drafts_from_members(test_client_e2e, db_session_e2e):
    create_user(db_session_e2e, "admin", role="admin")
    create_random_event(db_session_e2e, title="Published one")
    create_random_event(db_session_e2e, title="Published two")
    create_random_event(db_session_e2e, title="Draft", is_published=False)

    response = test_client_e2e.get("/api/v1/events")
    assert response.status_code == 200
    data = response.json()
    assert data["pagination"]["totalItems"] == 2
    assert {e["title"] for e in data["data"]} == {"Published one", "Published two"}

    # A member asking for drafts still only sees published events
    response = test_client_e2e.get(
        "/api/v1/events",
        params={"published": "false"},
        headers=get_user_authentication_headers("member"),
    )
    assert response.json()["pagination"]["totalItems"] == 2

    admin = get_user_authentication_headers("admin")
    response = test_client_e2e.get("/api/v1/events", params={"published": "false"}, headers=admin)
    assert [e["title"] for e in response.json()["data"]] == ["Draft"]

    response = test_client_e2e.get("/api/v1/events", params={"limit": 2}, headers=admin)
    assert response.json()["pagination"] == {
        "totalItems": 3,
        "totalPages": 2,
        "currentPage": 1,
    }


def test_capacity_changes_through_api(test_client_e2e, db_session_e2e):
    create_user(db_session_e2e, "admin", role="admin")
    event = create_random_event(db_session_e2e, capacity=1)
    url = f"/api/v1/events/{event.id}/participants"
    for user_id in ("alice", "bob"):
        test_client_e2e.post(url, headers=get_user_authentication_headers(user_id))
    admin = get_user_authentication_headers("admin")

    response = test_client_e2e.patch(
        f"/api/v1/events/{event.id}", headers=admin, json={"capacity": 2}
    )
    assert response.status_code == 200
    assert response.json()["going_count"] == 2
    assert response.json()["available_spots"] == 0

    response = test_client_e2e.patch(
        f"/api/v1/events/{event.id}", headers=admin, json={"capacity": 1}
    )
    assert response.status_code == 409


def test_patch_deadline_after_stored_date_is_rejected(test_client_e2e, db_session_e2e):
    create_user(db_session_e2e, "admin", role="admin")
    event_date = datetime.now(timezone.utc) + timedelta(days=10)
    event = create_random_event(db_session_e2e, date=event_date)
    admin = get_user_authentication_headers("admin")

    response = test_client_e2e.patch(
        f"/api/v1/events/{event.id}",
        headers=admin,
        json={"rsvp_deadline": (event_date + timedelta(days=30)).isoformat()},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "RSVP deadline must not be after the event date"
