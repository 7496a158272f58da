# tests/api/v1/test_photos_e2e.py

from community_events.models.photo import Photo
from tests.utils.auth import get_user_authentication_headers
from tests.utils.event import create_random_event
from tests.utils.user import create_user


def test_photo_gallery_lifecycle(test_client_e2e, db_session_e2e):
    create_user(db_session_e2e, "admin", role="admin")
    event = create_random_event(db_session_e2e)
    admin = get_user_authentication_headers("admin")

    response = test_client_e2e.post(
        "/api/v1/photos",
        headers=admin,
        json={
            "event_id": event.id,
            "image": "https://cdn.example.com/photos/events/stage.jpg",
            "caption": "Main stage",
        },
    )
    assert response.status_code == 201
    stage = response.json()
    assert stage["public_url"] == "https://cdn.example.com/photos/events/stage.jpg"
    assert stage["uploaded_by_user_id"] == "admin"

    # A storage path is resolved to a public URL
    response = test_client_e2e.post(
        "/api/v1/photos",
        headers=admin,
        json={"event_id": event.id, "image": f"events/{event.id}/crowd.jpg"},
    )
    assert response.status_code == 201
    assert response.json()["public_url"].endswith(f"/events/{event.id}/crowd.jpg")
    assert response.json()["public_url"].startswith("http")

    response = test_client_e2e.get("/api/v1/photos", params={"eventId": event.id})
    assert response.status_code == 200
    assert len(response.json()) == 2

    response = test_client_e2e.delete(f"/api/v1/photos/{stage['id']}", headers=admin)
    assert response.status_code == 204
    response = test_client_e2e.get("/api/v1/photos", params={"eventId": event.id})
    assert [p["caption"] for p in response.json()] == [None]

    assert test_client_e2e.delete(f"/api/v1/photos/{stage['id']}", headers=admin).status_code == 404


def test_only_admins_add_photos(test_client_e2e, db_session_e2e):
    event = create_random_event(db_session_e2e)
    payload = {"event_id": event.id, "image": "https://cdn.example.com/a.jpg"}

    assert test_client_e2e.post("/api/v1/photos", json=payload).status_code == 401
    member = get_user_authentication_headers("alice")
    assert test_client_e2e.post("/api/v1/photos", headers=member, json=payload).status_code == 403


def test_members_cannot_delete_other_uploads(test_client_e2e, db_session_e2e):
    create_user(db_session_e2e, "admin", role="admin")
    event = create_random_event(db_session_e2e)
    photo = Photo(
        event_id=event.id,
        image="https://cdn.example.com/a.jpg",
        public_url="https://cdn.example.com/a.jpg",
        uploaded_by_user_id="admin",
    )
    db_session_e2e.add(photo)
    db_session_e2e.commit()
    photo_id = photo.id

    member = get_user_authentication_headers("alice")
    assert test_client_e2e.delete(f"/api/v1/photos/{photo_id}", headers=member).status_code == 403


def test_draft_and_missing_event_galleries(test_client_e2e, db_session_e2e):
    create_user(db_session_e2e, "admin", role="admin")
    draft = create_random_event(db_session_e2e, is_published=False)
    admin = get_user_authentication_headers("admin")

    assert test_client_e2e.get("/api/v1/photos", params={"eventId": draft.id}).status_code == 404
    response = test_client_e2e.get("/api/v1/photos", params={"eventId": draft.id}, headers=admin)
    assert response.status_code == 200

    response = test_client_e2e.post(
        "/api/v1/photos",
        headers=admin,
        json={"event_id": "evt_missing", "image": "https://cdn.example.com/a.jpg"},
    )
    assert response.status_code == 404
    assert test_client_e2e.get("/api/v1/photos").status_code == 422


def test_deleting_event_removes_its_photos(test_client_e2e, db_session_e2e):
    create_user(db_session_e2e, "admin", role="admin")
    event = create_random_event(db_session_e2e)
    admin = get_user_authentication_headers("admin")
    test_client_e2e.post(
        "/api/v1/photos",
        headers=admin,
        json={"event_id": event.id, "image": "https://cdn.example.com/a.jpg"},
    )

    assert test_client_e2e.delete(f"/api/v1/events/{event.id}", headers=admin).status_code == 204
    db_session_e2e.expire_all()
    assert db_session_e2e.query(Photo).count() == 0
