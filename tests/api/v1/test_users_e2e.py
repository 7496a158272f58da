# tests/api/v1/test_users_e2e.py

from tests.utils.auth import get_user_authentication_headers
from tests.utils.event import create_random_event
from tests.utils.user import create_user


def test_profile_read_and_update(test_client_e2e, db_session_e2e):
    create_user(db_session_e2e, "alice", first_name="Alice")
    headers = get_user_authentication_headers("alice")

    response = test_client_e2e.patch(
        "/api/v1/users/me",
        headers=headers,
        json={"bio": "Data nerd", "last_name": "Liddell", "role": "admin"},
    )
    assert response.status_code == 200
    profile = response.json()
    assert profile["bio"] == "Data nerd"
    assert profile["last_name"] == "Liddell"
    assert profile["first_name"] == "Alice"
    # Role is not editable by the user
    assert profile["role"] == "member"


def test_my_events_excludes_cancelled_by_default(test_client_e2e, db_session_e2e):
    event = create_random_event(db_session_e2e)
    headers = get_user_authentication_headers("alice")
    url = f"/api/v1/events/{event.id}/participants"
    test_client_e2e.post(url, headers=headers)
    test_client_e2e.delete(url, headers=headers)

    assert test_client_e2e.get("/api/v1/users/me/events", headers=headers).json() == []

    response = test_client_e2e.get(
        "/api/v1/users/me/events", params={"include_cancelled": True}, headers=headers
    )
    assert [p["status"] for p in response.json()] == ["cancelled"]


def test_admin_user_management(test_client_e2e, db_session_e2e):
    create_user(db_session_e2e, "admin", role="admin", first_name="Ada")
    create_user(db_session_e2e, "alice", first_name="Alice")
    create_user(db_session_e2e, "bob", first_name="Bob")
    admin = get_user_authentication_headers("admin")

    response = test_client_e2e.get("/api/v1/users", headers=admin)
    assert response.status_code == 200
    assert response.json()["pagination"]["totalItems"] == 3

    response = test_client_e2e.get("/api/v1/users", params={"search": "ali"}, headers=admin)
    assert [u["id"] for u in response.json()["data"]] == ["alice"]

    response = test_client_e2e.patch(
        "/api/v1/users/bob/role", headers=admin, json={"role": "admin"}
    )
    assert response.status_code == 200
    assert response.json()["role"] == "admin"

    response = test_client_e2e.patch(
        "/api/v1/users/admin/role", headers=admin, json={"role": "member"}
    )
    assert response.status_code == 400

    response = test_client_e2e.patch(
        "/api/v1/users/nobody/role", headers=admin, json={"role": "admin"}
    )
    assert response.status_code == 404

    member = get_user_authentication_headers("alice")
    assert test_client_e2e.get("/api/v1/users", headers=member).status_code == 403


def test_dashboard_stats(test_client_e2e, db_session_e2e):
    create_user(db_session_e2e, "admin", role="admin")
    event = create_random_event(db_session_e2e, capacity=10)
    create_random_event(db_session_e2e, is_published=False)
    test_client_e2e.post(
        f"/api/v1/events/{event.id}/participants",
        headers=get_user_authentication_headers("alice"),
    )

    response = test_client_e2e.get("/api/v1/admin/stats", headers=get_user_authentication_headers("admin"))

    assert response.status_code == 200
    stats = response.json()
    assert stats["totalUsers"] == 2
    assert stats["totalEvents"] == 2
    assert stats["upcomingEvents"] == 1
    assert stats["goingParticipants"] == 1
    assert len(stats["recentEvents"]) == 2


def test_admin_reads_any_profile(test_client_e2e, db_session_e2e):
    create_user(db_session_e2e, "admin", role="admin")
    create_user(db_session_e2e, "alice", first_name="Alice")
    admin = get_user_authentication_headers("admin")

    response = test_client_e2e.get("/api/v1/users/alice", headers=admin)
    assert response.status_code == 200
    assert response.json()["first_name"] == "Alice"

    assert test_client_e2e.get("/api/v1/users/nobody", headers=admin).status_code == 404

    member = get_user_authentication_headers("alice")
    assert test_client_e2e.get("/api/v1/users/admin", headers=member).status_code == 403
    # The caller's own profile still resolves through /me
    assert test_client_e2e.get("/api/v1/users/me", headers=member).json()["id"] == "alice"
