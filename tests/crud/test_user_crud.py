# tests/crud/test_user_crud.py

from unittest.mock import MagicMock

from community_events.crud.crud_user import user as crud_user
from community_events.models.user import User


def test_get_or_create_returns_existing_profile():
    db_session = MagicMock()
    existing = User(id="user_1", email="a@example.com", role="member")
    db_session.query.return_value.filter.return_value.first.return_value = existing

    result = crud_user.get_or_create(db_session, id="user_1", email="a@example.com")

    assert result is existing
    db_session.add.assert_not_called()


def test_get_or_create_provisions_member():
    db_session = MagicMock()
    db_session.query.return_value.filter.return_value.first.return_value = None

    result = crud_user.get_or_create(db_session, id="user_2", email="b@example.com")

    db_session.add.assert_called_once()
    assert result.id == "user_2"
    assert result.role == "member"
    db_session.commit.assert_called_once()
