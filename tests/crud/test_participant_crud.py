# tests/crud/test_participant_crud.py

from unittest.mock import MagicMock

from community_events.crud.crud_event import event as crud_event
from community_events.crud.crud_participant import participant as crud_participant
from community_events.models.event_participant import EventParticipant


def test_get_active_returns_first_match():
    db_session = MagicMock()
    mock_record = EventParticipant(id="par_1", user_id="user_1", event_id="evt_1", status="going")
    db_session.query.return_value.filter.return_value.first.return_value = mock_record

    result = crud_participant.get_active(db_session, event_id="evt_1", user_id="user_1")

    db_session.query.assert_called_once_with(EventParticipant)
    assert result == mock_record


def test_count_all_going_defaults_to_zero():
    db_session = MagicMock()
    db_session.query.return_value.filter.return_value.scalar.return_value = None

    assert crud_participant.count_all_going(db_session) == 0


def test_get_waitlist_applies_limit():
    db_session = MagicMock()
    ordered = db_session.query.return_value.filter.return_value.order_by.return_value
    waiting = [EventParticipant(id="par_2"), EventParticipant(id="par_3")]
    ordered.limit.return_value.all.return_value = waiting

    result = crud_participant.get_waitlist(db_session, event_id="evt_1", limit=2)

    ordered.limit.assert_called_once_with(2)
    assert result == waiting


def test_claim_slot_reports_whether_a_row_was_updated():
    db_session = MagicMock()
    update = db_session.query.return_value.filter.return_value.update

    update.return_value = 1
    assert crud_event.claim_slot(db_session, event_id="evt_1") is True

    update.return_value = 0
    assert crud_event.claim_slot(db_session, event_id="evt_1") is False
