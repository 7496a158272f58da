# community_events/services/participation.py
"""
RSVP allocation for events.

Every operation that changes who is going runs in one transaction that:
- locks the event row (PostgreSQL `SELECT ... FOR UPDATE`),
- reads the going count and asks `evaluate_capacity` for a decision,
- takes the seat with a guarded counter update,
- writes the participant row.

A collision with another transaction surfaces as `CapacityRaceViolation`
and the operation is retried once from the top.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session
from tenacity import retry, retry_if_exception_type, stop_after_attempt

from community_events.constants.participation import ParticipantStatus
from community_events.core.exceptions import (
    CapacityConflict,
    CapacityRaceViolation,
    CommunityEventsError,
    EventNotAvailable,
    EventNotFound,
    InvalidEventUpdate,
    NotRegistered,
    ParticipantNotCheckable,
    StorageFailure,
)
from community_events.crud import crud_event, crud_participant
from community_events.models.event import Event
from community_events.models.event_participant import EventParticipant
from community_events.schemas.event import EventUpdate
from community_events.utils.capacity import Decision, available_spots, evaluate_capacity
from community_events.utils.event_status import as_utc

logger = logging.getLogger(__name__)

T = TypeVar("T")

WAITLIST_NOTICE = "Event is at capacity. You have been added to the waitlist."

# serialization_failure, deadlock_detected, lock_not_available
_RACE_PGCODES = {"40001", "40P01", "55P03"}
# unique_violation, check_violation
_CONFLICT_PGCODES = {"23505", "23514"}

# Columns an update may set back to NULL
_NULLABLE_EVENT_FIELDS = {
    "subtitle",
    "description",
    "rsvp_deadline",
    "capacity",
    "location",
    "online_url",
    "poster_image",
}

# Retry the losing side of a collision exactly once
retry_on_race = retry(
    stop=stop_after_attempt(2),
    retry=retry_if_exception_type(CapacityRaceViolation),
    reraise=True,
)


def is_race(exc: SQLAlchemyError) -> bool:
    """True when a storage error means another transaction won a race."""
    orig = getattr(exc, "orig", None)
    pgcode = getattr(orig, "pgcode", None)
    message = str(orig) if orig is not None else str(exc)

    if isinstance(exc, IntegrityError):
        return pgcode in _CONFLICT_PGCODES or (
            "UNIQUE constraint failed" in message or "CHECK constraint failed" in message
        )
    if isinstance(exc, OperationalError):
        return pgcode in _RACE_PGCODES or "database is locked" in message
    return False


@dataclass
class RsvpResult:
    participant: EventParticipant
    decision: Decision
    # False when the user already held a going or waitlisted record
    created: bool = True

    @property
    def message(self) -> Optional[str]:
        if self.decision is Decision.WAITLIST:
            return WAITLIST_NOTICE
        return None


@dataclass
class CancelResult:
    participant: EventParticipant
    promoted: List[EventParticipant] = field(default_factory=list)


class ParticipationService:
    """
    Participation state machine for one request.

    The session is passed in by the caller; the service never creates
    or caches its own.
    """

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    @retry_on_race
    def rsvp(
        self, *, user_id: str, event_id: str, now: Optional[datetime] = None
    ) -> RsvpResult:
        """RSVP a user to an event, admitting or waitlisting them."""
        now = now or datetime.now(timezone.utc)
        return self._run(
            lambda: self._rsvp(user_id, event_id, now),
            action="RSVP",
            user_id=user_id,
            event_id=event_id,
        )

    @retry_on_race
    def cancel(
        self, *, user_id: str, event_id: str, now: Optional[datetime] = None
    ) -> CancelResult:
        """Cancel a user's RSVP and hand a freed seat to the waitlist."""
        now = now or datetime.now(timezone.utc)
        return self._run(
            lambda: self._cancel(user_id, event_id, now),
            action="cancel RSVP",
            user_id=user_id,
            event_id=event_id,
        )

    @retry_on_race
    def promote_waitlisted(self, *, event_id: str) -> List[EventParticipant]:
        """Fill any free seats from the waitlist, oldest RSVP first."""

        def _promote_locked() -> List[EventParticipant]:
            event = self._lock_event(event_id)
            promoted = self._promote(event)
            self.db.commit()
            for record in promoted:
                self.db.refresh(record)
            return promoted

        return self._run(_promote_locked, action="promote waitlist", event_id=event_id)

    @retry_on_race
    def update_event(
        self, *, event_id: str, obj_in: EventUpdate
    ) -> Tuple[Event, List[EventParticipant]]:
        """
        Apply an administrator's edit.

        The RSVP deadline may not end up after the event date, and capacity
        may not drop below the current going count. Raising capacity
        promotes from the waitlist in the same transaction.
        """

        def _update_locked() -> Tuple[Event, List[EventParticipant]]:
            event = self._lock_event(event_id)
            update_data = {
                key: value
                for key, value in obj_in.model_dump(exclude_unset=True).items()
                if value is not None or key in _NULLABLE_EVENT_FIELDS
            }

            if "date" in update_data or "rsvp_deadline" in update_data:
                date = update_data.get("date", event.date)
                deadline = update_data.get("rsvp_deadline", event.rsvp_deadline)
                if deadline is not None and as_utc(deadline) > as_utc(date):
                    raise InvalidEventUpdate()

            if "capacity" in update_data:
                new_capacity = update_data["capacity"]
                if new_capacity is not None and new_capacity < event.going_count:
                    raise CapacityConflict(
                        f"Capacity cannot be lower than the {event.going_count} "
                        f"participants already going"
                    )

            for key, value in update_data.items():
                setattr(event, key, value)
            self.db.flush()

            promoted = self._promote(event)
            self.db.commit()
            self.db.refresh(event)
            for record in promoted:
                self.db.refresh(record)

            logger.info(
                f"Event {event_id} updated ({', '.join(sorted(update_data)) or 'no fields'}), "
                f"{len(promoted)} promoted from waitlist"
            )
            return event, promoted

        return self._run(_update_locked, action="update event", event_id=event_id)

    def check_in(self, *, user_id: str, event_id: str) -> EventParticipant:
        """Mark a going participant as present."""

        def _check_in() -> EventParticipant:
            if crud_event.event.get(self.db, id=event_id) is None:
                raise EventNotFound()
            record = crud_participant.participant.get_by_user_and_event(
                self.db, event_id=event_id, user_id=user_id
            )
            if record is None or record.status == ParticipantStatus.CANCELLED:
                raise NotRegistered("Participant not found for this event")
            if record.status != ParticipantStatus.GOING:
                raise ParticipantNotCheckable()

            record.is_checked_in = True
            self.db.commit()
            self.db.refresh(record)
            logger.info(f"User {user_id} checked in to event {event_id}")
            return record

        return self._run(_check_in, action="check in", user_id=user_id, event_id=event_id)

    def list_participants(
        self,
        *,
        event_id: str,
        limit: int = 50,
        cursor: Optional[str] = None,
        include_unpublished: bool = False,
    ) -> Tuple[List[EventParticipant], Optional[str]]:
        """
        Non-cancelled participants and the cursor of the next page.

        Unpublished events read as missing unless `include_unpublished`.
        """

        def _list() -> Tuple[List[EventParticipant], Optional[str]]:
            event = crud_event.event.get(self.db, id=event_id)
            if event is None or (not event.is_published and not include_unpublished):
                raise EventNotFound()
            records = crud_participant.participant.get_multi_by_event(
                self.db, event_id=event_id, limit=limit, cursor=cursor
            )
            next_cursor = records[-1].id if len(records) == limit else None
            return records, next_cursor

        return self._run(_list, action="list participants", event_id=event_id)

    # ------------------------------------------------------------------
    # Transaction bodies
    # ------------------------------------------------------------------

    def _rsvp(self, user_id: str, event_id: str, now: datetime) -> RsvpResult:
        event = self._lock_event(event_id)

        if not event.is_published:
            raise EventNotAvailable()
        if event.rsvp_deadline is not None and as_utc(event.rsvp_deadline) < now:
            raise EventNotAvailable("The RSVP deadline for this event has passed")

        record = crud_participant.participant.get_by_user_and_event(
            self.db, event_id=event_id, user_id=user_id
        )
        if record is not None and record.status in ParticipantStatus.active_values():
            # Idempotent: release the lock and hand back what is already there
            self.db.rollback()
            decision = (
                Decision.ADMIT
                if record.status == ParticipantStatus.GOING
                else Decision.WAITLIST
            )
            return RsvpResult(participant=record, decision=decision, created=False)

        decision = evaluate_capacity(event.capacity, event.going_count)
        if decision is Decision.ADMIT and not crud_event.event.claim_slot(
            self.db, event_id=event_id
        ):
            logger.info(
                f"Seat for event {event_id} taken concurrently while admitting user {user_id}"
            )
            raise CapacityRaceViolation()

        status = (
            ParticipantStatus.GOING
            if decision is Decision.ADMIT
            else ParticipantStatus.WAITLISTED
        )
        if record is None:
            record = EventParticipant(
                user_id=user_id,
                event_id=event_id,
                status=status,
                is_checked_in=False,
                rsvp_at=now,
            )
            self.db.add(record)
        else:
            # Re-RSVP after a cancellation reuses the row with a fresh queue position
            record.status = status
            record.cancelled_at = None
            record.is_checked_in = False
            record.rsvp_at = now

        self.db.commit()
        self.db.refresh(record)

        logger.info(
            f"User {user_id} RSVPed to event {event_id} as {status} "
            f"(capacity={event.capacity})"
        )
        return RsvpResult(participant=record, decision=decision, created=True)

    def _cancel(self, user_id: str, event_id: str, now: datetime) -> CancelResult:
        event = self._lock_event(event_id)

        record = crud_participant.participant.get_active(
            self.db, event_id=event_id, user_id=user_id
        )
        if record is None:
            raise NotRegistered()

        was_going = record.status == ParticipantStatus.GOING
        record.status = ParticipantStatus.CANCELLED
        record.cancelled_at = now
        record.is_checked_in = False

        promoted: List[EventParticipant] = []
        if was_going:
            crud_event.event.release_slot(self.db, event_id=event_id)
            self.db.flush()
            promoted = self._promote(event)

        self.db.commit()
        self.db.refresh(record)
        for promoted_record in promoted:
            self.db.refresh(promoted_record)

        logger.info(
            f"User {user_id} cancelled RSVP for event {event_id}; "
            f"promoted {[p.user_id for p in promoted]}"
        )
        return CancelResult(participant=record, promoted=promoted)

    def _promote(self, event: Event) -> List[EventParticipant]:
        """
        Move waitlisted records to going while the evaluator admits.

        Must run inside the caller's transaction with the event row locked.
        """
        self.db.refresh(event)
        going = event.going_count
        if evaluate_capacity(event.capacity, going) is not Decision.ADMIT:
            return []

        candidates = crud_participant.participant.get_waitlist(
            self.db,
            event_id=event.id,
            limit=available_spots(event.capacity, going),
        )

        promoted: List[EventParticipant] = []
        for candidate in candidates:
            if evaluate_capacity(event.capacity, going) is not Decision.ADMIT:
                break
            if not crud_event.event.claim_slot(self.db, event_id=event.id):
                break
            candidate.status = ParticipantStatus.GOING
            going += 1
            promoted.append(candidate)

        if promoted:
            self.db.flush()
        return promoted

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _lock_event(self, event_id: str) -> Event:
        event = crud_event.event.get_for_update(self.db, id=event_id)
        if event is None:
            raise EventNotFound()
        return event

    def _run(
        self,
        body: Callable[[], T],
        *,
        action: str,
        event_id: str,
        user_id: Optional[str] = None,
    ) -> T:
        """
        Run a transaction body, rolling back on any failure and mapping
        storage errors onto the domain errors.
        """
        try:
            return body()
        except CommunityEventsError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            if is_race(e):
                logger.warning(
                    f"Concurrent update while trying to {action} for event {event_id}: {e}",
                    extra={"user_id": user_id, "event_id": event_id},
                )
                raise CapacityRaceViolation() from e
            logger.error(
                f"Failed to {action} for event {event_id}: {str(e)}",
                exc_info=True,
                extra={"user_id": user_id, "event_id": event_id},
            )
            raise StorageFailure() from e
