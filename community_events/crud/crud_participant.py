# community_events/crud/crud_participant.py
"""
Queries over event participant records.

Writes that touch capacity live in `services.participation`, which wraps
them in a single transaction together with the event counter.
"""

from typing import List, Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session, joinedload

from community_events.constants.participation import ParticipantStatus
from community_events.models.event_participant import EventParticipant


class CRUDParticipant:
    """CRUD operations for event participants."""

    def get(self, db: Session, *, id: str) -> Optional[EventParticipant]:
        return db.query(EventParticipant).filter(EventParticipant.id == id).first()

    def get_by_user_and_event(
        self,
        db: Session,
        *,
        event_id: str,
        user_id: str,
    ) -> Optional[EventParticipant]:
        """Get a user's record for an event (any status)."""
        return db.query(EventParticipant).filter(
            and_(
                EventParticipant.event_id == event_id,
                EventParticipant.user_id == user_id,
            )
        ).first()

    def get_active(
        self,
        db: Session,
        *,
        event_id: str,
        user_id: str,
    ) -> Optional[EventParticipant]:
        """Get a user's going or waitlisted record for an event."""
        return db.query(EventParticipant).filter(
            and_(
                EventParticipant.event_id == event_id,
                EventParticipant.user_id == user_id,
                EventParticipant.status.in_(ParticipantStatus.active_values()),
            )
        ).first()

    def count_all_going(self, db: Session) -> int:
        return db.query(func.count(EventParticipant.id)).filter(
            EventParticipant.status == ParticipantStatus.GOING
        ).scalar() or 0

    def get_waitlist(
        self,
        db: Session,
        *,
        event_id: str,
        limit: Optional[int] = None,
    ) -> List[EventParticipant]:
        """Waitlisted records, longest waiting first."""
        query = db.query(EventParticipant).filter(
            and_(
                EventParticipant.event_id == event_id,
                EventParticipant.status == ParticipantStatus.WAITLISTED,
            )
        ).order_by(EventParticipant.rsvp_at.asc(), EventParticipant.id.asc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get_multi_by_event(
        self,
        db: Session,
        *,
        event_id: str,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> List[EventParticipant]:
        """
        Non-cancelled participants in RSVP order with their public profile.

        `cursor` is the id of the last participant of the previous page.
        An unknown cursor starts from the beginning.
        """
        query = (
            db.query(EventParticipant)
            .options(joinedload(EventParticipant.user))
            .filter(
                EventParticipant.event_id == event_id,
                EventParticipant.status != ParticipantStatus.CANCELLED,
            )
        )

        if cursor:
            anchor = self.get(db, id=cursor)
            if anchor is not None and anchor.event_id == event_id:
                query = query.filter(
                    or_(
                        EventParticipant.rsvp_at > anchor.rsvp_at,
                        and_(
                            EventParticipant.rsvp_at == anchor.rsvp_at,
                            EventParticipant.id > anchor.id,
                        ),
                    )
                )

        return (
            query.order_by(EventParticipant.rsvp_at.asc(), EventParticipant.id.asc())
            .limit(limit)
            .all()
        )

    def get_multi_by_user(
        self,
        db: Session,
        *,
        user_id: str,
        include_cancelled: bool = False,
    ) -> List[EventParticipant]:
        """A user's participations with the event eagerly loaded."""
        query = (
            db.query(EventParticipant)
            .options(joinedload(EventParticipant.event))
            .filter(EventParticipant.user_id == user_id)
        )
        if not include_cancelled:
            query = query.filter(EventParticipant.status != ParticipantStatus.CANCELLED)
        return query.order_by(EventParticipant.rsvp_at.desc()).all()


# Singleton instance
participant = CRUDParticipant()
