# community_events/crud/crud_event.py
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from .base import CRUDBase
from community_events.models.event import Event
from community_events.schemas.event import EventCreate, EventUpdate


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):

    def get_multi_filtered(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 10,
        published: Optional[bool] = None,
    ) -> Tuple[List[Event], int]:
        """
        Lists events newest first. `published=None` returns drafts and
        published events alike.
        """
        query = db.query(self.model)
        if published is not None:
            query = query.filter(self.model.is_published == published)

        total_count = query.count()

        events = (
            query.options(joinedload(self.model.organizer))
            .order_by(self.model.date.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return events, total_count

    def create_with_organizer(
        self, db: Session, *, obj_in: EventCreate, organizer_id: str
    ) -> Event:
        create_data = obj_in.model_dump()
        if not create_data.get("organizer_user_id"):
            create_data["organizer_user_id"] = organizer_id

        db_obj = self.model(**create_data, going_count=0)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_for_update(self, db: Session, *, id: str) -> Optional[Event]:
        """
        Loads the event and locks its row until the transaction ends.

        On PostgreSQL this serializes every admission, cancellation and
        promotion for one event. Dialects without row locks ignore FOR UPDATE
        and rely on the guarded counter updates below.
        """
        return (
            db.query(self.model)
            .filter(self.model.id == id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def claim_slot(self, db: Session, *, event_id: str) -> bool:
        """
        Takes one going seat if one is still free.

        The capacity check and the increment are a single UPDATE, so two
        transactions can never both take the last seat.
        """
        updated = (
            db.query(self.model)
            .filter(
                self.model.id == event_id,
                or_(
                    self.model.capacity.is_(None),
                    self.model.going_count < self.model.capacity,
                ),
            )
            .update(
                {self.model.going_count: self.model.going_count + 1},
                synchronize_session=False,
            )
        )
        return updated == 1

    def release_slot(self, db: Session, *, event_id: str) -> None:
        """Gives back one going seat, never dropping below zero."""
        (
            db.query(self.model)
            .filter(self.model.id == event_id, self.model.going_count > 0)
            .update(
                {self.model.going_count: self.model.going_count - 1},
                synchronize_session=False,
            )
        )

    def count_upcoming_published(self, db: Session, *, now: datetime) -> int:
        return (
            db.query(self.model)
            .filter(self.model.is_published.is_(True), self.model.date >= now)
            .count()
        )

    def get_recent(self, db: Session, *, limit: int = 5) -> List[Event]:
        return db.query(self.model).order_by(self.model.date.desc()).limit(limit).all()


event = CRUDEvent(Event)
