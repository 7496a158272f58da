# community_events/models/event_participant.py
"""
Event participant model: one row per (user, event) pair.

The row is reused when a user cancels and later RSVPs again, so the
uniqueness constraint keeps the upsert well-defined.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import relationship

from community_events.db.base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EventParticipant(Base):
    __tablename__ = "event_participants"

    id = Column(String, primary_key=True, default=lambda: f"par_{uuid.uuid4().hex[:12]}")
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), nullable=False, server_default="going")  # going, waitlisted, cancelled
    is_checked_in = Column(Boolean, nullable=False, default=False, server_default=text("false"))
    # Set in Python so waitlist ordering keeps sub-second precision
    rsvp_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    event = relationship("Event", back_populates="participants")
    user = relationship("User")

    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="unique_event_participant_user"),
        Index("idx_event_participants_queue", "event_id", "status", "rsvp_at"),
    )
