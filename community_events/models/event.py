# community_events/models/event.py
import uuid
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from community_events.db.base_class import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(
        String, primary_key=True, default=lambda: f"evt_{uuid.uuid4().hex[:12]}"
    )
    title = Column(String, nullable=False)
    subtitle = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    rsvp_deadline = Column(DateTime(timezone=True), nullable=True)

    # NULL means unlimited
    capacity = Column(Integer, nullable=True)
    # Number of participants with status 'going'. Only ever changed in the
    # same transaction as the participant rows it counts.
    going_count = Column(Integer, nullable=False, default=0, server_default=text("0"))

    is_published = Column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    is_online = Column(Boolean, nullable=False, default=False, server_default=text("false"))
    location = Column(String, nullable=True)
    online_url = Column(String, nullable=True)
    poster_image = Column(String, nullable=True)
    price = Column(Float, nullable=False, default=0, server_default=text("0"))

    organizer_user_id = Column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    organizer = relationship("User", foreign_keys=[organizer_user_id])
    participants = relationship(
        "EventParticipant",
        back_populates="event",
        cascade="all, delete-orphan",
    )
    photos = relationship(
        "Photo",
        back_populates="event",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("capacity IS NULL OR capacity >= 0", name="check_capacity_non_negative"),
        CheckConstraint("going_count >= 0", name="check_going_count_non_negative"),
        CheckConstraint(
            "capacity IS NULL OR going_count <= capacity",
            name="check_going_count_lte_capacity",
        ),
    )
