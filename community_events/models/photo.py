# community_events/models/photo.py
import uuid
from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from community_events.db.base_class import Base


class Photo(Base):
    """Gallery entry for an event. The image itself lives in object storage."""

    __tablename__ = "photos"

    id = Column(String, primary_key=True, default=lambda: f"pho_{uuid.uuid4().hex[:12]}")
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    # Storage path or URL as uploaded; public_url is what clients render
    image = Column(String, nullable=False)
    public_url = Column(String, nullable=False)
    caption = Column(String, nullable=True)
    uploaded_by_user_id = Column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    event = relationship("Event", back_populates="photos")
