# community_events/models/newsletter_subscription.py
import uuid
from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.sql import func

from community_events.db.base_class import Base


class NewsletterSubscription(Base):
    __tablename__ = "newsletter_subscriptions"

    id = Column(String, primary_key=True, default=lambda: f"nsub_{uuid.uuid4().hex[:12]}")
    email = Column(String, nullable=False, unique=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    status = Column(String(20), nullable=False, server_default="subscribed")  # subscribed, unsubscribed
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
