# community_events/models/user.py
from sqlalchemy import Boolean, Column, DateTime, String, Text, text
from sqlalchemy.sql import func

from community_events.db.base_class import Base


class User(Base):
    """
    Profile for an identity-provider subject.

    The primary key is the token's `sub` claim; rows are created the first
    time that subject calls the API.
    """

    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, nullable=True, index=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    role = Column(String(20), nullable=False, default="member", server_default="member")
    newsletter_subscribed = Column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
