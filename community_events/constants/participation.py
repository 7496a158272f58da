# community_events/constants/participation.py
"""
Constants for participant status values and user roles.
"""


class ParticipantStatus:
    """Event participant status values."""
    GOING = "going"
    WAITLISTED = "waitlisted"
    CANCELLED = "cancelled"

    @classmethod
    def active_values(cls) -> list[str]:
        """Statuses that hold a place (going or in the waitlist queue)."""
        return [cls.GOING, cls.WAITLISTED]


class UserRole:
    MEMBER = "member"
    ADMIN = "admin"


class NewsletterStatus:
    SUBSCRIBED = "subscribed"
    UNSUBSCRIBED = "unsubscribed"
