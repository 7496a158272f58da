# community_events/models/__init__.py
# Import all models so SQLAlchemy can resolve relationships by name

from community_events.db.base_class import Base
from community_events.models.user import User
from community_events.models.event import Event
from community_events.models.event_participant import EventParticipant
from community_events.models.newsletter_subscription import NewsletterSubscription
from community_events.models.photo import Photo
