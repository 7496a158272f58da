# community_events/crud/__init__.py

from .crud_event import event
from .crud_newsletter import newsletter
from .crud_participant import participant
from .crud_photo import photo
from .crud_user import user
