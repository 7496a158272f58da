# community_events/schemas/participant.py
from pydantic import BaseModel
from typing import Optional, List
from enum import Enum
from datetime import datetime

from community_events.schemas.event import EventSummary


class ParticipantStatus(str, Enum):
    going = "going"
    waitlisted = "waitlisted"
    cancelled = "cancelled"


class Participant(BaseModel):
    id: str
    user_id: str
    event_id: str
    status: ParticipantStatus
    is_checked_in: bool = False
    rsvp_at: datetime
    cancelled_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ParticipantUser(BaseModel):
    """Public profile fields shown next to a participant."""

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image: Optional[str] = None

    model_config = {"from_attributes": True}


class ParticipantWithUser(Participant):
    user: Optional[ParticipantUser] = None


class ParticipantList(BaseModel):
    participants: List[ParticipantWithUser]
    next_cursor: Optional[str] = None


class RsvpResponse(Participant):
    message: Optional[str] = None


class CancelRsvpResponse(BaseModel):
    message: str
    participant: Participant
    promoted: List[Participant] = []


class MyEventParticipation(BaseModel):
    id: str
    event_id: str
    status: ParticipantStatus
    is_checked_in: bool = False
    rsvp_at: datetime
    event: EventSummary

    model_config = {"from_attributes": True}
