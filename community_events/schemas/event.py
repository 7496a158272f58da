# community_events/schemas/event.py
from pydantic import BaseModel, Field, computed_field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime

from community_events.utils.capacity import available_spots as count_available_spots
from community_events.utils.event_status import (
    ProjectedEventStatus,
    as_utc,
    project_event_status,
)


class Organizer(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    model_config = {"from_attributes": True}


class Event(BaseModel):
    id: str = Field(..., json_schema_extra={"example": "evt_c5a6d8e0f9b1"})
    title: str = Field(..., json_schema_extra={"example": "Spring Data Mining Meetup"})
    subtitle: Optional[str] = None
    description: Optional[str] = None
    date: datetime
    rsvp_deadline: Optional[datetime] = None
    capacity: Optional[int] = Field(
        None, description="Maximum number of going participants; null is unlimited."
    )
    going_count: int = 0
    is_published: bool = False
    is_online: bool = False
    location: Optional[str] = None
    online_url: Optional[str] = None
    poster_image: Optional[str] = None
    price: float = 0
    organizer_user_id: Optional[str] = None
    organizer: Optional[Organizer] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def status(self) -> ProjectedEventStatus:
        return project_event_status(is_published=self.is_published, date=self.date)

    @computed_field
    @property
    def available_spots(self) -> Optional[int]:
        return count_available_spots(self.capacity, self.going_count)


class EventSummary(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    date: datetime
    location: Optional[str] = None
    is_online: bool = False
    is_published: bool = False

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def status(self) -> ProjectedEventStatus:
        return project_event_status(is_published=self.is_published, date=self.date)


def _check_deadline(values: "EventCreate | EventUpdate"):
    if values.rsvp_deadline is not None and values.date is not None:
        if as_utc(values.rsvp_deadline) > as_utc(values.date):
            raise ValueError("RSVP deadline must not be after the event date")
    return values


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, json_schema_extra={"example": "Spring Data Mining Meetup"})
    subtitle: Optional[str] = None
    description: Optional[str] = None
    date: datetime
    rsvp_deadline: Optional[datetime] = None
    capacity: Optional[int] = Field(None, gt=0)
    is_published: bool = False
    is_online: bool = False
    location: Optional[str] = None
    online_url: Optional[str] = None
    poster_image: Optional[str] = None
    price: float = Field(0, ge=0)
    organizer_user_id: Optional[str] = None

    @field_validator("date", "rsvp_deadline")
    @classmethod
    def normalize_to_utc(cls, value):
        return as_utc(value) if value is not None else value

    @model_validator(mode="after")
    def check_deadline(self):
        return _check_deadline(self)


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    rsvp_deadline: Optional[datetime] = None
    capacity: Optional[int] = Field(None, gt=0)
    is_published: Optional[bool] = None
    is_online: Optional[bool] = None
    location: Optional[str] = None
    online_url: Optional[str] = None
    poster_image: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)

    @field_validator("date", "rsvp_deadline")
    @classmethod
    def normalize_to_utc(cls, value):
        return as_utc(value) if value is not None else value

    @model_validator(mode="after")
    def check_deadline(self):
        return _check_deadline(self)


class Pagination(BaseModel):
    totalItems: int
    totalPages: int
    currentPage: int


class PaginatedEvent(BaseModel):
    data: List[Event]
    pagination: Pagination
