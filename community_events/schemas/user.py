# community_events/schemas/user.py
from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime

from community_events.schemas.event import Pagination


class UserProfile(BaseModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image: Optional[str] = None
    bio: Optional[str] = None
    role: str
    newsletter_subscribed: bool = False
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserProfileUpdate(BaseModel):
    # Role is deliberately absent; only admins change roles.
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    profile_image: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=2000)


class UserRoleUpdate(BaseModel):
    role: Literal["member", "admin"]


class PaginatedUsers(BaseModel):
    data: List[UserProfile]
    pagination: Pagination
