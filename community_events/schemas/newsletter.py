# community_events/schemas/newsletter.py
from pydantic import BaseModel, EmailStr
from typing import Optional
from enum import Enum


class NewsletterStatus(str, Enum):
    subscribed = "subscribed"
    unsubscribed = "unsubscribed"


class NewsletterSubscribe(BaseModel):
    email: EmailStr


class NewsletterSubscription(BaseModel):
    id: str
    email: str
    user_id: Optional[str] = None
    status: NewsletterStatus

    model_config = {"from_attributes": True}
