# community_events/api/v1/endpoints/newsletter.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import EmailStr
from sqlalchemy.orm import Session

from community_events.api import deps
from community_events.crud import crud_newsletter, crud_user
from community_events.db.session import get_db
from community_events.models.user import User
from community_events.schemas.newsletter import NewsletterSubscribe, NewsletterSubscription

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/newsletter", tags=["Newsletter"])


@router.post(
    "",
    response_model=NewsletterSubscription,
    status_code=status.HTTP_201_CREATED,
)
def subscribe(
    subscription_in: NewsletterSubscribe,
    db: Session = Depends(get_db),
    profile: Optional[User] = Depends(deps.get_current_profile_optional),
):
    """Subscribe an email. Signed-in callers also get their profile flag set."""
    user_id = profile.id if profile else None
    if profile:
        crud_user.user.set_newsletter_flag(db, db_obj=profile, subscribed=True)

    subscription = crud_newsletter.newsletter.subscribe(
        db, email=subscription_in.email, user_id=user_id
    )
    logger.info(f"Newsletter subscription {subscription.id} active")
    return subscription


@router.delete("")
def unsubscribe(
    email: EmailStr = Query(...),
    db: Session = Depends(get_db),
    profile: Optional[User] = Depends(deps.get_current_profile_optional),
):
    if profile and profile.email and profile.email.lower() == email.lower():
        crud_user.user.set_newsletter_flag(db, db_obj=profile, subscribed=False)

    subscription = crud_newsletter.newsletter.unsubscribe(db, email=email)
    if subscription is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="This email is not subscribed to the newsletter",
        )
    return {"message": "Successfully unsubscribed from newsletter"}
