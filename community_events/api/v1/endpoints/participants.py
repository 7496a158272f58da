# community_events/api/v1/endpoints/participants.py
"""
RSVP endpoints.

- POST   /events/{eventId}/participants  RSVP (going or waitlisted)
- DELETE /events/{eventId}/participants  cancel own RSVP
- GET    /events/{eventId}/participants  participant list
- POST   /events/{eventId}/participants/{userId}/check-in  admin check-in
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from community_events.api import deps
from community_events.api.errors import to_http_exception
from community_events.core.config import settings
from community_events.core.exceptions import CommunityEventsError
from community_events.core.limiter import limiter
from community_events.db.session import get_db
from community_events.models.user import User
from community_events.schemas.participant import (
    CancelRsvpResponse,
    Participant,
    ParticipantList,
    RsvpResponse,
)
from community_events.schemas.token import TokenPayload
from community_events.services.participation import ParticipationService
from community_events.utils.capacity import Decision

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Participants"])


@router.get("/events/{eventId}/participants", response_model=ParticipantList)
def list_participants(
    eventId: str,
    limit: int = Query(50, ge=1, le=200, description="Page size"),
    cursor: Optional[str] = Query(None, description="Id of the last participant already seen"),
    db: Session = Depends(get_db),
    profile: User = Depends(deps.get_current_profile),
):
    """
    List going and waitlisted participants with their public profile.

    Drafts are only visible to administrators.
    """
    try:
        records, next_cursor = ParticipationService(db).list_participants(
            event_id=eventId,
            limit=limit,
            cursor=cursor,
            include_unpublished=deps.is_admin(profile),
        )
    except CommunityEventsError as e:
        raise to_http_exception(e)
    return {"participants": records, "next_cursor": next_cursor}


@router.post(
    "/events/{eventId}/participants",
    response_model=RsvpResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.RSVP_RATE_LIMIT)
def rsvp_to_event(
    eventId: str,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    profile: User = Depends(deps.get_current_profile),
):
    """
    RSVP the caller to an event.

    **Responses**:
    - 201: admitted as going
    - 200: placed on the waitlist, or already holding an RSVP
    - 400: event unpublished or RSVP deadline passed
    - 404: event not found
    - 409: concurrent update could not be resolved, retry
    """
    try:
        result = ParticipationService(db).rsvp(user_id=profile.id, event_id=eventId)
    except CommunityEventsError as e:
        raise to_http_exception(e)

    message = result.message
    if not result.created:
        response.status_code = status.HTTP_200_OK
        if result.decision is Decision.ADMIT:
            message = "You are already going to this event."
    elif result.decision is Decision.WAITLIST:
        response.status_code = status.HTTP_200_OK

    body = Participant.model_validate(result.participant).model_dump()
    return RsvpResponse(**body, message=message)


@router.delete("/events/{eventId}/participants", response_model=CancelRsvpResponse)
@limiter.limit(settings.RSVP_RATE_LIMIT)
def cancel_rsvp(
    eventId: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Cancel the caller's RSVP; a freed seat goes to the longest-waiting user."""
    try:
        result = ParticipationService(db).cancel(user_id=current_user.sub, event_id=eventId)
    except CommunityEventsError as e:
        raise to_http_exception(e)

    return {
        "message": "RSVP cancelled successfully",
        "participant": result.participant,
        "promoted": result.promoted,
    }


@router.post(
    "/events/{eventId}/participants/{userId}/check-in", response_model=Participant
)
def check_in_participant(
    eventId: str,
    userId: str,
    db: Session = Depends(get_db),
    admin: User = Depends(deps.get_current_admin),
):
    """**[ADMIN]** Mark a going participant as checked in."""
    try:
        return ParticipationService(db).check_in(user_id=userId, event_id=eventId)
    except CommunityEventsError as e:
        raise to_http_exception(e)
