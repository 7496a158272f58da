# community_events/api/v1/endpoints/events.py
import logging
import math
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from community_events.api import deps
from community_events.api.errors import to_http_exception
from community_events.core.exceptions import CommunityEventsError
from community_events.crud import crud_event
from community_events.db.session import get_db
from community_events.models.user import User
from community_events.schemas.event import (
    Event as EventSchema,
    EventCreate,
    EventUpdate,
    PaginatedEvent,
)
from community_events.services.participation import ParticipationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Events"])


@router.get("/events", response_model=PaginatedEvent)
def list_events(
    db: Session = Depends(get_db),
    profile: Optional[User] = Depends(deps.get_current_profile_optional),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    published: Literal["all", "true", "false"] = Query(
        "all", description="Filter by publication state (admins only)"
    ),
):
    """
    Paginated list of events, newest first.

    Visitors and members only ever see published events; the `published`
    filter applies to administrators.
    """
    if not deps.is_admin(profile):
        published_filter: Optional[bool] = True
    elif published == "all":
        published_filter = None
    else:
        published_filter = published == "true"

    skip = (page - 1) * limit
    events, total = crud_event.event.get_multi_filtered(
        db, skip=skip, limit=limit, published=published_filter
    )

    return {
        "data": events,
        "pagination": {
            "totalItems": total,
            "totalPages": math.ceil(total / limit),
            "currentPage": page,
        },
    }


@router.get("/events/{eventId}", response_model=EventSchema)
def get_event_by_id(
    eventId: str,
    db: Session = Depends(get_db),
    profile: Optional[User] = Depends(deps.get_current_profile_optional),
):
    """Event detail; drafts are only visible to administrators."""
    event = crud_event.event.get(db, id=eventId)
    if not event or (not event.is_published and not deps.is_admin(profile)):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event not found"
        )
    return event


@router.post(
    "/events",
    response_model=EventSchema,
    status_code=status.HTTP_201_CREATED,
)
def create_event(
    event_in: EventCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(deps.get_current_admin),
):
    """**[ADMIN]** Create an event. The caller is the organizer unless one is given."""
    event = crud_event.event.create_with_organizer(db, obj_in=event_in, organizer_id=admin.id)
    logger.info(f"Admin {admin.id} created event {event.id}")
    return event


@router.patch("/events/{eventId}", response_model=EventSchema)
def update_event(
    eventId: str,
    event_in: EventUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(deps.get_current_admin),
):
    """
    **[ADMIN]** Partially update an event.

    Lowering capacity below the number of going participants is rejected
    with 409. Raising it promotes waitlisted participants.
    """
    try:
        event, promoted = ParticipationService(db).update_event(
            event_id=eventId, obj_in=event_in
        )
    except CommunityEventsError as e:
        raise to_http_exception(e)
    if promoted:
        logger.info(
            f"Admin {admin.id} raised capacity of event {eventId}; "
            f"promoted {[p.user_id for p in promoted]}"
        )
    return event


@router.delete("/events/{eventId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    eventId: str,
    db: Session = Depends(get_db),
    admin: User = Depends(deps.get_current_admin),
):
    """**[ADMIN]** Delete an event and every participant record attached to it."""
    event = crud_event.event.remove(db, id=eventId)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event not found"
        )
    logger.info(f"Admin {admin.id} deleted event {eventId}")
    return None
