# community_events/api/v1/endpoints/photos.py
"""
Event photo gallery.

Images are uploaded to object storage by the client; these routes only
keep track of where they are.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from community_events.api import deps
from community_events.crud import crud_event, crud_photo
from community_events.db.session import get_db
from community_events.models.user import User
from community_events.schemas.photo import Photo as PhotoSchema, PhotoCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/photos", tags=["Photos"])


def _get_visible_event(db: Session, event_id: str, profile: Optional[User]):
    event = crud_event.event.get(db, id=event_id)
    if not event or (not event.is_published and not deps.is_admin(profile)):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event not found"
        )
    return event


@router.get("", response_model=List[PhotoSchema])
def list_photos(
    eventId: str = Query(..., description="Event whose gallery to list"),
    db: Session = Depends(get_db),
    profile: Optional[User] = Depends(deps.get_current_profile_optional),
):
    """Photos of one event, oldest first."""
    _get_visible_event(db, eventId, profile)
    return crud_photo.photo.get_multi_by_event(db, event_id=eventId)


@router.post("", response_model=PhotoSchema, status_code=status.HTTP_201_CREATED)
def add_photo(
    photo_in: PhotoCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(deps.get_current_admin),
):
    """**[ADMIN]** Attach an already uploaded image to an event."""
    _get_visible_event(db, photo_in.event_id, admin)
    photo = crud_photo.photo.create_with_uploader(db, obj_in=photo_in, uploader_id=admin.id)
    logger.info(f"Admin {admin.id} added photo {photo.id} to event {photo_in.event_id}")
    return photo


@router.delete("/{photoId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_photo(
    photoId: str,
    db: Session = Depends(get_db),
    profile: User = Depends(deps.get_current_profile),
):
    """Delete a photo record. Allowed for its uploader and administrators."""
    photo = crud_photo.photo.get(db, id=photoId)
    if not photo:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found")
    if not deps.is_admin(profile) and photo.uploaded_by_user_id != profile.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have permission to delete this photo",
        )
    crud_photo.photo.remove(db, id=photoId)
    logger.info(f"User {profile.id} deleted photo {photoId}")
    return None
