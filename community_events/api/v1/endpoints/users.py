# community_events/api/v1/endpoints/users.py
import logging
import math
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from community_events.api import deps
from community_events.crud import crud_participant, crud_user
from community_events.db.session import get_db
from community_events.models.user import User
from community_events.schemas.participant import MyEventParticipation
from community_events.schemas.user import (
    PaginatedUsers,
    UserProfile,
    UserProfileUpdate,
    UserRoleUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserProfile)
def read_my_profile(profile: User = Depends(deps.get_current_profile)):
    return profile


@router.patch("/me", response_model=UserProfile)
def update_my_profile(
    profile_in: UserProfileUpdate,
    db: Session = Depends(get_db),
    profile: User = Depends(deps.get_current_profile),
):
    """Update the caller's own profile. The role cannot be changed here."""
    return crud_user.user.update(db, db_obj=profile, obj_in=profile_in)


@router.get("/me/events", response_model=List[MyEventParticipation])
def read_my_events(
    include_cancelled: bool = Query(False),
    db: Session = Depends(get_db),
    profile: User = Depends(deps.get_current_profile),
):
    """Events the caller RSVPed to, most recent RSVP first."""
    return crud_participant.participant.get_multi_by_user(
        db, user_id=profile.id, include_cancelled=include_cancelled
    )


@router.get("", response_model=PaginatedUsers)
def list_users(
    db: Session = Depends(get_db),
    admin: User = Depends(deps.get_current_admin),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
):
    """**[ADMIN]** Paginated user list, searchable by name or email."""
    users, total = crud_user.user.get_multi_filtered(
        db, skip=(page - 1) * limit, limit=limit, search=search
    )
    return {
        "data": users,
        "pagination": {
            "totalItems": total,
            "totalPages": math.ceil(total / limit),
            "currentPage": page,
        },
    }


@router.get("/{userId}", response_model=UserProfile)
def read_user(
    userId: str,
    db: Session = Depends(get_db),
    admin: User = Depends(deps.get_current_admin),
):
    """**[ADMIN]** Any user's profile."""
    target = crud_user.user.get(db, id=userId)
    if not target:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"User with ID {userId} not found"
        )
    return target


@router.patch("/{userId}/role", response_model=UserProfile)
def update_user_role(
    userId: str,
    role_in: UserRoleUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(deps.get_current_admin),
):
    """**[ADMIN]** Promote or demote a user."""
    target = crud_user.user.get(db, id=userId)
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if target.id == admin.id and role_in.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Administrators cannot remove their own admin role",
        )
    logger.info(f"Admin {admin.id} set role of {userId} to {role_in.role}")
    return crud_user.user.set_role(db, db_obj=target, role=role_in.role)
