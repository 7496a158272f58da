# community_events/api/v1/endpoints/admin.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from community_events.api import deps
from community_events.crud import crud_event, crud_participant, crud_user
from community_events.db.session import get_db
from community_events.models.user import User
from community_events.schemas.dashboard import DashboardStats

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/stats", response_model=DashboardStats)
def dashboard_stats(
    db: Session = Depends(get_db),
    admin: User = Depends(deps.get_current_admin),
):
    """**[ADMIN]** Headline numbers and the five most recent events."""
    now = datetime.now(timezone.utc)
    return {
        "totalUsers": crud_user.user.count(db),
        "totalEvents": db.query(crud_event.event.model).count(),
        "upcomingEvents": crud_event.event.count_upcoming_published(db, now=now),
        "goingParticipants": crud_participant.participant.count_all_going(db),
        "recentEvents": crud_event.event.get_recent(db, limit=5),
    }
