# community_events/schemas/dashboard.py
from pydantic import BaseModel
from typing import List

from community_events.schemas.event import EventSummary


class DashboardStats(BaseModel):
    totalUsers: int
    totalEvents: int
    upcomingEvents: int
    goingParticipants: int
    recentEvents: List[EventSummary]
