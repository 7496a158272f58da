# community_events/api/v1/api.py

from fastapi import APIRouter
from community_events.api.v1.endpoints import (
    admin,
    events,
    health,
    newsletter,
    participants,
    photos,
    users,
)

# Main router for the v1 API; each module contributes its own router.
api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(events.router)
api_router.include_router(participants.router)
api_router.include_router(users.router)
api_router.include_router(newsletter.router)
api_router.include_router(photos.router)
api_router.include_router(admin.router)
