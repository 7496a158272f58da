# community_events/api/errors.py
from fastapi import HTTPException

from community_events.core.exceptions import CommunityEventsError


def to_http_exception(exc: CommunityEventsError) -> HTTPException:
    """Translate a domain error into the response the client sees."""
    return HTTPException(status_code=exc.status_code, detail=exc.message)
