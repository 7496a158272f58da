# community_events/utils/event_status.py
"""
Display status of an event, computed on read and never stored.

Calendar days are compared in UTC. Naive datetimes (e.g. returned by
SQLite) are treated as UTC.
"""

from datetime import datetime, timezone
from enum import Enum


class ProjectedEventStatus(str, Enum):
    draft = "draft"
    ongoing = "ongoing"
    upcoming = "upcoming"
    past = "past"


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def project_event_status(
    *, is_published: bool, date: datetime, now: datetime | None = None
) -> ProjectedEventStatus:
    if not is_published:
        return ProjectedEventStatus.draft

    event_date = as_utc(date)
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)

    if event_date.date() == now.date():
        return ProjectedEventStatus.ongoing
    if event_date < now:
        return ProjectedEventStatus.past
    return ProjectedEventStatus.upcoming


def project(event, now: datetime | None = None) -> ProjectedEventStatus:
    """Project the status of anything with `is_published` and `date` attributes."""
    return project_event_status(
        is_published=bool(event.is_published), date=event.date, now=now
    )
