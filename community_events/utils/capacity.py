# community_events/utils/capacity.py
"""
Admission decision for an event RSVP.

Pure function over its inputs; the caller is responsible for reading
`current_going_count` inside the same transaction as the write that
acts on the decision.
"""

from enum import Enum
from typing import Optional


class Decision(str, Enum):
    ADMIT = "admit"
    WAITLIST = "waitlist"


def evaluate_capacity(capacity: Optional[int], current_going_count: int) -> Decision:
    """
    Admit when the event has no capacity or still has a free seat.

    A capacity of 0 can never admit anyone.
    """
    if capacity is None:
        return Decision.ADMIT
    if capacity <= 0:
        return Decision.WAITLIST
    if current_going_count < capacity:
        return Decision.ADMIT
    return Decision.WAITLIST


def available_spots(capacity: Optional[int], current_going_count: int) -> Optional[int]:
    """Free seats left, or None when the event is unlimited."""
    if capacity is None:
        return None
    return max(0, capacity - current_going_count)
