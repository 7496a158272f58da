# community_events/core/exceptions.py
"""
Domain errors raised by the participation and event services.

Route handlers translate these into HTTP responses using `status_code`
and `message`; storage-layer exceptions never leave the service layer.
"""


class CommunityEventsError(Exception):
    """Base class for domain errors."""

    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None, retryable: bool = False):
        self.message = message or self.default_message
        self.retryable = retryable
        super().__init__(self.message)


class EventNotFound(CommunityEventsError):
    status_code = 404
    default_message = "Event not found"


class EventNotAvailable(CommunityEventsError):
    status_code = 400
    default_message = "Event is not available for RSVP"


class NotRegistered(CommunityEventsError):
    status_code = 404
    default_message = "You are not registered for this event"


class ParticipantNotCheckable(CommunityEventsError):
    status_code = 400
    default_message = "Only participants marked as going can be checked in"


class CapacityConflict(CommunityEventsError):
    status_code = 409
    default_message = "Capacity cannot be set below the number of confirmed attendees"


class CapacityRaceViolation(CommunityEventsError):
    """Two admissions collided on the same event; safe to retry."""

    status_code = 409
    default_message = "The event changed while processing your RSVP. Please retry."

    def __init__(self, message: str | None = None):
        super().__init__(message, retryable=True)


class StorageFailure(CommunityEventsError):
    status_code = 500
    default_message = "The request could not be completed. Please try again later."


class InvalidEventUpdate(CommunityEventsError):
    status_code = 422
    default_message = "RSVP deadline must not be after the event date"
