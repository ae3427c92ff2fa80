"""Service layer initialization."""

from .bookings import BookingService
from .events import EventService
from .validation import EventSubmission, validate_event_submission, validate_slug

__all__ = [
    'BookingService',
    'EventService',
    'EventSubmission',
    'validate_event_submission',
    'validate_slug',
]
