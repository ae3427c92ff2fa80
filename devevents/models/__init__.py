"""Models package initialization."""

from .base import Base
from .event import Event, EventTag, EVENT_MODES, SHORT_TEXT_MAX_LENGTH, TAG_MAX_LENGTH
from .booking import Booking

__all__ = [
    'Base',
    'Event',
    'EventTag',
    'Booking',
    'EVENT_MODES',
    'SHORT_TEXT_MAX_LENGTH',
    'TAG_MAX_LENGTH',
]
