"""Domain errors raised by the service layer.

Every error carries a user-safe ``message``; route handlers map each class to
an HTTP status and never forward the underlying exception text.
"""

from typing import Dict, List


class EventsError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EventsError):
    """Raised when input fails validation. Carries every field-level violation."""

    def __init__(self, errors: List[Dict[str, str]], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = errors

    @property
    def fields(self) -> List[str]:
        return [error['field'] for error in self.errors]


class InvalidSlugError(ValidationError):
    """Raised when a slug is missing, too long or badly formatted."""

    def __init__(self, message: str):
        super().__init__([{'field': 'slug', 'message': message}], message=message)


class EventNotFoundError(EventsError):
    """Raised when a well-formed slug matches no event."""

    def __init__(self, slug: str):
        super().__init__(f'Event not found for slug "{slug}"')
        self.slug = slug


class ReferentialIntegrityError(EventsError):
    """Raised when a booking references an event that does not exist."""

    def __init__(self, event_id: object):
        super().__init__(f"Event with ID {event_id} does not exist. Cannot create booking.")
        self.event_id = event_id


class UploadError(EventsError):
    """Raised when the image host rejects or fails an upload."""

    def __init__(self, message: str = "Image upload failed"):
        super().__init__(message)


class StoreError(EventsError):
    """Raised when the event store cannot complete a read or write."""

    def __init__(self, message: str = "Could not access the event store"):
        super().__init__(message)


class DuplicateSlugError(StoreError):
    """Raised when an event with the same slug already exists."""

    def __init__(self, slug: str):
        super().__init__(f'An event with slug "{slug}" already exists')
        self.slug = slug
