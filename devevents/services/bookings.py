"""Booking service."""

import logging

from ..db import Database, DatabaseError
from ..errors import ReferentialIntegrityError, StoreError, ValidationError
from ..models import Booking, Event
from ..utils.normalization import is_valid_email, normalize_email

logger = logging.getLogger(__name__)

def _parse_event_id(event_id: object):
    """Integer form of an event id, or None if it cannot name an event."""
    if isinstance(event_id, bool):
        return None
    if isinstance(event_id, int):
        return event_id
    if isinstance(event_id, str) and event_id.strip().isdigit():
        return int(event_id.strip())
    return None

class BookingService:
    """Records email signups for events."""

    def __init__(self, db: Database):
        self._db = db

    def create_booking(self, event_id: object, email: str) -> Booking:
        """
        Store a booking of ``email`` for the event ``event_id``.

        The email is trimmed and lower-cased first. The event must exist when
        the booking is written. Repeated bookings of the same email for the
        same event are all stored.

        Raises:
            ValidationError: If the email is malformed
            ReferentialIntegrityError: If the event does not exist
            StoreError: If the booking cannot be stored
        """
        email = normalize_email(email or '')
        if not email:
            raise ValidationError([{'field': 'email', 'message': 'Email is required'}])
        if not is_valid_email(email):
            raise ValidationError(
                [{'field': 'email', 'message': 'Please provide a valid email address'}]
            )

        parsed_id = _parse_event_id(event_id)
        if parsed_id is None:
            raise ReferentialIntegrityError(event_id)

        try:
            with self._db.session() as session:
                if session.get(Event, parsed_id) is None:
                    raise ReferentialIntegrityError(event_id)
                booking = Booking(event_id=parsed_id, email=email)
                session.add(booking)
        except DatabaseError as e:
            logger.error(f"Failed to create booking for event {event_id}: {e}")
            raise StoreError("Could not store the booking") from e

        logger.info(f"Booking created for event {parsed_id}")
        return booking
