"""Booking model definition."""

from typing import Any, Dict

from sqlalchemy import Column, ForeignKey, Index, Integer, String

from ..utils.normalization import EMAIL_MAX_LENGTH
from .base import Base, TimestampMixin

class Booking(Base, TimestampMixin):
    """
    A single email signup for one event.

    The event reference is checked when the booking is written; there is no
    cascade, so bookings outlive a deleted event. The same email may book the
    same event more than once.

    Fields:
        id: Unique identifier (auto-generated)
        event_id: Identifier of the booked event
        email: Trimmed, lower-cased email address
        created_at: When the booking was stored
        updated_at: When the booking was last modified
    """
    __tablename__ = 'bookings'

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey('events.id'), nullable=False, index=True)
    email = Column(String(EMAIL_MAX_LENGTH), nullable=False)

    __table_args__ = (
        Index('ix_bookings_event_email', 'event_id', 'email'),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'id': str(self.id),
            'event_id': str(self.event_id),
            'email': self.email,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __str__(self) -> str:
        """String representation."""
        return f"Booking(id={self.id}, event_id={self.event_id}, email={self.email})"
