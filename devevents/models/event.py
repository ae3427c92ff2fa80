"""Event model definition."""

from typing import Any, Dict, List, Optional

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from ..utils.normalization import SLUG_MAX_LENGTH
from .base import Base, TimestampMixin

EVENT_MODES = ('online', 'offline', 'hybrid')
SHORT_TEXT_MAX_LENGTH = 255
TAG_MAX_LENGTH = 100

class Event(Base, TimestampMixin):
    """
    Event model representing a published event.

    Fields:
        id: Unique identifier (auto-generated, increases with insertion order)
        title: Event title
        slug: URL-safe identifier derived from the title, unique and immutable
        description: Short description shown in listings
        overview: Longer overview shown on the event page
        image: URL of the externally hosted event image
        venue: Name of the venue
        location: City/region or 'Remote'
        date: Calendar date, always stored as YYYY-MM-DD
        time: Start time, always stored as zero-padded HH:MM
        mode: One of 'online', 'offline', 'hybrid'
        audience: Who the event is for
        agenda: Ordered list of agenda items
        organizer: Who runs the event
        tags: Labels used to find similar events (stored in event_tags)
        created_at: When the event was stored
        updated_at: When the event was last modified
    """
    __tablename__ = 'events'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(SHORT_TEXT_MAX_LENGTH), nullable=False)
    slug = Column(String(SLUG_MAX_LENGTH), nullable=False, unique=True)
    description = Column(Text, nullable=False)
    overview = Column(Text, nullable=False)
    image = Column(String(500), nullable=False)
    venue = Column(String(SHORT_TEXT_MAX_LENGTH), nullable=False)
    location = Column(String(SHORT_TEXT_MAX_LENGTH), nullable=False)
    date = Column(String(10), nullable=False)
    time = Column(String(5), nullable=False)
    mode = Column(String(10), nullable=False)
    audience = Column(Text, nullable=False)
    agenda = Column(JSON, nullable=False)
    organizer = Column(Text, nullable=False)

    tag_links = relationship(
        'EventTag',
        back_populates='event',
        order_by='EventTag.position',
        cascade='all, delete-orphan',
        lazy='selectin',
    )

    __table_args__ = (
        CheckConstraint(
            f"mode IN ({', '.join(repr(mode) for mode in EVENT_MODES)})",
            name='check_event_mode'
        ),
        Index('ix_events_created_at', 'created_at'),
    )

    def __init__(self, tags: Optional[List[str]] = None, **kwargs):
        """Initialize Event, turning the plain tag list into EventTag rows."""
        super().__init__(**kwargs)
        if tags is not None:
            self.tags = tags

    @property
    def tags(self) -> List[str]:
        return [link.tag for link in self.tag_links]

    @tags.setter
    def tags(self, values: List[str]) -> None:
        self.tag_links = [
            EventTag(tag=value, position=position)
            for position, value in enumerate(values)
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'id': str(self.id),
            'title': self.title,
            'slug': self.slug,
            'description': self.description,
            'overview': self.overview,
            'image': self.image,
            'venue': self.venue,
            'location': self.location,
            'date': self.date,
            'time': self.time,
            'mode': self.mode,
            'audience': self.audience,
            'agenda': list(self.agenda or []),
            'organizer': self.organizer,
            'tags': self.tags,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __str__(self) -> str:
        """String representation."""
        return f"Event(id={self.id}, slug={self.slug}, title={self.title})"

class EventTag(Base):
    """One tag of one event. Tag membership queries run against this table."""
    __tablename__ = 'event_tags'

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    tag = Column(String(TAG_MAX_LENGTH), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    event = relationship('Event', back_populates='tag_links')

    __table_args__ = (
        UniqueConstraint('event_id', 'tag', name='uq_event_tag'),
        Index('ix_event_tags_tag', 'tag'),
    )

    def __str__(self) -> str:
        return f"EventTag(event_id={self.event_id}, tag={self.tag})"
