"""Event service: lookup, listing, similarity and ingestion."""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from ..config.uploads import ImageUploadConfig
from ..db import Database, DatabaseError
from ..errors import DuplicateSlugError, EventNotFoundError, StoreError
from ..models import Event, EventTag
from ..uploads import ImageFile, ImageUploader
from .validation import validate_event_submission, validate_slug

logger = logging.getLogger(__name__)

class EventService:
    """Business operations on events. Depends only on the database handle and uploader."""

    def __init__(
        self,
        db: Database,
        uploader: Optional[ImageUploader] = None,
        upload_config: Optional[ImageUploadConfig] = None
    ):
        self._db = db
        self._uploader = uploader
        self._upload_config = upload_config or ImageUploadConfig()

    def list_events(self) -> List[Event]:
        """Return all events, newest first.

        Raises:
            StoreError: If the store cannot be read.
        """
        try:
            with self._db.session() as session:
                return (
                    session.query(Event)
                    .order_by(Event.created_at.desc(), Event.id.desc())
                    .all()
                )
        except DatabaseError as e:
            logger.error(f"Failed to list events: {e}")
            raise StoreError() from e

    def get_by_slug(self, slug: str) -> Event:
        """Return the event with the given slug.

        The slug is validated and normalized before the store is touched.

        Raises:
            InvalidSlugError: If the slug is malformed.
            EventNotFoundError: If no event has this slug.
            StoreError: If the store cannot be read.
        """
        slug = validate_slug(slug)

        try:
            with self._db.session() as session:
                event = session.query(Event).filter(Event.slug == slug).first()
        except DatabaseError as e:
            logger.error(f"Failed to look up event '{slug}': {e}")
            raise StoreError() from e

        if event is None:
            raise EventNotFoundError(slug)
        return event

    def find_similar(self, slug: str) -> List[Event]:
        """Return other events sharing at least one tag with the event ``slug``.

        Matches are exact and case-sensitive, ordered by id (insertion
        order), without ranking. A missing event gives an empty list.

        Store failures are logged and also give an empty list, so callers
        cannot tell "nothing similar" from "lookup failed".
        """
        try:
            with self._db.session() as session:
                event = session.query(Event).filter(Event.slug == slug).first()
                if event is None:
                    return []
                return self._query_sharing_tags(session, event)
        except Exception:
            logger.exception(f"Similar event lookup failed for '{slug}', returning no results")
            return []

    @staticmethod
    def _query_sharing_tags(session: Session, event: Event) -> List[Event]:
        tags = event.tags
        if not tags:
            return []
        return (
            session.query(Event)
            .filter(
                Event.id != event.id,
                Event.tag_links.any(EventTag.tag.in_(tags)),
            )
            .order_by(Event.id)
            .all()
        )

    def create_event(self, payload: Mapping[str, Any], image: Optional[ImageFile]) -> Event:
        """
        Validate a submission, upload its image and store the event.

        Nothing is uploaded unless the whole submission is valid. If the
        image upload succeeds but the event cannot be stored, the uploaded
        image is left in place.

        Args:
            payload: Form fields of the submission
            image: The attached image

        Returns:
            Event: The stored event

        Raises:
            ValidationError: Listing every invalid field
            UploadError: If the image host fails
            StoreError: If the event cannot be stored
            DuplicateSlugError: If an event with the same slug exists
        """
        submission = validate_event_submission(payload, image, self._upload_config)
        record = submission.to_record()

        if self._uploader is None:
            raise RuntimeError("EventService was created without an image uploader")
        image_url = self._uploader.upload(image)

        try:
            with self._db.session() as session:
                if session.query(Event.id).filter(Event.slug == record['slug']).first():
                    raise DuplicateSlugError(record['slug'])
                event = Event(image=image_url, **record)
                session.add(event)
        except DuplicateSlugError:
            logger.warning(
                f"Event '{record['slug']}' already exists; uploaded image left at {image_url}"
            )
            raise
        except DatabaseError as e:
            logger.error(
                f"Failed to store event '{record['slug']}': {e}. "
                f"Uploaded image left at {image_url}"
            )
            raise StoreError("Could not store the event") from e

        logger.info(f"Created event {event.slug} (id={event.id})")
        return event
