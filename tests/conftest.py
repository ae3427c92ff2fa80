"""Pytest configuration and shared fixtures."""

from typing import Any, List

import pytest
from fastapi.testclient import TestClient

from devevents.api.app import create_application
from devevents.config.uploads import ImageUploadConfig
from devevents.db import Database, DatabaseConfig
from devevents.models import Event
from devevents.services.validation import EventSubmission

from .helpers import RecordingUploader, event_form

@pytest.fixture
def db():
    database = Database(DatabaseConfig(url="sqlite://"))
    yield database
    database.dispose()

@pytest.fixture
def uploader() -> RecordingUploader:
    return RecordingUploader()

@pytest.fixture
def upload_config() -> ImageUploadConfig:
    return ImageUploadConfig(max_size_bytes=1024)

@pytest.fixture
def add_event(db):
    """Store an event directly, bypassing the upload step."""

    def _add_event(title: str, tags: List[str], **overrides: Any) -> Event:
        submission = EventSubmission.model_validate(event_form(title=title, tags=tags, **overrides))
        with db.session() as session:
            event = Event(image='https://example.com/image.png', **submission.to_record())
            session.add(event)
        return event

    return _add_event

@pytest.fixture
def client(db, uploader, upload_config):
    app = create_application(database=db, uploader=uploader, upload_config=upload_config)
    with TestClient(app) as test_client:
        yield test_client
