"""Integration tests for the HTTP API.

Run with: pytest tests/test_api.py -v
"""

import asyncio
import io
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from starlette.datastructures import FormData, Headers, UploadFile

from devevents.api.app import create_application
from devevents.api.routes.events import _read_image
from devevents.config.environment import ENVIRONMENT_NAME
from devevents.db import Database, SessionError
from devevents.errors import UploadError
from devevents.models import Booking, Event

from .helpers import PNG_BYTES, RecordingUploader, event_form


def image_files(filename="banner.png", content=PNG_BYTES, content_type="image/png"):
    return {"image": (filename, content, content_type)}


class TestHealth:
    """Tests for GET /"""

    def test_health_check(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["environment"] == ENVIRONMENT_NAME


class TestEventList:
    """Tests for GET /api/events"""

    def test_list_events_newest_first(self, client: TestClient, add_event):
        add_event("First Event", ["a"])
        add_event("Second Event", ["b"])

        response = client.get("/api/events")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Events retrieved successfully"
        assert [event["title"] for event in body["events"]] == ["Second Event", "First Event"]

    def test_list_events_empty_catalog(self, client: TestClient):
        response = client.get("/api/events")
        assert response.status_code == 200
        assert response.json()["events"] == []

    def test_store_failure_returns_500(self, uploader):
        db = MagicMock(spec=Database)
        db.session.side_effect = SessionError("Database session error: boom")
        with TestClient(create_application(database=db, uploader=uploader)) as client:
            response = client.get("/api/events")

        assert response.status_code == 500
        assert response.json()["message"] == "Event retrieval failed"
        assert "boom" not in response.text


class TestEventDetail:
    """Tests for GET /api/events/{slug}"""

    def test_get_event_returns_details(self, client: TestClient, add_event):
        add_event("React Conf 2025", ["react", "frontend"])

        response = client.get("/api/events/react-conf-2025")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Event retrieved successfully"
        event = body["event"]
        assert event["slug"] == "react-conf-2025"
        assert event["tags"] == ["react", "frontend"]
        assert event["agenda"] == ["Keynote", "Breakouts"]
        assert event["date"] == "2025-04-10"
        assert event["time"] == "08:30"
        assert set(event) >= {"id", "title", "image", "mode", "created_at", "updated_at"}

    def test_slug_is_normalized_before_lookup(self, client: TestClient, add_event):
        add_event("React Conf 2025", ["react"])
        assert client.get("/api/events/React-Conf-2025").status_code == 200

    def test_get_event_not_found(self, client: TestClient):
        response = client.get("/api/events/no-such-event")
        assert response.status_code == 404
        assert response.json() == {"message": 'Event not found for slug "no-such-event"'}

    def test_get_event_invalid_slug_format(self, client: TestClient):
        response = client.get("/api/events/react_conf")
        assert response.status_code == 400
        assert "Invalid slug format" in response.json()["message"]

    def test_get_event_slug_too_long(self, client: TestClient):
        response = client.get("/api/events/" + "a" * 101)
        assert response.status_code == 400
        assert "1-100 characters" in response.json()["message"]

    def test_store_failure_returns_generic_500(self, uploader):
        db = MagicMock(spec=Database)
        db.session.side_effect = SessionError("Database session error: secret detail")
        with TestClient(create_application(database=db, uploader=uploader)) as client:
            response = client.get("/api/events/react-conf-2025")

        assert response.status_code == 500
        assert response.json() == {"message": "Unexpected error while retrieving event"}


class TestSimilarEvents:
    """Tests for GET /api/events/{slug}/similar"""

    def test_similar_events(self, client: TestClient, add_event):
        add_event("React Conf 2025", ["react", "frontend"])
        add_event("React Meetup", ["react"])
        add_event("Cloud Native Meetup", ["cloud"])

        response = client.get("/api/events/react-conf-2025/similar")

        assert response.status_code == 200
        assert [event["slug"] for event in response.json()["events"]] == ["react-meetup"]

    def test_unknown_slug_gives_empty_list(self, client: TestClient):
        response = client.get("/api/events/no-such-event/similar")
        assert response.status_code == 200
        assert response.json()["events"] == []

    def test_invalid_slug_is_rejected(self, client: TestClient):
        assert client.get("/api/events/bad--slug/similar").status_code == 400


class TestCreateEvent:
    """Tests for POST /api/events"""

    def test_create_event(self, client: TestClient, uploader: RecordingUploader):
        response = client.post("/api/events", data=event_form(), files=image_files())

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Event created successfully"
        assert body["event"]["slug"] == "react-conf-2025"
        assert body["event"]["image"] == "https://res.cloudinary.com/demo/image/upload/banner.png"
        assert body["event"]["tags"] == ["react", "frontend"]
        assert uploader.uploads[0].content == PNG_BYTES
        assert uploader.uploads[0].content_type == "image/png"

    def test_repeated_fields_become_lists(self, client: TestClient):
        form = event_form(agenda=["Keynote", "Panel"], tags=["react", "web"])
        response = client.post("/api/events", data=form, files=image_files())

        assert response.status_code == 201
        assert response.json()["event"]["agenda"] == ["Keynote", "Panel"]
        assert response.json()["event"]["tags"] == ["react", "web"]

    def test_comma_separated_tags(self, client: TestClient):
        response = client.post("/api/events", data=event_form(tags="react, web"), files=image_files())
        assert response.json()["event"]["tags"] == ["react", "web"]

    def test_invalid_mode_lists_mode_and_uploads_nothing(self, client: TestClient, uploader, db):
        response = client.post("/api/events", data=event_form(mode="virtual"), files=image_files())

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert "mode" in [error["field"] for error in body["errors"]]
        assert uploader.uploads == []
        with db.session() as session:
            assert session.query(Event).count() == 0

    def test_missing_image(self, client: TestClient):
        response = client.post("/api/events", data=event_form())

        assert response.status_code == 400
        assert {"field": "image", "message": "Image file is required"} in response.json()["errors"]

    def test_wrong_image_type(self, client: TestClient):
        response = client.post(
            "/api/events", data=event_form(), files=image_files("notes.txt", b"hello", "text/plain")
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["message"] == "Invalid file type. Only images are allowed"

    def test_oversized_image(self, client: TestClient, uploader):
        response = client.post("/api/events", data=event_form(), files=image_files(content=b"\x00" * 2048))

        assert response.status_code == 400
        assert response.json()["errors"][0]["message"] == "File size exceeds 1KB limit"
        assert uploader.uploads == []

    def test_upload_failure_returns_500(self, db, upload_config):
        app = create_application(
            database=db, uploader=RecordingUploader(error=UploadError()), upload_config=upload_config
        )
        with TestClient(app) as client:
            response = client.post("/api/events", data=event_form(), files=image_files())

        assert response.status_code == 500
        assert response.json() == {"message": "Event creation failed", "error": "Image upload failed"}

    def test_duplicate_title_returns_500(self, client: TestClient, add_event):
        add_event("React Conf 2025", ["react"])

        response = client.post("/api/events", data=event_form(), files=image_files())

        assert response.status_code == 500
        assert response.json()["error"] == 'An event with slug "react-conf-2025" already exists'


class TestCreateBooking:
    """Tests for POST /api/bookings"""

    def test_create_booking(self, client: TestClient, add_event, db):
        event = add_event("React Conf 2025", ["react"])

        response = client.post("/api/bookings", json={"event_id": str(event.id), "email": " A@B.com "})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Booking created"
        assert body["booking"]["email"] == "a@b.com"
        assert body["booking"]["event_id"] == str(event.id)

    def test_booking_for_missing_event(self, client: TestClient, db):
        response = client.post("/api/bookings", json={"event_id": "<nonexistent>", "email": "a@b.com"})

        assert response.status_code == 404
        assert "does not exist" in response.json()["message"]
        with db.session() as session:
            assert session.query(Booking).count() == 0

    def test_non_integer_event_ids_are_not_coerced(self, client: TestClient, add_event, db):
        add_event("React Conf 2025", ["react"])

        for event_id in (True, 1.0, [1]):
            response = client.post("/api/bookings", json={"event_id": event_id, "email": "a@b.com"})
            assert response.status_code == 404
            assert "does not exist" in response.json()["message"]

        with db.session() as session:
            assert session.query(Booking).count() == 0

    def test_invalid_email(self, client: TestClient, add_event):
        event = add_event("React Conf 2025", ["react"])

        response = client.post("/api/bookings", json={"event_id": event.id, "email": "nope"})

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "email", "message": "Please provide a valid email address"}
        ]

    def test_missing_fields(self, client: TestClient):
        response = client.post("/api/bookings", json={"event_id": "1"})

        assert response.status_code == 400
        assert [error["field"] for error in response.json()["errors"]] == ["email"]

    def test_duplicate_bookings_create_two_records(self, client: TestClient, add_event, db):
        event = add_event("React Conf 2025", ["react"])
        payload = {"event_id": event.id, "email": "a@b.com"}

        first = client.post("/api/bookings", json=payload)
        second = client.post("/api/bookings", json=payload)

        assert first.status_code == second.status_code == 201
        assert first.json()["booking"]["id"] != second.json()["booking"]["id"]
        with db.session() as session:
            assert session.query(Booking).count() == 2


class TestReadImage:
    """Tests for reading the image part of the event form."""

    def test_read_stops_one_byte_past_the_ceiling(self):
        upload = UploadFile(
            file=io.BytesIO(b"\x00" * 10_000),
            filename="huge.png",
            headers=Headers({"content-type": "image/png"}),
        )

        image = asyncio.run(_read_image(FormData([("image", upload)]), 1024))

        assert image.size == 1025
        assert image.filename == "huge.png"
        assert image.content_type == "image/png"

    def test_missing_image_part(self):
        assert asyncio.run(_read_image(FormData([("title", "x")]), 1024)) is None
