"""Events router module."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile

from ...errors import StoreError, UploadError, ValidationError
from ...services import EventService
from ...services.validation import validate_slug
from ...uploads import ImageFile
from ..dependencies import get_event_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])

LIST_FIELDS = ('agenda', 'tags')

def _form_payload(form: FormData) -> Dict[str, Any]:
    """Plain dict of the text fields; repeated agenda/tags fields become lists."""
    payload: Dict[str, Any] = {}
    for key in form.keys():
        if key == 'image':
            continue
        values = [value for value in form.getlist(key) if isinstance(value, str)]
        if not values:
            continue
        if key in LIST_FIELDS and len(values) > 1:
            payload[key] = values
        else:
            payload[key] = values[0]
    return payload

async def _read_image(form: FormData, max_size_bytes: int) -> Optional[ImageFile]:
    """The attached image, read up to one byte past the size ceiling."""
    upload = form.get('image')
    if not isinstance(upload, UploadFile):
        return None
    content = await upload.read(max_size_bytes + 1)
    return ImageFile(
        filename=upload.filename or 'image',
        content_type=upload.content_type or '',
        content=content
    )

@router.get("/events")
def list_events(service: EventService = Depends(get_event_service)):
    """Get all events, newest first."""
    try:
        events = service.list_events()
    except StoreError as e:
        return JSONResponse(
            status_code=500,
            content={"message": "Event retrieval failed", "error": e.message}
        )
    return {
        "message": "Events retrieved successfully",
        "events": [event.to_dict() for event in events]
    }

@router.post("/events", status_code=201)
async def create_event(
    request: Request,
    service: EventService = Depends(get_event_service)
):
    """Create an event from a multipart form with one image file."""
    form = await request.form()
    try:
        payload = _form_payload(form)
        image = await _read_image(form, request.app.state.upload_config.max_size_bytes)
    finally:
        await form.close()

    try:
        event = await run_in_threadpool(service.create_event, payload, image)
    except ValidationError as e:
        return JSONResponse(
            status_code=400,
            content={"message": e.message, "errors": e.errors}
        )
    except (UploadError, StoreError) as e:
        return JSONResponse(
            status_code=500,
            content={"message": "Event creation failed", "error": e.message}
        )

    return {"message": "Event created successfully", "event": event.to_dict()}

@router.get("/events/{slug}")
def get_event(slug: str, service: EventService = Depends(get_event_service)):
    """Get a single event by slug."""
    try:
        event = service.get_by_slug(slug)
    except StoreError:
        return JSONResponse(
            status_code=500,
            content={"message": "Unexpected error while retrieving event"}
        )
    return {"message": "Event retrieved successfully", "event": event.to_dict()}

@router.get("/events/{slug}/similar")
def get_similar_events(slug: str, service: EventService = Depends(get_event_service)):
    """Get events sharing at least one tag with the event ``slug``."""
    events = service.find_similar(validate_slug(slug))
    return {
        "message": "Similar events retrieved successfully",
        "events": [event.to_dict() for event in events]
    }
