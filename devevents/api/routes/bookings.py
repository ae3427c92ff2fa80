"""Bookings router module."""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...errors import StoreError
from ...services import BookingService
from ..dependencies import get_booking_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings"])

class BookingRequest(BaseModel):
    """Body of a booking request."""

    # Not coerced; _parse_event_id decides which values name an event
    event_id: Any
    email: str

@router.post("/bookings", status_code=201)
def create_booking(
    body: BookingRequest,
    service: BookingService = Depends(get_booking_service)
):
    """Book a spot on an event for an email address."""
    try:
        booking = service.create_booking(body.event_id, body.email)
    except StoreError as e:
        return JSONResponse(
            status_code=500,
            content={"message": "Error creating booking", "error": e.message}
        )
    return {"message": "Booking created", "booking": booking.to_dict()}
