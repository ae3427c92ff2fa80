"""FastAPI dependencies that hand the application's resources to route handlers."""

from fastapi import Depends, Request

from ..db import Database
from ..services import BookingService, EventService

def get_database(request: Request) -> Database:
    """The database handle owned by the running application."""
    return request.app.state.database

def get_event_service(
    request: Request,
    db: Database = Depends(get_database)
) -> EventService:
    return EventService(
        db,
        uploader=request.app.state.uploader,
        upload_config=request.app.state.upload_config
    )

def get_booking_service(db: Database = Depends(get_database)) -> BookingService:
    return BookingService(db)
