"""
Public API routes - no authentication required
"""

from fastapi import APIRouter, Depends, Request

from eventbook.api.deps import get_stores
from eventbook.schemas.booking import BookingCreate, BookingResponse
from eventbook.schemas.event import EventResponse
from eventbook.services.booking_service import BookingService
from eventbook.services.event_service import EventService
from eventbook.services.repositories import Stores
from eventbook.utils.responses import success_response, rate_limit_error
from eventbook.utils.security import rate_limit_check, get_client_ip

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/api/events/{slug}")
async def get_event_by_slug(
    slug: str,
    stores: Stores = Depends(get_stores)
):
    """Fetch a single event by its slug"""
    event = EventService(stores.events).get_by_slug(slug)

    return success_response(
        message="Event retrieved successfully",
        data=EventResponse(**event)
    )

@router.post("/api/bookings")
async def create_booking(
    request: Request,
    payload: BookingCreate,
    stores: Stores = Depends(get_stores)
):
    """Book a spot on an event"""
    client_ip = get_client_ip(request)
    if not rate_limit_check(client_ip):
        rate_limit_error()

    booking = BookingService(stores.bookings, stores.events).create_booking(
        payload.model_dump()
    )

    return success_response(
        message="Booking created successfully",
        data=BookingResponse(**booking),
        status_code=201
    )
