"""
Admin API routes - requires authentication
"""

from fastapi import APIRouter, Depends

from eventbook.api.deps import get_stores
from eventbook.schemas.booking import BookingResponse
from eventbook.schemas.event import EventCreate, EventUpdate, EventResponse, EventDetail
from eventbook.services.booking_service import BookingService
from eventbook.services.event_service import EventService
from eventbook.services.repositories import Stores
from eventbook.utils.responses import success_response
from eventbook.utils.security import verify_admin_token

router = APIRouter()

@router.post("/events")
async def create_event(
    event_data: EventCreate,
    stores: Stores = Depends(get_stores),
    token: str = Depends(verify_admin_token)
):
    """Create a new event"""
    event = EventService(stores.events).create_event(event_data.model_dump(exclude_unset=True))

    return success_response(
        message="Event created successfully",
        data=EventResponse(**event),
        status_code=201
    )

@router.patch("/events/{event_id}")
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    stores: Stores = Depends(get_stores),
    token: str = Depends(verify_admin_token)
):
    """Update some fields of an event"""
    event = EventService(stores.events).update_event(
        event_id, event_data.model_dump(exclude_unset=True)
    )

    return success_response(
        message="Event updated successfully",
        data=EventResponse(**event)
    )

@router.get("/events/{event_id}")
async def get_event_details(
    event_id: str,
    stores: Stores = Depends(get_stores),
    token: str = Depends(verify_admin_token)
):
    """Get event with its booking count"""
    event = EventService(stores.events).get_by_id(event_id)
    booking_count = BookingService(stores.bookings, stores.events).count_for_event(event_id)

    return success_response(
        message="Event details retrieved",
        data=EventDetail(**event, booking_count=booking_count)
    )

@router.get("/events/{event_id}/bookings")
async def list_event_bookings(
    event_id: str,
    stores: Stores = Depends(get_stores),
    token: str = Depends(verify_admin_token)
):
    """List bookings made for an event"""
    EventService(stores.events).get_by_id(event_id)
    bookings = BookingService(stores.bookings, stores.events).list_for_event(event_id)

    return success_response(
        message="Bookings retrieved",
        data={
            "count": len(bookings),
            "bookings": [BookingResponse(**booking) for booking in bookings]
        }
    )
