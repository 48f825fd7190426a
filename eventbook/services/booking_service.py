"""
Booking write and lookup operations
"""

import logging
from typing import Any, Dict, List

from eventbook.services.repositories import EntityStore
from eventbook.services.validators import prepare_booking

logger = logging.getLogger(__name__)


class BookingService:
    """Service for booking operations"""

    def __init__(self, bookings: EntityStore, events: EntityStore):
        self._bookings = bookings
        self._events = events

    def create_booking(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a booking, check its event exists, then insert it.

        Raises:
            FieldValidationError: If event_id or email is missing or malformed.
            DanglingReferenceError: If no event has the given event_id.
        """
        fields = {key: data.get(key) for key in ("event_id", "email")}
        draft = prepare_booking(fields, changed_fields=fields.keys(), events=self._events)

        booking = self._bookings.insert({"event_id": str(draft["event_id"]), "email": draft["email"]})
        logger.info(f"Booking created: {booking['id']} for event {booking['event_id']}")
        return booking

    def list_for_event(self, event_id: str) -> List[Dict[str, Any]]:
        return self._bookings.find_many(event_id=event_id)

    def count_for_event(self, event_id: str) -> int:
        return self._bookings.count(event_id=event_id)
