"""
Event write and read operations
"""

import logging
from typing import Any, Dict

from eventbook.core.errors import (
    DuplicateSlugError,
    EventNotFoundError,
    InvalidSlugError,
    StoreConstraintError,
)
from eventbook.services.repositories import MANAGED_FIELDS, EntityStore
from eventbook.services.validators import REQUIRED_EVENT_FIELDS, changed_keys, prepare_event

logger = logging.getLogger(__name__)

# slug is derived from title and never accepted from callers
EDITABLE_EVENT_FIELDS = tuple(REQUIRED_EVENT_FIELDS)


class EventService:
    """Service for event operations"""

    def __init__(self, events: EntityStore):
        self._events = events

    def get_by_slug(self, slug: Any) -> Dict[str, Any]:
        """Return an event by slug (trimmed and lowercased).

        Raises:
            InvalidSlugError: If the slug is empty or not a string.
            EventNotFoundError: If no event has the slug.
        """
        if not isinstance(slug, str) or not slug.strip():
            raise InvalidSlugError()

        key = slug.strip().lower()
        event = self._events.find_one(slug=key)
        if event is None:
            raise EventNotFoundError(key)
        return event

    def get_by_id(self, event_id: str) -> Dict[str, Any]:
        event = self._events.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def create_event(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Validate, normalize and insert a new event."""
        fields = {key: value for key, value in data.items() if key in EDITABLE_EVENT_FIELDS}
        draft = prepare_event(fields, changed_fields=fields.keys())

        try:
            event = self._events.insert(draft)
        except StoreConstraintError as exc:
            raise DuplicateSlugError(draft["slug"]) from exc

        logger.info(f"Event created: {event['id']} ({event['slug']})")
        return event

    def update_event(self, event_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Apply a partial update.

        Only fields whose submitted value differs from the stored one count
        as changed, so slug, date and time are recomputed only when title,
        date or time actually change.
        """
        current = self.get_by_id(event_id)
        changes = {key: value for key, value in changes.items() if key in EDITABLE_EVENT_FIELDS}
        changed = changed_keys(current, changes)

        draft = prepare_event({**current, **changes}, changed_fields=changed)
        updates = {
            key: value for key, value in draft.items()
            if key not in MANAGED_FIELDS and value != current.get(key)
        }
        if not updates:
            return current

        try:
            event = self._events.update(event_id, updates)
        except StoreConstraintError as exc:
            raise DuplicateSlugError(draft["slug"]) from exc
        if event is None:
            raise EventNotFoundError(event_id)

        logger.info(f"Event updated: {event_id} fields={sorted(updates)}")
        return event
