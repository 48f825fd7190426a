"""
Write-path validation pipeline for events and bookings.

Each prepare_* function takes the full record about to be written plus the
names of the fields this write changes, and returns a normalized copy. The
input record is never mutated; any error aborts the write before the store
is touched.
"""

import re
from typing import Any, Dict, Iterable, List

from eventbook.core.errors import DanglingReferenceError, FieldValidationError
from eventbook.services.normalizers import generate_slug, normalize_date, normalize_time

EVENT_MODES = ("online", "offline", "hybrid")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# field -> message when missing
REQUIRED_EVENT_FIELDS = {
    "title": "Event title is required",
    "description": "Event description is required",
    "overview": "Event overview is required",
    "image": "Event image is required",
    "venue": "Event venue is required",
    "location": "Event location is required",
    "date": "Event date is required",
    "time": "Event time is required",
    "mode": "Event mode is required",
    "audience": "Target audience is required",
    "agenda": "Event agenda is required",
    "organizer": "Event organizer is required",
    "tags": "Event tags are required",
}

TRIMMED_EVENT_FIELDS = (
    "title", "description", "overview", "venue", "location", "audience", "organizer",
)

LIST_EVENT_FIELDS = {
    "agenda": "Agenda must contain at least one item",
    "tags": "At least one tag is required",
}

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
DESCRIPTION_MIN_LENGTH = 10

# Sized to the store columns (see eventbook/models)
EVENT_MAX_LENGTHS = {
    "image": 500,
    "venue": 255,
    "location": 255,
    "audience": 255,
    "organizer": 255,
}
EMAIL_MAX_LENGTH = 320


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _coerce_event(record: Dict[str, Any]) -> Dict[str, Any]:
    draft = dict(record)
    for field in TRIMMED_EVENT_FIELDS:
        if isinstance(draft.get(field), str):
            draft[field] = draft[field].strip()
    if isinstance(draft.get("mode"), str):
        draft["mode"] = draft["mode"].lower()
    for field in LIST_EVENT_FIELDS:
        if isinstance(draft.get(field), (list, tuple)):
            draft[field] = list(draft[field])
    return draft


def check_event_fields(draft: Dict[str, Any]) -> None:
    """Enforce presence, length, enum and non-empty list constraints."""
    errors: Dict[str, str] = {}

    for field, message in REQUIRED_EVENT_FIELDS.items():
        value = draft.get(field)
        if _is_missing(value):
            errors[field] = message
        elif field in LIST_EVENT_FIELDS:
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                errors[field] = f"{field.capitalize()} must be a list of strings"
            elif not value:
                errors[field] = LIST_EVENT_FIELDS[field]
        elif not isinstance(value, str):
            errors[field] = f"{field.capitalize()} must be a string"

    title = draft.get("title")
    if "title" not in errors:
        if len(title) < TITLE_MIN_LENGTH:
            errors["title"] = f"Title must be at least {TITLE_MIN_LENGTH} characters"
        elif len(title) > TITLE_MAX_LENGTH:
            errors["title"] = f"Title cannot exceed {TITLE_MAX_LENGTH} characters"

    description = draft.get("description")
    if "description" not in errors and len(description) < DESCRIPTION_MIN_LENGTH:
        errors["description"] = f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters"

    if "mode" not in errors and draft["mode"] not in EVENT_MODES:
        errors["mode"] = "Mode must be online, offline, or hybrid"

    for field, limit in EVENT_MAX_LENGTHS.items():
        if field not in errors and len(draft[field]) > limit:
            errors[field] = f"{field.capitalize()} cannot exceed {limit} characters"

    if errors:
        raise FieldValidationError(errors)


def prepare_event(record: Dict[str, Any], changed_fields: Iterable[str]) -> Dict[str, Any]:
    """Validate an event and derive slug, date and time for the changed fields."""
    changed = set(changed_fields)
    draft = _coerce_event(record)

    check_event_fields(draft)

    if "title" in changed:
        draft["slug"] = generate_slug(draft["title"])
    if "date" in changed:
        draft["date"] = normalize_date(draft["date"])
    if "time" in changed:
        draft["time"] = normalize_time(draft["time"])

    return draft


def check_booking_fields(draft: Dict[str, Any]) -> None:
    errors: Dict[str, str] = {}

    if _is_missing(draft.get("event_id")):
        errors["event_id"] = "Event ID is required"

    email = draft.get("email")
    if _is_missing(email):
        errors["email"] = "Email is required"
    elif not isinstance(email, str) or not EMAIL_PATTERN.match(email):
        errors["email"] = "Please provide a valid email address"
    elif len(email) > EMAIL_MAX_LENGTH:
        errors["email"] = f"Email cannot exceed {EMAIL_MAX_LENGTH} characters"

    if errors:
        raise FieldValidationError(errors)


def prepare_booking(record: Dict[str, Any], changed_fields: Iterable[str], events) -> Dict[str, Any]:
    """Validate a booking and confirm its event exists.

    ``events`` is the event EntityStore. The lookup runs only when event_id
    is part of this write. Nothing holds the event between this check and
    the insert that follows it.
    """
    changed = set(changed_fields)
    draft = dict(record)
    if isinstance(draft.get("email"), str):
        draft["email"] = draft["email"].strip().lower()

    check_booking_fields(draft)

    if "event_id" in changed:
        event_id = str(draft["event_id"])
        if events.find_by_id(event_id) is None:
            raise DanglingReferenceError(event_id)

    return draft


def changed_keys(current: Dict[str, Any], changes: Dict[str, Any]) -> List[str]:
    """Keys in ``changes`` whose value differs from ``current``."""
    return [key for key, value in changes.items() if current.get(key) != value]
