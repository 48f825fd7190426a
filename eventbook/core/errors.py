"""
Error kinds raised by the validation pipeline and the store gateway.

Every error carries an ErrorCode and a user-safe message. The HTTP layer
maps codes to status codes; the core never catches these itself.
"""

from enum import Enum
from typing import Dict, Optional


class ErrorCode(Enum):
    """Domain error codes."""

    FIELD_VALIDATION = "FIELD_VALIDATION"
    INVALID_DATE_FORMAT = "INVALID_DATE_FORMAT"
    INVALID_TIME_FORMAT = "INVALID_TIME_FORMAT"
    DUPLICATE_SLUG = "DUPLICATE_SLUG"
    DANGLING_REFERENCE = "DANGLING_REFERENCE"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_SLUG = "INVALID_SLUG"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    STORE_CONSTRAINT = "STORE_CONSTRAINT"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode = ErrorCode.FIELD_VALIDATION

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class FieldValidationError(DomainError):
    """Raised when one or more fields violate their constraints."""

    code = ErrorCode.FIELD_VALIDATION

    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = dict(errors)
        summary = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(f"Validation failed ({summary})", details={"errors": self.errors})

    @property
    def field(self) -> str:
        """First offending field."""
        return next(iter(self.errors))


class InvalidDateFormat(DomainError):
    """Raised when a date string cannot be parsed to a calendar date."""

    code = ErrorCode.INVALID_DATE_FORMAT

    def __init__(self, value: object) -> None:
        super().__init__("Invalid date format", details={"field": "date", "value": str(value)})
        self.value = value


class InvalidTimeFormat(DomainError):
    """Raised when a time string is neither 24-hour nor 12-hour AM/PM."""

    code = ErrorCode.INVALID_TIME_FORMAT

    def __init__(self, value: object) -> None:
        super().__init__(
            "Invalid time format. Use HH:MM or HH:MM AM/PM",
            details={"field": "time", "value": str(value)},
        )
        self.value = value


class DuplicateSlugError(DomainError):
    """Raised when another event already owns the slug."""

    code = ErrorCode.DUPLICATE_SLUG

    def __init__(self, slug: str) -> None:
        super().__init__(f"An event with slug '{slug}' already exists", details={"slug": slug})
        self.slug = slug


class DanglingReferenceError(DomainError):
    """Raised when a booking references an event that does not exist."""

    code = ErrorCode.DANGLING_REFERENCE

    def __init__(self, event_id: str) -> None:
        super().__init__(f"Event with ID {event_id} does not exist", details={"event_id": event_id})
        self.event_id = event_id


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    code = ErrorCode.EVENT_NOT_FOUND

    def __init__(self, key: str) -> None:
        super().__init__("Event not found", details={"key": key})
        self.key = key


class InvalidSlugError(DomainError):
    """Raised when a slug argument is empty or not a string."""

    code = ErrorCode.INVALID_SLUG

    def __init__(self) -> None:
        super().__init__("Invalid slug parameter", details={"error": "Slug must be a non-empty string"})


class StoreUnavailableError(DomainError):
    """Raised on connection, configuration or driver failures."""

    code = ErrorCode.STORE_UNAVAILABLE

    def __init__(self, reason: str) -> None:
        # reason is logged, not returned to clients
        super().__init__("Unable to connect to database")
        self.reason = reason


class StoreConstraintError(DomainError):
    """Raised when the store rejects a write, e.g. a uniqueness violation."""

    code = ErrorCode.STORE_CONSTRAINT

    def __init__(self, collection: str, field: Optional[str] = None) -> None:
        super().__init__(
            f"Constraint violated on {collection}",
            details={"collection": collection, "field": field},
        )
        self.collection = collection
        self.field = field
