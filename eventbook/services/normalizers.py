"""
Pure normalizers for event fields: slug, date and time
"""

import re

import pandas as pd

from eventbook.core.errors import InvalidDateFormat, InvalidTimeFormat

TIME_24H = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")
TIME_12H = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)$")


def generate_slug(title: str) -> str:
    """Lowercase, hyphen-delimited, URL-safe identifier for a title.

    May return an empty string for titles made only of punctuation.
    """
    slug = title.lower().strip()
    slug = re.sub(r"[^a-z0-9_\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")


def normalize_date(value: str) -> str:
    """Parse a free-form date and return its UTC calendar date as YYYY-MM-DD."""
    try:
        parsed = pd.to_datetime(value, utc=True)
    except (ValueError, TypeError, OverflowError) as exc:
        raise InvalidDateFormat(value) from exc

    if pd.isna(parsed):
        raise InvalidDateFormat(value)
    return parsed.strftime("%Y-%m-%d")


def normalize_time(value: str) -> str:
    """Return a 24-hour HH:MM time.

    Values already in 24-hour form are returned unchanged, so "9:00" keeps
    its single-digit hour. Only the AM/PM branch pads the hour.
    """
    cleaned = value.strip().upper()

    if TIME_24H.match(cleaned):
        return cleaned

    match = TIME_12H.match(cleaned)
    if not match:
        raise InvalidTimeFormat(value)

    hours = int(match.group(1))
    minutes = match.group(2)
    period = match.group(3)

    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0

    return f"{hours:02d}:{minutes}"
