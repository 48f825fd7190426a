"""
Tests for slug, date and time normalization
"""

import re

import pytest

from eventbook.core.errors import InvalidDateFormat, InvalidTimeFormat
from eventbook.services.normalizers import generate_slug, normalize_date, normalize_time

SLUG_SHAPE = re.compile(r"^[a-z0-9_]+(-[a-z0-9_]+)*$")

@pytest.mark.parametrize("title,expected", [
    ("React Summit 2025", "react-summit-2025"),
    ("  AWS re:Invent -- Conference!! ", "aws-reinvent-conference"),
    ("Hello   World", "hello-world"),
    ("C++ & C# Meetup", "c-c-meetup"),
    ("Python_3 Day", "python_3-day"),
    ("-Leading and trailing-", "leading-and-trailing"),
])
def test_generate_slug(title, expected):
    """Test slug generation from typical titles"""
    assert generate_slug(title) == expected

def test_generate_slug_shape():
    """Slugs only contain lowercase word characters and single inner hyphens"""
    titles = [
        "AI & Machine Learning Expo",
        "Web3 Developer Conference -- 2025",
        "DevOps   World\tSummit",
        "Café Über Night",
        "  --Global Hackathon!!--  ",
    ]
    for title in titles:
        assert SLUG_SHAPE.match(generate_slug(title)), title

def test_generate_slug_degenerate_title():
    """Punctuation-only titles produce an empty slug rather than an error"""
    assert generate_slug("!!!") == ""

@pytest.mark.parametrize("value,expected", [
    ("June 13, 2025", "2025-06-13"),
    ("2025-06-13", "2025-06-13"),
    ("2025/06/13", "2025-06-13"),
    ("2025-06-13T10:15:00", "2025-06-13"),
])
def test_normalize_date(value, expected):
    """Test date normalization to YYYY-MM-DD"""
    assert normalize_date(value) == expected

def test_normalize_date_uses_utc_calendar_day():
    """Offsets are converted to UTC before the time of day is dropped"""
    assert normalize_date("2025-06-13T23:30:00-05:00") == "2025-06-14"

@pytest.mark.parametrize("value", ["2025-13-40", "not a date", ""])
def test_normalize_date_invalid(value):
    """Test invalid dates are rejected"""
    with pytest.raises(InvalidDateFormat):
        normalize_date(value)

@pytest.mark.parametrize("value,expected", [
    ("2:30 PM", "14:30"),
    ("14:30", "14:30"),
    ("9:00", "9:00"),
    ("00:05", "00:05"),
    ("12:00 AM", "00:00"),
    ("12:15 pm", "12:15"),
    (" 7:05am ", "07:05"),
])
def test_normalize_time(value, expected):
    """Test time normalization to 24-hour format"""
    assert normalize_time(value) == expected

@pytest.mark.parametrize("value", ["25:00", "9:60", "noon", "", "14:30:00"])
def test_normalize_time_invalid(value):
    """Test invalid times are rejected"""
    with pytest.raises(InvalidTimeFormat):
        normalize_time(value)
