"""
Shared fixtures: a throwaway sqlite store per test
"""

import pytest

from eventbook.core.config import Settings
from eventbook.core.db import Base, open_store
from eventbook.services.repositories import open_stores


@pytest.fixture
def store_client(tmp_path):
    """Open a sqlite-backed store in a temp directory"""
    client = open_store(Settings(DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}", USE_FIREBASE=False))
    try:
        yield client
    finally:
        Base.metadata.drop_all(bind=client.engine)
        client.close()


@pytest.fixture
def stores(store_client):
    with open_stores(store_client) as stores:
        yield stores


@pytest.fixture
def event_payload():
    """A valid event as an organizer would submit it"""
    return {
        "title": "React Summit 2025",
        "description": "The biggest React conference worldwide, with talks and workshops.",
        "overview": "Two days of React talks, workshops and networking.",
        "image": "/images/event1.png",
        "venue": "Amsterdam RAI",
        "location": "Amsterdam, Netherlands",
        "date": "June 13, 2025",
        "time": "9:00 AM",
        "mode": "Hybrid",
        "audience": "Frontend developers",
        "agenda": ["09:00 Keynote", "10:30 Workshops", "17:00 Closing panel"],
        "organizer": "GitNation",
        "tags": ["react", "frontend"],
    }
