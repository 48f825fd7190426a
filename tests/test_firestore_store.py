"""
Tests for the Firestore gateway against a mocked client
"""

from unittest.mock import MagicMock

import pytest
from google.api_core import exceptions as google_exceptions

from eventbook.core.errors import StoreConstraintError, StoreUnavailableError
from eventbook.services.repositories import FirestoreEntityStore

@pytest.fixture
def client():
    client = MagicMock()
    client.collection.return_value.document.return_value.id = "evt123"
    return client

def test_insert_claims_unique_slug(client):
    """Test inserts claim the slug in the same batch as the document"""
    store = FirestoreEntityStore(client, "events", unique_fields=("slug",))
    event = store.insert({"title": "React Summit", "slug": "react-summit", "id": "ignored"})

    batch = client.batch.return_value
    batch.create.assert_called_once()
    assert batch.create.call_args.args[1] == {"entity_id": "evt123"}
    batch.set.assert_called_once()
    batch.commit.assert_called_once()
    client.collection.assert_any_call("events_by_slug")

    assert event["id"] == "evt123"
    assert event["slug"] == "react-summit"
    assert event["created_at"] == event["updated_at"]

def test_insert_conflict_is_constraint_error(client):
    """Test an existing slug claim surfaces as a constraint violation"""
    client.batch.return_value.commit.side_effect = google_exceptions.Conflict("already exists")
    store = FirestoreEntityStore(client, "events", unique_fields=("slug",))

    with pytest.raises(StoreConstraintError) as exc_info:
        store.insert({"title": "React Summit", "slug": "react-summit"})
    assert exc_info.value.collection == "events"
    assert exc_info.value.field == "slug"

def test_insert_without_unique_fields(client):
    """Test bookings are written without claims"""
    store = FirestoreEntityStore(client, "bookings")
    store.insert({"event_id": "evt123", "email": "ada@example.com"})

    client.batch.return_value.create.assert_not_called()
    client.batch.return_value.set.assert_called_once()

def test_find_by_id_missing(client):
    """Test missing documents return None"""
    client.collection.return_value.document.return_value.get.return_value.exists = False
    store = FirestoreEntityStore(client, "events")

    assert store.find_by_id("evt404") is None
    assert store.find_by_id("") is None
    assert store.find_by_id("a/b") is None

def test_find_one_returns_document_with_id(client):
    """Test query results are returned as dicts carrying their ID"""
    doc = MagicMock()
    doc.id = "evt123"
    doc.to_dict.return_value = {"slug": "react-summit"}
    query = client.collection.return_value.where.return_value
    query.limit.return_value.get.return_value = [doc]
    store = FirestoreEntityStore(client, "events")

    assert store.find_one(slug="react-summit") == {"slug": "react-summit", "id": "evt123"}
    client.collection.return_value.where.assert_called_once_with("slug", "==", "react-summit")

def test_api_failure_is_store_unavailable(client):
    """Test driver errors surface as store unavailability"""
    client.collection.return_value.document.return_value.get.side_effect = (
        google_exceptions.ServiceUnavailable("backend down")
    )
    store = FirestoreEntityStore(client, "events")

    with pytest.raises(StoreUnavailableError):
        store.find_by_id("evt123")

def test_update_moves_slug_claim(client):
    """Test renaming swaps the old slug claim for a new one"""
    current = MagicMock()
    current.exists = True
    current.id = "evt123"
    current.to_dict.return_value = {"slug": "react-summit", "title": "React Summit"}
    client.collection.return_value.document.return_value.get.return_value = current
    store = FirestoreEntityStore(client, "events", unique_fields=("slug",))

    updated = store.update("evt123", {"title": "React Berlin", "slug": "react-berlin"})

    batch = client.batch.return_value
    batch.create.assert_called_once()
    batch.delete.assert_called_once()
    batch.update.assert_called_once()
    assert updated["slug"] == "react-berlin"
    assert updated["id"] == "evt123"

def test_count_uses_aggregation_query(client):
    """Test counting runs a server-side aggregation instead of fetching documents"""
    query = client.collection.return_value.where.return_value
    query.count.return_value.get.return_value = [[MagicMock(value=3)]]
    store = FirestoreEntityStore(client, "bookings")

    assert store.count(event_id="evt123") == 3
    client.collection.return_value.where.assert_called_once_with("event_id", "==", "evt123")
    query.count.assert_called_once_with(alias="total")
    query.get.assert_not_called()
