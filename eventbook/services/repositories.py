"""
Repository layer abstracting storage (SQLAlchemy vs Firebase Firestore).

Both backends implement EntityStore and return plain dicts, so the services
never see ORM rows or Firestore snapshots.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Sequence

from google.api_core import exceptions as google_exceptions
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from eventbook.core.db import StoreClient
from eventbook.core.errors import StoreConstraintError, StoreUnavailableError
from eventbook.models import Booking, Event


# Assigned by the store, never taken from callers
MANAGED_FIELDS = ("id", "created_at", "updated_at")


class EntityStore(ABC):
    """Generic gateway over one collection of entities."""

    collection: str

    @abstractmethod
    def find_one(self, **criteria: Any) -> Optional[Dict[str, Any]]:
        """Return the first entity matching all criteria, or None."""
        ...

    @abstractmethod
    def find_by_id(self, entity_id: str) -> Optional[Dict[str, Any]]:
        """Return an entity by ID, or None if not found."""
        ...

    @abstractmethod
    def find_many(self, **criteria: Any) -> List[Dict[str, Any]]:
        """Return all entities matching the criteria, oldest first."""
        ...

    @abstractmethod
    def count(self, **criteria: Any) -> int:
        ...

    @abstractmethod
    def insert(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Persist a new entity and return it with id and timestamps."""
        ...

    @abstractmethod
    def update(self, entity_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply changes to an entity; None if it does not exist."""
        ...


# -------- SQLAlchemy --------

class SqlEntityStore(EntityStore):
    def __init__(self, db: Session, model):
        self._db = db
        self._model = model
        self.collection = model.__tablename__
        self._columns = [column.name for column in model.__table__.columns]

    @contextmanager
    def _errors(self):
        try:
            yield
        except IntegrityError as exc:
            self._db.rollback()
            raise StoreConstraintError(self.collection, self._violated_field(exc)) from exc
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise StoreUnavailableError(str(exc)) from exc

    def _violated_field(self, exc: IntegrityError) -> Optional[str]:
        message = str(exc.orig)
        for column in self._model.__table__.columns:
            if column.unique and column.name in message:
                return column.name
        return None

    def _writable(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            key: value for key, value in data.items()
            if key in self._columns and key not in MANAGED_FIELDS
        }

    def _to_dict(self, row) -> Dict[str, Any]:
        return {name: getattr(row, name) for name in self._columns}

    def find_one(self, **criteria):
        with self._errors():
            row = self._db.query(self._model).filter_by(**criteria).first()
        return self._to_dict(row) if row is not None else None

    def find_by_id(self, entity_id):
        with self._errors():
            row = self._db.get(self._model, entity_id)
        return self._to_dict(row) if row is not None else None

    def find_many(self, **criteria):
        with self._errors():
            rows = (
                self._db.query(self._model)
                .filter_by(**criteria)
                .order_by(self._model.created_at)
                .all()
            )
        return [self._to_dict(row) for row in rows]

    def count(self, **criteria):
        with self._errors():
            return self._db.query(self._model).filter_by(**criteria).count()

    def insert(self, data):
        row = self._model(**self._writable(data))
        with self._errors():
            self._db.add(row)
            self._db.commit()
            self._db.refresh(row)
        return self._to_dict(row)

    def update(self, entity_id, changes):
        with self._errors():
            row = self._db.get(self._model, entity_id)
            if row is None:
                return None
            for key, value in self._writable(changes).items():
                setattr(row, key, value)
            self._db.commit()
            self._db.refresh(row)
        return self._to_dict(row)


# -------- Firestore --------

@contextmanager
def _firestore_errors(collection: str, field: Optional[str] = None):
    try:
        yield
    except google_exceptions.Conflict as exc:
        raise StoreConstraintError(collection, field) from exc
    except google_exceptions.GoogleAPICallError as exc:
        raise StoreUnavailableError(str(exc)) from exc


class FirestoreEntityStore(EntityStore):
    """Entities as documents in a top-level collection.

    Firestore has no unique indexes, so each unique field value is claimed
    by a document in "<collection>_by_<field>" whose ID is the value. The
    claim is created in the same batch as the entity write, and the batch
    fails if the claim already exists.
    """

    def __init__(self, client, collection: str, unique_fields: Sequence[str] = ()):
        self._client = client
        self.collection = collection
        self._unique_fields = tuple(unique_fields)

    def _collection(self):
        return self._client.collection(self.collection)

    def _claim_ref(self, field: str, value: Any):
        return self._client.collection(f"{self.collection}_by_{field}").document(str(value))

    def _query(self, criteria: Dict[str, Any]):
        query = self._collection()
        for field, value in criteria.items():
            query = query.where(field, "==", value)
        return query

    @staticmethod
    def _to_dict(doc) -> Dict[str, Any]:
        data = doc.to_dict()
        data["id"] = doc.id
        return data

    def find_one(self, **criteria):
        with _firestore_errors(self.collection):
            docs = self._query(criteria).limit(1).get()
        return self._to_dict(docs[0]) if docs else None

    def find_by_id(self, entity_id):
        if not entity_id or "/" in entity_id:
            return None
        with _firestore_errors(self.collection):
            doc = self._collection().document(entity_id).get()
        return self._to_dict(doc) if doc.exists else None

    def find_many(self, **criteria):
        with _firestore_errors(self.collection):
            docs = self._query(criteria).get()
        items = [self._to_dict(doc) for doc in docs]
        return sorted(items, key=lambda item: item.get("created_at") or datetime.min)

    def count(self, **criteria):
        with _firestore_errors(self.collection):
            result = self._query(criteria).count(alias="total").get()
        return int(result[0][0].value)

    def insert(self, data):
        ref = self._collection().document()
        now = datetime.utcnow()
        record = {key: value for key, value in data.items() if key not in MANAGED_FIELDS}
        record.update(created_at=now, updated_at=now)

        batch = self._client.batch()
        for field in self._unique_fields:
            if record.get(field):
                batch.create(self._claim_ref(field, record[field]), {"entity_id": ref.id})
        batch.set(ref, record)

        with _firestore_errors(self.collection, self._unique_fields[0] if self._unique_fields else None):
            batch.commit()
        return {**record, "id": ref.id}

    def update(self, entity_id, changes):
        current = self.find_by_id(entity_id)
        if current is None:
            return None

        record = {key: value for key, value in changes.items() if key not in MANAGED_FIELDS}
        record["updated_at"] = datetime.utcnow()

        batch = self._client.batch()
        for field in self._unique_fields:
            old, new = current.get(field), record.get(field, current.get(field))
            if new != old:
                if new:
                    batch.create(self._claim_ref(field, new), {"entity_id": entity_id})
                if old:
                    batch.delete(self._claim_ref(field, old))
        batch.update(self._collection().document(entity_id), record)

        with _firestore_errors(self.collection, self._unique_fields[0] if self._unique_fields else None):
            batch.commit()
        return {**current, **record}


# -------- Wiring --------

@dataclass
class Stores:
    """Entity stores for one request."""

    events: EntityStore
    bookings: EntityStore


@contextmanager
def open_stores(client: StoreClient) -> Iterator[Stores]:
    """Yield per-request stores; SQL sessions are closed on exit."""
    if client.backend == "firestore":
        yield Stores(
            events=FirestoreEntityStore(client.firestore, "events", unique_fields=("slug",)),
            bookings=FirestoreEntityStore(client.firestore, "bookings"),
        )
        return

    db = client.session_factory()
    try:
        yield Stores(events=SqlEntityStore(db, Event), bookings=SqlEntityStore(db, Booking))
    finally:
        db.close()
