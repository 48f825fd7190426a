"""
Store connection handling.

The application owns one StoreConnector (created in the lifespan in main.py).
The first caller of connect() opens the store; concurrent callers await the
same in-flight attempt instead of opening their own.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from eventbook.core.config import Settings
from eventbook.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

Base = declarative_base()


@dataclass
class StoreClient:
    """An open handle to the backing store (SQL engine or Firestore client)."""

    engine: Optional[Engine] = None
    session_factory: Optional[sessionmaker] = None
    firestore: Any = None

    @property
    def backend(self) -> str:
        return "firestore" if self.firestore is not None else "sql"

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
        if self.firestore is not None:
            self.firestore.close()


def open_store(settings: Settings) -> StoreClient:
    """Open the store selected by settings. Blocking; run it off the event loop."""
    if settings.USE_FIREBASE:
        from eventbook.services.firebase_client import create_firestore_client

        try:
            return StoreClient(firestore=create_firestore_client(settings))
        except (ValueError, RuntimeError, OSError) as exc:
            raise StoreUnavailableError(str(exc)) from exc

    url = settings.DATABASE_URL
    if not url:
        raise StoreUnavailableError("DATABASE_URL is not configured")

    # models must be registered on Base before create_all
    import eventbook.models  # noqa: F401

    try:
        if url.startswith("sqlite"):
            engine = create_engine(url, connect_args={"check_same_thread": False})
        else:
            engine = create_engine(url, pool_size=settings.DATABASE_POOL_SIZE, pool_pre_ping=True)
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as exc:
        raise StoreUnavailableError(str(exc)) from exc

    return StoreClient(
        engine=engine,
        session_factory=sessionmaker(autocommit=False, autoflush=False, bind=engine),
    )


class StoreConnector:
    """Lazily opens a StoreClient once and shares it across callers."""

    def __init__(
        self,
        settings: Settings,
        opener: Callable[[Settings], StoreClient] = open_store,
    ):
        self._settings = settings
        self._opener = opener
        self._lock = asyncio.Lock()
        self._client: Optional[StoreClient] = None
        self._pending: Optional[asyncio.Task] = None

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> StoreClient:
        if self._client is not None:
            return self._client

        async with self._lock:
            if self._client is not None:
                return self._client
            if self._pending is None:
                logger.info("Opening store connection")
                self._pending = asyncio.create_task(
                    asyncio.to_thread(self._opener, self._settings)
                )
            pending = self._pending

        # Shielded so a cancelled caller does not cancel the shared attempt
        try:
            client = await asyncio.shield(pending)
        except BaseException as e:
            if pending.done():
                # the attempt itself failed or was cancelled; let the next caller retry
                if self._pending is pending:
                    self._pending = None
                if not pending.cancelled():
                    logger.error(f"Store connection failed: {e}")
            raise

        self._client = client
        return client

    async def close(self) -> None:
        async with self._lock:
            client, self._client, self._pending = self._client, None, None
        if client is not None:
            client.close()
            logger.info("Store connection closed")
