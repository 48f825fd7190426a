"""
Request dependencies
"""

from typing import AsyncIterator

from fastapi import Request

from eventbook.services.repositories import Stores, open_stores


async def get_stores(request: Request) -> AsyncIterator[Stores]:
    """Yield entity stores backed by the application's shared store connection."""
    client = await request.app.state.store.connect()
    with open_stores(client) as stores:
        yield stores
