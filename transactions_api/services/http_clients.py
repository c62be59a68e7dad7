"""Outbound HTTP client dependencies."""
from typing import AsyncIterator

import httpx

from transactions_api.settings import settings


async def get_seed_client() -> AsyncIterator[httpx.AsyncClient]:
    """Dependency for the client that talks to the seed source."""
    async with httpx.AsyncClient(timeout=settings.SEED_TIMEOUT_SECONDS) as client:
        yield client


async def get_internal_client() -> AsyncIterator[httpx.AsyncClient]:
    """Dependency for the client used to call this service's own endpoints."""
    async with httpx.AsyncClient(timeout=None) as client:
        yield client
