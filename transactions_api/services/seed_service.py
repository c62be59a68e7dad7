"""Seed service module.

Fetches the product transaction array from the external source and bulk
inserts it. Seeding is not idempotent: every call appends the fetched
records again.
"""
import logging

import httpx
from pydantic import TypeAdapter

from transactions_api.exceptions.api_exception import UpstreamError
from transactions_api.models.transaction import Transaction
from transactions_api.schemas.transaction import TransactionCreate
from transactions_api.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(list[TransactionCreate])


async def fetch_seed_records(client: httpx.AsyncClient, url: str) -> list[TransactionCreate]:
    """
    Download and validate the seed payload.

    Args:
        client: HTTP client used for the request
        url: Location of the JSON array of transactions

    Returns:
        Validated records, in source order

    Raises:
        UpstreamError: the source is unreachable, answers with an error
            status, or does not return an array of transactions
    """
    try:
        response = await client.get(url)
        response.raise_for_status()
        return _records_adapter.validate_python(response.json())
    except (httpx.HTTPError, ValueError) as exc:
        # pydantic's ValidationError and JSON decode errors are both ValueErrors
        logger.exception("Failed to fetch seed data from %s", url)
        raise UpstreamError() from exc


async def seed_transactions(
    store: TransactionStore,
    client: httpx.AsyncClient,
    url: str,
) -> list[Transaction]:
    """Fetch the seed records and insert them all."""
    records = await fetch_seed_records(client, url)
    inserted = await store.insert_many(records)
    logger.info("Seeded %d transaction(s) from %s", len(inserted), url)
    return inserted
