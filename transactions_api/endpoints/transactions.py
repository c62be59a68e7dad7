"""Transaction seeding and listing endpoints module."""
import math
from typing import Union

import httpx
from fastapi import APIRouter, Depends, Query

from transactions_api.settings import settings
from transactions_api.schemas.transaction import (
    MessageResponse,
    SeedResponse,
    TransactionListResponse,
    TransactionResponse,
)
from transactions_api.services.http_clients import get_seed_client
from transactions_api.services.seed_service import seed_transactions
from transactions_api.services.transaction_store import TransactionStore, get_transaction_store


router = APIRouter(prefix=settings.API_PREFIX, tags=["transactions"])


@router.get("/initialize", response_model=SeedResponse)
async def initialize_database(
    store: TransactionStore = Depends(get_transaction_store),
    client: httpx.AsyncClient = Depends(get_seed_client),
) -> SeedResponse:
    """
    Seed the database from the external product transaction source.

    Not idempotent: calling it again inserts the same records a second time.
    """
    inserted = await seed_transactions(store, client, settings.SEED_URL)
    return SeedResponse(
        msg="Database initialized and seeded successfully",
        count=len(inserted),
        transactions=[TransactionResponse.model_validate(t) for t in inserted],
    )


@router.get(
    "/alltransactions",
    response_model=Union[TransactionListResponse, MessageResponse],
)
async def list_transactions(
    search: str = Query("", description="Matches title/description text or exact price"),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    per_page: int = Query(10, ge=1, description="Items per page"),
    store: TransactionStore = Depends(get_transaction_store),
) -> Union[TransactionListResponse, MessageResponse]:
    """
    List transactions with search and pagination.

    An empty page is not an error: it returns only an informational
    ``msg``, so callers should check for ``data`` in the body.
    """
    transactions = await store.find(search, skip=(page - 1) * per_page, limit=per_page)
    total = await store.count(search)

    if not transactions:
        return MessageResponse(msg="No transactions found for the given query.")

    return TransactionListResponse(
        page=page,
        per_page=per_page,
        total=total,
        total_pages=math.ceil(total / per_page),
        data=[TransactionResponse.model_validate(t) for t in transactions],
    )
