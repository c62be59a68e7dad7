"""Analytics endpoint module.

Month-scoped statistics, price range bar chart, category pie chart and
the combined view used by the dashboard.
"""
import asyncio
import logging

import httpx
from fastapi import APIRouter, Depends, Request

from transactions_api.settings import settings
from transactions_api.endpoints.params import month_param
from transactions_api.exceptions.api_exception import UpstreamError
from transactions_api.schemas.analytics import (
    CategoryCount,
    CombinedStatisticsResponse,
    StatisticsResponse,
)
from transactions_api.services.analytics_service import (
    compute_category_counts,
    compute_price_ranges,
    compute_statistics,
    load_month,
)
from transactions_api.services.http_clients import get_internal_client
from transactions_api.services.transaction_store import TransactionStore, get_transaction_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.API_PREFIX, tags=["analytics"])


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(
    month: int = Depends(month_param),
    store: TransactionStore = Depends(get_transaction_store),
) -> StatisticsResponse:
    """
    Get sale totals for a month.

    - **totalSaleAmount**: Sum of prices of sold items
    - **totalSoldItems**: Number of sold items
    - **totalUnsoldItems**: Number of unsold items
    """
    return compute_statistics(await load_month(store, month))


@router.get("/barchart", response_model=dict[str, int])
async def get_price_ranges(
    month: int = Depends(month_param),
    store: TransactionStore = Depends(get_transaction_store),
) -> dict[str, int]:
    """
    Get the number of items per price range for a month.

    Ranges: 0-100, 101-200, ..., 801-900, 901-above. All ten are always present.
    """
    return compute_price_ranges(await load_month(store, month))


@router.get("/piechart", response_model=list[CategoryCount])
async def get_category_counts(
    month: int = Depends(month_param),
    store: TransactionStore = Depends(get_transaction_store),
) -> list[CategoryCount]:
    """Get the number of items per category for a month, in first-seen order."""
    return compute_category_counts(await load_month(store, month))


@router.get("/combinedStatistics", response_model=CombinedStatisticsResponse)
async def get_combined_statistics(
    request: Request,
    month: int = Depends(month_param),
    client: httpx.AsyncClient = Depends(get_internal_client),
) -> CombinedStatisticsResponse:
    """
    Get statistics, bar chart and pie chart data in one response.

    Calls the three endpoints concurrently; if any of them fails the whole
    request fails.
    """
    params = {"month": month}
    try:
        responses = await asyncio.gather(
            client.get(str(request.url_for("get_statistics")), params=params),
            client.get(str(request.url_for("get_price_ranges")), params=params),
            client.get(str(request.url_for("get_category_counts")), params=params),
        )
        for response in responses:
            response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.exception("Failed to fetch combined statistics for month %d", month)
        raise UpstreamError() from exc

    statistics, price_ranges, category_counts = (r.json() for r in responses)
    return CombinedStatisticsResponse(
        statistics=statistics,
        priceRanges=price_ranges,
        categoryCounts=category_counts,
    )
