"""Analytics service module.

Month-scoped aggregations behind the statistics, bar chart and pie chart
endpoints. The aggregation functions are pure and operate on an already
month-filtered list of records.
"""
import logging
import math
from typing import Iterable, Sequence

from transactions_api.exceptions.api_exception import NotFoundError
from transactions_api.models.transaction import Transaction
from transactions_api.schemas.analytics import StatisticsResponse, CategoryCount
from transactions_api.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

# (inclusive upper bound, label); anything above the last bound is "901-above"
PRICE_BUCKETS = [
    (100, "0-100"),
    (200, "101-200"),
    (300, "201-300"),
    (400, "301-400"),
    (500, "401-500"),
    (600, "501-600"),
    (700, "601-700"),
    (800, "701-800"),
    (900, "801-900"),
]
OVERFLOW_BUCKET = "901-above"
PRICE_RANGE_LABELS = [label for _, label in PRICE_BUCKETS] + [OVERFLOW_BUCKET]


def filter_by_month(records: Iterable[Transaction], month: int) -> list[Transaction]:
    """Keep records sold in the given calendar month of any year."""
    return [r for r in records if r.date_of_sale.month == month]


async def load_month(store: TransactionStore, month: int) -> list[Transaction]:
    """Load all records for a month, raising NotFoundError if there are none."""
    records = filter_by_month(await store.find_all(), month)
    logger.debug("Month %d matched %d transaction(s)", month, len(records))
    if not records:
        raise NotFoundError("No data found for this month.")
    return records


def compute_statistics(records: Sequence[Transaction]) -> StatisticsResponse:
    """Total sale amount plus sold/unsold item counts."""
    sold = [r for r in records if r.sold]
    return StatisticsResponse(
        totalSaleAmount=math.fsum(r.price for r in sold),
        totalSoldItems=len(sold),
        totalUnsoldItems=len(records) - len(sold),
    )


def price_bucket(price: float) -> str:
    """Label of the price range a price falls into (upper bounds inclusive)."""
    for upper, label in PRICE_BUCKETS:
        if price <= upper:
            return label
    return OVERFLOW_BUCKET


def compute_price_ranges(records: Iterable[Transaction]) -> dict[str, int]:
    """Histogram of records over the ten fixed price ranges."""
    ranges = dict.fromkeys(PRICE_RANGE_LABELS, 0)
    for r in records:
        ranges[price_bucket(r.price)] += 1
    return ranges


def compute_category_counts(records: Iterable[Transaction]) -> list[CategoryCount]:
    """Item count per category, in order of first appearance."""
    counts: dict[str, int] = {}
    for r in records:
        counts[r.category] = counts.get(r.category, 0) + 1
    return [CategoryCount(category=c, count=n) for c, n in counts.items()]
