"""Transaction store module.

Wraps one ``AsyncSession`` with the handful of operations the endpoints
need: bulk insert, filtered paging, counting and the full scan used by the
month aggregations. Store failures surface as ``UpstreamError``.
"""
import logging
import math
import re
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, Optional

from fastapi import Depends
from sqlalchemy import select, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from transactions_api.database.database import get_db
from transactions_api.exceptions.api_exception import UpstreamError
from transactions_api.models.transaction import Transaction
from transactions_api.schemas.transaction import TransactionCreate

logger = logging.getLogger(__name__)


_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_search_number(search: str) -> Optional[float]:
    """Return the search term as a finite number, or None if it is not one.

    Only plain decimal notation counts; ``"1_000"``, ``"nan"`` and
    ``"150abc"`` are treated as text.
    """
    term = search.strip()
    if not _NUMBER_RE.fullmatch(term):
        return None
    value = float(term)
    if not math.isfinite(value):
        return None
    return value


def build_search_filter(search: str) -> list:
    """
    Build the WHERE clause for a free-text search.

    Title or description contains the term (case-insensitive, literal),
    or the price equals the term when it is numeric.
    """
    if not search:
        return []

    conditions = [
        Transaction.title.icontains(search, autoescape=True),
        Transaction.description.icontains(search, autoescape=True),
    ]
    number = parse_search_number(search)
    if number is not None:
        conditions.append(Transaction.price == number)

    return [or_(*conditions)]


class TransactionStore:
    """Record store bound to a single database session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def _store_errors(self, action: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception("Transaction store failed to %s", action)
            raise UpstreamError() from exc

    async def insert_many(self, records: Iterable[TransactionCreate]) -> list[Transaction]:
        """Bulk insert records; ids are assigned by the database."""
        db_transactions = [
            Transaction(
                title=r.title,
                description=r.description,
                price=r.price,
                category=r.category,
                image=r.image,
                sold=r.sold,
                date_of_sale=r.date_of_sale,
            )
            for r in records
        ]
        async with self._store_errors("insert transactions"):
            self.session.add_all(db_transactions)
            await self.session.commit()
        return db_transactions

    async def find(self, search: str = "", skip: int = 0, limit: int = 10) -> list[Transaction]:
        """Return one page of matching transactions in insertion order."""
        query = (
            select(Transaction)
            .where(*build_search_filter(search))
            .order_by(Transaction.id)
            .offset(skip)
            .limit(limit)
        )
        async with self._store_errors("find transactions"):
            result = await self.session.execute(query)
            return list(result.scalars().all())

    async def count(self, search: str = "") -> int:
        """Count all transactions matching the search term."""
        query = select(func.count(Transaction.id)).where(*build_search_filter(search))
        async with self._store_errors("count transactions"):
            result = await self.session.execute(query)
            return result.scalar() or 0

    async def find_all(self) -> list[Transaction]:
        """Return every stored transaction in insertion order."""
        async with self._store_errors("load transactions"):
            result = await self.session.execute(select(Transaction).order_by(Transaction.id))
            return list(result.scalars().all())


async def get_transaction_store(db: AsyncSession = Depends(get_db)) -> TransactionStore:
    """Dependency for a request-scoped transaction store."""
    return TransactionStore(db)
