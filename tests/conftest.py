"""Pytest fixtures for an async SQLite test database and in-process API client."""
import os

# Keep the application's own engine off PostgreSQL while tests import it
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from datetime import datetime

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from transactions_api.app import app
from transactions_api.database.database import Base, get_db
from transactions_api.models.transaction import Transaction
from transactions_api.services.http_clients import get_internal_client, get_seed_client
from transactions_api.settings import settings

BASE_URL = "http://test"


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Session factory bound to a fresh file-backed SQLite database.

    A file rather than ``:memory:`` so that concurrent requests each get
    their own connection to the same data.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'transactions.db'}",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create an async session for testing."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_transaction():
    """Factory for unsaved Transaction rows with sensible defaults."""
    def _make(**overrides) -> Transaction:
        fields = {
            "title": "Product",
            "description": "A product",
            "price": 10.0,
            "category": "misc",
            "image": "https://example.com/product.jpg",
            "sold": False,
            "date_of_sale": datetime(2021, 3, 1, 12, 0),
        }
        fields.update(overrides)
        return Transaction(**fields)

    return _make


@pytest_asyncio.fixture
async def sample_transactions(db_session, make_transaction):
    """Seven transactions: four in March, two in July, one in January."""
    transactions = [
        # March (two different years)
        make_transaction(
            title="Mens Cotton Jacket",
            description="Great outerwear jackets for Spring",
            price=100.0,
            category="men's clothing",
            sold=True,
            date_of_sale=datetime(2021, 3, 5, 10, 0),
        ),
        make_transaction(
            title="Solid Gold Petite Micropave",
            description="Satisfaction Guaranteed",
            price=101.0,
            category="jewelery",
            sold=False,
            date_of_sale=datetime(2022, 3, 15, 9, 30),
        ),
        make_transaction(
            title="WD 2TB Elements Portable Drive",
            description="USB 3.0 and USB 2.0 compatibility",
            price=900.0,
            category="electronics",
            sold=True,
            date_of_sale=datetime(2021, 3, 20, 18, 45),
        ),
        make_transaction(
            title="Samsung 49-Inch Monitor",
            description="Super ultrawide screen, 150% wider",
            price=999.99,
            category="electronics",
            sold=True,
            date_of_sale=datetime(2022, 3, 1, 8, 0),
        ),
        # July
        make_transaction(
            title="Womens Rain Jacket",
            description="Lightweight and waterproof",
            price=150.0,
            category="women's clothing",
            sold=False,
            date_of_sale=datetime(2021, 7, 10, 14, 0),
        ),
        make_transaction(
            title="Fjallraven Backpack",
            description="Your perfect pack for everyday use",
            price=109.95,
            category="men's clothing",
            sold=True,
            date_of_sale=datetime(2021, 7, 12, 16, 20),
        ),
        # January
        make_transaction(
            title="SanDisk SSD",
            description="Easy upgrade, reads at 150 MB/s",
            price=109.0,
            category="electronics",
            sold=False,
            date_of_sale=datetime(2022, 1, 1, 0, 5),
        ),
    ]
    db_session.add_all(transactions)
    await db_session.commit()
    return transactions


SEED_PAYLOAD = [
    {
        "id": 1,
        "title": "Fjallraven Foldsack No. 1 Backpack",
        "price": 329.85,
        "description": "Your perfect pack for everyday use",
        "category": "men's clothing",
        "image": "https://example.com/backpack.jpg",
        "sold": False,
        "dateOfSale": "2021-11-27T20:29:54+05:30",
    },
    {
        "id": 2,
        "title": "Mens Casual Premium Slim Fit T-Shirts",
        "price": 44.6,
        "description": "Slim-fitting style",
        "category": "men's clothing",
        "image": "https://example.com/tshirt.jpg",
        "sold": True,
        "dateOfSale": "2021-10-27T20:29:54+05:30",
    },
]


class SeedSource:
    """Stand-in for the external seed endpoint, served over httpx.MockTransport."""

    def __init__(self):
        self.status_code = 200
        self.payload = SEED_PAYLOAD
        self.error = None
        self.calls = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def seed_source():
    return SeedSource()


class FailingSession:
    """Session stand-in whose every statement fails."""

    def add_all(self, instances):
        pass

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is down"))

    async def commit(self):
        raise OperationalError("COMMIT", {}, Exception("database is down"))


@pytest.fixture
def failing_session():
    return FailingSession()


@pytest_asyncio.fixture
async def client(session_factory, seed_source):
    """HTTP client calling the app in-process, wired to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def override_internal_client():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as internal:
            yield internal

    async def override_seed_client():
        transport = httpx.MockTransport(seed_source.handler)
        async with httpx.AsyncClient(transport=transport) as seed_client:
            yield seed_client

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_internal_client] = override_internal_client
    app.dependency_overrides[get_seed_client] = override_seed_client

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as http_client:
        yield http_client

    app.dependency_overrides.clear()


@pytest.fixture
def api_url():
    """Build a URL under the configured API prefix."""
    return lambda path: f"{settings.API_PREFIX}{path}"
