"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "false"
os.environ.pop("PUBLIC_BASE_URL", None)

from lendlink.api.app import create_app
from lendlink.config import Settings
from lendlink.ledger.database import Database
from lendlink.ledger.store import TransactionStore
from lendlink.protocol.aave_v3 import TOKENS

# Lowercase addresses pass is_address regardless of checksum casing
USDC = TOKENS["USDC"].address.lower()
WETH = TOKENS["WETH"].address.lower()
WBTC = TOKENS["WBTC"].address.lower()
EURS = TOKENS["EURS"].address.lower()
DAI = TOKENS["DAI"].address.lower()

TX_HASH = "0x" + "ab" * 32
APPROVAL_HASH = "0x" + "cd" * 32


class FakeClock:
    """Settable UTC clock for expiry tests."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        database_url="sqlite+aiosqlite:///:memory:",
        debug=False,
    )


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """In-memory database with tables created."""
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def store(database: Database, clock: FakeClock) -> TransactionStore:
    return TransactionStore(database, ttl_seconds=900, clock=clock)


@pytest_asyncio.fixture
async def test_app(settings: Settings, database: Database, store: TransactionStore):
    """App wired to the test database and clock.

    ASGITransport does not run the lifespan, so tables come from the
    database fixture.
    """
    app = create_app(settings, database)
    app.state.store = store
    return app


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
