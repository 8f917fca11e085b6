"""
Pytest configuration and fixtures.
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import httpx
import pytest
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from watchlist_service.core import ConfigService
from watchlist_service.models import Base, User
from watchlist_service.services import MarketDataService

TEST_DATABASE_URL = "sqlite+aiosqlite://"

QUOTES = {
    "AAPL": {"c": 123.4, "d": 3.01, "dp": 2.5, "h": 124.0, "l": 120.1, "o": 121.0, "pc": 120.39},
    "MSFT": {"c": 410.0, "d": -4.98, "dp": -1.2, "h": 415.2, "l": 409.3, "o": 414.0, "pc": 414.98},
    "TSLA": {"c": 250.0, "d": 0, "dp": 0, "h": 251.0, "l": 248.0, "o": 250.0, "pc": 250.0},
}
PROFILES = {
    "AAPL": {"name": "Apple Inc", "ticker": "AAPL", "marketCapitalization": 2500},
    "MSFT": {"name": "Microsoft Corp", "ticker": "MSFT", "marketCapitalization": 45},
    "TSLA": {"name": "Tesla Inc", "ticker": "TSLA", "marketCapitalization": 0.5},
}
METRICS = {
    "AAPL": {"symbol": "AAPL", "metric": {"peExclExtraTTM": 28.456, "peNormalizedAnnual": 30.1}},
    "MSFT": {"symbol": "MSFT", "metric": {"peNormalizedAnnual": 35.0}},
    "TSLA": {"symbol": "TSLA", "metric": {}},
}


def finnhub_handler(failing_symbols=()):
    """Build a MockTransport handler that serves the canned Finnhub payloads."""

    def handler(request: httpx.Request) -> httpx.Response:
        symbol = request.url.params.get("symbol")
        if symbol in failing_symbols:
            return httpx.Response(500, json={"error": "upstream failure"})
        if request.url.path.endswith("/quote"):
            return httpx.Response(200, json=QUOTES.get(symbol, {"c": 0, "d": None, "dp": None}))
        if request.url.path.endswith("/stock/profile2"):
            return httpx.Response(200, json=PROFILES.get(symbol, {}))
        if request.url.path.endswith("/stock/metric"):
            return httpx.Response(200, json=METRICS.get(symbol, {"metric": {}}))
        return httpx.Response(404, json={"error": "unknown endpoint"})

    return handler


def make_market_data(handler=None, api_key="test-token") -> MarketDataService:
    environ = {"FINNHUB_BASE_URL": "https://finnhub.test/api/v1"}
    if api_key:
        environ["FINNHUB_API_KEY"] = api_key
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler or finnhub_handler()))
    return MarketDataService(ConfigService(environ=environ), client=client)


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def sample_user(db_session):
    """A user whose auth provider issued a semantic id."""
    user = User(email="trader@example.com", external_id="usr_abc123", username="trader")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers():
    def _headers(email: str) -> dict:
        token = jwt.encode({"sub": email}, os.environ["SECRET_KEY"], algorithm="HS256")
        return {"Authorization": f"Bearer {token}"}

    return _headers
