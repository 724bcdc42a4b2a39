# tests/conftest.py
from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.adapters.clients.attom import PropertyLookupError
from app.adapters.clients.equity_advance import PartnerDeal
from app.adapters.clients.http_resilience import reset_circuits
from app.config import settings
from app.domain.types import PropertyRecord
from app.models import Base


@pytest.fixture(autouse=True)
def _fast_http(monkeypatch):
    # no pacing or backoff sleeps in tests
    monkeypatch.setattr(settings, "HTTP_RATE_LIMIT_RPS", 0.0)
    monkeypatch.setattr(settings, "HTTP_BACKOFF_BASE_S", 0.0)
    monkeypatch.setattr(settings, "OUTBOX_WEBHOOK_RPS", 0.0)
    monkeypatch.setattr(settings, "SL_CHECK_OWNERSHIP", False)
    monkeypatch.setattr(settings, "API_KEY", None)
    reset_circuits()
    yield
    reset_circuits()


@pytest.fixture
async def engine():
    """
    Fresh in-memory DB per test. StaticPool makes all connections share the same
    in-memory database for the lifetime of this engine fixture.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def async_session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=True)


class FakeProvider:
    def __init__(self, record: PropertyRecord | None = None, error: str | None = None) -> None:
        self.record = record
        self.error = error
        self.calls: list[str] = []

    async def lookup(self, address: str) -> PropertyRecord:
        self.calls.append(address)
        if self.error:
            raise PropertyLookupError(self.error)
        assert self.record is not None
        return self.record


class FakePartnerClient:
    def __init__(self, deal: PartnerDeal | None = None, exc: Exception | None = None) -> None:
        self.deal = deal or PartnerDeal(deal_id="deal-123", tracking_link="https://track.example/deal-123")
        self.exc = exc
        self.deals: list[dict[str, Any]] = []

    async def create_deal(self, deal: dict[str, Any]) -> PartnerDeal:
        self.deals.append(deal)
        if self.exc:
            raise self.exc
        return self.deal


@pytest.fixture
def partner_client():
    return FakePartnerClient()


@pytest.fixture
def property_provider():
    return FakeProvider(
        record=PropertyRecord(
            owner_names="JOHN SMITH, JANE SMITH",
            state="tx",
            raw_property_type="SFR",
            estimated_value=400000.0,
            estimated_mortgage_balance=100000.0,
        )
    )


@pytest.fixture
def app(async_session_maker, property_provider, partner_client):
    from app.db import get_session
    from app.entrypoints.api.deps import get_partner_client, get_property_provider
    from app.entrypoints.fastapi_app import create_app

    application = create_app()

    async def _session_override():
        async with async_session_maker() as session:
            yield session

    application.dependency_overrides[get_session] = _session_override
    application.dependency_overrides[get_property_provider] = lambda: property_provider
    application.dependency_overrides[get_partner_client] = lambda: partner_client
    return application


@pytest.fixture
async def client(app):
    import httpx

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
