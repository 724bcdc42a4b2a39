# tests/test_funding_reasons.py
import pytest
from sqlalchemy.exc import OperationalError

from app.schemas import FundingReasonCreate, FundingReasonUpdate
from app.service_layer import funding_reasons as fr
from app.service_layer.funding_reasons import (
    DEFAULT_FUNDING_REASONS,
    FundingReasonsCache,
    create_reason,
    delete_reason,
    list_active_reasons,
    list_all_reasons,
    seed_default_reasons,
    update_reason,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_cache_expires_after_ttl():
    clock = FakeClock()
    cache = FundingReasonsCache(ttl_s=300.0, clock=clock)
    assert cache.get() is None

    cache.put(DEFAULT_FUNDING_REASONS[:2])
    clock.now += 299
    assert [r.value for r in cache.get()] == ["paying_off_debt", "health_issues"]

    clock.now += 1
    assert cache.get() is None


def test_cache_invalidate():
    cache = FundingReasonsCache(clock=FakeClock())
    cache.put(DEFAULT_FUNDING_REASONS)
    cache.invalidate()
    assert cache.get() is None


async def test_empty_table_is_an_empty_list(async_session_maker):
    async with async_session_maker() as session:
        assert await list_active_reasons(session, FundingReasonsCache()) == []


async def test_deactivating_everything_hides_every_reason(async_session_maker):
    cache = FundingReasonsCache(clock=FakeClock())
    async with async_session_maker() as session:
        created = await create_reason(session, FundingReasonCreate(value="tuition", label="Tuition"), cache)
        await session.commit()
        await update_reason(session, created.id, FundingReasonUpdate(is_active=False), cache)
        await session.commit()

        # no defaults sneak back in when the admin turned everything off
        assert await list_active_reasons(session, cache) == []

        everything = await list_all_reasons(session)
        assert [(r.value, r.is_active) for r in everything] == [("tuition", False)]


async def test_seed_is_idempotent(async_session_maker):
    async with async_session_maker() as session:
        assert await seed_default_reasons(session) == 5
        assert await seed_default_reasons(session) == 0
        await session.commit()

    async with async_session_maker() as session:
        items = await list_active_reasons(session, FundingReasonsCache())
    assert len(items) == 5
    assert all(r.id is not None for r in items)


async def test_create_and_update_invalidate_cache(async_session_maker):
    cache = FundingReasonsCache(clock=FakeClock())

    async with async_session_maker() as session:
        await seed_default_reasons(session)
        await session.commit()
        first = await list_active_reasons(session, cache)
        assert len(first) == 5

        created = await create_reason(session, FundingReasonCreate(value="home_repairs", label="Home Repairs", display_order=0), cache)
        await session.commit()
        items = await list_active_reasons(session, cache)
        assert items[0].value == "home_repairs"

        await update_reason(session, created.id, FundingReasonUpdate(is_active=False), cache)
        await session.commit()
        items = await list_active_reasons(session, cache)
        assert "home_repairs" not in [r.value for r in items]


async def test_duplicate_and_missing(async_session_maker):
    cache = FundingReasonsCache()
    async with async_session_maker() as session:
        await create_reason(session, FundingReasonCreate(value="other", label="Other"), cache)
        with pytest.raises(ValueError, match="already exists"):
            await create_reason(session, FundingReasonCreate(value="other", label="Other again"), cache)
        with pytest.raises(ValueError, match="not found"):
            await update_reason(session, 9999, FundingReasonUpdate(label="x"), cache)


async def test_database_error_falls_back_to_defaults(async_session_maker, monkeypatch):
    async def _boom(self):
        raise OperationalError("SELECT", {}, Exception("no such table"))

    monkeypatch.setattr(fr.FundingReasonRepository, "list_active", _boom)
    cache = FundingReasonsCache()

    async with async_session_maker() as session:
        items = await list_active_reasons(session, cache)

    assert [r.value for r in items] == [r.value for r in DEFAULT_FUNDING_REASONS]
    # the fallback is not cached
    assert cache.get() is None


async def test_delete_removes_reason_and_invalidates_cache(async_session_maker):
    cache = FundingReasonsCache(clock=FakeClock())

    async with async_session_maker() as session:
        await seed_default_reasons(session)
        await session.commit()
        assert len(await list_active_reasons(session, cache)) == 5

        other = next(r for r in await list_all_reasons(session) if r.value == "other")
        await delete_reason(session, other.id, cache)
        await session.commit()
        assert cache.get() is None

        items = await list_active_reasons(session, cache)
        assert "other" not in [r.value for r in items]
        assert "other" not in [r.value for r in await list_all_reasons(session)]

        with pytest.raises(ValueError, match="not found"):
            await delete_reason(session, other.id, cache)
