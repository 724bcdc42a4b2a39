# app/service_layer/funding_reasons.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..adapters.repos.funding_reasons import FundingReasonRepository
from ..models import FundingReason
from ..schemas import FundingReasonCreate, FundingReasonOut, FundingReasonUpdate

log = logging.getLogger(__name__)

# Served when the table can't be read.
DEFAULT_FUNDING_REASONS: list[FundingReasonOut] = [
    FundingReasonOut(value="paying_off_debt", label="Paying Off Debt", display_order=1),
    FundingReasonOut(value="health_issues", label="Health Issues", display_order=2),
    FundingReasonOut(value="unemployed", label="Unemployed", display_order=3),
    FundingReasonOut(value="life_events", label="Life Events", display_order=4),
    FundingReasonOut(value="other", label="Other", display_order=5),
]


@dataclass
class FundingReasonsCache:
    """
    TTL cache for the active funding reasons. One instance per app; the
    clock is injectable for tests.
    """
    ttl_s: float = 300.0
    clock: Callable[[], float] = time.monotonic
    _items: list[FundingReasonOut] | None = field(default=None, init=False)
    _stored_at: float = field(default=0.0, init=False)

    def get(self) -> list[FundingReasonOut] | None:
        if self._items is None:
            return None
        if (self.clock() - self._stored_at) >= self.ttl_s:
            self._items = None
            return None
        return list(self._items)

    def put(self, items: list[FundingReasonOut]) -> None:
        self._items = list(items)
        self._stored_at = self.clock()

    def invalidate(self) -> None:
        self._items = None


def _out(row: FundingReason) -> FundingReasonOut:
    return FundingReasonOut(
        id=row.id,
        value=row.value,
        label=row.label,
        display_order=row.display_order,
        is_active=row.is_active,
    )


async def list_active_reasons(session: AsyncSession, cache: FundingReasonsCache) -> list[FundingReasonOut]:
    cached = cache.get()
    if cached is not None:
        return cached

    try:
        rows = await FundingReasonRepository(session).list_active()
    except SQLAlchemyError as e:
        # don't cache the fallback, so the next call retries the table
        log.warning("funding reasons unavailable, serving defaults: %s", e)
        return list(DEFAULT_FUNDING_REASONS)

    # an empty list is a valid answer: the admin deactivated everything
    items = [_out(r) for r in rows]
    cache.put(items)
    return items


async def list_all_reasons(session: AsyncSession) -> list[FundingReasonOut]:
    """Admin view: inactive reasons included, never cached."""
    return [_out(r) for r in await FundingReasonRepository(session).list_all()]


async def create_reason(
    session: AsyncSession,
    body: FundingReasonCreate,
    cache: FundingReasonsCache,
) -> FundingReasonOut:
    """Does NOT commit. Raises ValueError on a duplicate value."""
    repo = FundingReasonRepository(session)
    if await repo.get_by_value(body.value):
        raise ValueError(f"Funding reason '{body.value}' already exists")

    row = await repo.add(
        FundingReason(
            value=body.value,
            label=body.label,
            display_order=body.display_order,
            is_active=body.is_active,
        )
    )
    cache.invalidate()
    return _out(row)


async def update_reason(
    session: AsyncSession,
    reason_id: int,
    body: FundingReasonUpdate,
    cache: FundingReasonsCache,
) -> FundingReasonOut:
    """Does NOT commit. Raises ValueError when the reason does not exist."""
    row = await FundingReasonRepository(session).get(reason_id)
    if not row:
        raise ValueError(f"Funding reason {reason_id} not found")

    if body.label is not None:
        row.label = body.label
    if body.display_order is not None:
        row.display_order = body.display_order
    if body.is_active is not None:
        row.is_active = body.is_active
    row.updated_at = datetime.utcnow()

    await session.flush()
    cache.invalidate()
    return _out(row)


async def seed_default_reasons(session: AsyncSession) -> int:
    """Idempotent: inserts any default reason whose value is missing."""
    repo = FundingReasonRepository(session)
    created = 0
    for d in DEFAULT_FUNDING_REASONS:
        if await repo.get_by_value(d.value):
            continue
        await repo.add(FundingReason(value=d.value, label=d.label, display_order=d.display_order, is_active=True))
        created += 1
    return created


async def delete_reason(session: AsyncSession, reason_id: int, cache: FundingReasonsCache) -> None:
    """Does NOT commit. Raises ValueError when the reason does not exist."""
    repo = FundingReasonRepository(session)
    row = await repo.get(reason_id)
    if not row:
        raise ValueError(f"Funding reason {reason_id} not found")
    await repo.delete(row)
    cache.invalidate()
