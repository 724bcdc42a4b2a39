# app/adapters/repos/funding_reasons.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import FundingReason


class FundingReasonRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_active(self) -> list[FundingReason]:
        q = (
            select(FundingReason)
            .where(FundingReason.is_active == True)  # noqa: E712
            .order_by(FundingReason.display_order.asc(), FundingReason.id.asc())
        )
        return list((await self.session.execute(q)).scalars().all())

    async def list_all(self) -> list[FundingReason]:
        q = select(FundingReason).order_by(FundingReason.display_order.asc(), FundingReason.id.asc())
        return list((await self.session.execute(q)).scalars().all())

    async def get(self, reason_id: int) -> FundingReason | None:
        return (await self.session.execute(select(FundingReason).where(FundingReason.id == reason_id))).scalars().first()

    async def get_by_value(self, value: str) -> FundingReason | None:
        return (await self.session.execute(select(FundingReason).where(FundingReason.value == value))).scalars().first()

    async def add(self, reason: FundingReason) -> FundingReason:
        self.session.add(reason)
        await self.session.flush()
        return reason

    async def delete(self, reason: FundingReason) -> None:
        await self.session.delete(reason)
        await self.session.flush()
