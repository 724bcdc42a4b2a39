# app/entrypoints/api/routers/funding_reasons.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_funding_cache, get_session, require_api_key
from ....schemas import FundingReasonCreate, FundingReasonOut, FundingReasonUpdate
from ....service_layer.funding_reasons import (
    FundingReasonsCache,
    create_reason,
    delete_reason,
    list_active_reasons,
    list_all_reasons,
    update_reason,
)

router = APIRouter(tags=["funding-reasons"])


@router.get("/funding-reasons", response_model=list[FundingReasonOut])
async def list_reasons(
    include_inactive: bool = Query(False),
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    session: AsyncSession = Depends(get_session),
    cache: FundingReasonsCache = Depends(get_funding_cache),
) -> list[FundingReasonOut]:
    # public dropdown by default; the full list is an admin view
    if include_inactive:
        require_api_key(x_api_key)
        return await list_all_reasons(session)
    return await list_active_reasons(session, cache)


@router.post("/funding-reasons", response_model=FundingReasonOut, status_code=201, dependencies=[Depends(require_api_key)])
async def add_reason(
    body: FundingReasonCreate,
    session: AsyncSession = Depends(get_session),
    cache: FundingReasonsCache = Depends(get_funding_cache),
) -> FundingReasonOut:
    try:
        out = await create_reason(session, body, cache)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    await session.commit()
    return out


@router.patch("/funding-reasons/{reason_id}", response_model=FundingReasonOut, dependencies=[Depends(require_api_key)])
async def patch_reason(
    reason_id: int,
    body: FundingReasonUpdate,
    session: AsyncSession = Depends(get_session),
    cache: FundingReasonsCache = Depends(get_funding_cache),
) -> FundingReasonOut:
    try:
        out = await update_reason(session, reason_id, body, cache)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await session.commit()
    return out


@router.delete("/funding-reasons/{reason_id}", status_code=204, dependencies=[Depends(require_api_key)])
async def remove_reason(
    reason_id: int,
    session: AsyncSession = Depends(get_session),
    cache: FundingReasonsCache = Depends(get_funding_cache),
) -> None:
    try:
        await delete_reason(session, reason_id, cache)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await session.commit()
