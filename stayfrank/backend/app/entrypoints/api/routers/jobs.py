# app/entrypoints/api/routers/jobs.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_session, require_api_key
from ....jobs.dispatch import dispatch_outbox_once
from ....schemas import DispatchResult

router = APIRouter(tags=["jobs"])


@router.post("/jobs/dispatch", response_model=DispatchResult, dependencies=[Depends(require_api_key)])
async def dispatch_outbox(
    batch_size: int = Query(50, ge=1, le=500),
    session: AsyncSession = Depends(get_session),
) -> DispatchResult:
    try:
        result = await dispatch_outbox_once(session, job_name="dispatch_api", batch_size=batch_size)
    finally:
        # the job run row is kept on failure too
        await session.commit()
    return DispatchResult(**result)
