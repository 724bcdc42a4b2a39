# app/jobs/dispatch.py
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..integrations.services.outbox import dispatch_pending_events
from ..service_layer.jobruns import finish_job_fail, finish_job_success, start_job

log = logging.getLogger(__name__)


async def run_dispatch(session: AsyncSession, batch_size: int | None = None) -> dict[str, Any]:
    return await dispatch_pending_events(session=session, batch_size=batch_size or settings.SCHED_DISPATCH_BATCH_SIZE)


async def dispatch_outbox_once(session: AsyncSession, job_name: str = "dispatch", batch_size: int | None = None) -> dict[str, Any]:
    """
    One recorded dispatch pass. The JobRun row is written either way;
    the exception is re-raised after it is recorded. Does NOT commit.
    """
    jr = await start_job(session, job_name, meta={"batch_size": batch_size})
    try:
        result = await run_dispatch(session, batch_size=batch_size)
    except Exception as e:
        log.exception("dispatch job %s failed", jr.id)
        await finish_job_fail(session, jr, e)
        raise
    await finish_job_success(session, jr, result)
    return result
