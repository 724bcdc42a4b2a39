# app/jobs/scheduler.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from sqlalchemy import func, or_, select

from ..config import settings
from ..db import async_session
from ..models import Integration, OutboxEvent, OutboxStatus
from .dispatch import dispatch_outbox_once

log = logging.getLogger(__name__)


async def _run_dispatch_quiet() -> None:
    """
    Quiet-by-default posture:
    - If there are no enabled integrations, do nothing.
    - If there are no due outbox events, do nothing.
    """
    async with async_session() as session:
        enabled_sinks = (
            await session.execute(select(func.count()).select_from(Integration).where(Integration.enabled == True))  # noqa: E712
        ).scalar_one()
        if int(enabled_sinks) == 0:
            return

        due = (
            await session.execute(
                select(func.count())
                .select_from(OutboxEvent)
                .where(OutboxEvent.status == OutboxStatus.pending)
                .where(or_(OutboxEvent.next_attempt_at.is_(None), OutboxEvent.next_attempt_at <= datetime.utcnow()))
            )
        ).scalar_one()
        if int(due) == 0:
            return

    # do actual dispatch outside the count transaction
    async with async_session() as session:
        try:
            res = await dispatch_outbox_once(session, job_name="dispatch_scheduled")
            log.info("scheduled dispatch: %s", res)
        finally:
            await session.commit()


def build_scheduler() -> AsyncIOScheduler:
    sched = AsyncIOScheduler()
    sched.add_job(
        lambda: asyncio.create_task(_run_dispatch_quiet()),
        "interval",
        minutes=settings.SCHED_DISPATCH_INTERVAL_MINUTES,
    )
    return sched
