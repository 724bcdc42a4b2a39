# scripts/run_scheduler.py
from __future__ import annotations

import asyncio
import logging

from app.config import settings
from app.jobs.scheduler import build_scheduler

log = logging.getLogger("stayfrank.scheduler")


def _quiet_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s:%(name)s:%(message)s",
    )
    for noisy in ("httpx", "apscheduler", "uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


async def main() -> None:
    _quiet_logging()

    scheduler = build_scheduler()
    scheduler.start()
    log.info(
        "outbox dispatcher started env=%s every=%smin batch=%s",
        settings.ENV,
        settings.SCHED_DISPATCH_INTERVAL_MINUTES,
        settings.SCHED_DISPATCH_BATCH_SIZE,
    )

    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        scheduler.shutdown()
        log.info("outbox dispatcher stopped")


if __name__ == "__main__":
    asyncio.run(main())
