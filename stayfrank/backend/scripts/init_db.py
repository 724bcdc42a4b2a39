# scripts/init_db.py
from __future__ import annotations

import argparse
import asyncio
import logging

from app.config import settings
from app.db import async_session, engine
from app.models import Base
from app.service_layer.funding_reasons import seed_default_reasons

log = logging.getLogger("stayfrank.init_db")


async def main() -> None:
    parser = argparse.ArgumentParser(description="Create the lead-intake tables (idempotent).")
    parser.add_argument("--reset", action="store_true", help="Drop every table first (refused when ENV=prod)")
    parser.add_argument("--seed", action="store_true", help="Also insert the default funding reasons")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s:%(name)s:%(message)s")

    if args.reset and settings.ENV == "prod":
        raise SystemExit("refusing to drop tables with ENV=prod")

    async with engine.begin() as conn:
        if args.reset:
            await conn.run_sync(Base.metadata.drop_all)
            log.info("dropped all tables")
        await conn.run_sync(Base.metadata.create_all)
    log.info("schema ready on %s: %s", engine.url.render_as_string(hide_password=True), ", ".join(sorted(Base.metadata.tables)))

    if args.seed:
        async with async_session() as session:
            created = await seed_default_reasons(session)
            await session.commit()
        log.info("funding reasons seeded: created=%s", created)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
