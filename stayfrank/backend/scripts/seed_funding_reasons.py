# scripts/seed_funding_reasons.py
from __future__ import annotations

import argparse
import asyncio
import json

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import async_session, engine
from app.models import Base, Integration, IntegrationType
from app.service_layer.funding_reasons import seed_default_reasons


async def _ensure_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def _upsert_webhook(session: AsyncSession, name: str, url: str, enabled: bool) -> None:
    existing = (await session.execute(select(Integration).where(Integration.name == name))).scalars().first()
    cfg = {"url": url, "secret": None}

    if existing:
        existing.type = IntegrationType.webhook
        existing.enabled = enabled
        existing.config_json = json.dumps(cfg)
    else:
        session.add(Integration(name=name, type=IntegrationType.webhook, enabled=enabled, config_json=json.dumps(cfg)))
    await session.flush()


async def main() -> None:
    parser = argparse.ArgumentParser(description="Seed default funding reasons (idempotent).")
    parser.add_argument("--webhook-url", default=None, help="Also register a demo webhook sink (disabled unless --enable)")
    parser.add_argument("--enable", action="store_true")
    args = parser.parse_args()

    await _ensure_schema()

    async with async_session() as session:
        created = await seed_default_reasons(session)
        if args.webhook_url:
            await _upsert_webhook(session, name="demo_webhook", url=args.webhook_url, enabled=args.enable)
        await session.commit()

    print(f"Seeded funding reasons. created={created} webhook={args.webhook_url or '-'}")


if __name__ == "__main__":
    asyncio.run(main())
