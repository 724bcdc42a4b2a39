# app/entrypoints/fastapi_app.py
from __future__ import annotations

from fastapi import FastAPI

from ..config import settings
from ..db import engine
from ..models import Base
from ..service_layer.funding_reasons import FundingReasonsCache
from .api.routers import eligibility, funding_reasons, health, integrations, jobs, properties, submissions


def create_app() -> FastAPI:
    app = FastAPI(title="StayFrank - Partner Lead Intake")
    app.state.funding_reasons_cache = FundingReasonsCache(ttl_s=settings.FUNDING_REASONS_CACHE_TTL_S)

    @app.on_event("startup")
    async def _startup() -> None:
        # Single place where DB tables are created in dev.
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    app.include_router(health.router)
    app.include_router(properties.router)
    app.include_router(eligibility.router)
    app.include_router(submissions.router)
    app.include_router(funding_reasons.router)
    app.include_router(integrations.router)
    app.include_router(jobs.router)

    return app
