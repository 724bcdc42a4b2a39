# app/entrypoints/api/routers/health.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_session, require_api_key
from ....config import settings
from ....models import JobRun
from ....service_layer.jobruns import latest_job_runs

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


def _redact(v: str | None) -> str | None:
    if not v:
        return v
    if len(v) <= 8:
        return "***"
    return v[:4] + "***" + v[-4:]


@router.get("/debug/config", dependencies=[Depends(require_api_key)])
def debug_config() -> dict[str, Any]:
    """Reads the running server's settings; secrets are redacted."""
    return {
        "ENV": settings.ENV,
        "STAYFRANK_DB_URL": settings.STAYFRANK_DB_URL,
        "ATTOM_BASE_URL": settings.ATTOM_BASE_URL,
        "ATTOM_API_KEY": _redact(settings.ATTOM_API_KEY),
        "EQUITYADVANCE_API_URL": settings.EQUITYADVANCE_API_URL,
        "EQUITYADVANCE_PARTNER_KEY_SET": bool(settings.EQUITYADVANCE_PARTNER_KEY),
        "SL_CHECK_OWNERSHIP": settings.SL_CHECK_OWNERSHIP,
        "API_KEY_SET": bool(settings.API_KEY),
    }


@router.get("/debug/job_runs/latest", dependencies=[Depends(require_api_key)])
async def debug_job_runs_latest(
    limit: int = Query(default=5, ge=1, le=50),
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    def _row(r: JobRun) -> dict[str, Any]:
        return {
            "id": r.id,
            "job_name": r.job_name,
            "status": r.status.value,
            "started_at": str(r.started_at),
            "finished_at": str(r.finished_at) if r.finished_at else None,
            "error": (r.error or "")[:1200],
            "summary": r.summary_json,
        }

    return {"items": [_row(r) for r in await latest_job_runs(session, limit=limit)]}
