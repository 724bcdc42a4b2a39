# app/entrypoints/api/deps.py
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Header, HTTPException, Request

from ...adapters.clients.attom import AttomClient
from ...adapters.clients.equity_advance import EquityAdvanceClient
from ...config import settings
from ...db import get_session  # noqa: F401  re-exported for routers
from ...service_layer.evaluation import PropertyDataProvider
from ...service_layer.funding_reasons import FundingReasonsCache
from ...service_layer.submissions import PartnerDealClient


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    if settings.API_KEY:
        if not x_api_key or x_api_key != settings.API_KEY:
            raise HTTPException(status_code=401, detail="Invalid API key")


@dataclass(frozen=True)
class PartnerContext:
    partner_id: str
    status: str


def require_active_partner(
    x_partner_id: str | None = Header(default=None, alias="X-Partner-Id"),
    x_partner_status: str | None = Header(default=None, alias="X-Partner-Status"),
) -> PartnerContext:
    """
    Sign-in happens upstream; the gateway forwards who the partner is and
    whether their application has been approved.
    """
    if not x_partner_id or not x_partner_id.strip():
        raise HTTPException(status_code=401, detail="Partner identity required")

    status = (x_partner_status or "pending").strip().lower()
    if status != "active":
        raise HTTPException(status_code=403, detail=f"Partner account is {status}")

    return PartnerContext(partner_id=x_partner_id.strip(), status=status)


def get_property_provider() -> PropertyDataProvider:
    return AttomClient()


def get_partner_client() -> PartnerDealClient:
    return EquityAdvanceClient()


def get_funding_cache(request: Request) -> FundingReasonsCache:
    return request.app.state.funding_reasons_cache
