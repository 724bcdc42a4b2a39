# app/adapters/clients/equity_advance.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from ...config import settings
from .http_resilience import resilient_request


@dataclass(frozen=True)
class PartnerDeal:
    deal_id: str
    tracking_link: str | None


class EquityAdvanceClient:
    """Creates the downstream partner deal for a stored submission."""

    def __init__(
        self,
        *,
        api_url: str | None = None,
        partner_key: str | None = None,
        source: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_url = api_url if api_url is not None else settings.EQUITYADVANCE_API_URL
        self.partner_key = partner_key if partner_key is not None else settings.EQUITYADVANCE_PARTNER_KEY
        self.source = source or settings.EQUITYADVANCE_SOURCE
        self._transport = transport

    def build_payload(self, deal: dict[str, Any]) -> dict[str, Any]:
        # HEI max investment is what the partner stores as max_investment
        return {
            "property_address": deal["property_address"],
            "home_value": deal["home_value"],
            "mortgage_balance": deal["mortgage_balance"],
            "owner_names": deal.get("owner_names") or [],
            "max_investment": deal.get("hei_max_investment") or 0,
            "sl_eligible": deal["sl_eligible"],
            "sl_offer_amount": deal.get("sl_offer_amount"),
            "hei_eligible": deal["hei_eligible"],
            "source": self.source,
            "stayfrank_submission_id": deal["submission_id"],
        }

    async def create_deal(self, deal: dict[str, Any]) -> PartnerDeal:
        if not (self.api_url and self.partner_key):
            raise RuntimeError("equityadvance_not_configured")

        resp = await resilient_request(
            "POST",
            self.api_url,
            headers={"Content-Type": "application/json", "X-Partner-Key": self.partner_key},
            json=self.build_payload(deal),
            transport=self._transport,
        )
        data = resp.json()
        deal_id = data.get("deal_id") if isinstance(data, dict) else None
        if not deal_id:
            raise httpx.HTTPError(f"equityadvance_deal_id_missing: {str(data)[:200]}")
        return PartnerDeal(deal_id=str(deal_id), tracking_link=data.get("tracking_link"))
