# app/adapters/clients/attom.py
from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...config import settings
from ...domain.types import PropertyRecord
from .http_resilience import resilient_request

log = logging.getLogger(__name__)


class PropertyLookupError(RuntimeError):
    """The property data provider could not produce a record for the address."""


# --- ATTOM "expanded profile" response, only the parts we read ---

class _AttomModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class _Address(_AttomModel):
    country_subd: str | None = Field(default=None, alias="countrySubd")


class _Summary(_AttomModel):
    property_type: str | None = Field(default=None, alias="propertyType")


class _AvmAmount(_AttomModel):
    value: float | None = None


class _Avm(_AttomModel):
    amount: _AvmAmount | None = None
    avm_value: float | None = Field(default=None, alias="avmValue")


class _OwnerName(_AttomModel):
    full_name: str | None = Field(default=None, alias="fullName")
    last_name_and_suffix: str | None = Field(default=None, alias="lastNameAndSuffix")

    def display(self) -> str:
        return (self.full_name or self.last_name_and_suffix or "").strip()


class _Owner(_AttomModel):
    owner1: _OwnerName | None = None
    owner2: _OwnerName | None = None


class _Market(_AttomModel):
    mkt_total_value: float | None = Field(default=None, alias="mktTotalValue")


class _Assessed(_AttomModel):
    assd_total_value: float | None = Field(default=None, alias="assdTotalValue")
    assd_impr_value: float | None = Field(default=None, alias="assdImprValue")
    assd_land_value: float | None = Field(default=None, alias="assdLandValue")


class _LoanAmount(_AttomModel):
    amount: float | None = None


class _AssessmentMortgage(_AttomModel):
    first_concurrent: _LoanAmount | None = Field(default=None, alias="FirstConcurrent")
    amount: float | None = None


class _Assessment(_AttomModel):
    owner: _Owner | None = None
    market: _Market | None = None
    assessed: _Assessed | None = None
    mortgage: _AssessmentMortgage | None = None


class _SaleTransaction(_AttomModel):
    sales_price: float | None = Field(default=None, alias="salesPrice")


class _SaleAmount(_AttomModel):
    saleamt: float | None = None


class _Sale(_AttomModel):
    sale_transaction_date: _SaleTransaction | None = Field(default=None, alias="saleTransactionDate")
    amount: _SaleAmount | None = None


class AttomProperty(_AttomModel):
    address: _Address | None = None
    summary: _Summary | None = None
    avm: _Avm | None = None
    assessment: _Assessment | None = None
    sale: _Sale | None = None
    mortgage: _LoanAmount | None = None

    def owner_names(self) -> str:
        owner = self.assessment.owner if self.assessment else None
        if owner is None:
            return "Unknown Owner"
        names = [o.display() for o in (owner.owner1, owner.owner2) if o is not None]
        return ", ".join(n for n in names if n) or "Unknown Owner"

    def estimated_value(self) -> float:
        """First positive figure, most trusted source first."""
        avm = self.avm
        assessment = self.assessment
        assessed = assessment.assessed if assessment else None
        sale = self.sale

        candidates = [
            avm.amount.value if avm and avm.amount else None,
            avm.avm_value if avm else None,
            assessment.market.mkt_total_value if assessment and assessment.market else None,
            assessed.assd_total_value if assessed else None,
            sale.sale_transaction_date.sales_price if sale and sale.sale_transaction_date else None,
            sale.amount.saleamt if sale and sale.amount else None,
        ]
        for c in candidates:
            if c:
                return float(round(c))

        if assessed:
            return float(round((assessed.assd_impr_value or 0.0) + (assessed.assd_land_value or 0.0)))
        return 0.0

    def estimated_mortgage_balance(self) -> float:
        m = self.assessment.mortgage if self.assessment else None
        if m and m.first_concurrent and m.first_concurrent.amount:
            return float(round(m.first_concurrent.amount))
        if m and m.amount:
            return float(round(m.amount))
        if self.mortgage and self.mortgage.amount:
            return float(round(self.mortgage.amount))
        return 0.0

    def to_record(self) -> PropertyRecord:
        return PropertyRecord(
            owner_names=self.owner_names(),
            state=(self.address.country_subd if self.address else None) or "",
            raw_property_type=(self.summary.property_type if self.summary else None) or "Single Family",
            estimated_value=self.estimated_value(),
            estimated_mortgage_balance=self.estimated_mortgage_balance(),
        )


class AttomExpandedProfile(_AttomModel):
    property: list[AttomProperty] = []


def parse_expanded_profile(payload: Any) -> PropertyRecord:
    """
    Decode a raw ATTOM payload into a PropertyRecord.
    Raises PropertyLookupError when the payload is malformed or holds no property.
    """
    try:
        profile = AttomExpandedProfile.model_validate(payload)
    except ValidationError as e:
        raise PropertyLookupError(f"attom_payload_invalid: {e.error_count()} errors") from e

    if not profile.property:
        raise PropertyLookupError("property_not_found")
    return profile.property[0].to_record()


class AttomClient:
    """Address -> PropertyRecord via the ATTOM property API."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.ATTOM_API_KEY
        self.base_url = (base_url or settings.ATTOM_BASE_URL).rstrip("/")
        self._transport = transport

    async def lookup(self, address: str) -> PropertyRecord:
        if not address or not address.strip():
            raise PropertyLookupError("address_required")
        if not self.api_key:
            raise PropertyLookupError("attom_not_configured")

        url = f"{self.base_url}/property/expandedprofile"
        headers = {"accept": "application/json", "apikey": self.api_key}

        try:
            resp = await resilient_request(
                "GET",
                url,
                headers=headers,
                params={"address": address.strip()},
                passthrough_statuses=(404,),
                transport=self._transport,
            )
        except httpx.HTTPError as e:
            log.warning("attom lookup failed for %r: %s", address, e)
            raise PropertyLookupError(f"attom_http_error: {type(e).__name__}") from e

        if resp.status_code == 404:
            raise PropertyLookupError("property_not_found")

        try:
            payload = resp.json()
        except ValueError as e:
            raise PropertyLookupError("attom_payload_not_json") from e

        record = parse_expanded_profile(payload)
        log.info(
            "attom lookup ok state=%s type=%s value=%s",
            record.state,
            record.raw_property_type,
            record.estimated_value,
        )
        return record
