from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal

from .domain.types import OwnershipType, Product


# ----- Property lookup -----

class PropertyLookupIn(BaseModel):
    address: str = Field(..., min_length=3, max_length=255)


class PropertyAttributesOut(BaseModel):
    home_value: float
    mortgage_balance: float
    state: str
    property_type: str
    ownership_type: str
    ltv: float


class PropertyLookupOut(BaseModel):
    address: str
    owner_names: str
    lookup_ok: bool
    lookup_error: str | None = None
    raw_property_type: str | None = None
    defaults_applied: list[str] = []
    attributes: PropertyAttributesOut


# ----- Eligibility -----

class EligibilityIn(BaseModel):
    home_value: float
    mortgage_balance: float = Field(0.0, ge=0)
    state: str = Field("", max_length=2)
    # free text is fine here, it is classified server-side
    property_type: str = "Single Family"
    ownership_type: OwnershipType | None = None
    owner_names: str | None = None


class VerdictOut(BaseModel):
    product: Product
    is_eligible: bool
    offer_amount: float
    reasons: list[str]
    ltv: float


class DualDecisionOut(BaseModel):
    property_type: str
    ownership_type: str
    sale_leaseback: VerdictOut
    hei: VerdictOut
    either_eligible: bool
    best_offer_amount: float
    combined_reasons: list[str]


class HeaCostIn(BaseModel):
    investment: float = Field(..., gt=0)
    starting_value: float = Field(..., gt=0)
    term_years: float = Field(10, gt=0, le=30)
    hpa_rate: float = Field(0.03, gt=-1, le=1, description="Annual appreciation as a fraction")
    multiplier: float = Field(2.0, gt=0)


class HeaCostOut(BaseModel):
    payoff: float
    apr: float
    is_capped: bool
    total_cost: float
    raw_unlock_share: float
    maximum_unlock_share: float
    ending_home_value: float


# ----- Submissions -----

class SubmissionCreate(BaseModel):
    property_address: str = Field(..., min_length=3, max_length=255)
    home_value: float
    mortgage_balance: float = Field(0.0, ge=0)
    state: str = Field(..., max_length=2)
    property_type: str = "Single Family"
    ownership_type: OwnershipType | None = None
    owner_names: list[str] = []

    owner_emails: list[str] = []
    owner_phones: list[str] = []
    owner_credit_scores: list[str] = []
    mortgage_current: bool | None = None
    money_reasons: list[str] = []
    helpful_context: str | None = None
    money_amount: str | None = None


class SubmissionOut(BaseModel):
    id: int
    partner_id: str
    property_address: str
    home_value: float
    mortgage_balance: float
    owner_names: list[str]
    property_type: str
    ownership_type: str
    state: str

    sl_eligible: bool
    sl_offer_amount: float | None = None
    sl_reasons: list[str]
    hei_eligible: bool
    hei_max_investment: float | None = None
    hei_reasons: list[str]
    best_offer_amount: float

    partner_sync_status: str
    partner_deal_id: str | None = None
    tracking_link: str | None = None
    partner_sync_error: str | None = None

    created_at: datetime


# ----- Funding reasons -----

class FundingReasonOut(BaseModel):
    # None for the built-in defaults served when the table is unavailable
    id: int | None = None
    value: str
    label: str
    display_order: int
    is_active: bool = True


class FundingReasonCreate(BaseModel):
    value: str = Field(..., min_length=1, max_length=80)
    label: str = Field(..., min_length=1, max_length=120)
    display_order: int = 0
    is_active: bool = True


class FundingReasonUpdate(BaseModel):
    label: str | None = Field(None, min_length=1, max_length=120)
    display_order: int | None = None
    is_active: bool | None = None


# ----- Integrations / jobs -----

class IntegrationCreate(BaseModel):
    name: str
    type: Literal["webhook"] = "webhook"
    enabled: bool = True
    url: str
    secret: str | None = None


class IntegrationOut(BaseModel):
    id: int
    name: str
    type: str
    enabled: bool
    created_at: datetime


class DispatchResult(BaseModel):
    delivered: int
    failed: int
    sinks: int | None = None
    events: int | None = None
    skipped_no_sinks: int | None = None
