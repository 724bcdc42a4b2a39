# app/domain/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PropertyType(str, Enum):
    single_family = "Single Family"
    condo = "Condo"
    townhouse = "Townhouse"
    multi_family = "Multi-Family"
    manufactured = "Manufactured"
    apartment = "Apartment"
    land = "Land"


class OwnershipType(str, Enum):
    personal = "Personal"
    llc = "LLC"
    corporation = "Corporation"
    trust = "Trust"
    partnership = "Partnership"


class Product(str, Enum):
    sale_leaseback = "sale_leaseback"
    hei = "hei"


def loan_to_value(home_value: float, mortgage_balance: float) -> float:
    """LTV/CLTV as a percentage. 0 when home_value is not positive."""
    if home_value <= 0:
        return 0.0
    return (mortgage_balance / home_value) * 100.0


@dataclass(frozen=True)
class PropertyAttributes:
    home_value: float
    mortgage_balance: float
    state: str
    property_type: PropertyType = PropertyType.single_family
    ownership_type: OwnershipType = OwnershipType.personal

    def __post_init__(self) -> None:
        object.__setattr__(self, "state", (self.state or "").strip().upper())

    @property
    def ltv(self) -> float:
        return loan_to_value(self.home_value, self.mortgage_balance)


@dataclass(frozen=True)
class EligibilityVerdict:
    product: Product
    is_eligible: bool
    offer_amount: float
    reasons: tuple[str, ...]
    ltv: float

    @classmethod
    def from_reasons(
        cls,
        product: Product,
        *,
        reasons: list[str],
        computed_amount: float,
        ltv: float,
    ) -> "EligibilityVerdict":
        """
        Eligible iff no reasons. An ineligible verdict never carries an amount.
        """
        eligible = not reasons
        return cls(
            product=product,
            is_eligible=eligible,
            offer_amount=max(0.0, computed_amount) if eligible else 0.0,
            reasons=tuple(reasons),
            ltv=ltv,
        )


@dataclass(frozen=True)
class DualProductDecision:
    sl: EligibilityVerdict
    hei: EligibilityVerdict
    either_eligible: bool
    best_offer_amount: float
    combined_reasons: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PropertyRecord:
    """What a property data provider hands back for an address (unvalidated values)."""
    owner_names: str | None
    state: str | None
    raw_property_type: str | None
    estimated_value: float | None
    estimated_mortgage_balance: float | None


@dataclass(frozen=True)
class HeaCostProjection:
    payoff: float
    apr: float
    is_capped: bool
    total_cost: float
    raw_unlock_share: float
    maximum_unlock_share: float
    ending_home_value: float
