# app/domain/sale_leaseback.py
from __future__ import annotations

from .formatting import format_currency, format_percentage
from .types import EligibilityVerdict, OwnershipType, Product, PropertyAttributes, PropertyType

SL_ELIGIBLE_STATES: tuple[str, ...] = (
    "AZ", "NV", "CA", "CO", "TX", "GA", "FL", "TN", "OH", "IN", "NC",
)
SL_ELIGIBLE_PROPERTY_TYPES: frozenset[PropertyType] = frozenset({PropertyType.single_family})
SL_INELIGIBLE_OWNERSHIP_TYPES: frozenset[OwnershipType] = frozenset(
    {OwnershipType.llc, OwnershipType.corporation, OwnershipType.partnership}
)

SL_MIN_HOME_VALUE = 200000.0
SL_MAX_HOME_VALUE = 1500000.0
SL_MAX_LTV = 65.0
SL_CASH_PERCENTAGE = 0.70


def sale_leaseback_cash(home_value: float, mortgage_balance: float) -> float:
    """(70% of value) - mortgage, floored at zero."""
    return max(0.0, home_value * SL_CASH_PERCENTAGE - mortgage_balance)


def evaluate_sale_leaseback(attrs: PropertyAttributes, *, check_ownership: bool = False) -> EligibilityVerdict:
    """
    Every rule is checked; each failure adds its own reason, in rule order.
    Ownership only counts when check_ownership is set.
    """
    reasons: list[str] = []
    ltv = attrs.ltv

    if attrs.state not in SL_ELIGIBLE_STATES:
        reasons.append(
            f"State not eligible. Sale-Leaseback is available in: {', '.join(SL_ELIGIBLE_STATES)}"
        )

    if attrs.property_type not in SL_ELIGIBLE_PROPERTY_TYPES:
        reasons.append("Only Single Family homes are eligible for Sale-Leaseback")

    if check_ownership and attrs.ownership_type in SL_INELIGIBLE_OWNERSHIP_TYPES:
        reasons.append(
            f"Properties owned by {attrs.ownership_type.value} are not eligible for Sale-Leaseback"
        )

    if attrs.home_value < SL_MIN_HOME_VALUE:
        reasons.append(f"Property value must be at least {format_currency(SL_MIN_HOME_VALUE)}")
    if attrs.home_value > SL_MAX_HOME_VALUE:
        reasons.append(f"Property value cannot exceed {format_currency(SL_MAX_HOME_VALUE)}")

    if ltv > SL_MAX_LTV:
        reasons.append(f"LTV must be 65% or less. Current LTV is {format_percentage(ltv)}")

    return EligibilityVerdict.from_reasons(
        Product.sale_leaseback,
        reasons=reasons,
        computed_amount=sale_leaseback_cash(attrs.home_value, attrs.mortgage_balance),
        ltv=ltv,
    )
