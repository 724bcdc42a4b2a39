# app/domain/hei.py
from __future__ import annotations

from .formatting import format_currency, format_percentage
from .types import (
    EligibilityVerdict,
    HeaCostProjection,
    OwnershipType,
    Product,
    PropertyAttributes,
    PropertyType,
)

HEI_ELIGIBLE_STATES: tuple[str, ...] = (
    "AZ", "CA", "FL", "HI", "ID", "IN", "KY", "MI", "MO", "MT",
    "NV", "NH", "NJ", "NM", "NC", "OH", "OR", "PA", "SC", "TN",
    "UT", "VA", "DC", "WI", "WY",
)
HEI_INELIGIBLE_PROPERTY_TYPES: frozenset[PropertyType] = frozenset(
    {PropertyType.manufactured, PropertyType.apartment, PropertyType.land}
)
HEI_INELIGIBLE_OWNERSHIP_TYPES: frozenset[OwnershipType] = frozenset(
    {OwnershipType.llc, OwnershipType.corporation, OwnershipType.partnership}
)

# Largest future share of the home the investor may claim.
MAX_UNLOCK_PERCENTAGE = 0.499
EXCHANGE_RATE = 2.0

HEI_MIN_HOME_VALUE = 175000.0
HEI_MAX_HOME_VALUE = 3000000.0
HEI_MIN_INVESTMENT = 15000.0
HEI_MAX_INVESTMENT = 500000.0
HEI_MAX_CLTV = 80.0

# Annualized cost cap used by the payoff preview.
HEA_COST_LIMIT = 0.199


def calculate_max_investment(
    home_value: float,
    mortgage_balance: float,
    max_cltv: float = 0.8,
    max_unlock_percentage: float = MAX_UNLOCK_PERCENTAGE,
    exchange_rate: float = EXCHANGE_RATE,
    absolute_max: float = HEI_MAX_INVESTMENT,
) -> float:
    """
    min(CLTV headroom, unlock-share cap, program cap), floored at zero.
    """
    if exchange_rate <= 0:
        raise ValueError("exchange_rate must be positive")

    cltv_max = home_value * max_cltv - mortgage_balance
    percent_max = home_value * (max_unlock_percentage / exchange_rate)
    return max(0.0, min(cltv_max, percent_max, absolute_max))


def evaluate_hei(attrs: PropertyAttributes) -> EligibilityVerdict:
    reasons: list[str] = []
    cltv = attrs.ltv

    if attrs.state not in HEI_ELIGIBLE_STATES:
        reasons.append(f"State not eligible for HEI. Available states: {', '.join(HEI_ELIGIBLE_STATES)}")

    if attrs.property_type in HEI_INELIGIBLE_PROPERTY_TYPES:
        reasons.append(f"{attrs.property_type.value} properties are not eligible for HEI")

    if attrs.ownership_type in HEI_INELIGIBLE_OWNERSHIP_TYPES:
        reasons.append(
            f"Properties owned by {attrs.ownership_type.value} are not eligible. "
            "Must be personally owned or in a Trust"
        )

    if attrs.home_value < HEI_MIN_HOME_VALUE:
        reasons.append(f"Home value must be at least {format_currency(HEI_MIN_HOME_VALUE)}")
    if attrs.home_value > HEI_MAX_HOME_VALUE:
        reasons.append(f"Home value cannot exceed {format_currency(HEI_MAX_HOME_VALUE)}")

    if cltv > HEI_MAX_CLTV:
        reasons.append(f"LTV must be 80% or less. Current LTV is {format_percentage(cltv)}")

    max_investment = calculate_max_investment(attrs.home_value, attrs.mortgage_balance)
    if max_investment < HEI_MIN_INVESTMENT:
        reasons.append(
            "Available equity must allow for a minimum investment of "
            f"{format_currency(HEI_MIN_INVESTMENT)}"
        )

    return EligibilityVerdict.from_reasons(
        Product.hei,
        reasons=reasons,
        computed_amount=max_investment,
        ltv=cltv,
    )


def calculate_hea_cost(
    investment: float,
    starting_value: float,
    term_years: float,
    hpa_rate: float,
    multiplier: float = EXCHANGE_RATE,
) -> HeaCostProjection:
    """
    Payoff preview for a home equity agreement.

    The investor's raw share is (investment / starting value) * multiplier of
    the appreciated home value; the payoff is capped so the effective annual
    cost never exceeds HEA_COST_LIMIT. hpa_rate is a fraction (0.03 = 3%).
    """
    if investment <= 0:
        raise ValueError("investment must be positive")
    if starting_value <= 0:
        raise ValueError("starting_value must be positive")
    if term_years <= 0:
        raise ValueError("term_years must be positive")
    if hpa_rate <= -1:
        raise ValueError("hpa_rate must be greater than -1")

    ending_home_value = starting_value * (1 + hpa_rate) ** term_years

    unlock_percentage = (investment / starting_value) * multiplier
    raw_unlock_share = ending_home_value * unlock_percentage
    maximum_unlock_share = investment * (1 + HEA_COST_LIMIT) ** term_years

    payoff = min(raw_unlock_share, maximum_unlock_share)
    effective_apr = (payoff / investment) ** (1 / term_years) - 1

    return HeaCostProjection(
        payoff=payoff,
        apr=effective_apr * 100.0,
        is_capped=raw_unlock_share > maximum_unlock_share,
        total_cost=payoff - investment,
        raw_unlock_share=raw_unlock_share,
        maximum_unlock_share=maximum_unlock_share,
        ending_home_value=ending_home_value,
    )
