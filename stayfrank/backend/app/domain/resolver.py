# app/domain/resolver.py
from __future__ import annotations

from .formatting import format_currency, format_percentage
from .hei import (
    HEI_ELIGIBLE_STATES,
    HEI_INELIGIBLE_OWNERSHIP_TYPES,
    HEI_INELIGIBLE_PROPERTY_TYPES,
    HEI_MAX_CLTV,
    HEI_MAX_HOME_VALUE,
    HEI_MIN_HOME_VALUE,
    HEI_MIN_INVESTMENT,
    calculate_max_investment,
    evaluate_hei,
)
from .sale_leaseback import SL_ELIGIBLE_PROPERTY_TYPES, SL_ELIGIBLE_STATES, evaluate_sale_leaseback
from .types import DualProductDecision, PropertyAttributes


def generic_reasons(attrs: PropertyAttributes) -> list[str]:
    """
    Product-agnostic explanation for a lead that qualifies for nothing.

    State and property type are reported only when both programs reject them;
    ownership, value bounds, LTV and minimum investment use the HEI rules,
    which are the most lenient of the two.
    """
    reasons: list[str] = []

    if attrs.state not in SL_ELIGIBLE_STATES and attrs.state not in HEI_ELIGIBLE_STATES:
        reasons.append(f"{attrs.state or 'Unknown state'} is not an eligible state")

    sl_type_ok = attrs.property_type in SL_ELIGIBLE_PROPERTY_TYPES
    hei_type_ok = attrs.property_type not in HEI_INELIGIBLE_PROPERTY_TYPES
    if not sl_type_ok and not hei_type_ok:
        reasons.append(f"{attrs.property_type.value} properties are not eligible")

    if attrs.ownership_type in HEI_INELIGIBLE_OWNERSHIP_TYPES:
        reasons.append(f"Properties owned by {attrs.ownership_type.value} are not eligible")

    if attrs.home_value < HEI_MIN_HOME_VALUE:
        reasons.append(f"Home value must be at least {format_currency(HEI_MIN_HOME_VALUE)}")
    if attrs.home_value > HEI_MAX_HOME_VALUE:
        reasons.append(f"Home value cannot exceed {format_currency(HEI_MAX_HOME_VALUE)}")

    ltv = attrs.ltv
    if ltv > HEI_MAX_CLTV:
        reasons.append(f"LTV must be 80% or less (current: {format_percentage(ltv)})")

    if calculate_max_investment(attrs.home_value, attrs.mortgage_balance) < HEI_MIN_INVESTMENT:
        reasons.append(
            "Available equity must allow for a minimum investment of "
            f"{format_currency(HEI_MIN_INVESTMENT)}"
        )

    # order-preserving de-dup
    return list(dict.fromkeys(reasons))


def resolve_dual_product(attrs: PropertyAttributes, *, sl_checks_ownership: bool = False) -> DualProductDecision:
    """
    Run both evaluators on the same input and fold them into one decision.
    Never raises for well-formed attributes.
    """
    sl = evaluate_sale_leaseback(attrs, check_ownership=sl_checks_ownership)
    hei = evaluate_hei(attrs)

    either = sl.is_eligible or hei.is_eligible
    combined: tuple[str, ...] = ()
    if not either:
        # each program can fail on a rule the other accepts; then nothing is
        # generic and the product-specific reasons are shown instead
        combined = tuple(generic_reasons(attrs)) or tuple(dict.fromkeys(sl.reasons + hei.reasons))

    return DualProductDecision(
        sl=sl,
        hei=hei,
        either_eligible=either,
        best_offer_amount=max(sl.offer_amount, hei.offer_amount),
        combined_reasons=combined,
    )
