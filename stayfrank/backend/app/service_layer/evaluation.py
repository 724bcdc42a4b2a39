# app/service_layer/evaluation.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from ..adapters.clients.attom import PropertyLookupError
from ..config import settings
from ..domain.classify import classify_ownership, classify_property_type
from ..domain.intake import IntakeFloors, PropertyIntake, build_property_intake
from ..domain.resolver import resolve_dual_product
from ..domain.types import DualProductDecision, OwnershipType, PropertyAttributes, PropertyRecord

log = logging.getLogger(__name__)


class PropertyDataProvider(Protocol):
    async def lookup(self, address: str) -> PropertyRecord:
        ...


@dataclass(frozen=True)
class LookupResult:
    address: str
    intake: PropertyIntake
    record: PropertyRecord | None = None
    error: str | None = None


def intake_floors_from_settings() -> IntakeFloors:
    return IntakeFloors(
        default_home_value=settings.INTAKE_DEFAULT_HOME_VALUE,
        min_home_value=settings.INTAKE_MIN_HOME_VALUE,
        min_mortgage_balance=settings.INTAKE_MIN_MORTGAGE_BALANCE,
        default_mortgage_ratio=settings.INTAKE_DEFAULT_MORTGAGE_RATIO,
    )


async def lookup_property(
    address: str,
    provider: PropertyDataProvider,
    *,
    floors: IntakeFloors | None = None,
) -> LookupResult:
    """
    Await the provider, then normalize. A provider failure is not fatal:
    the partner still gets default attributes to adjust by hand.
    """
    floors = floors or intake_floors_from_settings()
    try:
        record = await provider.lookup(address)
    except PropertyLookupError as e:
        log.warning("property lookup degraded to defaults for %r: %s", address, e)
        return LookupResult(address=address, intake=build_property_intake(None, floors=floors), error=str(e))

    return LookupResult(address=address, intake=build_property_intake(record, floors=floors), record=record)


def attributes_from_input(
    *,
    home_value: float,
    mortgage_balance: float,
    state: str,
    property_type: str | None,
    ownership_type: OwnershipType | None = None,
    owner_names: str | None = None,
) -> PropertyAttributes:
    """
    Build evaluator input from partner-entered values. An explicit ownership
    type wins; otherwise it is inferred from the owner names.
    """
    return PropertyAttributes(
        home_value=float(home_value),
        mortgage_balance=float(mortgage_balance),
        state=state,
        property_type=classify_property_type(property_type),
        ownership_type=ownership_type or classify_ownership(owner_names),
    )


def evaluate_attributes(attrs: PropertyAttributes, *, sl_checks_ownership: bool | None = None) -> DualProductDecision:
    if sl_checks_ownership is None:
        sl_checks_ownership = settings.SL_CHECK_OWNERSHIP
    decision = resolve_dual_product(attrs, sl_checks_ownership=sl_checks_ownership)
    log.debug(
        "evaluated state=%s type=%s sl=%s hei=%s best=%.0f",
        attrs.state,
        attrs.property_type.value,
        decision.sl.is_eligible,
        decision.hei.is_eligible,
        decision.best_offer_amount,
    )
    return decision
