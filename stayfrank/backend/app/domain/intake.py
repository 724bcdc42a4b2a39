# app/domain/intake.py
from __future__ import annotations

from dataclasses import dataclass, field

from .classify import classify_ownership, classify_property_type
from .types import OwnershipType, PropertyAttributes, PropertyRecord, PropertyType

UNKNOWN_OWNER = "Unknown Owner"


@dataclass(frozen=True)
class IntakeFloors:
    """Provider values below these floors are treated as missing."""
    default_home_value: float = 500000.0
    min_home_value: float = 50000.0
    min_mortgage_balance: float = 1000.0
    default_mortgage_ratio: float = 0.5


@dataclass(frozen=True)
class PropertyIntake:
    attributes: PropertyAttributes
    owner_names: str
    lookup_ok: bool
    defaults_applied: tuple[str, ...] = field(default_factory=tuple)


def build_property_intake(record: PropertyRecord | None, *, floors: IntakeFloors | None = None) -> PropertyIntake:
    """
    Turn a provider record (or None when the lookup failed) into evaluator input.

    - value missing or under the floor -> default home value
    - mortgage missing or under the floor -> default ratio of the home value
    - property type / ownership classified from the raw strings
    """
    floors = floors or IntakeFloors()

    if record is None:
        home_value = floors.default_home_value
        return PropertyIntake(
            attributes=PropertyAttributes(
                home_value=home_value,
                mortgage_balance=float(round(home_value * floors.default_mortgage_ratio)),
                state="",
                property_type=PropertyType.single_family,
                ownership_type=OwnershipType.personal,
            ),
            owner_names=UNKNOWN_OWNER,
            lookup_ok=False,
            defaults_applied=("home_value", "mortgage_balance", "property_type", "ownership_type"),
        )

    applied: list[str] = []

    value = record.estimated_value
    if value and value >= floors.min_home_value:
        home_value = float(value)
    else:
        home_value = floors.default_home_value
        applied.append("home_value")

    mortgage = record.estimated_mortgage_balance
    if mortgage and mortgage >= floors.min_mortgage_balance:
        mortgage_balance = float(mortgage)
    else:
        mortgage_balance = float(round(home_value * floors.default_mortgage_ratio))
        applied.append("mortgage_balance")

    if not (record.raw_property_type or "").strip():
        applied.append("property_type")

    owner_names = (record.owner_names or "").strip()
    if not owner_names:
        owner_names = UNKNOWN_OWNER
        applied.append("ownership_type")

    return PropertyIntake(
        attributes=PropertyAttributes(
            home_value=home_value,
            mortgage_balance=mortgage_balance,
            state=record.state or "",
            property_type=classify_property_type(record.raw_property_type),
            ownership_type=classify_ownership(owner_names),
        ),
        owner_names=owner_names,
        lookup_ok=True,
        defaults_applied=tuple(applied),
    )
