# tests/test_intake.py
from app.domain.formatting import format_currency, format_percentage
from app.domain.intake import IntakeFloors, UNKNOWN_OWNER, build_property_intake
from app.domain.types import OwnershipType, PropertyRecord, PropertyType


def _record(**kw) -> PropertyRecord:
    base = dict(
        owner_names="SMITH FAMILY TRUST",
        state="ca",
        raw_property_type="Condominium",
        estimated_value=650000.0,
        estimated_mortgage_balance=210000.0,
    )
    base.update(kw)
    return PropertyRecord(**base)


def test_failed_lookup_gets_all_defaults():
    intake = build_property_intake(None)
    a = intake.attributes
    assert intake.lookup_ok is False
    assert intake.owner_names == UNKNOWN_OWNER
    assert a.home_value == 500000.0
    assert a.mortgage_balance == 250000.0
    assert a.state == ""
    assert a.property_type is PropertyType.single_family
    assert a.ownership_type is OwnershipType.personal
    assert set(intake.defaults_applied) == {"home_value", "mortgage_balance", "property_type", "ownership_type"}


def test_record_is_classified():
    intake = build_property_intake(_record())
    a = intake.attributes
    assert intake.lookup_ok is True
    assert intake.defaults_applied == ()
    assert a.state == "CA"
    assert a.property_type is PropertyType.condo
    assert a.ownership_type is OwnershipType.trust
    assert a.home_value == 650000.0
    assert a.mortgage_balance == 210000.0


def test_values_under_the_floors_are_replaced():
    intake = build_property_intake(_record(estimated_value=20000.0, estimated_mortgage_balance=500.0))
    assert intake.attributes.home_value == 500000.0
    assert intake.attributes.mortgage_balance == 250000.0
    assert intake.defaults_applied == ("home_value", "mortgage_balance")


def test_missing_mortgage_uses_ratio_of_real_value():
    intake = build_property_intake(_record(estimated_mortgage_balance=None))
    assert intake.attributes.mortgage_balance == 325000.0
    assert intake.defaults_applied == ("mortgage_balance",)


def test_custom_floors():
    floors = IntakeFloors(default_home_value=300000.0, min_home_value=100000.0, default_mortgage_ratio=0.4)
    intake = build_property_intake(None, floors=floors)
    assert intake.attributes.home_value == 300000.0
    assert intake.attributes.mortgage_balance == 120000.0


def test_blank_owner_and_type():
    intake = build_property_intake(_record(owner_names="  ", raw_property_type=""))
    assert intake.owner_names == UNKNOWN_OWNER
    assert intake.attributes.ownership_type is OwnershipType.personal
    assert intake.attributes.property_type is PropertyType.single_family
    assert intake.defaults_applied == ("property_type", "ownership_type")


def test_missing_owner_names_is_reported_as_a_default():
    intake = build_property_intake(_record(owner_names=None))
    assert intake.owner_names == UNKNOWN_OWNER
    assert intake.defaults_applied == ("ownership_type",)


def test_formatting():
    assert format_currency(200000) == "$200,000"
    assert format_currency(1500000.4) == "$1,500,000"
    assert format_currency(-1500) == "-$1,500"
    assert format_percentage(70) == "70.0%"
    assert format_percentage(33.3333, decimals=2) == "33.33%"
