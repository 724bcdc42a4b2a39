# tests/test_classify.py
import pytest

from app.domain.classify import classify_ownership, classify_property_type
from app.domain.types import OwnershipType, PropertyType


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Single Family Residence", PropertyType.single_family),
        ("SFR", PropertyType.single_family),
        ("residential", PropertyType.single_family),
        ("CONDOMINIUM", PropertyType.condo),
        ("Timesh", PropertyType.condo),
        ("Town House", PropertyType.townhouse),
        ("Duplex", PropertyType.multi_family),
        ("Mobile Home", PropertyType.manufactured),
        ("Apartment", PropertyType.apartment),
        ("Vacant Land", PropertyType.land),
        # substring fallbacks
        ("SINGLE FAMILY RESIDENCE / TOWNHOUSE", PropertyType.single_family),
        ("SFR / Townhouse", PropertyType.single_family),
        ("RESIDENTIAL CONDO UNIT", PropertyType.single_family),
        ("High-rise Condo", PropertyType.condo),
        ("Row TOWNHOUSE end unit", PropertyType.townhouse),
        ("MULTI UNIT 5+", PropertyType.multi_family),
        ("AGRICULTURAL LAND", PropertyType.land),
    ],
)
def test_classify_property_type(raw, expected):
    assert classify_property_type(raw) is expected


@pytest.mark.parametrize("raw", [None, "", "   ", "Houseboat", "???"])
def test_classify_property_type_defaults_to_single_family(raw):
    assert classify_property_type(raw) is PropertyType.single_family


@pytest.mark.parametrize(
    "names,expected",
    [
        ("ACME HOLDINGS LLC", OwnershipType.llc),
        ("Acme Holdings, L.L.C.", OwnershipType.llc),
        ("SMITH FAMILY TRUST", OwnershipType.trust),
        ("JOHN SMITH TRUSTEE", OwnershipType.trust),
        ("SMITH JOHN TR", OwnershipType.trust),
        ("ACME INC", OwnershipType.corporation),
        ("BIG HOMES CORPORATION", OwnershipType.corporation),
        ("SMITH & SONS CO.", OwnershipType.corporation),
        ("RIVER ROAD LP", OwnershipType.partnership),
        ("RIVER ROAD LIMITED PARTNERSHIP", OwnershipType.partnership),
        ("JOHN SMITH, JANE SMITH", OwnershipType.personal),
        ("Unknown Owner", OwnershipType.personal),
    ],
)
def test_classify_ownership(names, expected):
    assert classify_ownership(names) is expected


def test_llc_wins_over_trust():
    # first match wins
    assert classify_ownership("SMITH TRUST HOLDINGS LLC") is OwnershipType.llc


def test_tr_inside_a_word_is_not_a_trust():
    assert classify_ownership("PETER STRAND") is OwnershipType.personal


@pytest.mark.parametrize("s", [None, "", " ", "\t\n", "ñandú", "0" * 500, "LLC" * 50])
def test_classifiers_are_total(s):
    assert isinstance(classify_property_type(s), PropertyType)
    assert isinstance(classify_ownership(s), OwnershipType)
