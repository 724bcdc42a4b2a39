# tests/test_hei.py
import pytest

from app.domain.hei import HEI_MAX_INVESTMENT, calculate_hea_cost, calculate_max_investment, evaluate_hei
from app.domain.types import OwnershipType, Product, PropertyAttributes, PropertyType


def _attrs(**kw) -> PropertyAttributes:
    base = dict(
        home_value=500000.0,
        mortgage_balance=200000.0,
        state="CA",
        property_type=PropertyType.single_family,
        ownership_type=OwnershipType.personal,
    )
    base.update(kw)
    return PropertyAttributes(**base)


def test_eligible_california_single_family():
    v = evaluate_hei(_attrs())
    assert v.product is Product.hei
    assert v.is_eligible is True
    assert v.ltv == 40.0
    # min(200000 cltv headroom, 124750 unlock share, 500000 cap)
    assert v.offer_amount == pytest.approx(124750.0)


def test_max_investment_caps():
    assert calculate_max_investment(500000.0, 200000.0) == pytest.approx(124750.0)
    assert calculate_max_investment(500000.0, 390000.0) == pytest.approx(10000.0)
    assert calculate_max_investment(3000000.0, 0.0) == HEI_MAX_INVESTMENT
    assert calculate_max_investment(300000.0, 290000.0) == 0.0


def test_max_investment_rejects_bad_exchange_rate():
    with pytest.raises(ValueError):
        calculate_max_investment(500000.0, 0.0, exchange_rate=0)


def test_condo_and_townhouse_are_fine():
    assert evaluate_hei(_attrs(property_type=PropertyType.condo)).is_eligible
    assert evaluate_hei(_attrs(property_type=PropertyType.townhouse)).is_eligible


@pytest.mark.parametrize("ptype", [PropertyType.manufactured, PropertyType.apartment, PropertyType.land])
def test_ineligible_property_types(ptype):
    v = evaluate_hei(_attrs(property_type=ptype))
    assert v.reasons == (f"{ptype.value} properties are not eligible for HEI",)
    assert v.offer_amount == 0.0


@pytest.mark.parametrize("owner", [OwnershipType.llc, OwnershipType.corporation, OwnershipType.partnership])
def test_entity_ownership_refused(owner):
    v = evaluate_hei(_attrs(ownership_type=owner))
    assert v.reasons == (
        f"Properties owned by {owner.value} are not eligible. Must be personally owned or in a Trust",
    )


def test_trust_ownership_allowed():
    assert evaluate_hei(_attrs(ownership_type=OwnershipType.trust)).is_eligible


def test_state_reason_lists_program_states():
    v = evaluate_hei(_attrs(state="TX"))
    assert v.reasons[0].startswith("State not eligible for HEI. Available states: AZ, CA, FL")


def test_value_bounds_and_cltv():
    assert evaluate_hei(_attrs(home_value=150000.0, mortgage_balance=0.0)).reasons == (
        "Home value must be at least $175,000",
    )
    assert evaluate_hei(_attrs(home_value=3500000.0, mortgage_balance=0.0)).reasons == (
        "Home value cannot exceed $3,000,000",
    )
    v = evaluate_hei(_attrs(mortgage_balance=425000.0))
    assert "LTV must be 80% or less. Current LTV is 85.0%" in v.reasons
    assert "Available equity must allow for a minimum investment of $15,000" in v.reasons


def test_thin_equity_refused_on_minimum_investment():
    v = evaluate_hei(_attrs(mortgage_balance=390000.0))
    assert v.reasons == ("Available equity must allow for a minimum investment of $15,000",)


def test_hea_cost_uncapped():
    p = calculate_hea_cost(investment=50000.0, starting_value=500000.0, term_years=10, hpa_rate=0.03)
    assert p.is_capped is False
    assert p.ending_home_value == pytest.approx(500000.0 * 1.03**10)
    assert p.raw_unlock_share == pytest.approx(p.ending_home_value * 0.2)
    assert p.payoff == pytest.approx(p.raw_unlock_share)
    assert p.total_cost == pytest.approx(p.payoff - 50000.0)
    assert 0 < p.apr < 19.9


def test_hea_cost_capped_at_annual_limit():
    p = calculate_hea_cost(investment=50000.0, starting_value=500000.0, term_years=10, hpa_rate=0.30)
    assert p.is_capped is True
    assert p.payoff == pytest.approx(p.maximum_unlock_share)
    assert p.apr == pytest.approx(19.9)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(investment=0, starting_value=500000, term_years=10, hpa_rate=0.03),
        dict(investment=50000, starting_value=0, term_years=10, hpa_rate=0.03),
        dict(investment=50000, starting_value=500000, term_years=0, hpa_rate=0.03),
        dict(investment=50000, starting_value=500000, term_years=10, hpa_rate=-1.0),
    ],
)
def test_hea_cost_rejects_nonsense(kwargs):
    with pytest.raises(ValueError):
        calculate_hea_cost(**kwargs)


@pytest.mark.parametrize("home_value", [175000.0, 3000000.0])
def test_home_value_bounds_are_inclusive(home_value):
    v = evaluate_hei(_attrs(home_value=home_value, mortgage_balance=0.0))
    assert v.is_eligible is True
    assert v.reasons == ()


@pytest.mark.parametrize(
    "home_value, reason",
    [
        (174999.0, "Home value must be at least $175,000"),
        (3000001.0, "Home value cannot exceed $3,000,000"),
    ],
)
def test_home_value_just_outside_bounds(home_value, reason):
    v = evaluate_hei(_attrs(home_value=home_value, mortgage_balance=0.0))
    assert v.is_eligible is False
    assert v.reasons == (reason,)
