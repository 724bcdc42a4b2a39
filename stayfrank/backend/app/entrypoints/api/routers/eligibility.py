# app/entrypoints/api/routers/eligibility.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ....domain.hei import calculate_hea_cost
from ....domain.types import DualProductDecision, EligibilityVerdict
from ....schemas import DualDecisionOut, EligibilityIn, HeaCostIn, HeaCostOut, VerdictOut
from ....service_layer.evaluation import attributes_from_input, evaluate_attributes

router = APIRouter(tags=["eligibility"])


def _verdict_out(v: EligibilityVerdict) -> VerdictOut:
    return VerdictOut(
        product=v.product,
        is_eligible=v.is_eligible,
        offer_amount=v.offer_amount,
        reasons=list(v.reasons),
        ltv=v.ltv,
    )


def decision_out(decision: DualProductDecision, *, property_type: str, ownership_type: str) -> DualDecisionOut:
    return DualDecisionOut(
        property_type=property_type,
        ownership_type=ownership_type,
        sale_leaseback=_verdict_out(decision.sl),
        hei=_verdict_out(decision.hei),
        either_eligible=decision.either_eligible,
        best_offer_amount=decision.best_offer_amount,
        combined_reasons=list(decision.combined_reasons),
    )


@router.post("/eligibility/evaluate", response_model=DualDecisionOut)
def evaluate(body: EligibilityIn) -> DualDecisionOut:
    attrs = attributes_from_input(
        home_value=body.home_value,
        mortgage_balance=body.mortgage_balance,
        state=body.state,
        property_type=body.property_type,
        ownership_type=body.ownership_type,
        owner_names=body.owner_names,
    )
    decision = evaluate_attributes(attrs)
    return decision_out(
        decision,
        property_type=attrs.property_type.value,
        ownership_type=attrs.ownership_type.value,
    )


@router.post("/calculators/hea-cost", response_model=HeaCostOut)
def hea_cost(body: HeaCostIn) -> HeaCostOut:
    try:
        p = calculate_hea_cost(
            investment=body.investment,
            starting_value=body.starting_value,
            term_years=body.term_years,
            hpa_rate=body.hpa_rate,
            multiplier=body.multiplier,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return HeaCostOut(
        payoff=p.payoff,
        apr=p.apr,
        is_capped=p.is_capped,
        total_cost=p.total_cost,
        raw_unlock_share=p.raw_unlock_share,
        maximum_unlock_share=p.maximum_unlock_share,
        ending_home_value=p.ending_home_value,
    )
