# app/entrypoints/api/routers/submissions.py
from __future__ import annotations

import json

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import PartnerContext, get_partner_client, get_session, require_active_partner
from ....models import Submission
from ....schemas import SubmissionCreate, SubmissionOut
from ....service_layer.submissions import PartnerDealClient, get_submission, list_submissions, submit_lead

router = APIRouter(tags=["submissions"])


def _out(sub: Submission) -> SubmissionOut:
    return SubmissionOut(
        id=sub.id,
        partner_id=sub.partner_id,
        property_address=sub.property_address,
        home_value=sub.home_value,
        mortgage_balance=sub.mortgage_balance,
        owner_names=json.loads(sub.owner_names_json or "[]"),
        property_type=sub.property_type,
        ownership_type=sub.ownership_type,
        state=sub.state,
        sl_eligible=sub.sl_eligible,
        sl_offer_amount=sub.sl_offer_amount,
        sl_reasons=json.loads(sub.sl_reasons_json or "[]"),
        hei_eligible=sub.hei_eligible,
        hei_max_investment=sub.hei_max_investment,
        hei_reasons=json.loads(sub.hei_reasons_json or "[]"),
        best_offer_amount=sub.best_offer_amount,
        partner_sync_status=sub.partner_sync_status.value,
        partner_deal_id=sub.partner_deal_id,
        tracking_link=sub.tracking_link,
        partner_sync_error=sub.partner_sync_error,
        created_at=sub.created_at,
    )


@router.post("/submissions", response_model=SubmissionOut, status_code=201)
async def create_submission(
    body: SubmissionCreate,
    partner: PartnerContext = Depends(require_active_partner),
    partner_client: PartnerDealClient = Depends(get_partner_client),
    session: AsyncSession = Depends(get_session),
) -> SubmissionOut:
    try:
        sub = await submit_lead(session, partner_id=partner.partner_id, body=body, partner_client=partner_client)
    except ValueError as e:
        await session.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    await session.commit()
    return _out(sub)


@router.get("/submissions", response_model=list[SubmissionOut])
async def my_submissions(
    limit: int = Query(50, ge=1, le=200),
    partner: PartnerContext = Depends(require_active_partner),
    session: AsyncSession = Depends(get_session),
) -> list[SubmissionOut]:
    rows = await list_submissions(session, partner_id=partner.partner_id, limit=limit)
    return [_out(s) for s in rows]


@router.get("/submissions/{submission_id}", response_model=SubmissionOut)
async def submission_detail(
    submission_id: int,
    partner: PartnerContext = Depends(require_active_partner),
    session: AsyncSession = Depends(get_session),
) -> SubmissionOut:
    try:
        sub = await get_submission(session, partner_id=partner.partner_id, submission_id=submission_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _out(sub)
