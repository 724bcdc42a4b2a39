# app/service_layer/submissions.py
from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from ..adapters.clients.equity_advance import PartnerDeal
from ..adapters.repos.submissions import SubmissionRepository
from ..integrations.services.outbox import enqueue_event
from ..models import Submission
from ..schemas import SubmissionCreate
from .evaluation import attributes_from_input, evaluate_attributes

log = logging.getLogger(__name__)


class PartnerDealClient(Protocol):
    async def create_deal(self, deal: dict[str, Any]) -> PartnerDeal:
        ...


def _loads_list(raw: str | None) -> list[Any]:
    try:
        data = json.loads(raw or "[]")
    except ValueError:
        return []
    return data if isinstance(data, list) else []


def submission_summary(sub: Submission) -> dict[str, Any]:
    """The verdict summary forwarded to the partner and to webhook sinks."""
    return {
        "submission_id": sub.id,
        "partner_id": sub.partner_id,
        "property_address": sub.property_address,
        "home_value": sub.home_value,
        "mortgage_balance": sub.mortgage_balance,
        "owner_names": _loads_list(sub.owner_names_json),
        "property_type": sub.property_type,
        "ownership_type": sub.ownership_type,
        "state": sub.state,
        "sl_eligible": sub.sl_eligible,
        "sl_offer_amount": sub.sl_offer_amount,
        "hei_eligible": sub.hei_eligible,
        "hei_max_investment": sub.hei_max_investment,
        "best_offer_amount": sub.best_offer_amount,
    }


async def record_submission(
    session: AsyncSession,
    *,
    partner_id: str,
    body: SubmissionCreate,
    sl_checks_ownership: bool | None = None,
) -> Submission:
    """
    Store a lead and queue its submission.created event.

    The verdicts are recomputed here rather than trusted from the client.
    Raises ValueError when neither product qualifies. Does NOT commit.
    """
    attrs = attributes_from_input(
        home_value=body.home_value,
        mortgage_balance=body.mortgage_balance,
        state=body.state,
        property_type=body.property_type,
        ownership_type=body.ownership_type,
        owner_names=", ".join(body.owner_names),
    )
    decision = evaluate_attributes(attrs, sl_checks_ownership=sl_checks_ownership)
    if not decision.either_eligible:
        raise ValueError("Property does not qualify for either program: " + "; ".join(decision.combined_reasons))

    sub = await SubmissionRepository(session).add(
        Submission(
            partner_id=partner_id,
            property_address=body.property_address.strip(),
            home_value=attrs.home_value,
            mortgage_balance=attrs.mortgage_balance,
            owner_names_json=json.dumps(body.owner_names),
            property_type=attrs.property_type.value,
            ownership_type=attrs.ownership_type.value,
            state=attrs.state,
            owner_emails_json=json.dumps(body.owner_emails),
            owner_phones_json=json.dumps(body.owner_phones),
            owner_credit_scores_json=json.dumps(body.owner_credit_scores),
            mortgage_current=body.mortgage_current,
            money_reasons_json=json.dumps(body.money_reasons),
            helpful_context=body.helpful_context,
            money_amount=body.money_amount,
            sl_eligible=decision.sl.is_eligible,
            sl_offer_amount=decision.sl.offer_amount if decision.sl.is_eligible else None,
            sl_reasons_json=json.dumps(list(decision.sl.reasons)),
            hei_eligible=decision.hei.is_eligible,
            hei_max_investment=decision.hei.offer_amount if decision.hei.is_eligible else None,
            hei_reasons_json=json.dumps(list(decision.hei.reasons)),
            best_offer_amount=decision.best_offer_amount,
        )
    )

    await enqueue_event(session, "submission.created", submission_summary(sub))
    return sub


async def sync_partner_deal(session: AsyncSession, sub: Submission, partner_client: PartnerDealClient) -> Submission:
    """
    Forward a stored submission to the downstream partner. A partner failure
    is recorded on the row, never raised. Does NOT commit.
    """
    repo = SubmissionRepository(session)
    try:
        deal = await partner_client.create_deal(submission_summary(sub))
    except (httpx.HTTPError, RuntimeError, ValueError) as e:
        log.warning("partner sync failed for submission %s: %s", sub.id, e)
        await repo.mark_partner_failed(sub, error=f"{type(e).__name__}: {e}")
        return sub

    await repo.mark_partner_synced(sub, deal_id=deal.deal_id, tracking_link=deal.tracking_link)
    log.info("submission %s synced as partner deal %s", sub.id, deal.deal_id)
    return sub


async def submit_lead(
    session: AsyncSession,
    *,
    partner_id: str,
    body: SubmissionCreate,
    partner_client: PartnerDealClient,
    sl_checks_ownership: bool | None = None,
) -> Submission:
    """
    Store a lead, then forward it to the partner.

    The new row and its outbox event are committed before the partner is
    contacted, so a remote deal always points at a local submission. The
    sync outcome is flushed; the caller commits it.
    """
    sub = await record_submission(
        session,
        partner_id=partner_id,
        body=body,
        sl_checks_ownership=sl_checks_ownership,
    )
    await session.commit()
    return await sync_partner_deal(session, sub, partner_client)


async def list_submissions(session: AsyncSession, *, partner_id: str, limit: int = 50) -> list[Submission]:
    return await SubmissionRepository(session).list_for_partner(partner_id, limit=limit)


async def get_submission(session: AsyncSession, *, partner_id: str, submission_id: int) -> Submission:
    sub = await SubmissionRepository(session).get_for_partner(submission_id, partner_id)
    if not sub:
        raise ValueError(f"Submission {submission_id} not found")
    return sub
