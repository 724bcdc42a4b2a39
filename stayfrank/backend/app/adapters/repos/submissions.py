# app/adapters/repos/submissions.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import PartnerSyncStatus, Submission


class SubmissionRepository:
    """Does NOT commit; callers own the transaction."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, submission: Submission) -> Submission:
        self.session.add(submission)
        await self.session.flush()
        return submission

    async def get_for_partner(self, submission_id: int, partner_id: str) -> Submission | None:
        q = select(Submission).where(
            Submission.id == submission_id,
            Submission.partner_id == partner_id,
        )
        return (await self.session.execute(q)).scalars().first()

    async def list_for_partner(self, partner_id: str, *, limit: int = 50) -> list[Submission]:
        q = (
            select(Submission)
            .where(Submission.partner_id == partner_id)
            .order_by(desc(Submission.created_at), desc(Submission.id))
            .limit(limit)
        )
        return list((await self.session.execute(q)).scalars().all())

    async def mark_partner_synced(self, submission: Submission, *, deal_id: str, tracking_link: str | None) -> None:
        submission.partner_sync_status = PartnerSyncStatus.synced
        submission.partner_deal_id = deal_id
        submission.tracking_link = tracking_link
        submission.partner_sync_error = None
        submission.updated_at = datetime.utcnow()
        await self.session.flush()

    async def mark_partner_failed(self, submission: Submission, *, error: str) -> None:
        submission.partner_sync_status = PartnerSyncStatus.failed
        submission.partner_sync_error = error[:2000]
        submission.updated_at = datetime.utcnow()
        await self.session.flush()
