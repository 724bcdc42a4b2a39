# app/models.py
from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    Float,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# -----------------------------
# Core enums
# -----------------------------
class PartnerSyncStatus(str, enum.Enum):
    pending = "pending"
    synced = "synced"
    failed = "failed"


class OutboxStatus(str, enum.Enum):
    pending = "pending"
    delivered = "delivered"
    failed = "failed"


class IntegrationType(str, enum.Enum):
    webhook = "webhook"


class JobRunStatus(str, enum.Enum):
    running = "running"
    success = "success"
    failed = "failed"


# -----------------------------
# Models
# -----------------------------
class Submission(Base):
    """
    A lead submitted by a partner: property data, borrower details and both
    product verdicts exactly as the eligibility engine produced them.
    """
    __tablename__ = "submissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    partner_id: Mapped[str] = mapped_column(String(64), index=True)

    # property data
    property_address: Mapped[str] = mapped_column(String(255))
    home_value: Mapped[float] = mapped_column(Float)
    mortgage_balance: Mapped[float] = mapped_column(Float)
    owner_names_json: Mapped[str] = mapped_column(Text, default="[]")
    property_type: Mapped[str] = mapped_column(String(40))
    ownership_type: Mapped[str] = mapped_column(String(40))
    state: Mapped[str] = mapped_column(String(2))

    # borrower details
    owner_emails_json: Mapped[str] = mapped_column(Text, default="[]")
    owner_phones_json: Mapped[str] = mapped_column(Text, default="[]")
    owner_credit_scores_json: Mapped[str] = mapped_column(Text, default="[]")
    mortgage_current: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    money_reasons_json: Mapped[str] = mapped_column(Text, default="[]")
    helpful_context: Mapped[str | None] = mapped_column(Text, nullable=True)
    money_amount: Mapped[str | None] = mapped_column(String(80), nullable=True)

    # sale-leaseback verdict
    sl_eligible: Mapped[bool] = mapped_column(Boolean, default=False)
    sl_offer_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    sl_reasons_json: Mapped[str] = mapped_column(Text, default="[]")

    # home equity investment verdict
    hei_eligible: Mapped[bool] = mapped_column(Boolean, default=False)
    hei_max_investment: Mapped[float | None] = mapped_column(Float, nullable=True)
    hei_reasons_json: Mapped[str] = mapped_column(Text, default="[]")

    best_offer_amount: Mapped[float] = mapped_column(Float, default=0.0)

    # downstream partner deal
    partner_sync_status: Mapped[PartnerSyncStatus] = mapped_column(
        Enum(PartnerSyncStatus), default=PartnerSyncStatus.pending, index=True
    )
    partner_deal_id: Mapped[str | None] = mapped_column(String(80), nullable=True)
    tracking_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    partner_sync_error: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class FundingReason(Base):
    __tablename__ = "funding_reasons"
    __table_args__ = (UniqueConstraint("value", name="uq_funding_reason_value"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    value: Mapped[str] = mapped_column(String(80))
    label: Mapped[str] = mapped_column(String(120))
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Integration(Base):
    __tablename__ = "integrations"
    __table_args__ = (UniqueConstraint("name", name="uq_integration_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(80))
    type: Mapped[IntegrationType] = mapped_column(Enum(IntegrationType))

    # quiet by default
    enabled: Mapped[bool] = mapped_column(Boolean, default=False)

    # typically contains {"url": "...", "secret": "..."}
    config_json: Mapped[str] = mapped_column(Text, default="{}")

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class OutboxEvent(Base):
    __tablename__ = "outbox_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    event_type: Mapped[str] = mapped_column(String(120), index=True)
    payload_json: Mapped[str] = mapped_column(Text)

    status: Mapped[OutboxStatus] = mapped_column(Enum(OutboxStatus), default=OutboxStatus.pending, index=True)
    attempts: Mapped[int] = mapped_column(Integer, default=0)

    next_attempt_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    last_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    delivered_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class JobRun(Base):
    """
    Tracks job executions (outbox dispatch today).
    """
    __tablename__ = "job_runs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    job_name: Mapped[str] = mapped_column(String(80), index=True)

    status: Mapped[JobRunStatus] = mapped_column(Enum(JobRunStatus), default=JobRunStatus.running, index=True)

    started_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    error: Mapped[str | None] = mapped_column(Text, nullable=True)

    meta_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary_json: Mapped[str | None] = mapped_column(Text, nullable=True)
