# app/integrations/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class SinkDeliveryResult:
    ok: bool
    error: str | None = None


class SubmissionSink(Protocol):
    """Anything that can receive a submission event (webhook today)."""

    async def deliver(self, event_type: str, payload: dict[str, Any]) -> SinkDeliveryResult:
        ...
