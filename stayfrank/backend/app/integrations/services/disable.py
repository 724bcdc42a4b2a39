# app/integrations/services/disable.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import Integration


async def set_integration_enabled(
    session: AsyncSession,
    *,
    integration_id: int | None = None,
    name: str | None = None,
    enabled: bool,
) -> Optional[Integration]:
    """
    Toggle a webhook sink by id OR name. Returns None when nothing matches.
    Does NOT commit.
    """
    if (integration_id is None) == (name is None):
        raise ValueError("Provide exactly one of integration_id or name")

    if integration_id is not None:
        q = select(Integration).where(Integration.id == integration_id)
    else:
        q = select(Integration).where(Integration.name == name)

    integ = (await session.execute(q)).scalars().first()
    if not integ:
        return None

    integ.enabled = bool(enabled)
    await session.flush()
    return integ


async def disable_integration(
    session: AsyncSession,
    *,
    integration_id: int | None = None,
    name: str | None = None,
) -> bool:
    """True if something was disabled, False if not found."""
    integ = await set_integration_enabled(session, integration_id=integration_id, name=name, enabled=False)
    return integ is not None
