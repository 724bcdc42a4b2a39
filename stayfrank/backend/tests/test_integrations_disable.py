# tests/test_integrations_disable.py
import json

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.integrations.services.disable import disable_integration, set_integration_enabled
from app.models import Integration, IntegrationType


def _webhook(name: str) -> Integration:
    return Integration(
        name=name,
        type=IntegrationType.webhook,
        enabled=True,
        config_json=json.dumps({"url": "https://example.com", "secret": "x"}),
    )


async def test_integration_name_unique(async_session_maker):
    async with async_session_maker() as session:
        session.add(_webhook("dup"))
        await session.commit()

    async with async_session_maker() as session:
        session.add(_webhook("dup"))
        with pytest.raises(IntegrityError):
            await session.commit()
        await session.rollback()


async def test_disable_integration_by_name(async_session_maker):
    async with async_session_maker() as session:
        session.add(_webhook("toggle"))
        await session.commit()

    async with async_session_maker() as session:
        assert await disable_integration(session, name="toggle") is True
        assert await disable_integration(session, name="missing") is False
        await session.commit()

    async with async_session_maker() as session:
        row = (await session.execute(select(Integration).where(Integration.name == "toggle"))).scalars().one()
        assert row.enabled is False

        again = await set_integration_enabled(session, integration_id=row.id, enabled=True)
        assert again is not None and again.enabled is True


async def test_target_must_be_unambiguous(async_session_maker):
    async with async_session_maker() as session:
        with pytest.raises(ValueError):
            await set_integration_enabled(session, enabled=False)
        with pytest.raises(ValueError):
            await set_integration_enabled(session, integration_id=1, name="x", enabled=False)
