"""Testes do endpoint de liveness."""

from __future__ import annotations

import pytest

from api.routes.health.router import health_check


@pytest.mark.asyncio
async def test_health_check_returns_ok() -> None:
    assert await health_check() == "OK"
