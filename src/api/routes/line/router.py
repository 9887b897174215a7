"""Router do canal LINE."""

from __future__ import annotations

from api.routes.line.webhook import router

__all__ = ["router"]
