"""Identificação do chamador e headers de rate limit do webhook."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from app.infra.ratelimit import RateLimitAllowed, RateLimitExceeded

if TYPE_CHECKING:
    from fastapi import Request

    from app.infra.ratelimit import RateLimitDecision

UNKNOWN_CALLER = "unknown"


def extract_rate_limit_key(request: Request) -> str:
    """Identidade do chamador para o rate limit.

    Ordem: primeiro IP de X-Forwarded-For, X-Real-IP, endereço da conexão.
    """
    forwarded_for = request.headers.get("x-forwarded-for", "")
    first = forwarded_for.split(",")[0].strip()
    if first:
        return first

    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip

    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CALLER


def rate_limit_headers(decision: RateLimitDecision | None) -> dict[str, str]:
    """Headers da decisão do limitador (vazio se o limitador não foi consultado)."""
    if isinstance(decision, RateLimitAllowed):
        return {
            "X-RateLimit-Remaining": str(decision.remaining),
            "X-RateLimit-Reset": str(math.ceil(decision.reset_after)),
        }
    if isinstance(decision, RateLimitExceeded):
        return {
            "Retry-After": str(retry_after_seconds(decision)),
            "X-RateLimit-Remaining": "0",
        }
    return {}


def retry_after_seconds(decision: RateLimitExceeded) -> int:
    """Retry-After em segundos inteiros, arredondado para cima (mínimo 1)."""
    return max(1, math.ceil(decision.retry_after))
