"""Rate limiting em memória para o endpoint de webhook."""

from __future__ import annotations

from app.infra.ratelimit.memory_rate_limiter import (
    RateLimitAllowed,
    RateLimitDecision,
    RateLimitEntry,
    RateLimiter,
    RateLimiterConfig,
    RateLimitExceeded,
)

__all__ = [
    "RateLimitAllowed",
    "RateLimitDecision",
    "RateLimitEntry",
    "RateLimitExceeded",
    "RateLimiter",
    "RateLimiterConfig",
]
