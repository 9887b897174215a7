"""Testes da identificação do chamador e dos headers de rate limit."""

from __future__ import annotations

import pytest
from starlette.requests import Request

from api.routes.line.rate_limit import (
    UNKNOWN_CALLER,
    extract_rate_limit_key,
    rate_limit_headers,
    retry_after_seconds,
)
from app.infra.ratelimit import RateLimitAllowed, RateLimitExceeded


def _request(headers: dict[str, str], client: tuple[str, int] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/webhook",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": client,
    }
    return Request(scope)


def test_key_from_first_forwarded_address() -> None:
    request = _request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}, ("10.0.0.2", 1234))
    assert extract_rate_limit_key(request) == "203.0.113.7"


def test_key_from_real_ip() -> None:
    request = _request({"X-Real-IP": "203.0.113.9"}, ("10.0.0.2", 1234))
    assert extract_rate_limit_key(request) == "203.0.113.9"


def test_key_from_connection() -> None:
    assert extract_rate_limit_key(_request({}, ("10.0.0.2", 1234))) == "10.0.0.2"


def test_key_fallback_unknown() -> None:
    assert extract_rate_limit_key(_request({"X-Forwarded-For": " "})) == UNKNOWN_CALLER


def test_allowed_headers_round_reset_up() -> None:
    headers = rate_limit_headers(RateLimitAllowed(remaining=4, reset_after=12.2))
    assert headers == {"X-RateLimit-Remaining": "4", "X-RateLimit-Reset": "13"}


def test_exceeded_headers() -> None:
    headers = rate_limit_headers(RateLimitExceeded(retry_after=30.01))
    assert headers == {"Retry-After": "31", "X-RateLimit-Remaining": "0"}


@pytest.mark.parametrize(("retry_after", "expected"), [(0.0, 1), (0.2, 1), (1.0, 1), (59.5, 60)])
def test_retry_after_is_positive_whole_seconds(retry_after: float, expected: int) -> None:
    assert retry_after_seconds(RateLimitExceeded(retry_after=retry_after)) == expected


def test_no_decision_no_headers() -> None:
    assert rate_limit_headers(None) == {}
