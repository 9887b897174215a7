"""Testes do pipeline de ingestão (estados, rejeições e isolamento de falhas)."""

from __future__ import annotations

import asyncio
import logging
import time

import pytest

from api.validators.line import TextContentValidator
from app.coordinators.line.ingestion import IngestionPipeline, PipelineState
from app.infra.ratelimit import (
    RateLimitAllowed,
    RateLimiter,
    RateLimiterConfig,
    RateLimitExceeded,
)
from app.services.event_dispatcher import EventDispatcher
from app.services.line_fixed_replies import ReplyTextClassifier
from tests.fakes.fake_delivery import FakeClock, FakeDelivery
from tests.fakes.line_payloads import (
    CHANNEL_SECRET,
    batch_body,
    leave_event,
    sign,
    text_event,
)

TOKEN_1 = "replytoken-0001"
TOKEN_2 = "replytoken-0002"
TOKEN_3 = "replytoken-0003"


def _pipeline(
    delivery: FakeDelivery,
    max_requests: int = 10,
    clock: FakeClock | None = None,
    rejection_delay_seconds: float = 0.0,
) -> IngestionPipeline:
    limiter = RateLimiter(
        RateLimiterConfig(max_requests=max_requests, window_seconds=60),
        clock=clock or FakeClock(),
    )
    dispatcher = EventDispatcher(
        text_validator=TextContentValidator(),
        classifier=ReplyTextClassifier(),
        delivery_timeout_seconds=1.0,
    )
    return IngestionPipeline(
        channel_secret=CHANNEL_SECRET,
        rate_limiter=limiter,
        dispatcher=dispatcher,
        delivery=delivery,
        rejection_delay_seconds=rejection_delay_seconds,
    )


@pytest.mark.asyncio
async def test_signed_empty_batch_completes() -> None:
    body = batch_body()
    outcome = await _pipeline(FakeDelivery()).run(body, sign(body), "203.0.113.7")

    assert outcome.state is PipelineState.COMPLETED
    assert outcome.status_code == 200
    assert outcome.accepted
    assert isinstance(outcome.rate_limit, RateLimitAllowed)
    assert outcome.summary is not None
    assert outcome.summary.processed == 0


@pytest.mark.asyncio
async def test_events_dispatched_in_order() -> None:
    delivery = FakeDelivery()
    body = batch_body(
        text_event("hello", TOKEN_1),
        leave_event(),
        text_event("help", TOKEN_2),
        text_event("echo x", TOKEN_3),
    )

    outcome = await _pipeline(delivery).run(body, sign(body), "k")

    assert delivery.tokens == [TOKEN_1, TOKEN_2, TOKEN_3]
    assert outcome.summary is not None
    assert outcome.summary.processed == 4
    assert outcome.summary.replied == 3
    assert outcome.summary.skipped == 1
    assert outcome.summary.failed == 0


@pytest.mark.asyncio
async def test_partial_failure_is_isolated(caplog: pytest.LogCaptureFixture) -> None:
    delivery = FakeDelivery(failing_tokens={TOKEN_2})
    body = batch_body(
        text_event("hello", TOKEN_1),
        text_event("hello", TOKEN_2),
        text_event("hello", TOKEN_3),
    )

    with caplog.at_level(logging.WARNING):
        outcome = await _pipeline(delivery).run(body, sign(body), "k")

    assert delivery.tokens == [TOKEN_1, TOKEN_2, TOKEN_3]
    assert outcome.status_code == 200
    assert outcome.state is PipelineState.COMPLETED
    assert outcome.summary is not None
    assert outcome.summary.failed == 1
    assert outcome.summary.replied == 2
    assert "event_dispatch_failed" in caplog.text


@pytest.mark.asyncio
async def test_unexpected_exception_in_one_event_does_not_abort_batch(
    caplog: pytest.LogCaptureFixture,
) -> None:
    class _ExplodingOnSecond(FakeDelivery):
        async def reply(self, reply_token, messages):  # type: ignore[override]
            await super().reply(reply_token, messages)
            if reply_token == TOKEN_2:
                raise RuntimeError("boom")

    delivery = _ExplodingOnSecond()
    body = batch_body(
        text_event("hello", TOKEN_1),
        text_event("hello", TOKEN_2),
        text_event("hello", TOKEN_3),
    )

    with caplog.at_level(logging.ERROR):
        outcome = await _pipeline(delivery).run(body, sign(body), "k")

    assert delivery.tokens == [TOKEN_1, TOKEN_2, TOKEN_3]
    assert outcome.summary is not None
    assert outcome.summary.failed == 1
    assert "event_dispatch_unexpected_error" in caplog.text


@pytest.mark.asyncio
async def test_invalid_reply_token_counts_as_failed_event() -> None:
    delivery = FakeDelivery()
    body = batch_body(text_event("hello", "bad"), text_event("hello", TOKEN_1))

    outcome = await _pipeline(delivery).run(body, sign(body), "k")

    assert delivery.tokens == [TOKEN_1]
    assert outcome.summary is not None
    assert outcome.summary.failed == 1


@pytest.mark.asyncio
async def test_missing_signature_is_malformed() -> None:
    delivery = FakeDelivery()
    outcome = await _pipeline(delivery).run(batch_body(text_event("hi")), None, "k")

    assert outcome.state is PipelineState.REJECTED_MALFORMED
    assert outcome.status_code == 400
    assert outcome.detail == "missing_signature"
    assert outcome.rate_limit is None
    assert delivery.calls == []


@pytest.mark.asyncio
async def test_unparseable_signature_is_malformed() -> None:
    outcome = await _pipeline(FakeDelivery()).run(batch_body(), "sha256=???", "k")
    assert outcome.state is PipelineState.REJECTED_MALFORMED
    assert outcome.status_code == 400


@pytest.mark.asyncio
async def test_wrong_signature_is_rejected_auth() -> None:
    body = batch_body(text_event("hi"))
    outcome = await _pipeline(FakeDelivery()).run(body, sign(body, "other"), "k")

    assert outcome.state is PipelineState.REJECTED_AUTH
    assert outcome.status_code == 401


@pytest.mark.asyncio
async def test_auth_rejection_does_not_consume_quota() -> None:
    pipeline = _pipeline(FakeDelivery(), max_requests=1)
    body = batch_body()
    for _ in range(3):
        await pipeline.run(body, sign(body, "other"), "k")

    outcome = await pipeline.run(body, sign(body), "k")
    assert outcome.state is PipelineState.COMPLETED


@pytest.mark.asyncio
async def test_rate_limited_after_quota() -> None:
    clock = FakeClock()
    pipeline = _pipeline(FakeDelivery(), max_requests=2, clock=clock)
    body = batch_body()

    for _ in range(2):
        assert (await pipeline.run(body, sign(body), "k")).accepted
    clock.advance(20.5)
    outcome = await pipeline.run(body, sign(body), "k")

    assert outcome.state is PipelineState.REJECTED_RATE
    assert outcome.status_code == 429
    assert isinstance(outcome.rate_limit, RateLimitExceeded)
    assert outcome.rate_limit.retry_after == pytest.approx(39.5)

    assert (await pipeline.run(body, sign(body), "other-caller")).accepted


@pytest.mark.asyncio
async def test_rate_limit_rejection_is_delayed() -> None:
    pipeline = _pipeline(FakeDelivery(), max_requests=1, rejection_delay_seconds=0.05)
    body = batch_body()
    await pipeline.run(body, sign(body), "k")

    started_at = time.perf_counter()
    outcome = await pipeline.run(body, sign(body), "k")
    elapsed = time.perf_counter() - started_at

    assert outcome.status_code == 429
    assert elapsed >= 0.04


@pytest.mark.asyncio
async def test_malformed_body_after_admission_keeps_rate_limit_decision() -> None:
    body = b'{"destination": "U1", "events": [{"type": "unknown"}]}'
    outcome = await _pipeline(FakeDelivery()).run(body, sign(body), "k")

    assert outcome.state is PipelineState.REJECTED_MALFORMED
    assert outcome.status_code == 400
    assert outcome.detail == "invalid_payload"
    assert isinstance(outcome.rate_limit, RateLimitAllowed)


@pytest.mark.asyncio
async def test_scheduler_mode_returns_before_dispatch() -> None:
    delivery = FakeDelivery()
    scheduled: list[asyncio.Task[object]] = []

    def _scheduler(coroutine) -> None:  # type: ignore[no-untyped-def]
        scheduled.append(asyncio.ensure_future(coroutine))

    body = batch_body(text_event("hello", TOKEN_1))
    outcome = await _pipeline(delivery).run(body, sign(body), "k", scheduler=_scheduler)

    assert outcome.state is PipelineState.DISPATCHING
    assert outcome.status_code == 200
    assert outcome.summary is None
    assert delivery.calls == []

    await asyncio.gather(*scheduled)
    assert delivery.tokens == [TOKEN_1]
