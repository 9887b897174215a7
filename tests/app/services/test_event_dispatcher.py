"""Testes do despacho de eventos do webhook LINE."""

from __future__ import annotations

import logging

import pytest

from api.validators.line import TextContentValidator
from app.constants.line_fixed_replies import (
    FOLLOW_WELCOME_TEXT,
    GREETING_TEXT,
    IMAGE_ACK_TEXT,
    INVALID_CONTENT_TEXT,
    JOIN_WELCOME_TEXT,
    STICKER_ACK_TEXT,
)
from app.domain.line_events import WebhookBatch
from app.domain.line_messages import TextMessage
from app.services.event_dispatcher import (
    DeliveryFailedError,
    DispatchError,
    EventDispatcher,
    InvalidReplyTokenError,
)
from app.services.line_fixed_replies import ReplyTextClassifier
from tests.fakes.fake_delivery import FakeDelivery
from tests.fakes.line_payloads import (
    REPLY_TOKEN,
    USER_ID,
    follow_event,
    image_event,
    join_event,
    leave_event,
    postback_event,
    sticker_event,
    text_event,
    unfollow_event,
)


def _event(raw: dict):
    return WebhookBatch.model_validate({"destination": "U1", "events": [raw]}).events[0]


@pytest.fixture
def dispatcher() -> EventDispatcher:
    return EventDispatcher(
        text_validator=TextContentValidator(),
        classifier=ReplyTextClassifier(),
        delivery_timeout_seconds=0.05,
    )


@pytest.fixture
def delivery() -> FakeDelivery:
    return FakeDelivery()


@pytest.mark.asyncio
async def test_hello_replies_with_single_greeting(
    dispatcher: EventDispatcher, delivery: FakeDelivery
) -> None:
    result = await dispatcher.dispatch(_event(text_event("hello")), delivery)

    assert result.event_type == "message"
    assert result.replied
    assert len(delivery.calls) == 1
    assert delivery.calls[0].reply_token == REPLY_TOKEN
    assert delivery.calls[0].messages == [TextMessage(text=GREETING_TEXT)]


@pytest.mark.asyncio
async def test_echo_reply(dispatcher: EventDispatcher, delivery: FakeDelivery) -> None:
    await dispatcher.dispatch(_event(text_event("echo abc")), delivery)
    assert delivery.calls[0].messages == [TextMessage(text="Eco: abc")]


@pytest.mark.asyncio
async def test_time_reply(dispatcher: EventDispatcher, delivery: FakeDelivery) -> None:
    await dispatcher.dispatch(_event(text_event("time")), delivery)
    [message] = delivery.calls[0].messages
    assert isinstance(message, TextMessage)
    assert message.text.startswith("Hora atual: ")
    assert message.text.endswith(" UTC")


@pytest.mark.asyncio
async def test_invalid_content_gets_generic_refusal(
    dispatcher: EventDispatcher,
    delivery: FakeDelivery,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.INFO):
        await dispatcher.dispatch(_event(text_event("compre spam barato")), delivery)

    assert delivery.calls[0].messages == [TextMessage(text=INVALID_CONTENT_TEXT)]
    assert any(getattr(r, "reason", None) == "forbidden" for r in caplog.records)
    assert "compre spam barato" not in caplog.text


@pytest.mark.asyncio
async def test_invalid_reply_token_short_circuits(
    dispatcher: EventDispatcher, delivery: FakeDelivery
) -> None:
    with pytest.raises(InvalidReplyTokenError) as exc_info:
        await dispatcher.dispatch(_event(text_event("hello", reply_token="short")), delivery)

    assert exc_info.value.code == "invalid_length"
    assert isinstance(exc_info.value, DispatchError)
    assert delivery.calls == []


@pytest.mark.asyncio
async def test_invalid_reply_token_checked_before_content(
    dispatcher: EventDispatcher, delivery: FakeDelivery
) -> None:
    with pytest.raises(InvalidReplyTokenError):
        await dispatcher.dispatch(_event(text_event("spam", reply_token="bad token!")), delivery)
    assert delivery.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (sticker_event(), STICKER_ACK_TEXT),
        (image_event(), IMAGE_ACK_TEXT),
        (follow_event(), FOLLOW_WELCOME_TEXT),
        (join_event(), JOIN_WELCOME_TEXT),
        (postback_event("action=buy&id=1"), "Postback recebido: action=buy&id=1"),
    ],
)
async def test_fixed_replies_per_event_kind(
    dispatcher: EventDispatcher,
    delivery: FakeDelivery,
    raw: dict,
    expected: str,
) -> None:
    await dispatcher.dispatch(_event(raw), delivery)
    assert delivery.calls[0].messages == [TextMessage(text=expected)]


@pytest.mark.asyncio
async def test_sticker_bypasses_text_validation(delivery: FakeDelivery) -> None:
    class _RejectAll:
        def validate(self, text: str) -> None:
            raise AssertionError("não deveria validar")

    dispatcher = EventDispatcher(_RejectAll(), ReplyTextClassifier())
    await dispatcher.dispatch(_event(sticker_event()), delivery)
    assert delivery.calls[0].messages == [TextMessage(text=STICKER_ACK_TEXT)]


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", [unfollow_event(), leave_event()])
async def test_events_without_reply_token_are_noops(
    dispatcher: EventDispatcher, delivery: FakeDelivery, raw: dict
) -> None:
    result = await dispatcher.dispatch(_event(raw), delivery)
    assert not result.replied
    assert delivery.calls == []


@pytest.mark.asyncio
async def test_empty_classifier_output_sends_nothing(delivery: FakeDelivery) -> None:
    class _Silent:
        def classify(self, text: str) -> list:
            return []

    dispatcher = EventDispatcher(TextContentValidator(), _Silent())
    result = await dispatcher.dispatch(_event(text_event("hello")), delivery)
    assert not result.replied
    assert delivery.calls == []


@pytest.mark.asyncio
async def test_delivery_error_becomes_delivery_failed(dispatcher: EventDispatcher) -> None:
    delivery = FakeDelivery(failing_tokens={REPLY_TOKEN})
    with pytest.raises(DeliveryFailedError) as exc_info:
        await dispatcher.dispatch(_event(text_event("hello")), delivery)

    assert exc_info.value.status_code == 500
    assert len(delivery.calls) == 1


@pytest.mark.asyncio
async def test_delivery_timeout_becomes_delivery_failed(dispatcher: EventDispatcher) -> None:
    delivery = FakeDelivery(hanging_tokens={REPLY_TOKEN})
    with pytest.raises(DeliveryFailedError, match="timeout"):
        await dispatcher.dispatch(_event(text_event("hello")), delivery)
    assert len(delivery.calls) == 1


@pytest.mark.asyncio
async def test_user_id_is_masked_in_logs(
    dispatcher: EventDispatcher,
    delivery: FakeDelivery,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.INFO):
        await dispatcher.dispatch(_event(text_event("hello")), delivery)

    assert USER_ID not in caplog.text
    started = [r for r in caplog.records if r.getMessage() == "event_dispatch_started"]
    assert started[0].user_id == "U01...def"
