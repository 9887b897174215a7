"""Testes do classificador de respostas fixas."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from app.constants.line_fixed_replies import (
    FALLBACK_TEXT,
    GREETING_TEXT,
    HELP_TEXT,
    MENU_ALT_TEXT,
)
from app.domain.line_messages import (
    MessageAction,
    PostbackAction,
    StickerMessage,
    TemplateMessage,
    TextMessage,
    UriAction,
)
from app.services.line_fixed_replies import ReplyTextClassifier

FIXED_NOW = datetime(2026, 10, 17, 9, 5, 3, tzinfo=UTC)


@pytest.fixture
def classifier() -> ReplyTextClassifier:
    return ReplyTextClassifier(now=lambda: FIXED_NOW)


@pytest.mark.parametrize("text", ["hello", "Hello", "  HI  ", "oi", "Olá"])
def test_greeting(classifier: ReplyTextClassifier, text: str) -> None:
    assert classifier.classify(text) == [TextMessage(text=GREETING_TEXT)]


@pytest.mark.parametrize("text", ["help", "AJUDA"])
def test_help(classifier: ReplyTextClassifier, text: str) -> None:
    assert classifier.classify(text) == [TextMessage(text=HELP_TEXT)]


@pytest.mark.parametrize("text", ["time", "hora"])
def test_time_contains_current_timestamp(classifier: ReplyTextClassifier, text: str) -> None:
    [reply] = classifier.classify(text)
    assert isinstance(reply, TextMessage)
    assert reply.text == "Hora atual: 2026-10-17 09:05:03 UTC"


def test_time_uses_real_clock_by_default() -> None:
    [reply] = ReplyTextClassifier().classify("time")
    assert isinstance(reply, TextMessage)
    assert str(datetime.now(UTC).year) in reply.text


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("echo Hello World", "Eco: Hello World"),
        ("echo  spaced ", "Eco:  spaced "),
        ("eco olá", "Eco: olá"),
        ("echo ", "Eco: "),
    ],
)
def test_echo_returns_remainder_with_prefix(
    classifier: ReplyTextClassifier, text: str, expected: str
) -> None:
    assert classifier.classify(text) == [TextMessage(text=expected)]


def test_echo_requires_space_after_keyword(classifier: ReplyTextClassifier) -> None:
    assert classifier.classify("echoes") == [TextMessage(text=FALLBACK_TEXT)]


@pytest.mark.parametrize("text", ["ECHO hi", "Echo hi", "Eco olá"])
def test_echo_prefix_is_case_sensitive(classifier: ReplyTextClassifier, text: str) -> None:
    assert classifier.classify(text) == [TextMessage(text=FALLBACK_TEXT)]


@pytest.mark.parametrize("text", ["sticker", "Figurinha"])
def test_sticker(classifier: ReplyTextClassifier, text: str) -> None:
    assert classifier.classify(text) == [StickerMessage(package_id="1", sticker_id="1")]


def test_menu_is_buttons_template(classifier: ReplyTextClassifier) -> None:
    [reply] = classifier.classify("menu")
    assert isinstance(reply, TemplateMessage)
    assert reply.alt_text == MENU_ALT_TEXT
    assert reply.template.type == "buttons"
    assert [type(action) for action in reply.template.actions] == [
        MessageAction,
        PostbackAction,
        UriAction,
    ]


@pytest.mark.parametrize("text", ["qualquer coisa", "", "hello there"])
def test_fallback(classifier: ReplyTextClassifier, text: str) -> None:
    assert classifier.classify(text) == [TextMessage(text=FALLBACK_TEXT)]
