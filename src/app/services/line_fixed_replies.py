"""Serviço determinístico de respostas fixas para mensagens de texto do LINE."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.constants.line_fixed_replies import (
    DEFAULT_STICKER_ID,
    DEFAULT_STICKER_PACKAGE_ID,
    ECHO_PREFIX,
    ECHO_PREFIXES,
    FALLBACK_TEXT,
    GREETING_TEXT,
    GREETING_TRIGGERS,
    HELP_TEXT,
    HELP_TRIGGERS,
    MENU_ALT_TEXT,
    MENU_DOCS_LABEL,
    MENU_DOCS_URI,
    MENU_HELP_LABEL,
    MENU_TEXT,
    MENU_TIME_LABEL,
    MENU_TIME_POSTBACK,
    MENU_TITLE,
    MENU_TRIGGERS,
    STICKER_TRIGGERS,
    TIME_FORMAT,
    TIME_PREFIX,
    TIME_TRIGGERS,
)
from app.domain.line_messages import (
    ButtonsTemplate,
    MessageAction,
    PostbackAction,
    TemplateMessage,
    UriAction,
    sticker_message,
    text_message,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.line_messages import OutgoingMessage


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ReplyTextClassifier:
    """Mapeia texto recebido para a resposta do vocabulário de comandos.

    Comandos são testados primeiro e ignoram caixa e espaços nas pontas.
    O prefixo de eco vale só em minúsculas, no texto original, e o restante
    é devolvido sem alteração. Texto fora do vocabulário recebe uma dica
    de ajuda.
    """

    def __init__(self, now: Callable[[], datetime] = _utc_now) -> None:
        self._now = now

    def classify(self, text: str) -> list[OutgoingMessage]:
        command = text.strip().lower()
        if command in GREETING_TRIGGERS:
            return [text_message(GREETING_TEXT)]
        if command in HELP_TRIGGERS:
            return [text_message(HELP_TEXT)]
        if command in TIME_TRIGGERS:
            return [text_message(f"{TIME_PREFIX}{self._now().strftime(TIME_FORMAT)}")]
        if command in STICKER_TRIGGERS:
            return [sticker_message(DEFAULT_STICKER_PACKAGE_ID, DEFAULT_STICKER_ID)]
        if command in MENU_TRIGGERS:
            return [build_menu_message()]

        echoed = _strip_echo_prefix(text)
        if echoed is not None:
            return [text_message(f"{ECHO_PREFIX}{echoed}")]
        return [text_message(FALLBACK_TEXT)]


def build_menu_message() -> TemplateMessage:
    """Template "buttons" com ajuda, hora atual e link de documentação."""
    template = ButtonsTemplate(
        title=MENU_TITLE,
        text=MENU_TEXT,
        actions=[
            MessageAction(label=MENU_HELP_LABEL, text=HELP_TRIGGERS[0]),
            PostbackAction(
                label=MENU_TIME_LABEL,
                data=MENU_TIME_POSTBACK,
                display_text=MENU_TIME_LABEL,
            ),
            UriAction(label=MENU_DOCS_LABEL, uri=MENU_DOCS_URI),
        ],
    )
    return TemplateMessage(alt_text=MENU_ALT_TEXT, template=template)


def _strip_echo_prefix(text: str) -> str | None:
    for prefix in ECHO_PREFIXES:
        if text.startswith(prefix):
            return text[len(prefix) :]
    return None
