"""Despacho de um evento do webhook LINE para zero ou mais respostas.

Classificação exaustiva sobre a união fechada de eventos. Cada evento
gera no máximo uma chamada ao DeliveryPort; falhas são reportadas como
DispatchError e não têm retry aqui (política do cliente de entrega).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, assert_never

from api.validators.line import mask_user_id, validate_reply_token
from app.constants.line_fixed_replies import (
    FOLLOW_WELCOME_TEXT,
    IMAGE_ACK_TEXT,
    INVALID_CONTENT_TEXT,
    JOIN_WELCOME_TEXT,
    POSTBACK_PREFIX,
    STICKER_ACK_TEXT,
)
from app.domain.line_events import (
    FollowEvent,
    ImageContent,
    JoinEvent,
    LeaveEvent,
    MessageEvent,
    PostbackEvent,
    StickerContent,
    TextContent,
    UnfollowEvent,
    source_user_id,
)
from app.domain.line_messages import text_message
from app.observability import get_correlation_id, record_webhook_event
from app.protocols.delivery import DeliveryError
from app.protocols.validator import ValidationError
from config.logging import log_fallback

if TYPE_CHECKING:
    from app.domain.line_events import InboundEvent
    from app.domain.line_messages import OutgoingMessage
    from app.protocols.classifier import ReplyTextClassifierProtocol
    from app.protocols.delivery import DeliveryPortProtocol
    from app.protocols.validator import TextContentValidatorProtocol

logger = logging.getLogger(__name__)

DEFAULT_DELIVERY_TIMEOUT_SECONDS = 15.0


class DispatchError(Exception):
    """Falha ao despachar um único evento (nunca aborta o lote)."""

    def __init__(self, event_type: str, reason: str) -> None:
        super().__init__(f"{event_type}: {reason}")
        self.event_type = event_type
        self.reason = reason


class InvalidReplyTokenError(DispatchError):
    """Reply token estruturalmente inválido; nenhuma resposta enviada."""

    def __init__(self, event_type: str, code: str) -> None:
        super().__init__(event_type, f"invalid_reply_token:{code}")
        self.code = code


class DeliveryFailedError(DispatchError):
    """DeliveryPort falhou ou excedeu o timeout."""

    def __init__(
        self,
        event_type: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(event_type, f"delivery_failed:{reason}")
        self.status_code = status_code


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Resultado do despacho de um evento.

    Attributes:
        event_type: Tipo do evento despachado
        messages: Respostas entregues (vazia = nenhuma resposta)
    """

    event_type: str
    messages: tuple[OutgoingMessage, ...] = field(default_factory=tuple)

    @property
    def replied(self) -> bool:
        return bool(self.messages)


class EventDispatcher:
    """Classifica um evento e entrega as respostas via DeliveryPort.

    Colaboradores injetados:
    - text_validator: política de conteúdo para texto recebido
    - classifier: vocabulário de comandos -> mensagens de resposta
    """

    def __init__(
        self,
        text_validator: TextContentValidatorProtocol,
        classifier: ReplyTextClassifierProtocol,
        delivery_timeout_seconds: float = DEFAULT_DELIVERY_TIMEOUT_SECONDS,
    ) -> None:
        self._text_validator = text_validator
        self._classifier = classifier
        self._delivery_timeout_seconds = delivery_timeout_seconds

    async def dispatch(
        self,
        event: InboundEvent,
        delivery: DeliveryPortProtocol,
    ) -> DispatchResult:
        """Despacha um evento.

        Raises:
            InvalidReplyTokenError: Reply token de evento message inválido
            DeliveryFailedError: Falha ou timeout na entrega da resposta
        """
        record_webhook_event(event.type, get_correlation_id() or None)
        logger.info(
            "event_dispatch_started",
            extra={
                "event_type": event.type,
                "source_type": event.source.type,
                "user_id": mask_user_id(source_user_id(event.source)),
            },
        )

        if isinstance(event, MessageEvent):
            _check_reply_token(event)
            messages = self._reply_for_message(event)
            reply_token: str | None = event.reply_token
        elif isinstance(event, FollowEvent):
            messages = [text_message(FOLLOW_WELCOME_TEXT)]
            reply_token = event.reply_token
        elif isinstance(event, JoinEvent):
            messages = [text_message(JOIN_WELCOME_TEXT)]
            reply_token = event.reply_token
        elif isinstance(event, PostbackEvent):
            messages = [text_message(f"{POSTBACK_PREFIX}{event.postback.data}")]
            reply_token = event.reply_token
        elif isinstance(event, UnfollowEvent | LeaveEvent):
            # Sem reply token no fio: apenas telemetria
            messages = []
            reply_token = None
        else:
            assert_never(event)

        if messages and reply_token is not None:
            await self._deliver(event.type, reply_token, messages, delivery)

        return DispatchResult(event_type=event.type, messages=tuple(messages))

    def _reply_for_message(self, event: MessageEvent) -> list[OutgoingMessage]:
        content = event.message
        if isinstance(content, TextContent):
            try:
                self._text_validator.validate(content.text)
            except ValidationError as exc:
                log_fallback(logger, "event_dispatcher", reason=exc.code)
                return [text_message(INVALID_CONTENT_TEXT)]
            return self._classifier.classify(content.text)
        if isinstance(content, StickerContent):
            return [text_message(STICKER_ACK_TEXT)]
        if isinstance(content, ImageContent):
            return [text_message(IMAGE_ACK_TEXT)]
        assert_never(content)

    async def _deliver(
        self,
        event_type: str,
        reply_token: str,
        messages: list[OutgoingMessage],
        delivery: DeliveryPortProtocol,
    ) -> None:
        try:
            await asyncio.wait_for(
                delivery.reply(reply_token, messages),
                timeout=self._delivery_timeout_seconds,
            )
        except TimeoutError as exc:
            raise DeliveryFailedError(event_type, "timeout") from exc
        except DeliveryError as exc:
            raise DeliveryFailedError(
                event_type,
                "delivery_error",
                status_code=exc.status_code,
            ) from exc

        logger.info(
            "event_reply_delivered",
            extra={"event_type": event_type, "message_count": len(messages)},
        )


def _check_reply_token(event: MessageEvent) -> None:
    try:
        validate_reply_token(event.reply_token)
    except ValidationError as exc:
        raise InvalidReplyTokenError(event.type, exc.code) from exc
