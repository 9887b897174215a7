"""Protocolo de entrega de respostas (reply endpoint do LINE)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.line_messages import OutgoingMessage


class DeliveryError(Exception):
    """Falha ao entregar respostas de um evento.

    Attributes:
        status_code: Status HTTP da API, quando houve resposta
        is_retryable: Se o próprio cliente considera a falha transitória
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


class DeliveryPortProtocol(Protocol):
    """Contrato mínimo para responder um evento via reply token."""

    async def reply(
        self,
        reply_token: str,
        messages: Sequence[OutgoingMessage],
    ) -> None: ...
