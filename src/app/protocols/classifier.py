"""Protocolo do classificador de texto em respostas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.line_messages import OutgoingMessage


class ReplyTextClassifierProtocol(Protocol):
    """Mapeia um texto recebido para zero ou mais mensagens de resposta."""

    def classify(self, text: str) -> list[OutgoingMessage]: ...
