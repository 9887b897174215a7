"""Protocolos de validação de conteúdo inbound."""

from __future__ import annotations

from typing import Protocol


class ValidationError(Exception):
    """Erro de validação de conteúdo.

    Attributes:
        code: Motivo estável e sem PII (ex: "too_long", "forbidden")
    """

    def __init__(self, code: str, message: str | None = None) -> None:
        super().__init__(message or code)
        self.code = code


class TextContentValidatorProtocol(Protocol):
    """Contrato de política de conteúdo para texto recebido."""

    def validate(self, text: str) -> None: ...
