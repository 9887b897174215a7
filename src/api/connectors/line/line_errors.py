"""Erros e helpers de parsing para respostas de erro do Messaging API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

_UNKNOWN_ERROR = "Unknown error"


@dataclass(frozen=True)
class LineApiError:
    """Erro retornado pelo Messaging API.

    Corpo de erro do LINE: {"message": "...", "details": [{"message", "property"}]}
    """

    status_code: int
    message: str
    details: tuple[str, ...] = ()
    is_permanent: bool = True  # True se erro não é retentável


def is_permanent_error(status_code: int) -> bool:
    """Classifica erro como permanente ou transitório.

    Permanentes: 4xx exceto 429 (token expirado/usado, payload inválido, auth)
    Transitórios: 429 (rate limit) e 5xx
    """
    if status_code == 429:
        return False
    return 400 <= status_code < 500


def parse_line_error(status_code: int, response_data: Any) -> LineApiError:
    """Extrai informações de erro do corpo de resposta.

    Args:
        status_code: Status HTTP da resposta
        response_data: JSON decodificado (qualquer formato)

    Returns:
        LineApiError; a mensagem cai para os details e depois para "Unknown error"
    """
    message = ""
    details: tuple[str, ...] = ()

    if isinstance(response_data, dict):
        raw_details = response_data.get("details")
        if isinstance(raw_details, list):
            details = tuple(
                str(item.get("message", ""))
                for item in raw_details
                if isinstance(item, dict) and item.get("message")
            )
        message = str(response_data.get("message") or "")

    if not message:
        message = ", ".join(details) if details else _UNKNOWN_ERROR

    return LineApiError(
        status_code=status_code,
        message=message,
        details=details,
        is_permanent=is_permanent_error(status_code),
    )
