"""Gerenciamento de correlation_id para rastreamento de requisições.

O correlation_id de cada POST /webhook é injetado em todos os logs
emitidos durante o processamento (inclusive em tasks de background,
que herdam o contexto no momento em que são criadas).
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

# Headers aceitos como origem do correlation_id, em ordem de prioridade
CORRELATION_HEADERS = ("x-correlation-id", "x-line-request-id")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None/vazio, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def correlation_id_from_headers(headers: Mapping[str, str]) -> str | None:
    """Extrai o correlation_id dos headers da requisição, se houver."""
    for name in CORRELATION_HEADERS:
        value = headers.get(name)
        if value:
            return value
    return None
