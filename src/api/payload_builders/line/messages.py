"""Builders para reply, push e multicast."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.constants.line import MAX_MESSAGES_PER_REQUEST, MAX_MULTICAST_RECIPIENTS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.line_messages import OutgoingMessage


def serialize_messages(messages: Sequence[OutgoingMessage]) -> list[dict[str, Any]]:
    """Serializa mensagens com nomes camelCase e sem opcionais vazios.

    Raises:
        ValueError: Se a lista estiver vazia ou exceder o limite por requisição
    """
    if not messages:
        raise ValueError("messages não pode ser vazio")
    if len(messages) > MAX_MESSAGES_PER_REQUEST:
        raise ValueError(
            f"máximo de {MAX_MESSAGES_PER_REQUEST} mensagens por requisição"
        )
    return [message.to_wire() for message in messages]


def build_reply_payload(
    reply_token: str,
    messages: Sequence[OutgoingMessage],
    notification_disabled: bool | None = None,
) -> dict[str, Any]:
    """Constrói corpo para POST /message/reply."""
    payload: dict[str, Any] = {
        "replyToken": reply_token,
        "messages": serialize_messages(messages),
    }
    if notification_disabled is not None:
        payload["notificationDisabled"] = notification_disabled
    return payload


def build_push_payload(
    to: str,
    messages: Sequence[OutgoingMessage],
    notification_disabled: bool | None = None,
) -> dict[str, Any]:
    """Constrói corpo para POST /message/push."""
    if not to:
        raise ValueError("destinatário é obrigatório")
    payload: dict[str, Any] = {
        "to": to,
        "messages": serialize_messages(messages),
    }
    if notification_disabled is not None:
        payload["notificationDisabled"] = notification_disabled
    return payload


def build_multicast_payload(
    to: Sequence[str],
    messages: Sequence[OutgoingMessage],
    notification_disabled: bool | None = None,
) -> dict[str, Any]:
    """Constrói corpo para POST /message/multicast.

    Raises:
        ValueError: Sem destinatários ou acima do limite do multicast
    """
    if not to:
        raise ValueError("multicast exige ao menos um destinatário")
    if len(to) > MAX_MULTICAST_RECIPIENTS:
        raise ValueError(
            f"multicast aceita no máximo {MAX_MULTICAST_RECIPIENTS} destinatários"
        )
    payload: dict[str, Any] = {
        "to": list(to),
        "messages": serialize_messages(messages),
    }
    if notification_disabled is not None:
        payload["notificationDisabled"] = notification_disabled
    return payload
