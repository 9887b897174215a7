"""Serviços de aplicação.

Unidades de decisão sem IO direto: despacho de eventos e respostas fixas.
A entrega das respostas chega via DeliveryPort (app/protocols).
"""

from app.services.event_dispatcher import (
    DeliveryFailedError,
    DispatchError,
    DispatchResult,
    EventDispatcher,
    InvalidReplyTokenError,
)
from app.services.line_fixed_replies import ReplyTextClassifier

__all__ = [
    "DeliveryFailedError",
    "DispatchError",
    "DispatchResult",
    "EventDispatcher",
    "InvalidReplyTokenError",
    "ReplyTextClassifier",
]
