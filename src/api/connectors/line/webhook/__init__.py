"""Recebimento do webhook LINE: autenticação e decodificação."""

from .receive import (
    authenticate_webhook_request,
    decode_webhook_batch,
)

__all__ = [
    "authenticate_webhook_request",
    "decode_webhook_batch",
]
