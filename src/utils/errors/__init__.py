"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthError,
    DecodeError,
    InvalidJsonError,
    InvalidSignatureError,
    MalformedSignatureError,
    MissingSignatureError,
    RateLimitError,
    WebhookError,
)

__all__ = [
    "AuthError",
    "DecodeError",
    "InvalidJsonError",
    "InvalidSignatureError",
    "MalformedSignatureError",
    "MissingSignatureError",
    "RateLimitError",
    "WebhookError",
]
