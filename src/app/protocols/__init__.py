"""Protocolos e contratos do core da aplicação."""

from .classifier import ReplyTextClassifierProtocol
from .delivery import DeliveryError, DeliveryPortProtocol
from .validator import TextContentValidatorProtocol, ValidationError

__all__ = [
    "DeliveryError",
    "DeliveryPortProtocol",
    "ReplyTextClassifierProtocol",
    "TextContentValidatorProtocol",
    "ValidationError",
]
