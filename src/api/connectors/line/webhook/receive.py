"""Autenticação e decodificação do corpo do webhook (sem PII)."""

from __future__ import annotations

import json

from pydantic import ValidationError as PydanticValidationError

from app.domain.line_events import WebhookBatch
from utils.errors import (
    InvalidJsonError,
    InvalidSignatureError,
    MalformedSignatureError,
    MissingSignatureError,
)

from ..signature import SignatureResult, check_signature


def authenticate_webhook_request(
    raw_body: bytes,
    signature_header: str | None,
    secret: str,
) -> SignatureResult:
    """Valida a assinatura do corpo bruto.

    Raises:
        MissingSignatureError: Header ausente
        MalformedSignatureError: Header sem prefixo `sha256=` ou base64 inválido
        InvalidSignatureError: Assinatura divergente (ou secret não configurado)

    Returns:
        SignatureResult válido
    """
    result = check_signature(raw_body, signature_header, secret)
    if result.valid:
        return result

    if result.error == "missing_signature":
        raise MissingSignatureError(result.error)
    if result.error == "malformed_signature":
        raise MalformedSignatureError(result.error)
    raise InvalidSignatureError(result.error or "invalid_signature")


def decode_webhook_batch(raw_body: bytes) -> WebhookBatch:
    """Decodifica o lote de eventos.

    Raises:
        InvalidJsonError: JSON inválido, não-objeto ou fora do schema

    Returns:
        WebhookBatch com eventos na ordem recebida
    """
    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    try:
        return WebhookBatch.model_validate(payload)
    except PydanticValidationError as exc:
        raise InvalidJsonError("invalid_payload") from exc
