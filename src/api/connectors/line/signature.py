"""Validação de assinatura HMAC-SHA256 do webhook LINE.

Header esperado: `X-Line-Signature: sha256=<base64(HMAC-SHA256(secret, corpo))>`.
A verificação usa sempre os bytes exatamente como chegaram no fio.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from dataclasses import dataclass

SIGNATURE_HEADER = "x-line-signature"
SIGNATURE_PREFIX = "sha256="


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da checagem de assinatura (sem dados sensíveis)."""

    valid: bool
    error: str | None = None


def compute_line_signature(secret: bytes, raw_body: bytes) -> str:
    """Gera o valor do header de assinatura para um corpo.

    Args:
        secret: Channel secret em bytes
        raw_body: Corpo bruto

    Returns:
        Valor no formato `sha256=<base64>`
    """
    digest = hmac.new(secret, raw_body, hashlib.sha256).digest()
    return SIGNATURE_PREFIX + base64.b64encode(digest).decode("ascii")


def decode_signature_header(header_value: str) -> bytes | None:
    """Extrai o digest do header.

    Returns:
        Bytes do digest, ou None se o prefixo faltar ou o base64 for inválido.
    """
    if not header_value.startswith(SIGNATURE_PREFIX):
        return None
    try:
        return base64.b64decode(header_value[len(SIGNATURE_PREFIX):], validate=True)
    except (binascii.Error, ValueError):
        return None


def verify_line_signature(secret: bytes, raw_body: bytes, header_value: str) -> bool:
    """Valida assinatura HMAC-SHA256 do LINE.

    Args:
        secret: Channel secret em bytes
        raw_body: Corpo bruto da requisição
        header_value: Valor do header X-Line-Signature

    Returns:
        True se assinatura válida. Prefixo ausente ou base64 inválido
        resultam em False, nunca em exceção.
    """
    provided = decode_signature_header(header_value)
    if provided is None:
        return False

    computed = hmac.new(secret, raw_body, hashlib.sha256).digest()
    return hmac.compare_digest(computed, provided)


def check_signature(
    raw_body: bytes,
    header_value: str | None,
    secret: str,
) -> SignatureResult:
    """Classifica o header de assinatura de uma requisição.

    Distingue header ausente/ilegível (requisição malformada) de
    assinatura divergente (não autenticada).

    Args:
        raw_body: Corpo bruto
        header_value: Valor do header, ou None se ausente
        secret: Channel secret configurado

    Returns:
        SignatureResult com error em
        {"missing_signature", "malformed_signature", "missing_secret", "signature_mismatch"}
    """
    if not header_value:
        return SignatureResult(valid=False, error="missing_signature")

    if decode_signature_header(header_value) is None:
        return SignatureResult(valid=False, error="malformed_signature")

    if not secret:
        return SignatureResult(valid=False, error="missing_secret")

    if not verify_line_signature(secret.encode("utf-8"), raw_body, header_value):
        return SignatureResult(valid=False, error="signature_mismatch")

    return SignatureResult(valid=True)
