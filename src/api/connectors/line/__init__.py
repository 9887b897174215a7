"""Conector LINE - adapter de borda para o Messaging API.

Este módulo é o único ponto de IO para o canal LINE.
Responsabilidades:
- Webhook (assinatura, decodificação do lote)
- HTTP client para o Messaging API
- Erros do Messaging API
"""

from .http_client import LineHttpClient, create_line_http_client
from .line_errors import LineApiError, is_permanent_error, parse_line_error
from .signature import (
    SignatureResult,
    check_signature,
    compute_line_signature,
    verify_line_signature,
)

__all__ = [
    "LineApiError",
    "LineHttpClient",
    "SignatureResult",
    "check_signature",
    "compute_line_signature",
    "create_line_http_client",
    "is_permanent_error",
    "parse_line_error",
    "verify_line_signature",
]
