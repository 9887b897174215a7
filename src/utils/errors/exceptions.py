"""Exceções compartilhadas do pipeline de ingestão do webhook.

Cada falha terminal de uma requisição mapeia para um status HTTP:
- AuthError: 400 (header ausente/ilegível) ou 401 (assinatura divergente)
- RateLimitError: 429 com Retry-After
- DecodeError: 400 (lote malformado)
"""

from __future__ import annotations


class WebhookError(ValueError):
    """Erro base para falhas terminais de uma requisição de webhook."""

    status_code: int = 400

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class AuthError(WebhookError):
    """Falha de autenticação da requisição."""

    status_code = 401


class MissingSignatureError(AuthError):
    """Header X-Line-Signature ausente."""

    status_code = 400


class MalformedSignatureError(AuthError):
    """Header de assinatura presente mas ilegível (prefixo ou base64)."""

    status_code = 400


class InvalidSignatureError(AuthError):
    """Assinatura não corresponde ao HMAC do corpo."""

    status_code = 401


class RateLimitError(WebhookError):
    """Chamador excedeu a cota da janela atual."""

    status_code = 429

    def __init__(self, reason: str, retry_after: float) -> None:
        super().__init__(reason)
        self.retry_after = retry_after


class DecodeError(WebhookError):
    """Corpo não é um lote de eventos válido."""

    status_code = 400


class InvalidJsonError(DecodeError):
    """JSON inválido ou fora do schema do webhook."""
