"""Settings específicas do canal LINE.

Configurações do Messaging API (webhook + envio de respostas).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes do Messaging API
LINE_API_BASE_URL: str = "https://api.line.me/v2/bot"

PROCESSING_MODES = ("async", "inline")


@dataclass(frozen=True)
class LineSettings:
    """Configurações do canal LINE.

    Attributes:
        channel_secret: Secret do canal para validação HMAC do webhook
        channel_access_token: Token de acesso ao Messaging API
        api_base_url: URL base do Messaging API
        request_timeout_seconds: Timeout por requisição HTTP
        max_retries: Máximo de tentativas em erro transitório
        delivery_timeout_seconds: Limite total para entregar a resposta de um evento
        webhook_processing_mode: Modo de processamento do webhook (async|inline)
        host: Interface de bind do servidor
        port: Porta de bind do servidor
    """

    # Credenciais
    channel_secret: str = ""
    channel_access_token: str = ""

    # API
    api_base_url: str = LINE_API_BASE_URL

    # Timeouts e retries
    request_timeout_seconds: float = 10.0
    max_retries: int = 2
    delivery_timeout_seconds: float = 15.0

    # Webhook processing
    webhook_processing_mode: str = "inline"

    # Servidor
    host: str = "0.0.0.0"
    port: int = 3000

    def get_endpoint(self, path: str) -> str:
        """Retorna URL completa para um path do Messaging API.

        Args:
            path: Path relativo (ex: "message/reply")

        Returns:
            URL no formato https://api.line.me/v2/bot/{path}
        """
        return f"{self.api_base_url.rstrip('/')}/{path.lstrip('/')}"

    def validate(self) -> list[str]:
        """Valida configurações mínimas do canal.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.channel_secret:
            errors.append("LINE_CHANNEL_SECRET não configurado")

        if not self.channel_access_token:
            errors.append("LINE_CHANNEL_ACCESS_TOKEN não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("LINE_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.delivery_timeout_seconds <= 0:
            errors.append("LINE_DELIVERY_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("LINE_MAX_RETRIES deve ser >= 0")

        if self.webhook_processing_mode not in PROCESSING_MODES:
            errors.append("LINE_WEBHOOK_PROCESSING_MODE deve ser 'async' ou 'inline'")

        if not 0 < self.port < 65536:
            errors.append("PORT deve estar entre 1 e 65535")

        return errors


def _load_from_env() -> LineSettings:
    """Carrega LineSettings a partir de variáveis de ambiente."""
    environment = os.getenv("ENVIRONMENT", "").lower()
    default_processing_mode = (
        "async" if environment in ("staging", "stage", "production", "prod") else "inline"
    )
    return LineSettings(
        channel_secret=os.getenv("LINE_CHANNEL_SECRET", ""),
        channel_access_token=os.getenv("LINE_CHANNEL_ACCESS_TOKEN", ""),
        api_base_url=os.getenv("LINE_API_BASE_URL", LINE_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("LINE_REQUEST_TIMEOUT_SECONDS", "10")),
        max_retries=int(os.getenv("LINE_MAX_RETRIES", "2")),
        delivery_timeout_seconds=float(os.getenv("LINE_DELIVERY_TIMEOUT_SECONDS", "15")),
        webhook_processing_mode=os.getenv(
            "LINE_WEBHOOK_PROCESSING_MODE", default_processing_mode
        ).lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
    )


@lru_cache(maxsize=1)
def get_line_settings() -> LineSettings:
    """Retorna instância cacheada de LineSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
