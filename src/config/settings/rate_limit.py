"""Settings do rate limiter do endpoint de webhook."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class RateLimitSettings:
    """Configurações do limitador por chamador.

    Attributes:
        max_requests: Requisições admitidas por janela
        window_seconds: Duração da janela fixa
        cleanup_interval_seconds: Intervalo da varredura de entradas ociosas
        shard_count: Número de partições (locks) do mapa de contadores
        rejection_delay_ms: Atraso aplicado antes de responder 429
    """

    max_requests: int = 10
    window_seconds: float = 60.0
    cleanup_interval_seconds: float = 300.0
    shard_count: int = 16
    rejection_delay_ms: int = 100

    def validate(self) -> list[str]:
        """Valida limites do rate limiter.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if self.max_requests <= 0:
            errors.append("RATE_LIMIT_MAX_REQUESTS deve ser > 0")

        if self.window_seconds <= 0:
            errors.append("RATE_LIMIT_WINDOW_SECONDS deve ser > 0")

        if self.cleanup_interval_seconds <= 0:
            errors.append("RATE_LIMIT_CLEANUP_INTERVAL_SECONDS deve ser > 0")

        if self.shard_count <= 0:
            errors.append("RATE_LIMIT_SHARDS deve ser > 0")

        if self.rejection_delay_ms < 0:
            errors.append("RATE_LIMIT_REJECTION_DELAY_MS deve ser >= 0")

        return errors


def _load_from_env() -> RateLimitSettings:
    """Carrega RateLimitSettings de variáveis de ambiente."""
    return RateLimitSettings(
        max_requests=int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "10")),
        window_seconds=float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60")),
        cleanup_interval_seconds=float(os.getenv("RATE_LIMIT_CLEANUP_INTERVAL_SECONDS", "300")),
        shard_count=int(os.getenv("RATE_LIMIT_SHARDS", "16")),
        rejection_delay_ms=int(os.getenv("RATE_LIMIT_REJECTION_DELAY_MS", "100")),
    )


@lru_cache(maxsize=1)
def get_rate_limit_settings() -> RateLimitSettings:
    """Retorna instância cacheada de RateLimitSettings."""
    return _load_from_env()
