"""Contexto compartilhado do processo.

Construído uma vez no startup e exposto em `app.state.context`; toda
requisição usa as mesmas instâncias de limitador, cliente HTTP e pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from api.connectors.line.http_client import create_line_http_client
from api.validators.line import TextContentValidator
from app.bootstrap.line_adapters import LineReplyDelivery
from app.coordinators.line.ingestion import IngestionPipeline
from app.infra.ratelimit import RateLimiter, RateLimiterConfig
from app.services.event_dispatcher import EventDispatcher
from app.services.line_fixed_replies import ReplyTextClassifier
from config.settings import get_line_settings, get_rate_limit_settings

if TYPE_CHECKING:
    from api.connectors.line.http_client import LineHttpClient
    from app.protocols.delivery import DeliveryPortProtocol
    from config.settings import LineSettings, RateLimitSettings


@dataclass(slots=True)
class AppContext:
    """Dependências de longa duração do serviço."""

    pipeline: IngestionPipeline
    rate_limiter: RateLimiter
    http_client: LineHttpClient | None
    processing_mode: str

    async def aclose(self) -> None:
        """Libera recursos (varredura do limitador e pool HTTP)."""
        await self.rate_limiter.stop()
        if self.http_client is not None:
            await self.http_client.aclose()


def rate_limiter_config_from_settings(settings: RateLimitSettings) -> RateLimiterConfig:
    return RateLimiterConfig(
        max_requests=settings.max_requests,
        window_seconds=settings.window_seconds,
        cleanup_interval_seconds=settings.cleanup_interval_seconds,
    )


def create_app_context(
    line_settings: LineSettings | None = None,
    rate_limit_settings: RateLimitSettings | None = None,
    *,
    delivery: DeliveryPortProtocol | None = None,
    rate_limiter: RateLimiter | None = None,
) -> AppContext:
    """Monta o contexto a partir das settings.

    Args:
        line_settings: Settings do canal (default: ambiente)
        rate_limit_settings: Settings do limitador (default: ambiente)
        delivery: DeliveryPort alternativo; se None, usa o cliente HTTP do LINE
        rate_limiter: Limitador alternativo (ex: com relógio controlado em testes)
    """
    line = line_settings or get_line_settings()
    limits = rate_limit_settings or get_rate_limit_settings()

    limiter = rate_limiter or RateLimiter(
        rate_limiter_config_from_settings(limits),
        shard_count=limits.shard_count,
    )

    http_client: LineHttpClient | None = None
    if delivery is None:
        http_client = create_line_http_client(line)
        delivery = LineReplyDelivery(http_client)

    dispatcher = EventDispatcher(
        text_validator=TextContentValidator(),
        classifier=ReplyTextClassifier(),
        delivery_timeout_seconds=line.delivery_timeout_seconds,
    )
    pipeline = IngestionPipeline(
        channel_secret=line.channel_secret,
        rate_limiter=limiter,
        dispatcher=dispatcher,
        delivery=delivery,
        rejection_delay_seconds=limits.rejection_delay_ms / 1000,
    )
    return AppContext(
        pipeline=pipeline,
        rate_limiter=limiter,
        http_client=http_client,
        processing_mode=line.webhook_processing_mode,
    )
