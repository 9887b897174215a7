"""Registro de métricas via structured logging.

As métricas são logs estruturados com `metric_type`, agregáveis
posteriormente pelo backend de logs. Não há exporter nem endpoint.

Métricas suportadas:
- webhook_event: counter por tipo de evento recebido
- line_api_request: counter + latência por chamada ao Messaging API
- rate_limited: counter de requisições rejeitadas com 429
- latency: histogram genérico por componente/operação
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_webhook_event(event_type: str, correlation_id: str | None = None) -> None:
    """Registra um evento recebido no webhook."""
    logger.info(
        "metric_webhook_event",
        extra={
            "metric_type": "webhook_event",
            "event_type": event_type,
            "correlation_id": correlation_id,
        },
    )


def record_line_api_request(
    api: str,
    latency_ms: float,
    success: bool,
    correlation_id: str | None = None,
) -> None:
    """Registra uma chamada ao Messaging API.

    Args:
        api: Nome da operação (ex: "reply", "push")
        latency_ms: Latência total em milissegundos (inclui retries)
        success: Se a chamada terminou com sucesso
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_line_api_request",
        extra={
            "metric_type": "line_api_request",
            "api": api,
            "status": "success" if success else "error",
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_rate_limited(retry_after_seconds: int, correlation_id: str | None = None) -> None:
    """Registra uma requisição rejeitada pelo rate limiter."""
    logger.info(
        "metric_rate_limited",
        extra={
            "metric_type": "rate_limited",
            "retry_after_seconds": retry_after_seconds,
            "correlation_id": correlation_id,
        },
    )


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "ingestion_pipeline")
        operation: Nome da operação (ex: "dispatch_batch")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )
