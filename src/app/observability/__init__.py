"""Observabilidade — correlation_id e métricas via logs estruturados.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_webhook_event, record_latency
"""

from app.observability.correlation import (
    correlation_id_from_headers,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_latency,
    record_line_api_request,
    record_rate_limited,
    record_webhook_event,
)

__all__ = [
    "correlation_id_from_headers",
    "generate_correlation_id",
    "get_correlation_id",
    "record_latency",
    "record_line_api_request",
    "record_rate_limited",
    "record_webhook_event",
    "reset_correlation_id",
    "set_correlation_id",
]
