"""Helpers de logging para o Messaging API (sem PII)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .line_errors import LineApiError

logger = logging.getLogger(__name__)


def log_line_error(
    line_error: LineApiError,
    method: str,
    endpoint: str,
) -> None:
    """Loga erro do LINE sem expor tokens ou conteúdo."""
    logger.warning(
        "line_api_error",
        extra={
            "method": method,
            "endpoint": endpoint,
            "status_code": line_error.status_code,
            "is_permanent": line_error.is_permanent,
            "detail_count": len(line_error.details),
        },
    )


def log_success(
    method: str,
    endpoint: str,
    status_code: int,
) -> None:
    logger.debug(
        "line_api_success",
        extra={
            "method": method,
            "endpoint": endpoint,
            "status_code": status_code,
        },
    )
