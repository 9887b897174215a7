"""Adapters concretos para o LINE (wiring em app/bootstrap).

Este módulo é o único autorizado a acoplar app <-> api na entrega de respostas.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import httpx

from api.connectors.line.http_base import HttpError
from app.observability import get_correlation_id, record_line_api_request
from app.protocols.delivery import DeliveryError, DeliveryPortProtocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from api.connectors.line.http_client import LineHttpClient
    from app.domain.line_messages import OutgoingMessage

logger = logging.getLogger(__name__)


class LineReplyDelivery(DeliveryPortProtocol):
    """DeliveryPort sobre o endpoint de reply do Messaging API."""

    def __init__(self, client: LineHttpClient) -> None:
        self._client = client

    async def reply(
        self,
        reply_token: str,
        messages: Sequence[OutgoingMessage],
    ) -> None:
        started_at = time.perf_counter()
        success = False
        try:
            await self._client.reply_message(reply_token, messages)
            success = True
        except HttpError as exc:
            raise DeliveryError(
                str(exc),
                status_code=exc.status_code,
                is_retryable=exc.is_retryable,
            ) from exc
        except httpx.HTTPError as exc:
            raise DeliveryError(f"http_transport_error:{type(exc).__name__}") from exc
        except ValueError as exc:
            # Token de acesso ausente ou lote fora do limite de mensagens
            raise DeliveryError(str(exc)) from exc
        finally:
            record_line_api_request(
                "reply",
                (time.perf_counter() - started_at) * 1000,
                success,
                get_correlation_id() or None,
            )
