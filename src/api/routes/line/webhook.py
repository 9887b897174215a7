"""Endpoint de webhook do LINE.

Endpoints:
- POST /webhook: recebimento de lotes de eventos

Fluxo:
1. Corpo lido como bytes crus (a assinatura cobre os bytes do fio)
2. IngestionPipeline: assinatura -> rate limit -> decodificação -> despacho
3. Resultado mapeado para status + headers de rate limit

Segurança:
- Validação HMAC obrigatória
- Resposta 200 assim que o lote é decodificado; falhas de entrega não afetam o status
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response

from api.connectors.line.signature import SIGNATURE_HEADER
from api.routes.line.rate_limit import extract_rate_limit_key, rate_limit_headers
from api.routes.line.webhook_runtime_tasks import schedule_processing_task
from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

if TYPE_CHECKING:
    from app.bootstrap.context import AppContext

logger = logging.getLogger(__name__)

router = APIRouter()

CORRELATION_RESPONSE_HEADER = "X-Correlation-Id"


@router.post("")
async def receive_webhook(request: Request) -> Response:
    """Recebe um lote de eventos do LINE."""
    context: AppContext = request.app.state.context
    token = set_correlation_id(correlation_id_from_headers(request.headers))
    try:
        raw_body = await request.body()
        scheduler = schedule_processing_task if context.processing_mode == "async" else None
        outcome = await context.pipeline.run(
            raw_body,
            request.headers.get(SIGNATURE_HEADER),
            extract_rate_limit_key(request),
            scheduler=scheduler,
        )
        headers = rate_limit_headers(outcome.rate_limit)
        headers[CORRELATION_RESPONSE_HEADER] = get_correlation_id()
        logger.info(
            "webhook_request_completed",
            extra={
                "status_code": outcome.status_code,
                "state": str(outcome.state),
                "reason": outcome.detail,
            },
        )
        return Response(
            content="OK" if outcome.accepted else (outcome.detail or ""),
            status_code=outcome.status_code,
            headers=headers,
            media_type="text/plain",
        )
    finally:
        reset_correlation_id(token)
