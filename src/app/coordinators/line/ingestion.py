"""Pipeline de ingestão do webhook LINE.

Estados:
    RECEIVED -> AUTHENTICATED -> ADMITTED -> DECODED -> DISPATCHING -> COMPLETED

Saídas antecipadas (terminais): REJECTED_AUTH (401), REJECTED_MALFORMED (400,
header ausente/ilegível ou lote malformado) e REJECTED_RATE (429).

Após a decodificação a resposta ao LINE é sempre 200: a entrega das
respostas é desacoplada do acknowledgment e falhas por evento apenas
são registradas em log.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from api.connectors.line.webhook import authenticate_webhook_request, decode_webhook_batch
from app.infra.ratelimit import RateLimitExceeded
from app.observability import get_correlation_id, record_latency, record_rate_limited
from app.services.event_dispatcher import DispatchError
from utils.errors import AuthError, DecodeError, RateLimitError

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from typing import Any

    from app.domain.line_events import WebhookBatch
    from app.infra.ratelimit import RateLimitAllowed, RateLimitDecision, RateLimiter
    from app.protocols.delivery import DeliveryPortProtocol
    from app.services.event_dispatcher import EventDispatcher

    BatchScheduler = Callable[[Coroutine[Any, Any, None]], object]

logger = logging.getLogger(__name__)


class PipelineState(StrEnum):
    RECEIVED = "received"
    AUTHENTICATED = "authenticated"
    ADMITTED = "admitted"
    DECODED = "decoded"
    DISPATCHING = "dispatching"
    COMPLETED = "completed"
    REJECTED_AUTH = "rejected_auth"
    REJECTED_RATE = "rejected_rate"
    REJECTED_MALFORMED = "rejected_malformed"


@dataclass(slots=True)
class BatchDispatchSummary:
    """Contadores do despacho de um lote."""

    processed: int = 0
    replied: int = 0
    failed: int = 0
    skipped: int = 0


@dataclass(frozen=True, slots=True)
class PipelineOutcome:
    """Estado terminal de uma execução do pipeline.

    Attributes:
        state: Último estado atingido
        status_code: Status HTTP a devolver ao LINE
        detail: Motivo estável da rejeição (None em sucesso)
        rate_limit: Decisão do limitador, quando consultado
        summary: Resumo do despacho (apenas no modo inline)
    """

    state: PipelineState
    status_code: int
    detail: str | None = None
    rate_limit: RateLimitDecision | None = None
    summary: BatchDispatchSummary | None = None

    @property
    def accepted(self) -> bool:
        return self.status_code == 200


class IngestionPipeline:
    """Orquestra assinatura -> rate limit -> decodificação -> despacho.

    Todas as dependências de longa duração (limitador, despachante,
    entrega) são compartilhadas pelo processo e injetadas aqui.
    """

    def __init__(
        self,
        *,
        channel_secret: str,
        rate_limiter: RateLimiter,
        dispatcher: EventDispatcher,
        delivery: DeliveryPortProtocol,
        rejection_delay_seconds: float = 0.0,
    ) -> None:
        self._channel_secret = channel_secret
        self._rate_limiter = rate_limiter
        self._dispatcher = dispatcher
        self._delivery = delivery
        self._rejection_delay_seconds = rejection_delay_seconds

    async def run(
        self,
        raw_body: bytes,
        signature_header: str | None,
        caller_key: str,
        scheduler: BatchScheduler | None = None,
    ) -> PipelineOutcome:
        """Executa o pipeline para uma requisição.

        Args:
            raw_body: Corpo exatamente como recebido
            signature_header: Valor de X-Line-Signature (None se ausente)
            caller_key: Identidade do chamador para o rate limit
            scheduler: Se informado, recebe a corotina de despacho do lote
                e o pipeline retorna em DISPATCHING (modo async).
                Se None, o lote é despachado antes do retorno (modo inline).
        """
        state = PipelineState.RECEIVED
        decision: RateLimitDecision | None = None
        try:
            authenticate_webhook_request(raw_body, signature_header, self._channel_secret)
            state = PipelineState.AUTHENTICATED

            decision = self._admit(caller_key)
            state = PipelineState.ADMITTED

            batch = decode_webhook_batch(raw_body)
            state = PipelineState.DECODED
        except AuthError as exc:
            return self._reject_auth(exc)
        except RateLimitError as exc:
            return await self._reject_rate(exc)
        except DecodeError as exc:
            logger.warning(
                "webhook_rejected",
                extra={"state": str(state), "reason": exc.reason},
            )
            return PipelineOutcome(
                state=PipelineState.REJECTED_MALFORMED,
                status_code=exc.status_code,
                detail=exc.reason,
                rate_limit=decision,
            )

        logger.info(
            "webhook_batch_decoded",
            extra={
                "event_count": len(batch.events),
                "mode": "inline" if scheduler is None else "async",
            },
        )

        if scheduler is not None:
            scheduler(self.dispatch_batch(batch))
            return PipelineOutcome(
                state=PipelineState.DISPATCHING,
                status_code=200,
                rate_limit=decision,
            )

        summary = await self.dispatch_batch(batch)
        return PipelineOutcome(
            state=PipelineState.COMPLETED,
            status_code=200,
            rate_limit=decision,
            summary=summary,
        )

    async def dispatch_batch(self, batch: WebhookBatch) -> BatchDispatchSummary:
        """Despacha os eventos em ordem, isolando falhas por evento."""
        summary = BatchDispatchSummary()
        started_at = time.perf_counter()

        for index, event in enumerate(batch.events):
            summary.processed += 1
            try:
                result = await self._dispatcher.dispatch(event, self._delivery)
            except DispatchError as exc:
                summary.failed += 1
                logger.warning(
                    "event_dispatch_failed",
                    extra={
                        "event_index": index,
                        "event_type": exc.event_type,
                        "reason": exc.reason,
                    },
                )
                continue
            except asyncio.CancelledError:
                raise
            except Exception:
                summary.failed += 1
                logger.exception(
                    "event_dispatch_unexpected_error",
                    extra={"event_index": index, "event_type": event.type},
                )
                continue

            if result.replied:
                summary.replied += 1
            else:
                summary.skipped += 1

        elapsed_ms = (time.perf_counter() - started_at) * 1000
        record_latency(
            "ingestion_pipeline",
            "dispatch_batch",
            elapsed_ms,
            get_correlation_id() or None,
        )
        logger.info(
            "webhook_batch_dispatched",
            extra={
                "processed": summary.processed,
                "replied": summary.replied,
                "failed": summary.failed,
                "skipped": summary.skipped,
            },
        )
        return summary

    def _admit(self, caller_key: str) -> RateLimitAllowed:
        decision = self._rate_limiter.check_rate_limit(caller_key)
        if isinstance(decision, RateLimitExceeded):
            raise RateLimitError("rate_limit_exceeded", retry_after=decision.retry_after)
        return decision

    def _reject_auth(self, exc: AuthError) -> PipelineOutcome:
        state = (
            PipelineState.REJECTED_AUTH
            if exc.status_code == 401
            else PipelineState.REJECTED_MALFORMED
        )
        logger.warning("webhook_rejected", extra={"state": str(state), "reason": exc.reason})
        return PipelineOutcome(state=state, status_code=exc.status_code, detail=exc.reason)

    async def _reject_rate(self, exc: RateLimitError) -> PipelineOutcome:
        retry_after_seconds = max(1, math.ceil(exc.retry_after))
        record_rate_limited(retry_after_seconds, get_correlation_id() or None)
        logger.warning(
            "webhook_rejected",
            extra={
                "state": str(PipelineState.REJECTED_RATE),
                "reason": exc.reason,
                "retry_after_seconds": retry_after_seconds,
            },
        )
        await self._delay_rejection()
        return PipelineOutcome(
            state=PipelineState.REJECTED_RATE,
            status_code=exc.status_code,
            detail=exc.reason,
            rate_limit=RateLimitExceeded(retry_after=exc.retry_after),
        )

    async def _delay_rejection(self) -> None:
        if self._rejection_delay_seconds > 0:
            await asyncio.sleep(self._rejection_delay_seconds)
