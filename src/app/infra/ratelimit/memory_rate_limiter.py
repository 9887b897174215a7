"""Rate limiter em memória — contador de janela fixa por chave.

Algoritmo aproximado: perto da virada de janela um chamador pode obter até
2x max_requests admissões seguidas. Em troca, memória e tempo O(1) por checagem.

Concorrência:
- O mapa é particionado em shards, cada um com seu próprio lock; uma checagem
  segura apenas o lock do shard da chave.
- A varredura de entradas ociosas visita um shard por vez e nunca segura
  mais de um lock.

Sem persistência: o estado é reconstruído do zero a cada reinício.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

logger = logging.getLogger(__name__)

DEFAULT_SHARD_COUNT = 16


@dataclass(frozen=True, slots=True)
class RateLimiterConfig:
    """Parâmetros imutáveis do limitador.

    Attributes:
        max_requests: Admissões por janela (> 0)
        window_seconds: Duração da janela fixa (> 0)
        cleanup_interval_seconds: Intervalo da varredura (> 0)
    """

    max_requests: int = 10
    window_seconds: float = 60.0
    cleanup_interval_seconds: float = 300.0

    def __post_init__(self) -> None:
        if self.max_requests <= 0:
            raise ValueError("max_requests deve ser > 0")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds deve ser > 0")
        if self.cleanup_interval_seconds <= 0:
            raise ValueError("cleanup_interval_seconds deve ser > 0")


@dataclass(slots=True)
class RateLimitEntry:
    """Contador de uma chave. Mutado apenas sob o lock do seu shard."""

    count: int
    window_start: float
    last_seen: float


@dataclass(frozen=True, slots=True)
class RateLimitAllowed:
    """Requisição admitida."""

    remaining: int
    reset_after: float

    @property
    def allowed(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class RateLimitExceeded:
    """Cota da janela esgotada."""

    retry_after: float

    @property
    def allowed(self) -> bool:
        return False


RateLimitDecision = RateLimitAllowed | RateLimitExceeded


@dataclass(slots=True)
class _Shard:
    lock: threading.Lock = field(default_factory=threading.Lock)
    entries: dict[str, RateLimitEntry] = field(default_factory=dict)


class RateLimiter:
    """Limitador compartilhado por todo o processo.

    Uma única instância deve atender todas as requisições: criar um limitador
    por requisição faz toda chamada começar com count=1 e anula o limite.

    Uso:
        limiter = RateLimiter(RateLimiterConfig(max_requests=10, window_seconds=60))
        async with limiter:  # inicia/cancela a varredura periódica
            decision = limiter.check_rate_limit("203.0.113.7")
    """

    def __init__(
        self,
        config: RateLimiterConfig | None = None,
        *,
        shard_count: int = DEFAULT_SHARD_COUNT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if shard_count <= 0:
            raise ValueError("shard_count deve ser > 0")
        self._config = config or RateLimiterConfig()
        self._clock = clock
        self._shards = tuple(_Shard() for _ in range(shard_count))
        self._cleanup_task: asyncio.Task[None] | None = None

    @property
    def config(self) -> RateLimiterConfig:
        return self._config

    @property
    def entry_count(self) -> int:
        """Total de chaves rastreadas (aproximado sob concorrência)."""
        return sum(len(shard.entries) for shard in self._shards)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        shard = self._shard_for(key)
        with shard.lock:
            return key in shard.entries

    def _shard_for(self, key: str) -> _Shard:
        return self._shards[hash(key) % len(self._shards)]

    def check_rate_limit(self, key: str) -> RateLimitDecision:
        """Registra uma tentativa e decide se ela é admitida.

        Ao atingir max_requests, novas tentativas na mesma janela são
        rejeitadas sem incrementar o contador.
        """
        config = self._config
        shard = self._shard_for(key)

        with shard.lock:
            now = self._clock()
            entry = shard.entries.get(key)

            # Primeira observação ou janela encerrada: nova entrada, nova janela
            if entry is None or now - entry.window_start >= config.window_seconds:
                shard.entries[key] = RateLimitEntry(count=1, window_start=now, last_seen=now)
                return RateLimitAllowed(
                    remaining=config.max_requests - 1,
                    reset_after=config.window_seconds,
                )

            elapsed = now - entry.window_start
            if entry.count < config.max_requests:
                entry.count += 1
                entry.last_seen = now
                return RateLimitAllowed(
                    remaining=config.max_requests - entry.count,
                    reset_after=config.window_seconds - elapsed,
                )

            retry_after = config.window_seconds - elapsed

        logger.debug("rate_limit_exceeded", extra={"retry_after_seconds": round(retry_after, 3)})
        return RateLimitExceeded(retry_after=retry_after)

    def cleanup_expired_entries(self) -> int:
        """Remove entradas com janela encerrada e sem tráfego recente.

        Returns:
            Número de entradas removidas.
        """
        removed = sum(self._sweep_shard(shard) for shard in self._shards)
        self._log_sweep(removed)
        return removed

    def _sweep_shard(self, shard: _Shard) -> int:
        window = self._config.window_seconds
        with shard.lock:
            now = self._clock()
            expired = [
                key
                for key, entry in shard.entries.items()
                if now - entry.window_start > window and now - entry.last_seen > window
            ]
            for key in expired:
                del shard.entries[key]
        return len(expired)

    def _log_sweep(self, removed: int) -> None:
        if removed:
            logger.debug(
                "rate_limit_entries_cleaned",
                extra={"removed": removed, "remaining": self.entry_count},
            )

    # --- Ciclo de vida da varredura -----------------------------------

    @property
    def is_running(self) -> bool:
        return self._cleanup_task is not None and not self._cleanup_task.done()

    def start(self) -> None:
        """Agenda a varredura periódica no event loop corrente (idempotente).

        Raises:
            RuntimeError: Se chamado fora de um event loop em execução.
        """
        if self.is_running:
            return
        loop = asyncio.get_running_loop()
        self._cleanup_task = loop.create_task(
            self._cleanup_loop(),
            name="rate-limiter-cleanup",
        )
        logger.info(
            "rate_limiter_cleanup_started",
            extra={
                "cleanup_interval_seconds": self._config.cleanup_interval_seconds,
                "shards": len(self._shards),
            },
        )

    async def stop(self) -> None:
        """Cancela a varredura e aguarda seu término."""
        task = self._cleanup_task
        self._cleanup_task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("rate_limiter_cleanup_stopped")

    async def _cleanup_loop(self) -> None:
        interval = self._config.cleanup_interval_seconds
        while True:
            await asyncio.sleep(interval)
            try:
                await self._sweep_all_shards()
            except Exception:
                logger.exception("rate_limiter_cleanup_failed")

    async def _sweep_all_shards(self) -> int:
        removed = 0
        for shard in self._shards:
            removed += self._sweep_shard(shard)
            # Devolve o loop entre shards para não atrasar requisições
            await asyncio.sleep(0)
        self._log_sweep(removed)
        return removed

    async def __aenter__(self) -> RateLimiter:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()
