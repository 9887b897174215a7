"""Entrypoint do serviço de webhook LINE.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 3000

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 3000
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from api.routes.line.webhook_runtime_tasks import drain_processing_tasks
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.context import create_app_context
from config.logging import get_logger
from config.settings import get_base_settings, get_line_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from app.bootstrap.context import AppContext

# Inicializar logging ANTES de qualquer log do módulo
initialize_app()

logger = get_logger(__name__)

SHUTDOWN_DRAIN_TIMEOUT_SECONDS = 30.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Inicia a varredura periódica do rate limiter

    Shutdown:
    - Aguarda lotes em processamento (modo async)
    - Cancela a varredura e fecha o pool HTTP
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()

    context: AppContext = app.state.context
    context.rate_limiter.start()

    yield

    logger.info("app_shutting_down", extra={"service": service_name})
    await drain_processing_tasks(timeout_seconds=SHUTDOWN_DRAIN_TIMEOUT_SECONDS)
    await context.aclose()


def create_app(context: AppContext | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        context: Contexto pronto (testes); se None, monta a partir do ambiente.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="LINE Bot Webhook",
        description="Recebimento e resposta de eventos do LINE Messaging API",
        version="1.0.0",
        lifespan=lifespan,
    )
    fastapi_app.state.context = context or create_app_context()

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta."""
    import uvicorn

    line = get_line_settings()
    logger.info("server_starting", extra={"host": line.host, "port": line.port})
    uvicorn.run("app.app:app", host=line.host, port=line.port)


if __name__ == "__main__":
    main()
