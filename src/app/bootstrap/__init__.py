"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings
e monta o AppContext compartilhado pelo processo.

Uso:
    from app.bootstrap import initialize_app, validate_runtime_settings
    from app.bootstrap.context import create_app_context

    # Na inicialização do serviço
    initialize_app()
    validate_runtime_settings()
    context = create_app_context()
"""

from __future__ import annotations

import logging

from api.validators.line import mask_token
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_line_settings,
    get_rate_limit_settings,
)

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação.

    Deve ser chamada uma vez no início do serviço.

    Configura:
    - Logging estruturado JSON com correlation_id
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (logging em DEBUG)."""
    base = get_base_settings()
    configure_logging(
        level="DEBUG",
        service_name=f"{base.service_name}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Raises:
        RuntimeError: Settings inválidas em ambiente estrito.
    """
    base = get_base_settings()
    line = get_line_settings()
    environment = base.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"line: {error}" for error in line.validate())
    errors.extend(f"rate_limit: {error}" for error in get_rate_limit_settings().validate())

    logger.info(
        "settings_loaded",
        extra={
            "component": "bootstrap",
            "environment": environment,
            "channel_secret": mask_token(line.channel_secret) if line.channel_secret else None,
            "channel_access_token": (
                mask_token(line.channel_access_token) if line.channel_access_token else None
            ),
            "processing_mode": line.webhook_processing_mode,
        },
    )

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")
