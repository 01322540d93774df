"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings
e conecta gateways concretos aos protocolos do motor.

Uso:
    from app.bootstrap import initialize_app, get_sync_engine

    # Na inicialização do serviço
    initialize_app()

    # Obter motor (lazy, cacheado)
    engine = get_sync_engine()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_highlevel_settings,
    get_sms_settings,
    get_tallbob_settings,
)

if TYPE_CHECKING:
    from app.use_cases.sms import SyncEngine

# Nome do serviço para logs e métricas
SERVICE_NAME = "sincroniza_sms"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.
    Configura logging estruturado JSON com correlation_id.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"tallbob: {error}" for error in get_tallbob_settings().validate())
    errors.extend(f"highlevel: {error}" for error in get_highlevel_settings().validate())
    errors.extend(f"sms: {error}" for error in get_sms_settings().validate())

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


@lru_cache(maxsize=1)
def get_sync_engine() -> SyncEngine:
    """Obtém o SyncEngine do processo (lazy, criado na primeira requisição)."""
    from app.bootstrap.dependencies import create_sync_engine

    return create_sync_engine()
