"""Configuração centralizada de logging.

Funções para configurar logging estruturado JSON com:
- Campos obrigatórios (correlation_id, service, level, logger, message)
- Redação de credenciais dos gateways (Tall Bob, HighLevel)
- Níveis configuráveis por ambiente

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do serviço (app/bootstrap/)
    configure_logging(level="INFO", service_name="sincroniza_sms")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("crm_sync_completed", extra={"latency_ms": 42})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

# Níveis de log válidos
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Nome padrão do serviço
DEFAULT_SERVICE_NAME = "sincroniza_sms"

# Loggers de bibliotecas HTTP que logam URLs completas em INFO
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez na inicialização do serviço (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual (ex: de ContextVar).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(SecretRedactionFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado.

    Os filters do handler injetam service/correlation_id e redigem segredos.
    """
    return logging.getLogger(name)


def log_degraded(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    error_type: str | None = None,
) -> None:
    """Log observável de etapa best-effort que falhou (sem PII).

    Usado quando uma etapa não-fatal (ex: espelhamento no CRM) falha e o
    fluxo segue com resultado parcial.

    Exemplo:
        log_degraded(logger, "crm_append", reason="crm_unavailable")
    """
    extra: dict[str, object] = {
        "degraded": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if error_type:
        extra["error_type"] = error_type

    logger.warning(
        "Best-effort step degraded: %s",
        component,
        extra=extra,
    )
