"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="sincroniza_sms")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("webhook_received", extra={"event_type": "message_received_sms"})

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime

Credenciais (Authorization, api_key, token) nunca saem nos logs.
"""

from config.logging.config import configure_logging, get_logger, log_degraded
from config.logging.filters import REDACTED, CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REDACTED",
    "REQUIRED_LOG_FIELDS",
    # Filters
    "CorrelationIdFilter",
    "SecretRedactionFilter",
    # Configuração principal
    "configure_logging",
    # Formatters
    "create_json_formatter",
    "get_logger",
    "log_degraded",
]
