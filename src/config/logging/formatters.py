"""Formatters de logging estruturado.

Define o formatter JSON com campos obrigatórios em ordem estável:
asctime, level, logger, message, correlation_id, service.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado (ordem de saída)
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Mapeamento de nomes de campos para formato padrão
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

ISO_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-19T10:30:00+0000",
            "level": "INFO",
            "logger": "app.use_cases.sms.sync_engine",
            "message": "outbound_send_completed",
            "correlation_id": "abc-123",
            "service": "sincroniza_sms"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        datefmt=ISO_DATE_FORMAT,
    )
