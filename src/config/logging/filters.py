"""Filters de logging para injeção de contexto e redação de segredos.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço (ex: sincroniza_sms)

Campos redigidos:
- Qualquer atributo do record cujo nome indique credencial
  (authorization, api_key, token, password, secret)
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTED = "***"

_SENSITIVE_KEY = re.compile(r"(authorization|api[_-]?key|token|password|secret)", re.IGNORECASE)
_BASIC_OR_BEARER = re.compile(r"\b(Basic|Bearer)\s+[A-Za-z0-9._~+/=-]+")


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


def redact_value(key: str, value: Any) -> Any:
    """Mascara valor se a chave indicar credencial (recursivo em dicts)."""
    if _SENSITIVE_KEY.search(key):
        return REDACTED
    if isinstance(value, dict):
        return {k: redact_value(str(k), v) for k, v in value.items()}
    if isinstance(value, str):
        return _BASIC_OR_BEARER.sub(r"\1 " + REDACTED, value)
    return value


class SecretRedactionFilter(logging.Filter):
    """Remove credenciais dos atributos `extra` de cada record.

    Gateways HTTP logam headers e payloads; este filter garante que
    Authorization/API keys nunca cheguem ao handler.
    """

    _STANDARD_ATTRS = frozenset(
        logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
    ) | {"message", "asctime"}

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in list(record.__dict__.items()):
            if key in self._STANDARD_ATTRS:
                continue
            record.__dict__[key] = redact_value(key, value)
        return True
