"""Helpers de logging para a API Tall Bob (sem credenciais, PII mascarada)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .errors import TallBobApiError

logger = logging.getLogger(__name__)

_PHONE_FIELDS = frozenset({"to", "from"})
_OMITTED_FIELDS = frozenset({"message"})


def mask_phone(value: str) -> str:
    """Mantém só os 4 últimos dígitos (ex: ******0100)."""
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


def summarize_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Versão logável do payload: telefones mascarados, corpo omitido."""
    summary: dict[str, Any] = {}
    for key, value in payload.items():
        if key in _OMITTED_FIELDS:
            summary[f"{key}_length"] = len(str(value or ""))
        elif key in _PHONE_FIELDS and isinstance(value, str):
            summary[key] = mask_phone(value)
        else:
            summary[key] = value
    return summary


def log_request(method: str, endpoint: str, payload: dict[str, Any] | None = None) -> None:
    logger.info(
        "tallbob_request",
        extra={
            "method": method,
            "endpoint": endpoint,
            "payload": summarize_payload(payload or {}),
        },
    )


def log_response(method: str, endpoint: str, status_code: int, latency_ms: float) -> None:
    logger.info(
        "tallbob_response",
        extra={
            "method": method,
            "endpoint": endpoint,
            "status_code": status_code,
            "latency_ms": round(latency_ms, 2),
        },
    )


def log_api_error(api_error: TallBobApiError, method: str, endpoint: str) -> None:
    """Loga erro do Tall Bob sem expor dados sensíveis."""
    logger.warning(
        "tallbob_api_error",
        extra={
            "method": method,
            "endpoint": endpoint,
            "status_code": api_error.status_code,
            "error_code": api_error.error_code,
            "error_kind": api_error.kind.value,
        },
    )


def log_transport_error(method: str, endpoint: str, error: Exception) -> None:
    logger.error(
        "tallbob_transport_error",
        extra={
            "method": method,
            "endpoint": endpoint,
            "error_type": type(error).__name__,
            "error": str(error),
        },
    )
