"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e agregadas depois
pelo sistema de logs (BigQuery, CloudWatch Insights, etc.).

Métricas suportadas:
- Latência: tempo de chamadas a gateways por componente/operação
- Sync outcome: estado terminal de cada envio/webhook processado
- Delivery status: recibos de entrega recebidos do provedor

Uso:
    start = time.perf_counter()
    # ... chamada ao provedor ...
    record_latency("tallbob", "send_sms", (time.perf_counter() - start) * 1000)

    record_sync_outcome("outbound", "synced")
"""

from __future__ import annotations

import logging

from app.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "tallbob", "highlevel")
        operation: Nome da operação (ex: "send_sms", "upsert_contact")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (default: contexto atual)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )


def record_sync_outcome(
    flow: str,
    state: str,
    correlation_id: str | None = None,
    error_code: str | None = None,
) -> None:
    """Registra estado terminal de um fluxo de sincronização.

    Args:
        flow: "outbound" ou "inbound"
        state: Estado terminal (ex: "synced", "send_failed", "acknowledged")
        correlation_id: ID de correlação (default: contexto atual)
        error_code: Código do erro quando houver
    """
    extra: dict[str, str | None] = {
        "metric_type": "sync_outcome",
        "flow": flow,
        "state": state,
        "correlation_id": correlation_id or get_correlation_id(),
    }
    if error_code:
        extra["error_code"] = error_code

    logger.info("metric_sync_outcome", extra=extra)


def record_delivery_status(
    status: str,
    is_final: bool,
    correlation_id: str | None = None,
) -> None:
    """Registra recibo de entrega (sem message_id para evitar cardinalidade)."""
    logger.info(
        "metric_delivery_status",
        extra={
            "metric_type": "delivery_status",
            "status": status,
            "is_final": is_final,
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )
