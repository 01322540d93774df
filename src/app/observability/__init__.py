"""Observabilidade — logs estruturados, correlação e métricas.

Uso:
    from app.observability import get_correlation_id, correlation_scope
    from app.observability import record_latency, record_sync_outcome
"""

from app.observability.correlation import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_delivery_status,
    record_latency,
    record_sync_outcome,
)

__all__ = [
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "record_delivery_status",
    "record_latency",
    "record_sync_outcome",
    "reset_correlation_id",
    "set_correlation_id",
]
