"""Runtime helpers para processamento dos webhooks Tall Bob.

Modo `inline` (padrão): processa antes de responder e devolve o ack real.
Modo `async`: agenda task limitada e responde imediatamente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.routes.tallbob.webhook_runtime_tasks import (
    drain_processing_tasks,
    schedule_processing_task,
)
from app.observability import correlation_scope
from app.protocols.models import InboundAck

if TYPE_CHECKING:
    from app.protocols.models import InboundWebhookEvent
    from app.use_cases.sms import SyncEngine

logger = logging.getLogger(__name__)

ASYNC_MODE = "async"


async def process_event_safe(
    *,
    engine: SyncEngine,
    event: InboundWebhookEvent,
    correlation_id: str,
) -> InboundAck:
    """Processa evento sem propagar exceções (o ack é sempre devolvido)."""
    with correlation_scope(correlation_id):
        try:
            return await engine.handle_inbound_webhook(event)
        except Exception as exc:
            logger.exception(
                "webhook_processing_failed",
                extra={"channel": "tallbob", "correlation_id": correlation_id},
            )
            return InboundAck(error=str(exc) or type(exc).__name__)


async def dispatch_inbound_event(
    *,
    engine: SyncEngine,
    event: InboundWebhookEvent,
    correlation_id: str,
    settings: Any,
) -> InboundAck:
    """Despacha processamento inline ou async conforme configuração."""
    processing_mode = (settings.webhook_processing_mode or "inline").lower()
    if processing_mode == ASYNC_MODE:
        schedule_processing_task(
            correlation_id=correlation_id,
            coroutine=process_event_safe(
                engine=engine, event=event, correlation_id=correlation_id
            ),
        )
        return InboundAck()

    ack = await process_event_safe(engine=engine, event=event, correlation_id=correlation_id)
    logger.info(
        "webhook_processing_completed",
        extra={
            "channel": "tallbob",
            "correlation_id": correlation_id,
            "mode": "inline",
            "synced": ack.synced,
        },
    )
    return ack


async def drain_background_tasks(timeout_seconds: float = 30.0) -> None:
    """Aguarda tasks async pendentes durante shutdown do processo."""
    await drain_processing_tasks(timeout_seconds=timeout_seconds)
