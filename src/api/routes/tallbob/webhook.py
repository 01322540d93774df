"""Endpoints de webhook do Tall Bob e relay de envio.

Endpoints:
- POST /webhooks/tallbob/incoming: mensagem recebida (SMS/MMS)
- POST /webhooks/tallbob/delivery: recibo de entrega
- POST /webhooks/send-message: relay de envio vindo do CRM

Webhooks do provedor sempre respondem 200 com `received: true`, mesmo
em falha, para evitar retentativas; a falha volta em `error`.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.normalizers.sms import normalize_delivery_receipt, normalize_inbound_message
from api.routes.messages.router import run_send_and_sync
from api.routes.responses import read_json_body
from api.routes.tallbob.webhook_runtime import dispatch_inbound_event
from app.bootstrap import get_sync_engine
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from app.protocols.models import InboundAck
from config.settings import get_sms_settings
from utils.errors import CallerError

logger = logging.getLogger(__name__)

router = APIRouter()


def _ack_body(ack: InboundAck) -> dict[str, Any]:
    body: dict[str, Any] = {
        "received": True,
        "timestamp": datetime.now(UTC).isoformat(),
        "synced": ack.synced,
    }
    if ack.action is not None:
        body["action"] = ack.action.value
    if ack.error:
        body["error"] = ack.error
    return body


@router.post("/tallbob/incoming")
async def receive_incoming(request: Request) -> dict[str, Any]:
    """Recebimento de mensagens inbound do Tall Bob.

    Sempre 200: payload inválido, engine indisponível ou qualquer falha
    inesperada voltam em `error` para o provedor não reenviar.
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        return await _receive_incoming(request)
    except Exception as exc:
        logger.exception(
            "webhook_unhandled_error",
            extra={"channel": "tallbob", "correlation_id": get_correlation_id()},
        )
        return _ack_body(InboundAck(error=str(exc) or type(exc).__name__))
    finally:
        reset_correlation_id(token)


async def _receive_incoming(request: Request) -> dict[str, Any]:
    try:
        payload = await read_json_body(request)
        event = normalize_inbound_message(payload)
    except CallerError as exc:
        logger.warning(
            "webhook_payload_invalid",
            extra={
                "channel": "tallbob",
                "correlation_id": get_correlation_id(),
                "error": str(exc),
            },
        )
        return _ack_body(InboundAck(error=str(exc)))

    logger.info(
        "webhook_received",
        extra={
            "channel": "tallbob",
            "correlation_id": get_correlation_id(),
            "event_type": event.event_type,
            "media_count": len(event.media),
        },
    )

    try:
        engine = get_sync_engine()
    except ValueError as exc:
        logger.error(
            "sync_engine_unavailable",
            extra={"channel": "tallbob", "error_type": type(exc).__name__},
        )
        return _ack_body(InboundAck(error="sync_engine_not_configured"))

    ack = await dispatch_inbound_event(
        engine=engine,
        event=event,
        correlation_id=get_correlation_id(),
        settings=get_sms_settings(),
    )
    return _ack_body(ack)


@router.post("/tallbob/delivery")
async def receive_delivery(request: Request) -> dict[str, Any]:
    """Recibo de entrega do Tall Bob. Sempre 200 `{received: true}`."""
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        try:
            payload = await read_json_body(request)
            receipt = normalize_delivery_receipt(payload)
        except CallerError as exc:
            logger.warning(
                "delivery_receipt_invalid",
                extra={
                    "channel": "tallbob",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return {"received": True}

        try:
            engine = get_sync_engine()
            await engine.handle_delivery_receipt(receipt)
        except Exception:
            logger.exception(
                "delivery_receipt_processing_failed",
                extra={"channel": "tallbob", "correlation_id": get_correlation_id()},
            )
        return {"received": True}
    finally:
        reset_correlation_id(token)


@router.post("/send-message", response_model=None)
async def relay_send_message(request: Request) -> JSONResponse | dict[str, Any]:
    """Relay de envio chamado pelo CRM (custom action / app).

    400 quando `to`, `from` ou `message` estão ausentes.
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        return await run_send_and_sync(request)
    finally:
        reset_correlation_id(token)
