"""Endpoints administrativos.

Endpoints:
- POST /admin/webhooks/register: registra os callbacks deste serviço
  (incoming e delivery) no provedor. Idempotente.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.connectors.tallbob import DELIVERY_WEBHOOK_EVENTS, INCOMING_WEBHOOK_EVENTS
from api.routes.responses import error_response, service_unavailable_response
from app.bootstrap import get_sync_engine
from app.observability import reset_correlation_id, set_correlation_id
from config.settings import get_base_settings
from utils.errors import CallerError, SyncError

logger = logging.getLogger(__name__)

router = APIRouter()

INCOMING_WEBHOOK_PATH = "/webhooks/tallbob/incoming"
DELIVERY_WEBHOOK_PATH = "/webhooks/tallbob/delivery"


@router.post("/webhooks/register", response_model=None)
async def register_webhooks(request: Request) -> JSONResponse | dict[str, Any]:
    """Registra webhooks de mensagem recebida e recibo de entrega."""
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        settings = get_base_settings()
        try:
            callbacks = {
                settings.webhook_url(INCOMING_WEBHOOK_PATH): INCOMING_WEBHOOK_EVENTS,
                settings.webhook_url(DELIVERY_WEBHOOK_PATH): DELIVERY_WEBHOOK_EVENTS,
            }
        except ValueError as exc:
            return error_response(CallerError(str(exc)))

        try:
            engine = get_sync_engine()
        except ValueError as exc:
            logger.error("sync_engine_unavailable", extra={"error_type": type(exc).__name__})
            return service_unavailable_response("sync_engine_not_configured")

        try:
            registered = await engine.register_provider_webhooks(callbacks)
        except SyncError as exc:
            logger.warning("webhook_registration_failed", extra={"error_code": exc.error_code})
            return error_response(exc)

        logger.info("webhook_registration_completed", extra={"count": len(registered)})
        return {"success": True, "registered": registered}
    finally:
        reset_correlation_id(token)
