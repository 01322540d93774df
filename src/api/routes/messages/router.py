"""Endpoints de envio e consulta de mensagens.

Endpoints:
- POST /api/send-and-sync: envia SMS/MMS e espelha no CRM
- GET  /api/status/{message_id}: status de entrega no provedor

Erros do provedor são fatais (status HTTP conforme o tipo de falha);
erros do CRM nunca alteram o sucesso do envio, apenas `synced`.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.routes.responses import (
    error_response,
    read_json_body,
    service_unavailable_response,
)
from api.validators.sms import parse_send_request
from app.bootstrap import get_sync_engine
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from utils.errors import CallerError, SyncError

logger = logging.getLogger(__name__)

router = APIRouter()

PROVIDER_NAME = "Tall Bob"


async def run_send_and_sync(request: Request) -> JSONResponse | dict[str, Any]:
    """Valida o corpo, executa o saga e monta a resposta HTTP."""
    try:
        body = await read_json_body(request)
        send_request = parse_send_request(body)
    except CallerError as exc:
        logger.warning(
            "send_request_rejected",
            extra={"correlation_id": get_correlation_id(), "error": str(exc)},
        )
        return error_response(exc)

    try:
        engine = get_sync_engine()
    except ValueError as exc:
        logger.error("sync_engine_unavailable", extra={"error_type": type(exc).__name__})
        return service_unavailable_response("sync_engine_not_configured")

    result = await engine.send_and_sync(send_request)
    if not result.success:
        return error_response(result.error or SyncError("send_failed"))

    response: dict[str, Any] = {
        "success": True,
        "messageId": result.provider_message_id,
        "provider": PROVIDER_NAME,
        "synced": result.synced,
        "state": result.state.value,
    }
    if result.crm_error is not None:
        response["crmError"] = result.crm_error.error_code
    if result.campaign_enrolled is not None:
        response["campaignEnrolled"] = result.campaign_enrolled
    return response


@router.post("/send-and-sync", response_model=None)
async def send_and_sync(request: Request) -> JSONResponse | dict[str, Any]:
    """Envia mensagem pelo provedor e sincroniza com o CRM.

    Corpo: {to, from, message, mediaUrl?, locationId?, contactId?,
    addToCampaign?, campaignId?, reference?}
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        return await run_send_and_sync(request)
    finally:
        reset_correlation_id(token)


@router.get("/status/{message_id}", response_model=None)
async def get_status(message_id: str, request: Request) -> JSONResponse | dict[str, Any]:
    """Consulta status de entrega de uma mensagem no provedor."""
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        try:
            engine = get_sync_engine()
        except ValueError as exc:
            logger.error("sync_engine_unavailable", extra={"error_type": type(exc).__name__})
            return service_unavailable_response("sync_engine_not_configured")

        try:
            status = await engine.get_message_status(message_id)
        except SyncError as exc:
            logger.warning(
                "message_status_failed",
                extra={"error_code": exc.error_code, "correlation_id": get_correlation_id()},
            )
            return error_response(exc)

        return {
            "messageId": message_id,
            "status": status.status,
            "deliveredAt": status.delivered_at,
            "details": status.raw,
        }
    finally:
        reset_correlation_id(token)
