"""Respostas HTTP compartilhadas entre rotas (erros da taxonomia SyncError)."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from utils.errors import CallerError, ProviderError, SyncError

logger = logging.getLogger(__name__)


def error_response(exc: SyncError) -> JSONResponse:
    """Converte SyncError em resposta `{success: false, error, errorCode}`."""
    content: dict[str, Any] = {
        "success": False,
        "error": str(exc),
        "errorCode": exc.error_code,
    }
    if isinstance(exc, ProviderError):
        content["kind"] = exc.kind.value
    return JSONResponse(content=content, status_code=exc.http_status)


async def read_json_body(request: Request) -> Any:
    """Lê o corpo JSON da requisição.

    Raises:
        CallerError: Corpo vazio ou JSON inválido.
    """
    raw_body = await request.body()
    if not raw_body:
        raise CallerError("Request body is empty")
    try:
        return json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise CallerError("Request body is not valid JSON") from exc


def service_unavailable_response(reason: str) -> JSONResponse:
    return JSONResponse(
        content={"success": False, "error": reason, "errorCode": "SERVICE_UNAVAILABLE"},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )
