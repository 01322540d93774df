"""Endpoints de health check."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings, get_highlevel_settings, get_tallbob_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "failed"]
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "error": self.error}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check() -> JSONResponse:
    """Readiness probe — credenciais do provedor e do CRM configuradas.

    Não chama as APIs externas; só confere a configuração local.
    """
    tallbob_check = _check_settings(get_tallbob_settings().validate())
    highlevel_check = _check_settings(get_highlevel_settings().validate())
    ready = tallbob_check.status == "ok" and highlevel_check.status == "ok"

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "tallbob": tallbob_check.as_dict(),
            "highlevel": highlevel_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_settings(errors: list[str]) -> DependencyCheck:
    if errors:
        return DependencyCheck(status="failed", error="; ".join(errors))
    return DependencyCheck(status="ok")
