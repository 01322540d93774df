"""Agregador de rotas — registra todos os routers da API.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.admin.router import router as admin_router
from api.routes.health.router import router as health_router
from api.routes.messages.router import router as messages_router
from api.routes.tallbob.router import router as tallbob_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Envio e status
    api_router.include_router(messages_router, prefix="/api", tags=["messages"])

    # Webhooks do provedor + relay de envio
    api_router.include_router(tallbob_router, prefix="/webhooks", tags=["tallbob"])

    # Administração
    api_router.include_router(admin_router, prefix="/admin", tags=["admin"])

    return api_router
