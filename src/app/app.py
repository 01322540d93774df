"""Entrypoint da aplicação Sincroniza_SMS.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from api.routes.tallbob.webhook_runtime import drain_background_tasks
from app.bootstrap import initialize_app, validate_runtime_settings
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (falha rápido em staging/production)

    Shutdown:
    - Aguarda webhooks em processamento async
    """
    service = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service})
    validate_runtime_settings()

    yield

    logger.info("app_shutting_down", extra={"service": service})
    await drain_background_tasks(timeout_seconds=30.0)


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="Sincroniza_SMS",
        description="Sincronização bidirecional de SMS/MMS entre Tall Bob e HighLevel",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting Sincroniza_SMS in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
