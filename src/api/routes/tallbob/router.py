"""Router principal do Tall Bob — agrega os endpoints de webhook do canal."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.tallbob.webhook import router as webhook_router

router = APIRouter()

router.include_router(webhook_router)
