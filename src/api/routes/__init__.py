"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (envio, webhooks, health, admin)
- Validação inicial de request (headers, corpo JSON)
- Delegação para o SyncEngine
- Respostas HTTP apropriadas

Estrutura:
- routes/messages/: /api/send-and-sync e /api/status
- routes/tallbob/: webhooks do provedor e relay de envio
- routes/admin/: registro de webhooks no provedor
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
