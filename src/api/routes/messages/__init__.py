"""Rotas de envio e status de mensagens (/api)."""
