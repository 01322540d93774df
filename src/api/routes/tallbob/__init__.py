"""Rotas de webhook do provedor Tall Bob (/webhooks)."""
