"""Rotas administrativas (/admin)."""
