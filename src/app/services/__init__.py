"""Serviços de aplicação.

Unidades reutilizáveis de orquestração sobre os gateways (sem IO direto).
"""

from app.services.contact_resolver import ContactResolver, ResolvedContact
from app.services.location_policy import LocationPolicy

__all__ = [
    "ContactResolver",
    "LocationPolicy",
    "ResolvedContact",
]
