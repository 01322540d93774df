"""Conector HighLevel — adapter de borda para o CRM (LeadConnector API v2)."""

from .errors import crm_error_from_response
from .gateway import HighLevelGateway, create_highlevel_gateway, to_e164

__all__ = [
    "HighLevelGateway",
    "create_highlevel_gateway",
    "crm_error_from_response",
    "to_e164",
]
