"""Conector Tall Bob — adapter de borda para o provedor SMS/MMS.

Único ponto de IO com o provedor:
- Envio de SMS/MMS
- Consulta de status
- Registro de webhooks
- Classificação de erros da API
"""

from .errors import TallBobApiError, classify_error, parse_tallbob_error
from .gateway import (
    DELIVERY_WEBHOOK_EVENTS,
    INCOMING_WEBHOOK_EVENTS,
    TallBobGateway,
    create_tallbob_gateway,
    extract_message_id,
)

__all__ = [
    "DELIVERY_WEBHOOK_EVENTS",
    "INCOMING_WEBHOOK_EVENTS",
    "TallBobApiError",
    "TallBobGateway",
    "classify_error",
    "create_tallbob_gateway",
    "extract_message_id",
    "parse_tallbob_error",
]
