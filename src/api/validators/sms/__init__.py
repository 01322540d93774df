"""Validators para envio SMS/MMS.

Uso:
    from api.validators.sms import parse_send_request

    request = parse_send_request(body)  # CallerError se inválido
"""

from .send import REQUIRED_SEND_FIELDS, SendMessagePayload, parse_send_request

__all__ = [
    "REQUIRED_SEND_FIELDS",
    "SendMessagePayload",
    "parse_send_request",
]
