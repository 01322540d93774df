"""Normalizers — conversão de dados externos para modelos internos.

Estrutura:
- sms/: telefones e webhooks do provedor SMS/MMS
"""

from .sms import (
    PhoneNumberNormalizer,
    normalize_delivery_receipt,
    normalize_inbound_message,
    normalize_phone_number,
)

__all__ = [
    "PhoneNumberNormalizer",
    "normalize_delivery_receipt",
    "normalize_inbound_message",
    "normalize_phone_number",
]
