"""Normalizer SMS — telefones e webhooks do provedor.

Responsabilidades:
- Normalizar números para o formato canônico do provedor
- Converter webhooks Tall Bob em eventos internos (MessageReceived,
  DeliveryReceipt)
"""

from .normalizer import normalize_delivery_receipt, normalize_inbound_message
from .phone import PhoneNumberNormalizer, normalize_phone_number

__all__ = [
    "PhoneNumberNormalizer",
    "normalize_delivery_receipt",
    "normalize_inbound_message",
    "normalize_phone_number",
]
