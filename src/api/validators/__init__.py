"""Validators por canal — validação de payloads recebidos na borda.

Estrutura:
- sms/: corpo de envio SMS/MMS (send-and-sync e relay)
"""

from .sms import parse_send_request

__all__ = ["parse_send_request"]
