"""Settings do canal SMS (políticas independentes de provedor)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_COUNTRY_CODE: str = "61"


@dataclass(frozen=True)
class SmsSettings:
    """Configurações do canal SMS.

    Attributes:
        default_country_code: DDI aplicado a números em formato local (0...)
        webhook_processing_mode: Processamento de webhooks (inline|async)
    """

    default_country_code: str = DEFAULT_COUNTRY_CODE
    webhook_processing_mode: str = "inline"

    def validate(self) -> list[str]:
        """Valida configurações do canal SMS."""
        errors: list[str] = []

        code = self.default_country_code
        if not code.isdigit() or code.startswith("0"):
            errors.append("SMS_DEFAULT_COUNTRY_CODE deve conter apenas dígitos e não iniciar com 0")

        if self.webhook_processing_mode not in ("async", "inline"):
            errors.append("SMS_WEBHOOK_PROCESSING_MODE deve ser 'async' ou 'inline'")

        return errors


def _load_from_env() -> SmsSettings:
    """Carrega SmsSettings de variáveis de ambiente."""
    return SmsSettings(
        default_country_code=os.getenv("SMS_DEFAULT_COUNTRY_CODE", DEFAULT_COUNTRY_CODE)
        .strip()
        .lstrip("+"),
        webhook_processing_mode=os.getenv("SMS_WEBHOOK_PROCESSING_MODE", "inline").lower(),
    )


@lru_cache(maxsize=1)
def get_sms_settings() -> SmsSettings:
    """Retorna instância cacheada de SmsSettings."""
    return _load_from_env()
