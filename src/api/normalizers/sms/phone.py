"""Normalização de números de telefone para o formato do provedor.

Formato canônico: apenas dígitos, sem "+", com DDI explícito
(ex: "61499000100"). A função é total (nunca levanta) e idempotente:
o resultado nunca começa com "0", então aplicar de novo não muda nada.

Regras:
1. Remove tudo que não é dígito
2. Prefixo internacional "00" → remove todos os zeros à esquerda
3. Um único "0" à esquerda (formato local) → troca pelo DDI padrão
"""

from __future__ import annotations

import re

from config.settings.sms import DEFAULT_COUNTRY_CODE

_NON_DIGITS = re.compile(r"\D")


def normalize_phone_number(
    value: str | None,
    default_country_code: str = DEFAULT_COUNTRY_CODE,
) -> str:
    """Converte texto arbitrário em número canônico.

    Entrada malformada degrada para extração de dígitos; quem rejeita
    números inválidos é o provedor/CRM.

    Exemplos:
        >>> normalize_phone_number("0499 000 100")
        '61499000100'
        >>> normalize_phone_number("+61 499-000-100")
        '61499000100'
        >>> normalize_phone_number("0044 20 7946 0000")
        '442079460000'
    """
    digits = _NON_DIGITS.sub("", value or "")
    if digits.startswith("00"):
        return digits.lstrip("0")
    if digits.startswith("0"):
        return f"{default_country_code}{digits[1:]}"
    return digits


class PhoneNumberNormalizer:
    """Normalizer com DDI padrão configurável (injetado no SyncEngine)."""

    __slots__ = ("_default_country_code",)

    def __init__(self, default_country_code: str = DEFAULT_COUNTRY_CODE) -> None:
        code = _NON_DIGITS.sub("", default_country_code or "")
        if not code or code.startswith("0"):
            raise ValueError(f"DDI padrão inválido: {default_country_code!r}")
        self._default_country_code = code

    @property
    def default_country_code(self) -> str:
        return self._default_country_code

    def normalize(self, value: str | None) -> str:
        return normalize_phone_number(value, self._default_country_code)
