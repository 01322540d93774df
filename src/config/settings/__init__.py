"""Agregador de settings do Sincroniza_SMS.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# CRM
from config.settings.highlevel import (
    HIGHLEVEL_API_BASE_URL,
    HIGHLEVEL_API_VERSION,
    HighLevelSettings,
    get_highlevel_settings,
)

# Canal SMS
from config.settings.sms import (
    DEFAULT_COUNTRY_CODE,
    SmsSettings,
    get_sms_settings,
)

# Provedor
from config.settings.tallbob import (
    TALLBOB_API_BASE_URL,
    TallBobSettings,
    get_tallbob_settings,
)

__all__ = [
    # Constants
    "DEFAULT_COUNTRY_CODE",
    "HIGHLEVEL_API_BASE_URL",
    "HIGHLEVEL_API_VERSION",
    "TALLBOB_API_BASE_URL",
    # Base
    "BaseSettings",
    "Environment",
    # Gateways
    "HighLevelSettings",
    "SmsSettings",
    "TallBobSettings",
    "get_base_settings",
    "get_highlevel_settings",
    "get_sms_settings",
    "get_tallbob_settings",
]
