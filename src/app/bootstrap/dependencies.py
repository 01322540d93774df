"""Factories de dependências — gateways, serviços e motor de sincronização.

Este módulo centraliza a criação de implementações concretas a partir
das configurações de ambiente. O motor recebe tudo por injeção; nenhum
singleton é criado dentro dele.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.highlevel import create_highlevel_gateway
from api.connectors.tallbob import create_tallbob_gateway
from api.normalizers.sms import PhoneNumberNormalizer
from app.services import ContactResolver, LocationPolicy
from app.use_cases.sms import SyncEngine
from config.settings import get_highlevel_settings, get_sms_settings, get_tallbob_settings

if TYPE_CHECKING:
    from app.protocols.crm_gateway import CrmGatewayProtocol
    from app.protocols.provider_gateway import ProviderGatewayProtocol

logger = logging.getLogger(__name__)


def create_provider_gateway() -> ProviderGatewayProtocol:
    """Cria gateway do provedor SMS/MMS (Tall Bob)."""
    gateway = create_tallbob_gateway(get_tallbob_settings())
    logger.info("provider_gateway_created", extra={"provider": "tallbob"})
    return gateway


def create_crm_gateway() -> CrmGatewayProtocol:
    """Cria gateway do CRM (HighLevel).

    Raises:
        ValueError: Token de integração ausente.
    """
    gateway = create_highlevel_gateway(get_highlevel_settings())
    logger.info("crm_gateway_created", extra={"crm": "highlevel"})
    return gateway


def create_phone_normalizer() -> PhoneNumberNormalizer:
    return PhoneNumberNormalizer(get_sms_settings().default_country_code)


def create_location_policy(
    crm: CrmGatewayProtocol,
    normalizer: PhoneNumberNormalizer,
) -> LocationPolicy:
    settings = get_highlevel_settings()
    return LocationPolicy(
        crm,
        normalizer=normalizer,
        default_location_id=settings.default_location_id,
        location_by_number=settings.location_by_number,
    )


def create_sync_engine(
    provider: ProviderGatewayProtocol | None = None,
    crm: CrmGatewayProtocol | None = None,
) -> SyncEngine:
    """Monta o SyncEngine com gateways concretos (ou injetados)."""
    provider = provider or create_provider_gateway()
    crm = crm or create_crm_gateway()
    normalizer = create_phone_normalizer()
    return SyncEngine(
        provider,
        crm,
        normalizer=normalizer,
        resolver=ContactResolver(crm),
        location_policy=create_location_policy(crm, normalizer),
    )
