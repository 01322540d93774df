"""Política determinística de seleção de location (sub-conta do CRM).

Ordem:
1. location explícita do chamador
2. mapa número do provedor → location (HIGHLEVEL_LOCATION_BY_NUMBER)
3. location padrão configurada (HIGHLEVEL_DEFAULT_LOCATION_ID)
4. primeira location de list_locations() ordenada por ID

Nenhum resultado é cacheado; cada requisição resolve de novo.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from api.normalizers.sms import PhoneNumberNormalizer

if TYPE_CHECKING:
    from app.protocols.crm_gateway import CrmGatewayProtocol

logger = logging.getLogger(__name__)


class LocationPolicy:
    """Escolhe a location do CRM para uma mensagem."""

    def __init__(
        self,
        crm: CrmGatewayProtocol,
        *,
        normalizer: PhoneNumberNormalizer | None = None,
        default_location_id: str = "",
        location_by_number: Mapping[str, str] | None = None,
    ) -> None:
        self._crm = crm
        self._normalizer = normalizer or PhoneNumberNormalizer()
        self._default_location_id = (default_location_id or "").strip()
        self._location_by_number = {
            self._normalizer.normalize(number): location_id.strip()
            for number, location_id in (location_by_number or {}).items()
            if self._normalizer.normalize(number) and location_id and location_id.strip()
        }

    @property
    def location_by_number(self) -> dict[str, str]:
        return dict(self._location_by_number)

    async def select(
        self,
        *,
        explicit_location_id: str | None = None,
        provider_number: str | None = None,
    ) -> str | None:
        """Retorna o location_id escolhido ou None se nada estiver disponível.

        Raises:
            CrmError: Falha ao listar locations (apenas no último passo).
        """
        if explicit_location_id and explicit_location_id.strip():
            return explicit_location_id.strip()

        if provider_number:
            mapped = self._location_by_number.get(self._normalizer.normalize(provider_number))
            if mapped:
                return mapped

        if self._default_location_id:
            return self._default_location_id

        locations = await self._crm.list_locations()
        ids = sorted(loc.location_id for loc in locations if loc.location_id)
        if not ids:
            logger.warning("crm_no_locations_available")
            return None
        return ids[0]
