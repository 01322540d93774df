"""Settings específicas do CRM HighLevel (LeadConnector API v2).

Autenticação via Private Integration Token (Bearer) + header Version.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

HIGHLEVEL_API_BASE_URL: str = "https://services.leadconnectorhq.com"
HIGHLEVEL_API_VERSION: str = "2021-07-28"


@dataclass(frozen=True)
class HighLevelSettings:
    """Configurações do CRM HighLevel.

    Attributes:
        private_integration_token: Token de integração privada
        api_base_url: URL base da API
        api_version: Valor do header Version
        company_id: ID da agência (usado em listagem de locations)
        default_location_id: Location padrão para inbound sem mapeamento
        location_by_number: Mapa número do provedor → location_id
        conversation_provider_id: Provider customizado de conversas (outbound)
        request_timeout_seconds: Timeout por requisição HTTP
        max_retries: Tentativas extras para GETs
    """

    # Credenciais
    private_integration_token: str = ""

    # API
    api_base_url: str = HIGHLEVEL_API_BASE_URL
    api_version: str = HIGHLEVEL_API_VERSION

    # Roteamento de locations
    company_id: str = ""
    default_location_id: str = ""
    location_by_number: dict[str, str] = field(default_factory=dict)

    # Conversas
    conversation_provider_id: str = ""

    # Timeouts e retries
    request_timeout_seconds: float = 15.0
    max_retries: int = 2

    def validate(self) -> list[str]:
        """Valida configurações mínimas do HighLevel.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.private_integration_token:
            errors.append("HIGHLEVEL_PRIVATE_INTEGRATION_TOKEN não configurado")

        # Sem location fixa, a resolução inbound depende de list_locations (companyId)
        if not self.company_id and not self.default_location_id and not self.location_by_number:
            errors.append(
                "HIGHLEVEL_COMPANY_ID é obrigatório sem HIGHLEVEL_DEFAULT_LOCATION_ID "
                "ou HIGHLEVEL_LOCATION_BY_NUMBER"
            )

        if self.request_timeout_seconds <= 0:
            errors.append("HIGHLEVEL_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("HIGHLEVEL_MAX_RETRIES deve ser >= 0")

        return errors


def parse_location_map(raw: str) -> dict[str, str]:
    """Converte "61400111222=locA,61400333444=locB" em dict.

    Entradas malformadas são ignoradas. Números não são normalizados aqui;
    quem consulta o mapa normaliza a chave antes.
    """
    mapping: dict[str, str] = {}
    for item in raw.split(","):
        number, sep, location_id = item.partition("=")
        number = number.strip()
        location_id = location_id.strip()
        if sep and number and location_id:
            mapping[number] = location_id
    return mapping


def _load_from_env() -> HighLevelSettings:
    """Carrega HighLevelSettings a partir de variáveis de ambiente."""
    return HighLevelSettings(
        private_integration_token=os.getenv(
            "HIGHLEVEL_PRIVATE_INTEGRATION_TOKEN",
            os.getenv("GHL_PRIVATE_INTEGRATION_TOKEN", ""),
        ),
        api_base_url=os.getenv("HIGHLEVEL_API_BASE_URL", HIGHLEVEL_API_BASE_URL),
        api_version=os.getenv(
            "HIGHLEVEL_API_VERSION", os.getenv("GHL_API_VERSION", HIGHLEVEL_API_VERSION)
        ),
        company_id=os.getenv("HIGHLEVEL_COMPANY_ID", ""),
        default_location_id=os.getenv("HIGHLEVEL_DEFAULT_LOCATION_ID", ""),
        location_by_number=parse_location_map(os.getenv("HIGHLEVEL_LOCATION_BY_NUMBER", "")),
        conversation_provider_id=os.getenv("HIGHLEVEL_CONVERSATION_PROVIDER_ID", ""),
        request_timeout_seconds=float(os.getenv("HIGHLEVEL_REQUEST_TIMEOUT_SECONDS", "15")),
        max_retries=int(os.getenv("HIGHLEVEL_MAX_RETRIES", "2")),
    )


@lru_cache(maxsize=1)
def get_highlevel_settings() -> HighLevelSettings:
    """Retorna instância cacheada de HighLevelSettings."""
    return _load_from_env()
