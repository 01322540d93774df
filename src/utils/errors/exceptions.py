"""Taxonomia de erros do motor de sincronização SMS ↔ CRM.

Hierarquia:
- SyncError: base de todos os erros de domínio
  - CallerError: request malformado (4xx, nenhuma chamada externa feita)
  - ProviderError: falha no provedor SMS/MMS (fatal para envio outbound)
  - CrmError: falha no CRM (sempre best-effort após envio bem-sucedido)
  - NotFoundError: identificador desconhecido em consultas de status

Nenhuma mensagem de erro deve carregar credenciais ou payload bruto.
"""

from __future__ import annotations

from enum import Enum


class SyncError(RuntimeError):
    """Base para erros do motor de sincronização."""

    error_code: str = "SYNC_ERROR"
    http_status: int = 500


class CallerError(SyncError):
    """Request inválido do chamador (campos obrigatórios ausentes, tipos errados)."""

    error_code = "CALLER_ERROR"
    http_status = 400


class ProviderErrorKind(str, Enum):
    """Classificação das falhas do provedor."""

    AUTH_FAILURE = "auth_failure"
    RATE_LIMITED = "rate_limited"
    INVALID_RECIPIENT = "invalid_recipient"
    MEDIA_REJECTED = "media_rejected"
    NETWORK = "network"
    UNKNOWN = "unknown"


# Status HTTP equivalente devolvido ao chamador por tipo de falha
_PROVIDER_HTTP_STATUS: dict[ProviderErrorKind, int] = {
    ProviderErrorKind.AUTH_FAILURE: 502,
    ProviderErrorKind.RATE_LIMITED: 429,
    ProviderErrorKind.INVALID_RECIPIENT: 422,
    ProviderErrorKind.MEDIA_REJECTED: 422,
    ProviderErrorKind.NETWORK: 504,
    ProviderErrorKind.UNKNOWN: 502,
}


class ProviderError(SyncError):
    """Falha reportada (ou provocada) pelo provedor SMS/MMS."""

    error_code = "PROVIDER_ERROR"

    def __init__(
        self,
        message: str,
        kind: ProviderErrorKind = ProviderErrorKind.UNKNOWN,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code

    @property
    def http_status(self) -> int:  # type: ignore[override]
        return _PROVIDER_HTTP_STATUS[self.kind]


class CrmError(SyncError):
    """Base para falhas do CRM."""

    error_code = "CRM_ERROR"
    http_status = 502

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CrmUnavailableError(CrmError):
    """CRM indisponível (rede, timeout, 5xx, 429 ou credencial recusada)."""

    error_code = "CRM_UNAVAILABLE"


class CrmValidationError(CrmError):
    """CRM rejeitou o payload (400/422)."""

    error_code = "CRM_VALIDATION_ERROR"


class CampaignNotFoundError(CrmError):
    """Campanha inexistente no CRM."""

    error_code = "CAMPAIGN_NOT_FOUND"
    http_status = 404


class NotFoundError(SyncError):
    """Identificador desconhecido pelo sistema externo."""

    error_code = "NOT_FOUND"
    http_status = 404
