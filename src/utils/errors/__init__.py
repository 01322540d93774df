"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    CallerError,
    CampaignNotFoundError,
    CrmError,
    CrmUnavailableError,
    CrmValidationError,
    NotFoundError,
    ProviderError,
    ProviderErrorKind,
    SyncError,
)

__all__ = [
    "CallerError",
    "CampaignNotFoundError",
    "CrmError",
    "CrmUnavailableError",
    "CrmValidationError",
    "NotFoundError",
    "ProviderError",
    "ProviderErrorKind",
    "SyncError",
]
