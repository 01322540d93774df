"""Erros e helpers de parsing para a API Tall Bob."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from utils.errors import ProviderError, ProviderErrorKind

_RECIPIENT_HINTS = ("recipient", "msisdn", "phone", "number", "destination", "'to'", '"to"')
_MEDIA_HINTS = ("media", "mediaurl", "attachment", "file size", "mime", "image")


@dataclass(frozen=True)
class TallBobApiError:
    """Erro retornado pela API Tall Bob."""

    status_code: int
    error_code: str
    error_message: str
    kind: ProviderErrorKind

    def to_provider_error(self) -> ProviderError:
        return ProviderError(
            f"Tall Bob API error: {self.error_code} ({self.status_code})",
            kind=self.kind,
            status_code=self.status_code,
        )


def _error_text(response_data: dict[str, Any]) -> tuple[str, str]:
    """Extrai (código, mensagem) dos formatos de erro conhecidos."""
    error_obj = response_data.get("error")
    if isinstance(error_obj, dict):
        code = str(error_obj.get("code") or error_obj.get("type") or "unknown")
        message = str(error_obj.get("message") or "")
    else:
        code = str(response_data.get("code") or "unknown")
        message = str(error_obj or response_data.get("message") or "")

    field_errors = response_data.get("errors")
    if isinstance(field_errors, dict):
        details = " ".join(f"'{key}' {value}" for key, value in field_errors.items())
        message = f"{message} {details}".strip()
    return code, message


def classify_error(
    status_code: int,
    message: str,
    *,
    media: bool = False,
) -> ProviderErrorKind:
    """Classifica falha do provedor a partir do status HTTP e do corpo.

    401/403 → AUTH_FAILURE; 429 → RATE_LIMITED; 413/415 em MMS →
    MEDIA_REJECTED; 400/422 → INVALID_RECIPIENT quando a mensagem cita o
    destinatário (checado antes da mídia, pois um MMS também pode ter o
    número rejeitado), senão MEDIA_REJECTED (MMS, mensagem sobre mídia);
    502/503/504 → NETWORK; resto → UNKNOWN.
    """
    text = f" {message.lower()} "
    if status_code in (401, 403):
        return ProviderErrorKind.AUTH_FAILURE
    if status_code == 429:
        return ProviderErrorKind.RATE_LIMITED
    if media and status_code in (413, 415):
        return ProviderErrorKind.MEDIA_REJECTED
    if status_code in (400, 422):
        if any(hint in text for hint in _RECIPIENT_HINTS):
            return ProviderErrorKind.INVALID_RECIPIENT
        if media and any(hint in text for hint in _MEDIA_HINTS):
            return ProviderErrorKind.MEDIA_REJECTED
    if status_code in (502, 503, 504):
        return ProviderErrorKind.NETWORK
    return ProviderErrorKind.UNKNOWN


def parse_tallbob_error(
    status_code: int,
    response_data: dict[str, Any],
    *,
    media: bool = False,
) -> TallBobApiError | None:
    """Extrai erro do response Tall Bob.

    Returns:
        TallBobApiError se status >= 400, None se sucesso.
    """
    if status_code < 400:
        return None

    error_code, error_message = _error_text(response_data)
    return TallBobApiError(
        status_code=status_code,
        error_code=error_code,
        error_message=error_message,
        kind=classify_error(status_code, error_message, media=media),
    )
