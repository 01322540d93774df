"""Classificação de erros da API HighLevel em CrmError."""

from __future__ import annotations

from typing import Any

from utils.errors import (
    CampaignNotFoundError,
    CrmError,
    CrmUnavailableError,
    CrmValidationError,
)


def _error_message(response_data: dict[str, Any]) -> str:
    message = response_data.get("message") or response_data.get("error") or ""
    if isinstance(message, list):
        message = "; ".join(str(item) for item in message)
    return str(message)


def crm_error_from_response(
    status_code: int,
    response_data: dict[str, Any],
    operation: str,
) -> CrmError | None:
    """Converte response HighLevel em CrmError.

    Returns:
        CrmError adequado se status >= 400, None se sucesso.
    """
    if status_code < 400:
        return None

    message = f"HighLevel {operation} failed ({status_code})"
    detail = _error_message(response_data)
    if detail:
        message = f"{message}: {detail}"

    if status_code in (401, 403, 429) or status_code >= 500:
        return CrmUnavailableError(message, status_code=status_code)
    if status_code == 404 and operation == "add_to_campaign":
        return CampaignNotFoundError(message, status_code=status_code)
    if status_code in (400, 404, 409, 422):
        if operation == "add_to_campaign" and "campaign" in detail.lower():
            return CampaignNotFoundError(message, status_code=status_code)
        return CrmValidationError(message, status_code=status_code)
    return CrmError(message, status_code=status_code)
