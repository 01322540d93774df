"""Validação do corpo de envio outbound (send-and-sync e relay).

Campos obrigatórios: to, from, message. `mediaUrl` presente seleciona MMS.
Qualquer violação vira CallerError antes de qualquer chamada externa.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from app.protocols.models import OutboundSendRequest
from utils.errors import CallerError

REQUIRED_SEND_FIELDS = ("to", "from", "message")


class SendMessagePayload(BaseModel):
    """Corpo JSON aceito pelas rotas de envio."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    to: str = ""
    sender: str = Field("", validation_alias=AliasChoices("from", "sender"))
    message: str = Field("", validation_alias=AliasChoices("message", "body"))
    media_url: str | None = Field(None, validation_alias=AliasChoices("mediaUrl", "media_url"))
    location_id: str | None = Field(
        None, validation_alias=AliasChoices("locationId", "location_id")
    )
    contact_id: str | None = Field(None, validation_alias=AliasChoices("contactId", "contact_id"))
    add_to_campaign: bool = Field(
        False, validation_alias=AliasChoices("addToCampaign", "add_to_campaign")
    )
    campaign_id: str | None = Field(
        None, validation_alias=AliasChoices("campaignId", "campaign_id")
    )
    reference: str | None = None

    @field_validator("to", "sender", "message", mode="before")
    @classmethod
    def _required_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator(
        "media_url", "location_id", "contact_id", "campaign_id", "reference", mode="before"
    )
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("add_to_campaign", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> Any:
        return False if value in (None, "") else value

    def missing_fields(self) -> list[str]:
        values = {"to": self.to, "from": self.sender, "message": self.message}
        return [name for name in REQUIRED_SEND_FIELDS if not values[name]]


def parse_send_request(payload: Any) -> OutboundSendRequest:
    """Valida o corpo de envio e devolve OutboundSendRequest.

    Raises:
        CallerError: Corpo não é objeto, tipos inválidos ou campos obrigatórios ausentes.
    """
    if not isinstance(payload, dict):
        raise CallerError("Request body must be a JSON object")
    try:
        parsed = SendMessagePayload.model_validate(payload)
    except PydanticValidationError as exc:
        fields = sorted({".".join(str(loc) for loc in err["loc"]) for err in exc.errors()})
        raise CallerError(f"Invalid fields: {', '.join(fields)}") from exc

    missing = parsed.missing_fields()
    if missing:
        raise CallerError(
            f"Missing required fields: {', '.join(missing)} "
            "(to, from, and message are required)"
        )

    return OutboundSendRequest(
        to=parsed.to,
        sender=parsed.sender,
        body=parsed.message,
        media_url=parsed.media_url,
        location_id=parsed.location_id,
        contact_id=parsed.contact_id,
        add_to_campaign=parsed.add_to_campaign,
        campaign_id=parsed.campaign_id,
        reference=parsed.reference,
    )
