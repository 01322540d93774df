"""Extrator de payloads de webhook Tall Bob.

Estrutura típica (mensagem recebida):
- type, from, to, body, media[], receivedAt

Estrutura típica (recibo de entrega):
- providerMessageId, status, timestamp

Aceita aliases observados na API (message, mediaUrls, messageId, id).
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _coerce_text(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class InboundMessagePayload(BaseModel):
    """Payload de mensagem recebida (SMS/MMS)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str = Field("", validation_alias=AliasChoices("type", "event_type", "eventType"))
    sender: str = Field("", validation_alias=AliasChoices("from", "sender"))
    recipient: str = Field("", validation_alias=AliasChoices("to", "recipient"))
    body: str = Field("", validation_alias=AliasChoices("body", "message", "text"))
    media: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("media", "mediaUrls", "media_urls"),
    )
    received_at: str | None = Field(
        None, validation_alias=AliasChoices("receivedAt", "received_at", "timestamp")
    )
    message_id: str | None = Field(
        None, validation_alias=AliasChoices("messageId", "message_id", "id")
    )

    @field_validator("type", "sender", "recipient", "body", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _coerce_text(value)

    @field_validator("message_id", "received_at", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        if value in (None, ""):
            return None
        return _coerce_text(value)

    @field_validator("media", mode="before")
    @classmethod
    def _media_urls(cls, value: Any) -> list[str]:
        """Aceita string única, lista de strings ou lista de {"url": ...}."""
        if value in (None, ""):
            return []
        items = value if isinstance(value, list) else [value]
        urls: list[str] = []
        for item in items:
            if isinstance(item, dict):
                item = item.get("url") or item.get("mediaUrl")
            if isinstance(item, str) and item.strip():
                urls.append(item.strip())
        return urls


class DeliveryReceiptPayload(BaseModel):
    """Payload de recibo de entrega."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    provider_message_id: str = Field(
        validation_alias=AliasChoices("providerMessageId", "messageId", "message_id", "id"),
        min_length=1,
    )
    status: str = Field(
        validation_alias=AliasChoices("status", "deliveryStatus", "delivery_status"),
        min_length=1,
    )
    timestamp: str | None = Field(
        None, validation_alias=AliasChoices("timestamp", "deliveredAt", "updatedAt")
    )

    @field_validator("provider_message_id", "status", "timestamp", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        if value is None:
            return value
        return _coerce_text(value)
