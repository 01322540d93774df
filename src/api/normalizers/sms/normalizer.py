"""Normalizer SMS — converte payloads de webhook em eventos internos.

Payload inválido vira CallerError; quem decide como responder ao
provedor (sempre 200 nos webhooks) é a camada de rotas/use case.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from api.normalizers.sms.extractor import DeliveryReceiptPayload, InboundMessagePayload
from app.protocols.models import DeliveryReceipt, MessageReceived
from utils.errors import CallerError


def _describe(exc: PydanticValidationError) -> str:
    fields = sorted({".".join(str(loc) for loc in err["loc"]) for err in exc.errors()})
    return f"invalid fields: {', '.join(fields)}" if fields else "invalid payload"


def normalize_inbound_message(payload: dict[str, Any]) -> MessageReceived:
    """Converte webhook de mensagem recebida em MessageReceived.

    Raises:
        CallerError: Payload não é objeto ou tem tipos inválidos.
    """
    if not isinstance(payload, dict):
        raise CallerError("payload_not_object")
    try:
        parsed = InboundMessagePayload.model_validate(payload)
    except PydanticValidationError as exc:
        raise CallerError(_describe(exc)) from exc

    return MessageReceived(
        event_type=parsed.type,
        sender=parsed.sender,
        recipient=parsed.recipient,
        body=parsed.body,
        media=tuple(parsed.media),
        received_at=parsed.received_at,
        provider_message_id=parsed.message_id,
    )


def normalize_delivery_receipt(payload: dict[str, Any]) -> DeliveryReceipt:
    """Converte webhook de recibo de entrega em DeliveryReceipt.

    Raises:
        CallerError: ID da mensagem ou status ausentes.
    """
    if not isinstance(payload, dict):
        raise CallerError("payload_not_object")
    try:
        parsed = DeliveryReceiptPayload.model_validate(payload)
    except PydanticValidationError as exc:
        raise CallerError(_describe(exc)) from exc

    return DeliveryReceipt(
        provider_message_id=parsed.provider_message_id,
        status=parsed.status,
        timestamp=parsed.timestamp,
    )
