"""Protocolo do gateway de provedor SMS/MMS."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import MessageStatus, ProviderMessageResult


class ProviderGatewayProtocol(Protocol):
    """Contrato mínimo do provedor.

    Falhas de envio levantam `ProviderError` (com `kind`); consulta de
    status de ID desconhecido levanta `NotFoundError`. `reference` deve ser
    repassado sem alteração para permitir detecção de retry no provedor.
    """

    async def send_sms(
        self,
        to: str,
        sender: str,
        body: str,
        reference: str,
    ) -> ProviderMessageResult: ...

    async def send_mms(
        self,
        to: str,
        sender: str,
        body: str,
        media_url: str,
        reference: str,
    ) -> ProviderMessageResult: ...

    async def get_message_status(self, provider_message_id: str) -> MessageStatus: ...

    async def register_webhook(
        self,
        callback_url: str,
        event_types: Sequence[str],
    ) -> None: ...
