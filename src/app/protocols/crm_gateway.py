"""Protocolo do gateway de CRM (contatos, conversas, campanhas)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .models import (
        ContactUpsertResult,
        CrmConversationRef,
        CrmMessage,
        LocationRef,
        MessageType,
    )


class CrmGatewayProtocol(Protocol):
    """Contrato mínimo do CRM.

    `upsert_contact` deve usar a primitiva atômica do CRM (find-or-create
    nativo): chamadas concorrentes para o mesmo (phone, location) não
    podem criar contatos duplicados.

    Falhas levantam subclasses de `CrmError`.
    """

    async def list_locations(self) -> list[LocationRef]: ...

    async def upsert_contact(
        self,
        phone: str,
        location_id: str,
        custom_fields: dict[str, Any] | None = None,
    ) -> ContactUpsertResult: ...

    async def create_or_get_conversation(
        self,
        contact_id: str,
        location_id: str,
        channel: MessageType,
    ) -> CrmConversationRef: ...

    async def append_message(
        self,
        ref: CrmConversationRef,
        message: CrmMessage,
    ) -> None: ...

    async def add_to_campaign(
        self,
        contact_id: str,
        campaign_id: str,
        location_id: str,
    ) -> None: ...
