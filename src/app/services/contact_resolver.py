"""Resolução telefone → contato + conversa no CRM.

Sem check-then-act: o contato vem do upsert nativo do CRM e a conversa
é criada primeiro, com fallback de busca no gateway em caso de conflito.
Eventos repetidos convergem para o mesmo contato.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.protocols.models import CrmConversationRef, MessageType, UpsertAction

if TYPE_CHECKING:
    from app.protocols.crm_gateway import CrmGatewayProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedContact:
    """Referência de conversa + ação do upsert (created/found)."""

    ref: CrmConversationRef
    action: UpsertAction


class ContactResolver:
    """Mapeia telefone normalizado para CrmConversationRef."""

    def __init__(self, crm: CrmGatewayProtocol) -> None:
        self._crm = crm

    async def resolve(
        self,
        phone: str,
        location_id: str,
        *,
        channel: MessageType = MessageType.SMS,
        custom_fields: dict[str, Any] | None = None,
    ) -> CrmConversationRef:
        resolved = await self.resolve_with_action(
            phone, location_id, channel=channel, custom_fields=custom_fields
        )
        return resolved.ref

    async def resolve_with_action(
        self,
        phone: str,
        location_id: str,
        *,
        channel: MessageType = MessageType.SMS,
        custom_fields: dict[str, Any] | None = None,
    ) -> ResolvedContact:
        """Upsert do contato seguido de create_or_get da conversa.

        Raises:
            CrmError: Qualquer falha do CRM (propagada ao chamador).
        """
        upserted = await self._crm.upsert_contact(phone, location_id, custom_fields)
        ref = await self._crm.create_or_get_conversation(
            upserted.contact.contact_id, location_id, channel
        )
        logger.info(
            "crm_contact_resolved",
            extra={
                "contact_id": ref.contact_id,
                "conversation_id": ref.conversation_id,
                "location_id": location_id,
                "action": upserted.action.value,
            },
        )
        return ResolvedContact(ref=ref, action=upserted.action)
