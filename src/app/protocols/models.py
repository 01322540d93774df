"""Modelos internos do motor de sincronização.

Tipos imutáveis trocados entre rotas, use cases e gateways. Nenhum deles
é persistido por este serviço: o estado vive no provedor e no CRM.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from utils.errors import CrmError, SyncError

# Tipos de evento inbound que disparam sincronização com o CRM
SMS_RECEIVED_EVENT = "message_received_sms"
MMS_RECEIVED_EVENT = "message_received_mms"
SYNC_EVENT_TYPES = frozenset({SMS_RECEIVED_EVENT, MMS_RECEIVED_EVENT})

# Status terminais de entrega do provedor
FINAL_DELIVERY_STATUSES = frozenset({"delivered", "undeliverable"})


class MessageType(str, Enum):
    SMS = "SMS"
    MMS = "MMS"


class Direction(str, Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class UpsertAction(str, Enum):
    CREATED = "created"
    FOUND = "found"


class SyncState(str, Enum):
    """Estados terminais do saga outbound (envio → espelhamento no CRM)."""

    REJECTED = "rejected"
    SEND_FAILED = "send_failed"
    SYNCED = "synced"
    SYNC_SKIPPED = "sync_skipped"
    SYNC_FAILED = "sync_failed"


# ──────────────────────────────────────────────────────────────────────────────
# Outbound
# ──────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class OutboundSendRequest:
    """Pedido de envio validado na borda.

    `media_url` presente seleciona MMS em vez de SMS.
    """

    to: str
    sender: str
    body: str
    media_url: str | None = None
    location_id: str | None = None
    contact_id: str | None = None
    add_to_campaign: bool = False
    campaign_id: str | None = None
    reference: str | None = None

    @property
    def message_type(self) -> MessageType:
        return MessageType.MMS if self.media_url else MessageType.SMS

    @property
    def wants_crm_sync(self) -> bool:
        return bool(self.location_id and self.contact_id)


@dataclass(frozen=True, slots=True)
class ProviderMessageResult:
    """Resultado de envio devolvido pelo provedor (somente IDs reais)."""

    provider_message_id: str
    provider_status: str
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class MessageStatus:
    """Status de uma mensagem consultado no provedor."""

    provider_message_id: str
    status: str
    delivered_at: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Resultado do saga outbound.

    `synced` é True somente quando envio e espelhamento no CRM deram certo.
    `crm_error` é diagnóstico da etapa best-effort, nunca muda `success`.
    """

    success: bool
    state: SyncState
    provider_message_id: str | None = None
    synced: bool = False
    error: SyncError | None = None
    crm_error: CrmError | None = None
    campaign_enrolled: bool | None = None


# ──────────────────────────────────────────────────────────────────────────────
# Inbound
# ──────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MessageReceived:
    """Mensagem recebida pelo provedor (webhook inbound)."""

    event_type: str
    sender: str
    recipient: str
    body: str = ""
    media: tuple[str, ...] = ()
    received_at: str | None = None
    provider_message_id: str | None = None

    @property
    def should_sync(self) -> bool:
        return self.event_type in SYNC_EVENT_TYPES

    @property
    def message_type(self) -> MessageType:
        return MessageType.MMS if self.media else MessageType.SMS


@dataclass(frozen=True, slots=True)
class DeliveryReceipt:
    """Recibo de entrega de uma mensagem enviada."""

    provider_message_id: str
    status: str
    timestamp: str | None = None

    @property
    def is_final(self) -> bool:
        return self.status.lower() in FINAL_DELIVERY_STATUSES


InboundWebhookEvent = MessageReceived | DeliveryReceipt


@dataclass(frozen=True, slots=True)
class InboundAck:
    """Confirmação devolvida ao provedor — sempre `received=True`."""

    received: bool = True
    synced: bool = False
    action: UpsertAction | None = None
    error: str | None = None


# ──────────────────────────────────────────────────────────────────────────────
# CRM
# ──────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class LocationRef:
    """Sub-conta (location) do CRM."""

    location_id: str
    name: str = ""


@dataclass(frozen=True, slots=True)
class CrmContact:
    contact_id: str
    location_id: str
    phone: str = ""


@dataclass(frozen=True, slots=True)
class ContactUpsertResult:
    contact: CrmContact
    action: UpsertAction


@dataclass(frozen=True, slots=True)
class CrmConversationRef:
    """Par contato/conversa no CRM. Válido apenas durante uma requisição."""

    contact_id: str
    conversation_id: str
    location_id: str


@dataclass(frozen=True, slots=True)
class CrmMessage:
    """Mensagem a registrar numa conversa do CRM."""

    body: str
    message_type: MessageType
    direction: Direction
    media_urls: tuple[str, ...] = ()
    provider_message_id: str | None = None
    timestamp: str | None = None
