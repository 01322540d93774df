"""Protocolos e contratos do core da aplicação."""

from .crm_gateway import CrmGatewayProtocol
from .models import (
    ContactUpsertResult,
    CrmContact,
    CrmConversationRef,
    CrmMessage,
    DeliveryReceipt,
    Direction,
    InboundAck,
    InboundWebhookEvent,
    LocationRef,
    MessageReceived,
    MessageStatus,
    MessageType,
    OutboundSendRequest,
    ProviderMessageResult,
    SyncResult,
    SyncState,
    UpsertAction,
)
from .provider_gateway import ProviderGatewayProtocol

__all__ = [
    "ContactUpsertResult",
    "CrmContact",
    "CrmConversationRef",
    "CrmGatewayProtocol",
    "CrmMessage",
    "DeliveryReceipt",
    "Direction",
    "InboundAck",
    "InboundWebhookEvent",
    "LocationRef",
    "MessageReceived",
    "MessageStatus",
    "MessageType",
    "OutboundSendRequest",
    "ProviderGatewayProtocol",
    "ProviderMessageResult",
    "SyncResult",
    "SyncState",
    "UpsertAction",
]
