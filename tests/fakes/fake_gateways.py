"""Fakes in-memory do provedor SMS/MMS e do CRM para testes deterministas."""

from __future__ import annotations

from typing import Any

from app.protocols.models import (
    ContactUpsertResult,
    CrmContact,
    CrmConversationRef,
    CrmMessage,
    LocationRef,
    MessageStatus,
    MessageType,
    ProviderMessageResult,
    UpsertAction,
)
from utils.errors import NotFoundError


class FakeProvider:
    """Registra chamadas e devolve IDs sequenciais (ou levanta `fail_with`)."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.fail_with = fail_with
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.statuses: dict[str, MessageStatus] = {}
        self.webhooks: list[tuple[str, list[str]]] = []
        self._counter = 0

    def _next_result(self) -> ProviderMessageResult:
        self._counter += 1
        return ProviderMessageResult(
            provider_message_id=f"tb-{self._counter}",
            provider_status="queued",
        )

    async def send_sms(self, to: str, sender: str, body: str, reference: str) -> ProviderMessageResult:
        self.calls.append(
            ("send_sms", {"to": to, "from": sender, "body": body, "reference": reference})
        )
        if self.fail_with:
            raise self.fail_with
        return self._next_result()

    async def send_mms(
        self,
        to: str,
        sender: str,
        body: str,
        media_url: str,
        reference: str,
    ) -> ProviderMessageResult:
        self.calls.append(
            (
                "send_mms",
                {
                    "to": to,
                    "from": sender,
                    "body": body,
                    "media_url": media_url,
                    "reference": reference,
                },
            )
        )
        if self.fail_with:
            raise self.fail_with
        return self._next_result()

    async def get_message_status(self, provider_message_id: str) -> MessageStatus:
        self.calls.append(("get_message_status", {"id": provider_message_id}))
        if provider_message_id not in self.statuses:
            raise NotFoundError(f"message not found: {provider_message_id}")
        return self.statuses[provider_message_id]

    async def register_webhook(self, callback_url: str, event_types: list[str]) -> None:
        self.webhooks.append((callback_url, list(event_types)))


class FakeCrm:
    """CRM em memória com upsert idempotente por (phone, location).

    `fail_on` mapeia nome de operação → exceção a levantar.
    """

    def __init__(
        self,
        locations: list[str] | None = None,
        fail_on: dict[str, Exception] | None = None,
    ) -> None:
        self.locations = locations if locations is not None else ["loc-1"]
        self.fail_on = fail_on or {}
        self.calls: list[str] = []
        self.contacts: dict[tuple[str, str], CrmContact] = {}
        self.conversations: dict[tuple[str, str], str] = {}
        self.messages: list[tuple[CrmConversationRef, CrmMessage]] = []
        self.campaigns: list[tuple[str, str, str]] = []
        self.custom_fields: list[dict[str, Any] | None] = []

    def _maybe_fail(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise self.fail_on[operation]

    async def list_locations(self) -> list[LocationRef]:
        self._maybe_fail("list_locations")
        return [LocationRef(location_id=loc) for loc in self.locations]

    async def upsert_contact(
        self,
        phone: str,
        location_id: str,
        custom_fields: dict[str, Any] | None = None,
    ) -> ContactUpsertResult:
        self._maybe_fail("upsert_contact")
        self.custom_fields.append(custom_fields)
        key = (phone, location_id)
        if key in self.contacts:
            return ContactUpsertResult(contact=self.contacts[key], action=UpsertAction.FOUND)
        contact = CrmContact(
            contact_id=f"contact-{len(self.contacts) + 1}",
            location_id=location_id,
            phone=phone,
        )
        self.contacts[key] = contact
        return ContactUpsertResult(contact=contact, action=UpsertAction.CREATED)

    async def create_or_get_conversation(
        self,
        contact_id: str,
        location_id: str,
        channel: MessageType,
    ) -> CrmConversationRef:
        self._maybe_fail("create_or_get_conversation")
        key = (contact_id, location_id)
        conversation_id = self.conversations.setdefault(key, f"conv-{len(self.conversations) + 1}")
        return CrmConversationRef(contact_id, conversation_id, location_id)

    async def append_message(self, ref: CrmConversationRef, message: CrmMessage) -> None:
        self._maybe_fail("append_message")
        self.messages.append((ref, message))

    async def add_to_campaign(self, contact_id: str, campaign_id: str, location_id: str) -> None:
        self._maybe_fail("add_to_campaign")
        self.campaigns.append((contact_id, campaign_id, location_id))
