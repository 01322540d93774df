"""Gateway HighLevel — contatos, conversas, mensagens e campanhas.

Endpoints (LeadConnector API v2):
- GET  /locations/search
- POST /contacts/upsert                       (find-or-create atômico)
- POST /conversations/                         (cria; conflito → busca)
- GET  /conversations/search
- POST /conversations/messages/inbound
- POST /conversations/messages/outbound
- POST /contacts/{contactId}/campaigns/{campaignId}

Nenhum resultado é cacheado: cada requisição resolve tudo no CRM.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from api.connectors.highlevel.errors import crm_error_from_response
from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError, safe_json
from app.observability import record_latency
from app.protocols.models import (
    ContactUpsertResult,
    CrmContact,
    CrmConversationRef,
    Direction,
    LocationRef,
    UpsertAction,
)
from utils.errors import CrmError, CrmUnavailableError

if TYPE_CHECKING:
    import httpx

    from app.protocols.models import CrmMessage, MessageType
    from config.settings import HighLevelSettings

logger = logging.getLogger(__name__)

_MESSAGE_PATHS = {
    Direction.INBOUND: "/conversations/messages/inbound",
    Direction.OUTBOUND: "/conversations/messages/outbound",
}


def to_e164(phone: str) -> str:
    """Formata número normalizado (só dígitos) como E.164 para o CRM."""
    return phone if phone.startswith("+") or not phone else f"+{phone}"


class HighLevelGateway(HttpClient):
    """Cliente do CRM HighLevel (implementa CrmGatewayProtocol)."""

    component = "highlevel"

    def __init__(
        self,
        token: str,
        api_version: str,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        company_id: str = "",
        conversation_provider_id: str = "",
    ) -> None:
        if not token or not token.strip():
            raise ValueError("token é obrigatório para o HighLevel")
        super().__init__(config, transport)
        self._token = token
        self._api_version = api_version
        self._company_id = company_id
        self._conversation_provider_id = conversation_provider_id

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Version": self._api_version,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _call(
        self,
        method: str,
        path: str,
        operation: str,
        *,
        payload: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> tuple[int, dict[str, Any]]:
        """Executa chamada; transporte falho vira CrmUnavailableError."""
        started_at = time.perf_counter()
        try:
            response = await self.request(
                method, path, json=payload, params=params, headers=self._headers()
            )
        except HttpError as exc:
            logger.error(
                "highlevel_transport_error",
                extra={"operation": operation, "error_type": type(exc).__name__, "error": str(exc)},
            )
            raise CrmUnavailableError(f"HighLevel unreachable: {exc}") from exc
        latency_ms = (time.perf_counter() - started_at) * 1000
        record_latency(self.component, operation, latency_ms)
        logger.debug(
            "highlevel_response",
            extra={"operation": operation, "status_code": response.status_code},
        )
        return response.status_code, safe_json(response)

    @staticmethod
    def _raise_for_error(status_code: int, data: dict[str, Any], operation: str) -> None:
        error = crm_error_from_response(status_code, data, operation)
        if error is None:
            return
        logger.warning(
            "highlevel_api_error",
            extra={
                "operation": operation,
                "status_code": status_code,
                "error_code": error.error_code,
            },
        )
        raise error

    async def list_locations(self) -> list[LocationRef]:
        params = {"companyId": self._company_id, "limit": 100} if self._company_id else None
        status_code, data = await self._call(
            "GET", "/locations/search", "list_locations", params=params
        )
        self._raise_for_error(status_code, data, "list_locations")
        return [
            LocationRef(location_id=str(item["id"]), name=str(item.get("name") or ""))
            for item in data.get("locations") or []
            if isinstance(item, dict) and item.get("id")
        ]

    async def upsert_contact(
        self,
        phone: str,
        location_id: str,
        custom_fields: dict[str, Any] | None = None,
    ) -> ContactUpsertResult:
        """Find-or-create nativo por (phone, location)."""
        payload: dict[str, Any] = {"locationId": location_id, "phone": to_e164(phone)}
        if custom_fields:
            payload["customFields"] = [
                {"key": key, "field_value": value} for key, value in custom_fields.items()
            ]
        status_code, data = await self._call(
            "POST", "/contacts/upsert", "upsert_contact", payload=payload
        )
        self._raise_for_error(status_code, data, "upsert_contact")

        contact = data.get("contact") or {}
        contact_id = contact.get("id")
        if not contact_id:
            raise CrmError("HighLevel upsert_contact returned no contact id", status_code=status_code)
        action = UpsertAction.CREATED if data.get("new") else UpsertAction.FOUND
        return ContactUpsertResult(
            contact=CrmContact(
                contact_id=str(contact_id),
                location_id=str(contact.get("locationId") or location_id),
                phone=str(contact.get("phone") or phone),
            ),
            action=action,
        )

    async def create_or_get_conversation(
        self,
        contact_id: str,
        location_id: str,
        channel: MessageType,
    ) -> CrmConversationRef:
        """Cria conversa; se já existir, reaproveita a existente.

        Create-first evita a corrida de buscar-e-depois-criar: o CRM
        recusa a duplicata e devolvemos a conversa que ele já tem.
        """
        payload = {"locationId": location_id, "contactId": contact_id}
        status_code, data = await self._call(
            "POST", "/conversations/", "create_conversation", payload=payload
        )

        conversation_id = _conversation_id(data)
        if status_code < 400 and conversation_id:
            return CrmConversationRef(contact_id, conversation_id, location_id)

        if status_code < 400 or status_code in (400, 409, 422):
            if conversation_id is None:
                conversation_id = await self._search_conversation(contact_id, location_id)
            if conversation_id:
                logger.debug(
                    "highlevel_conversation_reused",
                    extra={"channel": channel.value, "status_code": status_code},
                )
                return CrmConversationRef(contact_id, conversation_id, location_id)

        self._raise_for_error(status_code, data, "create_conversation")
        raise CrmError("HighLevel conversation could not be resolved", status_code=status_code)

    async def _search_conversation(self, contact_id: str, location_id: str) -> str | None:
        status_code, data = await self._call(
            "GET",
            "/conversations/search",
            "search_conversation",
            params={"locationId": location_id, "contactId": contact_id},
        )
        self._raise_for_error(status_code, data, "search_conversation")
        for item in data.get("conversations") or []:
            if isinstance(item, dict) and item.get("id"):
                return str(item["id"])
        return None

    async def append_message(
        self,
        ref: CrmConversationRef,
        message: CrmMessage,
    ) -> None:
        payload: dict[str, Any] = {
            "type": "SMS",
            "conversationId": ref.conversation_id,
            "message": message.body,
            "attachments": list(message.media_urls),
        }
        if message.provider_message_id:
            payload["altId"] = message.provider_message_id
        if message.timestamp:
            payload["date"] = message.timestamp
        if self._conversation_provider_id:
            payload["conversationProviderId"] = self._conversation_provider_id

        operation = f"append_{message.direction.value}_message"
        status_code, data = await self._call(
            "POST", _MESSAGE_PATHS[message.direction], operation, payload=payload
        )
        self._raise_for_error(status_code, data, operation)

    async def add_to_campaign(
        self,
        contact_id: str,
        campaign_id: str,
        location_id: str,
    ) -> None:
        path = f"/contacts/{quote(contact_id, safe='')}/campaigns/{quote(campaign_id, safe='')}"
        status_code, data = await self._call(
            "POST", path, "add_to_campaign", payload={"locationId": location_id}
        )
        self._raise_for_error(status_code, data, "add_to_campaign")


def _conversation_id(data: dict[str, Any]) -> str | None:
    conversation = data.get("conversation")
    if isinstance(conversation, dict) and conversation.get("id"):
        return str(conversation["id"])
    for key in ("conversationId", "id"):
        if data.get(key):
            return str(data[key])
    return None


def create_highlevel_gateway(
    settings: HighLevelSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HighLevelGateway:
    """Factory para criar gateway HighLevel com config do ambiente."""
    from config.settings import get_highlevel_settings

    highlevel = settings or get_highlevel_settings()
    config = HttpClientConfig(
        base_url=highlevel.api_base_url,
        timeout_seconds=highlevel.request_timeout_seconds,
        max_retries=highlevel.max_retries,
    )
    return HighLevelGateway(
        token=highlevel.private_integration_token,
        api_version=highlevel.api_version,
        config=config,
        transport=transport,
        company_id=highlevel.company_id,
        conversation_provider_id=highlevel.conversation_provider_id,
    )
