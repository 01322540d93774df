"""Gateway Tall Bob — envio de SMS/MMS, status e registro de webhooks.

Estende HttpClient genérico com comportamentos específicos do Tall Bob:
- Autenticação HTTP Basic (username:api_key)
- Classificação de erros em ProviderErrorKind
- Logging estruturado sem credenciais e com telefones mascarados
- Nunca inventa message_id: resposta 2xx sem ID é erro UNKNOWN

Endpoints (API v2):
- POST /v2/sms/send
- POST /v2/mms/send
- GET  /v2/messages/{id}
- POST /v2/webhooks
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError, safe_json
from api.connectors.tallbob.errors import parse_tallbob_error
from api.connectors.tallbob.tallbob_logging import (
    log_api_error,
    log_request,
    log_response,
    log_transport_error,
)
from app.observability import record_latency
from app.protocols.models import MessageStatus, ProviderMessageResult
from utils.errors import NotFoundError, ProviderError, ProviderErrorKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from config.settings import TallBobSettings

logger = logging.getLogger(__name__)

SMS_SEND_PATH = "/v2/sms/send"
MMS_SEND_PATH = "/v2/mms/send"
MESSAGES_PATH = "/v2/messages"
WEBHOOKS_PATH = "/v2/webhooks"

# Eventos de webhook do provedor por callback deste serviço
INCOMING_WEBHOOK_EVENTS = ("message.received",)
DELIVERY_WEBHOOK_EVENTS = ("message.delivered",)

_MESSAGE_ID_KEYS = ("messageId", "message_id", "id")


def extract_message_id(data: dict[str, Any]) -> str | None:
    """Procura o ID da mensagem no corpo (raiz ou envelope `data`)."""
    candidates = [data]
    nested = data.get("data")
    if isinstance(nested, dict):
        candidates.append(nested)
    for candidate in candidates:
        for key in _MESSAGE_ID_KEYS:
            value = candidate.get(key)
            if value not in (None, ""):
                return str(value)
    return None


class TallBobGateway(HttpClient):
    """Cliente do provedor Tall Bob (implementa ProviderGatewayProtocol)."""

    component = "tallbob"

    def __init__(
        self,
        auth_header: str,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        mms_subject: str = "",
    ) -> None:
        """Inicializa gateway.

        Args:
            auth_header: Valor completo do header Authorization (Basic ...)
            config: Configuração HTTP base (base_url, timeout, retries)
            transport: Transport httpx opcional (testes)
            mms_subject: Assunto enviado junto com MMS (opcional)
        """
        if not auth_header or not auth_header.strip():
            raise ValueError("auth_header é obrigatório para o Tall Bob")
        super().__init__(config, transport)
        self._auth_header = auth_header
        self._mms_subject = mms_subject

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": self._auth_header,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _call(
        self,
        method: str,
        path: str,
        operation: str,
        payload: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Executa chamada com logging/latência; falha de transporte → NETWORK."""
        log_request(method, path, payload)
        started_at = time.perf_counter()
        try:
            response = await self.request(method, path, json=payload, headers=self._headers())
        except HttpError as exc:
            log_transport_error(method, path, exc)
            raise ProviderError(
                f"Tall Bob unreachable: {exc}",
                kind=ProviderErrorKind.NETWORK,
            ) from exc
        latency_ms = (time.perf_counter() - started_at) * 1000
        log_response(method, path, response.status_code, latency_ms)
        record_latency(self.component, operation, latency_ms)
        return response

    def _raise_for_error(
        self,
        response: httpx.Response,
        data: dict[str, Any],
        method: str,
        path: str,
        *,
        media: bool = False,
    ) -> None:
        api_error = parse_tallbob_error(response.status_code, data, media=media)
        if api_error is None:
            return
        log_api_error(api_error, method, path)
        raise api_error.to_provider_error()

    async def _send(
        self,
        path: str,
        operation: str,
        payload: dict[str, Any],
        *,
        media: bool,
    ) -> ProviderMessageResult:
        response = await self._call("POST", path, operation, payload)
        data = safe_json(response)
        self._raise_for_error(response, data, "POST", path, media=media)

        message_id = extract_message_id(data)
        if message_id is None:
            logger.error(
                "tallbob_missing_message_id",
                extra={"endpoint": path, "status_code": response.status_code},
            )
            raise ProviderError(
                "Tall Bob response without message id",
                kind=ProviderErrorKind.UNKNOWN,
                status_code=response.status_code,
            )
        return ProviderMessageResult(
            provider_message_id=message_id,
            provider_status=str(data.get("status") or "accepted"),
            raw=data,
        )

    async def send_sms(
        self,
        to: str,
        sender: str,
        body: str,
        reference: str,
    ) -> ProviderMessageResult:
        """Envia SMS. Parâmetros do chamador são usados sem alteração."""
        payload = {
            "to": to,
            "from": sender,
            "message": body,
            "reference": reference,
        }
        return await self._send(SMS_SEND_PATH, "send_sms", payload, media=False)

    async def send_mms(
        self,
        to: str,
        sender: str,
        body: str,
        media_url: str,
        reference: str,
    ) -> ProviderMessageResult:
        """Envia MMS com mídia remota (o provedor baixa `media_url`)."""
        payload: dict[str, Any] = {
            "to": to,
            "from": sender,
            "message": body,
            "url": media_url,
            "reference": reference,
        }
        if self._mms_subject:
            payload["subject"] = self._mms_subject
        return await self._send(MMS_SEND_PATH, "send_mms", payload, media=True)

    async def get_message_status(self, provider_message_id: str) -> MessageStatus:
        """Consulta status de uma mensagem.

        Raises:
            NotFoundError: Se o ID é desconhecido para o provedor.
            ProviderError: Demais falhas.
        """
        path = f"{MESSAGES_PATH}/{quote(provider_message_id, safe='')}"
        response = await self._call("GET", path, "get_message_status")
        data = safe_json(response)
        if response.status_code == 404:
            raise NotFoundError(f"message not found: {provider_message_id}")
        self._raise_for_error(response, data, "GET", path)

        body = data.get("data") if isinstance(data.get("data"), dict) else data
        return MessageStatus(
            provider_message_id=provider_message_id,
            status=str(body.get("status") or "unknown"),
            delivered_at=body.get("deliveredAt") or body.get("delivered_at"),
            raw=data,
        )

    async def register_webhook(
        self,
        callback_url: str,
        event_types: Sequence[str],
    ) -> None:
        """Registra callback para cada tipo de evento.

        Idempotente: registro duplicado (409 ou "already exists") é no-op.
        """
        for event_type in event_types:
            payload = {"url": callback_url, "event_type": event_type}
            response = await self._call("POST", WEBHOOKS_PATH, "register_webhook", payload)
            data = safe_json(response)
            if _is_duplicate_registration(response.status_code, data):
                logger.info(
                    "tallbob_webhook_already_registered",
                    extra={"event_type": event_type},
                )
                continue
            self._raise_for_error(response, data, "POST", WEBHOOKS_PATH)
            logger.info("tallbob_webhook_registered", extra={"event_type": event_type})


def _is_duplicate_registration(status_code: int, data: dict[str, Any]) -> bool:
    if status_code == 409:
        return True
    if status_code in (400, 422):
        text = str(data).lower()
        return "already exist" in text or "duplicate" in text
    return False


def create_tallbob_gateway(
    settings: TallBobSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TallBobGateway:
    """Factory para criar gateway Tall Bob com config do ambiente."""
    from config.settings import get_tallbob_settings

    tallbob = settings or get_tallbob_settings()
    config = HttpClientConfig(
        base_url=tallbob.api_base_url,
        timeout_seconds=tallbob.request_timeout_seconds,
        max_retries=tallbob.max_retries,
    )
    return TallBobGateway(
        auth_header=tallbob.auth_header,
        config=config,
        transport=transport,
        mms_subject=tallbob.mms_subject,
    )
