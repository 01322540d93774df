"""Motor de sincronização SMS/MMS ↔ CRM.

Outbound (saga de duas etapas):
    envio aceito → SYNCED | SYNC_SKIPPED | SYNC_FAILED
    antes ou no envio → REJECTED | SEND_FAILED

- Envio no provedor é a etapa fatal: falha encerra o fluxo sem tocar o CRM.
- Espelhamento no CRM é best-effort: falha vira `synced=False` + `crm_error`.
- Inscrição em campanha é best-effort e não altera `synced`.

Inbound (webhooks do provedor):
- Só `message_received_sms` / `message_received_mms` sincronizam.
- Sempre devolve InboundAck; exceções viram diagnóstico em `error`.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from api.normalizers.sms import PhoneNumberNormalizer
from app.observability import record_delivery_status, record_sync_outcome
from app.protocols.models import (
    CrmMessage,
    DeliveryReceipt,
    Direction,
    InboundAck,
    InboundWebhookEvent,
    MessageReceived,
    MessageStatus,
    OutboundSendRequest,
    ProviderMessageResult,
    SyncResult,
    SyncState,
)
from app.services import ContactResolver, LocationPolicy
from config.logging import log_degraded
from utils.errors import CallerError, CrmError, ProviderError

if TYPE_CHECKING:
    from app.protocols.crm_gateway import CrmGatewayProtocol
    from app.protocols.provider_gateway import ProviderGatewayProtocol

logger = logging.getLogger(__name__)

OUTBOUND_FLOW = "outbound"
INBOUND_FLOW = "inbound"
DELIVERY_FLOW = "delivery"

NO_LOCATION_ERROR = "no_location_available"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def default_reference(contact_id: str | None, now: datetime) -> str:
    """Referência de idempotência quando o chamador não envia uma."""
    epoch_ms = int(now.timestamp() * 1000)
    return f"ghl_{contact_id or 'unknown'}_{epoch_ms}"


class SyncEngine:
    """Orquestra provedor SMS/MMS e CRM para envios e webhooks."""

    def __init__(
        self,
        provider: ProviderGatewayProtocol,
        crm: CrmGatewayProtocol,
        *,
        normalizer: PhoneNumberNormalizer | None = None,
        resolver: ContactResolver | None = None,
        location_policy: LocationPolicy | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._provider = provider
        self._crm = crm
        self._normalizer = normalizer or PhoneNumberNormalizer()
        self._resolver = resolver or ContactResolver(crm)
        self._location_policy = location_policy or LocationPolicy(
            crm, normalizer=self._normalizer
        )
        self._clock = clock

    # ──────────────────────────────────────────────────────────────────────
    # Outbound
    # ──────────────────────────────────────────────────────────────────────

    async def send_and_sync(self, request: OutboundSendRequest) -> SyncResult:
        """Envia pelo provedor e espelha a mensagem na conversa do CRM."""
        to = self._normalizer.normalize(request.to)
        try:
            self._validate_outbound(request, to)
        except CallerError as exc:
            record_sync_outcome(OUTBOUND_FLOW, SyncState.REJECTED.value, error_code=exc.error_code)
            return SyncResult(success=False, state=SyncState.REJECTED, error=exc)

        reference = request.reference or default_reference(request.contact_id, self._clock())

        try:
            sent = await self._dispatch(request, to, reference)
        except ProviderError as exc:
            logger.warning(
                "outbound_send_failed",
                extra={
                    "error_code": exc.error_code,
                    "kind": exc.kind.value,
                    "status_code": exc.status_code,
                    "message_type": request.message_type.value,
                },
            )
            record_sync_outcome(OUTBOUND_FLOW, SyncState.SEND_FAILED.value, error_code=exc.kind.value)
            return SyncResult(success=False, state=SyncState.SEND_FAILED, error=exc)

        logger.info(
            "outbound_sent",
            extra={
                "provider_message_id": sent.provider_message_id,
                "provider_status": sent.provider_status,
                "message_type": request.message_type.value,
            },
        )

        if not request.wants_crm_sync:
            record_sync_outcome(OUTBOUND_FLOW, SyncState.SYNC_SKIPPED.value)
            return SyncResult(
                success=True,
                state=SyncState.SYNC_SKIPPED,
                provider_message_id=sent.provider_message_id,
            )

        crm_error = await self._mirror_outbound(request, sent)
        state = SyncState.SYNC_FAILED if crm_error else SyncState.SYNCED
        campaign_enrolled = await self._enroll_in_campaign(request)

        record_sync_outcome(
            OUTBOUND_FLOW,
            state.value,
            error_code=crm_error.error_code if crm_error else None,
        )
        return SyncResult(
            success=True,
            state=state,
            provider_message_id=sent.provider_message_id,
            synced=crm_error is None,
            crm_error=crm_error,
            campaign_enrolled=campaign_enrolled,
        )

    @staticmethod
    def _validate_outbound(request: OutboundSendRequest, to: str) -> None:
        if not to:
            raise CallerError("Recipient 'to' has no digits")
        if not request.sender or not request.sender.strip():
            raise CallerError("Sender 'from' is required")
        if not request.body or not request.body.strip():
            raise CallerError("Message body is required")

    async def _dispatch(
        self,
        request: OutboundSendRequest,
        to: str,
        reference: str,
    ) -> ProviderMessageResult:
        if request.media_url:
            return await self._provider.send_mms(
                to, request.sender, request.body, request.media_url, reference
            )
        return await self._provider.send_sms(to, request.sender, request.body, reference)

    async def _mirror_outbound(
        self,
        request: OutboundSendRequest,
        sent: ProviderMessageResult,
    ) -> CrmError | None:
        """Registra a mensagem enviada no CRM. Retorna o erro, nunca levanta."""
        location_id = request.location_id or ""
        contact_id = request.contact_id or ""
        message = CrmMessage(
            body=request.body,
            message_type=request.message_type,
            direction=Direction.OUTBOUND,
            media_urls=(request.media_url,) if request.media_url else (),
            provider_message_id=sent.provider_message_id,
            timestamp=self._clock().isoformat(),
        )
        try:
            ref = await self._crm.create_or_get_conversation(
                contact_id, location_id, request.message_type
            )
            await self._crm.append_message(ref, message)
        except CrmError as exc:
            log_degraded(logger, "crm_append", reason=exc.error_code, error_type=type(exc).__name__)
            return exc
        except Exception as exc:
            logger.exception("crm_append_unexpected_error")
            return CrmError(f"Unexpected CRM failure: {type(exc).__name__}")
        return None

    async def _enroll_in_campaign(self, request: OutboundSendRequest) -> bool | None:
        if not (request.add_to_campaign and request.campaign_id):
            return None
        try:
            await self._crm.add_to_campaign(
                request.contact_id or "", request.campaign_id, request.location_id or ""
            )
        except CrmError as exc:
            log_degraded(
                logger, "crm_campaign", reason=exc.error_code, error_type=type(exc).__name__
            )
            return False
        logger.info("crm_campaign_enrolled", extra={"campaign_id": request.campaign_id})
        return True

    async def get_message_status(self, provider_message_id: str) -> MessageStatus:
        """Consulta o status no provedor.

        Raises:
            CallerError: ID vazio.
            NotFoundError: ID desconhecido pelo provedor.
            ProviderError: Falha do provedor.
        """
        if not provider_message_id or not provider_message_id.strip():
            raise CallerError("Message ID is required")
        start = time.perf_counter()
        status = await self._provider.get_message_status(provider_message_id.strip())
        logger.info(
            "message_status_fetched",
            extra={
                "provider_message_id": status.provider_message_id,
                "status": status.status,
                "elapsed_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return status

    # ──────────────────────────────────────────────────────────────────────
    # Inbound
    # ──────────────────────────────────────────────────────────────────────

    async def handle_inbound_webhook(self, event: InboundWebhookEvent) -> InboundAck:
        """Projeta um webhook do provedor no CRM. Nunca levanta."""
        if isinstance(event, DeliveryReceipt):
            return await self.handle_delivery_receipt(event)

        if not event.should_sync:
            logger.info("inbound_event_ignored", extra={"event_type": event.event_type})
            record_sync_outcome(INBOUND_FLOW, "ignored")
            return InboundAck()

        try:
            return await self._sync_inbound(event)
        except Exception as exc:
            error_code = getattr(exc, "error_code", type(exc).__name__)
            if isinstance(exc, (CrmError, CallerError)):
                logger.warning("inbound_sync_failed", extra={"error_code": error_code})
            else:
                logger.exception("inbound_sync_unexpected_error")
            record_sync_outcome(INBOUND_FLOW, SyncState.SYNC_FAILED.value, error_code=error_code)
            return InboundAck(error=str(exc) or error_code)

    async def _sync_inbound(self, event: MessageReceived) -> InboundAck:
        phone = self._normalizer.normalize(event.sender)
        if not phone:
            raise CallerError("Inbound sender has no digits")

        location_id = await self._location_policy.select(provider_number=event.recipient)
        if not location_id:
            log_degraded(logger, "crm_location", reason=NO_LOCATION_ERROR)
            record_sync_outcome(INBOUND_FLOW, SyncState.SYNC_SKIPPED.value)
            return InboundAck(error=NO_LOCATION_ERROR)

        received_at = event.received_at or self._clock().isoformat()
        resolved = await self._resolver.resolve_with_action(
            phone,
            location_id,
            channel=event.message_type,
            custom_fields={
                "last_incoming_message": event.body,
                "last_message_date": received_at,
            },
        )
        await self._crm.append_message(
            resolved.ref,
            CrmMessage(
                body=event.body,
                message_type=event.message_type,
                direction=Direction.INBOUND,
                media_urls=event.media,
                provider_message_id=event.provider_message_id,
                timestamp=event.received_at,
            ),
        )
        logger.info(
            "inbound_synced",
            extra={
                "contact_id": resolved.ref.contact_id,
                "action": resolved.action.value,
                "message_type": event.message_type.value,
            },
        )
        record_sync_outcome(INBOUND_FLOW, SyncState.SYNCED.value)
        return InboundAck(synced=True, action=resolved.action)

    async def handle_delivery_receipt(self, receipt: DeliveryReceipt) -> InboundAck:
        """Recibo de entrega: apenas log + métrica (nada é persistido)."""
        logger.info(
            "delivery_receipt_received",
            extra={
                "provider_message_id": receipt.provider_message_id,
                "status": receipt.status,
                "is_final": receipt.is_final,
            },
        )
        record_delivery_status(receipt.status, receipt.is_final)
        record_sync_outcome(DELIVERY_FLOW, "acknowledged")
        return InboundAck()

    # ──────────────────────────────────────────────────────────────────────
    # Provider setup
    # ──────────────────────────────────────────────────────────────────────

    async def register_provider_webhooks(
        self,
        callbacks: dict[str, tuple[str, ...]],
    ) -> list[str]:
        """Registra cada callback para seus eventos. Retorna as URLs registradas.

        Raises:
            ProviderError: Falha do provedor (duplicados já são no-op no gateway).
        """
        registered: list[str] = []
        for url, event_types in callbacks.items():
            await self._provider.register_webhook(url, list(event_types))
            registered.append(url)
        return registered
