"""Testes dos endpoints /api/send-and-sync e /api/status."""

from __future__ import annotations

import json

import pytest
from starlette.requests import Request

from api.routes.messages import router as messages_module
from app.protocols.models import MessageStatus
from app.use_cases.sms import SyncEngine
from tests.fakes.fake_gateways import FakeCrm, FakeProvider
from utils.errors import CrmUnavailableError, ProviderError, ProviderErrorKind


def _build_request(
    *,
    method: str = "POST",
    body: bytes = b"",
    headers: dict[str, str] | None = None,
) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _use_engine(
    monkeypatch: pytest.MonkeyPatch,
    provider: FakeProvider | None = None,
    crm: FakeCrm | None = None,
) -> tuple[FakeProvider, FakeCrm]:
    provider = provider or FakeProvider()
    crm = crm or FakeCrm()
    engine = SyncEngine(provider, crm)
    monkeypatch.setattr(messages_module, "get_sync_engine", lambda: engine)
    return provider, crm


def _json(response: object) -> dict[str, object]:
    return json.loads(response.body.decode("utf-8"))  # type: ignore[attr-defined]


SEND_BODY = {
    "to": "0499000100",
    "from": "ACME",
    "message": "Olá",
    "locationId": "loc-1",
    "contactId": "contact-1",
}


@pytest.mark.asyncio
async def test_send_and_sync_success(monkeypatch: pytest.MonkeyPatch) -> None:
    provider, crm = _use_engine(monkeypatch)

    response = await messages_module.send_and_sync(
        _build_request(body=json.dumps(SEND_BODY).encode())
    )

    assert response == {
        "success": True,
        "messageId": "tb-1",
        "provider": "Tall Bob",
        "synced": True,
        "state": "synced",
    }
    assert provider.calls[0][1]["to"] == "61499000100"
    assert len(crm.messages) == 1


@pytest.mark.asyncio
async def test_send_and_sync_crm_failure_reports_not_synced(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _use_engine(monkeypatch, crm=FakeCrm(fail_on={"append_message": CrmUnavailableError("down")}))

    response = await messages_module.send_and_sync(
        _build_request(body=json.dumps(SEND_BODY).encode())
    )

    assert response["success"] is True
    assert response["synced"] is False
    assert response["crmError"] == "CRM_UNAVAILABLE"


@pytest.mark.asyncio
async def test_send_and_sync_missing_fields_returns_400(monkeypatch: pytest.MonkeyPatch) -> None:
    provider, _ = _use_engine(monkeypatch)

    response = await messages_module.send_and_sync(
        _build_request(body=json.dumps({"to": "0499000100"}).encode())
    )

    assert response.status_code == 400
    payload = _json(response)
    assert payload["success"] is False
    assert payload["errorCode"] == "CALLER_ERROR"
    assert provider.calls == []


@pytest.mark.asyncio
async def test_send_and_sync_invalid_json_returns_400(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_engine(monkeypatch)

    response = await messages_module.send_and_sync(_build_request(body=b"{not json"))

    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("kind", "status_code"),
    [
        (ProviderErrorKind.AUTH_FAILURE, 502),
        (ProviderErrorKind.RATE_LIMITED, 429),
        (ProviderErrorKind.INVALID_RECIPIENT, 422),
        (ProviderErrorKind.NETWORK, 504),
    ],
)
async def test_send_and_sync_provider_error_status(
    monkeypatch: pytest.MonkeyPatch,
    kind: ProviderErrorKind,
    status_code: int,
) -> None:
    _, crm = _use_engine(monkeypatch, provider=FakeProvider(fail_with=ProviderError("x", kind=kind)))

    response = await messages_module.send_and_sync(
        _build_request(body=json.dumps(SEND_BODY).encode())
    )

    assert response.status_code == status_code
    payload = _json(response)
    assert payload["errorCode"] == "PROVIDER_ERROR"
    assert payload["kind"] == kind.value
    assert crm.calls == []


@pytest.mark.asyncio
async def test_send_and_sync_engine_not_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    def _raise() -> None:
        raise ValueError("token é obrigatório")

    monkeypatch.setattr(messages_module, "get_sync_engine", _raise)

    response = await messages_module.send_and_sync(
        _build_request(body=json.dumps(SEND_BODY).encode())
    )

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_get_status_success(monkeypatch: pytest.MonkeyPatch) -> None:
    provider = FakeProvider()
    provider.statuses["tb-1"] = MessageStatus(
        "tb-1", "delivered", "2026-01-01T00:00:00Z", raw={"status": "delivered"}
    )
    _use_engine(monkeypatch, provider=provider)

    response = await messages_module.get_status("tb-1", _build_request(method="GET"))

    assert response == {
        "messageId": "tb-1",
        "status": "delivered",
        "deliveredAt": "2026-01-01T00:00:00Z",
        "details": {"status": "delivered"},
    }


@pytest.mark.asyncio
async def test_get_status_unknown_id_returns_404(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_engine(monkeypatch)

    response = await messages_module.get_status("missing", _build_request(method="GET"))

    assert response.status_code == 404
    assert _json(response)["errorCode"] == "NOT_FOUND"
