"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json

import pytest

from api.routes.health import router as health_module
from config.settings import BaseSettings, HighLevelSettings, TallBobSettings


@pytest.mark.asyncio
async def test_health_reports_service_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        health_module,
        "get_base_settings",
        lambda: BaseSettings(service_name="sincroniza-sms"),
    )

    response = await health_module.health_check()

    assert response.status == "healthy"
    assert response.service == "sincroniza-sms"


@pytest.mark.asyncio
async def test_readiness_returns_not_ready_without_credentials(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(health_module, "get_tallbob_settings", lambda: TallBobSettings())
    monkeypatch.setattr(health_module, "get_highlevel_settings", lambda: HighLevelSettings())

    response = await health_module.readiness_check()
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "not_ready"
    assert payload["checks"]["tallbob"]["status"] == "failed"
    assert "TALLBOB_API_KEY" in payload["checks"]["tallbob"]["error"]
    assert payload["checks"]["highlevel"]["status"] == "failed"


@pytest.mark.asyncio
async def test_readiness_returns_ready_when_gateways_are_configured(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(
        health_module,
        "get_tallbob_settings",
        lambda: TallBobSettings(api_username="user", api_key="key"),
    )
    monkeypatch.setattr(
        health_module,
        "get_highlevel_settings",
        lambda: HighLevelSettings(private_integration_token="pit", company_id="comp-1"),
    )

    response = await health_module.readiness_check()
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["checks"]["tallbob"] == {"status": "ok", "error": None}
    assert payload["checks"]["highlevel"] == {"status": "ok", "error": None}
