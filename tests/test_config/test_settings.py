"""Testes das settings (carga via env e validação)."""

from __future__ import annotations

import base64

import pytest

from config.settings import (
    BaseSettings,
    HighLevelSettings,
    SmsSettings,
    TallBobSettings,
    get_base_settings,
    get_highlevel_settings,
    get_sms_settings,
    get_tallbob_settings,
)
from config.settings.highlevel import parse_location_map


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    for getter in (
        get_base_settings,
        get_highlevel_settings,
        get_sms_settings,
        get_tallbob_settings,
    ):
        getter.cache_clear()
    yield
    for getter in (
        get_base_settings,
        get_highlevel_settings,
        get_sms_settings,
        get_tallbob_settings,
    ):
        getter.cache_clear()


class TestBaseSettings:
    def test_webhook_url_joins_paths(self) -> None:
        settings = BaseSettings(public_base_url="https://sync.example.com/")
        url = settings.webhook_url("/webhooks/tallbob/incoming")
        assert url == "https://sync.example.com/webhooks/tallbob/incoming"

    def test_webhook_url_requires_public_base_url(self) -> None:
        with pytest.raises(ValueError, match="PUBLIC_BASE_URL"):
            BaseSettings().webhook_url("/x")

    def test_validate_rejects_plain_http(self) -> None:
        errors = BaseSettings(public_base_url="http://sync.example.com").validate()
        assert any("https" in error for error in errors)

    def test_environment_aliases(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "prod")
        settings = get_base_settings()
        assert settings.environment == "production"
        assert settings.is_production is True


class TestTallBobSettings:
    def test_auth_header_is_basic(self) -> None:
        settings = TallBobSettings(api_username="user", api_key="key")
        expected = base64.b64encode(b"user:key").decode("ascii")
        assert settings.auth_header == f"Basic {expected}"

    def test_validate_requires_credentials(self) -> None:
        errors = TallBobSettings().validate()
        assert "TALLBOB_API_USERNAME não configurado" in errors
        assert "TALLBOB_API_KEY não configurado" in errors

    def test_validate_ok(self) -> None:
        assert TallBobSettings(api_username="u", api_key="k").validate() == []

    def test_load_from_env_accepts_legacy_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TALLBOB_API_BASE_URL", raising=False)
        monkeypatch.setenv("TALLBOB_API_URL", "https://sandbox.tallbob.com")
        assert get_tallbob_settings().api_base_url == "https://sandbox.tallbob.com"


class TestHighLevelSettings:
    def test_parse_location_map(self) -> None:
        raw = "61400111222=locA, 61400333444 = locB,broken,=locC,61499000000="
        assert parse_location_map(raw) == {"61400111222": "locA", "61400333444": "locB"}

    def test_parse_location_map_empty(self) -> None:
        assert parse_location_map("") == {}

    def test_validate_requires_token(self) -> None:
        errors = HighLevelSettings().validate()
        assert "HIGHLEVEL_PRIVATE_INTEGRATION_TOKEN não configurado" in errors

    def test_validate_rejects_negative_retries(self) -> None:
        errors = HighLevelSettings(
            private_integration_token="t", company_id="comp-1", max_retries=-1
        ).validate()
        assert errors == ["HIGHLEVEL_MAX_RETRIES deve ser >= 0"]

    def test_validate_requires_company_id_without_location_routing(self) -> None:
        errors = HighLevelSettings(private_integration_token="t").validate()
        assert len(errors) == 1
        assert errors[0].startswith("HIGHLEVEL_COMPANY_ID é obrigatório")

    @pytest.mark.parametrize(
        "routing",
        [
            {"company_id": "comp-1"},
            {"default_location_id": "loc-1"},
            {"location_by_number": {"61400111222": "locA"}},
        ],
    )
    def test_validate_accepts_any_location_routing(self, routing: dict[str, object]) -> None:
        errors = HighLevelSettings(private_integration_token="t", **routing).validate()  # type: ignore[arg-type]
        assert errors == []

    def test_load_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("HIGHLEVEL_PRIVATE_INTEGRATION_TOKEN", raising=False)
        monkeypatch.setenv("GHL_PRIVATE_INTEGRATION_TOKEN", "pit-1")
        monkeypatch.setenv("HIGHLEVEL_DEFAULT_LOCATION_ID", "loc-default")
        monkeypatch.setenv("HIGHLEVEL_LOCATION_BY_NUMBER", "61400111222=locA")
        settings = get_highlevel_settings()
        assert settings.private_integration_token == "pit-1"
        assert settings.default_location_id == "loc-default"
        assert settings.location_by_number == {"61400111222": "locA"}


class TestSmsSettings:
    def test_defaults_are_valid(self) -> None:
        settings = SmsSettings()
        assert settings.default_country_code == "61"
        assert settings.webhook_processing_mode == "inline"
        assert settings.validate() == []

    @pytest.mark.parametrize("code", ["061", "+61", "au", ""])
    def test_invalid_country_code(self, code: str) -> None:
        assert SmsSettings(default_country_code=code).validate()

    def test_invalid_processing_mode(self) -> None:
        errors = SmsSettings(webhook_processing_mode="queue").validate()
        assert errors == ["SMS_WEBHOOK_PROCESSING_MODE deve ser 'async' ou 'inline'"]

    def test_load_from_env_strips_plus(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SMS_DEFAULT_COUNTRY_CODE", "+64")
        monkeypatch.setenv("SMS_WEBHOOK_PROCESSING_MODE", "ASYNC")
        settings = get_sms_settings()
        assert settings.default_country_code == "64"
        assert settings.webhook_processing_mode == "async"
