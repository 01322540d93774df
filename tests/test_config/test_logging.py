"""Testes para config.logging.

Cobre: configure_logging, get_logger, log_degraded,
CorrelationIdFilter, SecretRedactionFilter, create_json_formatter.
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REDACTED,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    SecretRedactionFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_degraded,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS
from config.logging.filters import redact_value


def _record(msg: str = "msg", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_is_case_insensitive(self) -> None:
        configure_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_configure_logging_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_configure_logging_installs_filters(self) -> None:
        configure_logging(correlation_id_getter=lambda: "custom-corr-id")
        handler = logging.getLogger().handlers[0]
        assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)
        assert any(isinstance(f, SecretRedactionFilter) for f in handler.filters)

    def test_configure_logging_quiets_http_client_loggers(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "sincroniza_sms"


class TestGetLogger:
    """Testes para get_logger."""

    def test_get_logger_returns_named_logger(self) -> None:
        logger = get_logger("test.module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"
        assert get_logger("test.module") is logger


class TestLogDegraded:
    """Testes para log_degraded."""

    def test_log_degraded_basic(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_degraded(logger, "crm_append")
        logger.warning.assert_called_once()
        call_args = logger.warning.call_args
        assert call_args[0][0] == "Best-effort step degraded: %s"
        assert call_args[0][1] == "crm_append"
        extra = call_args[1]["extra"]
        assert extra["degraded"] is True
        assert extra["component"] == "crm_append"
        assert "reason" not in extra
        assert "error_type" not in extra

    def test_log_degraded_with_reason_and_error_type(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_degraded(logger, "campaign", reason="crm_unavailable", error_type="CrmUnavailableError")
        extra = logger.warning.call_args[1]["extra"]
        assert extra["reason"] == "crm_unavailable"
        assert extra["error_type"] == "CrmUnavailableError"


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_filter_adds_correlation_id_from_getter(self) -> None:
        filter_ = CorrelationIdFilter("my_service", lambda: "corr-123")
        record = _record()
        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "my_service"

    def test_filter_preserves_explicit_correlation_id(self) -> None:
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter")
        record = _record()
        record.correlation_id = "explicit-id"
        filter_.filter(record)
        assert record.correlation_id == "explicit-id"

    def test_filter_uses_empty_string_when_no_getter(self) -> None:
        filter_ = CorrelationIdFilter("service_name", None)
        record = _record()
        filter_.filter(record)
        assert record.correlation_id == ""


class TestSecretRedaction:
    """Credenciais dos gateways nunca chegam ao handler."""

    @pytest.mark.parametrize(
        "key",
        ["Authorization", "api_key", "apiKey", "private_integration_token", "password"],
    )
    def test_sensitive_keys_are_masked(self, key: str) -> None:
        assert redact_value(key, "s3cr3t") == REDACTED

    def test_nested_dict_is_masked(self) -> None:
        headers = {"Authorization": "Bearer abc", "Version": "2021-07-28"}
        assert redact_value("headers", headers) == {
            "Authorization": REDACTED,
            "Version": "2021-07-28",
        }

    def test_basic_and_bearer_values_are_masked_in_text(self) -> None:
        text = "failed with Basic dXNlcjprZXk= and Bearer pit-123"
        redacted = redact_value("error", text)
        assert "dXNlcjprZXk=" not in redacted
        assert "pit-123" not in redacted
        assert f"Basic {REDACTED}" in redacted

    def test_non_string_values_pass_through(self) -> None:
        assert redact_value("status_code", 401) == 401

    def test_filter_redacts_extra_attributes(self) -> None:
        record = _record()
        record.api_key = "s3cr3t"
        record.status_code = 401
        assert SecretRedactionFilter().filter(record) is True
        assert record.api_key == REDACTED
        assert record.status_code == 401
        assert record.msg == "msg"


class TestCreateJsonFormatter:
    """Testes para create_json_formatter e constantes."""

    def test_constants(self) -> None:
        assert set(REQUIRED_LOG_FIELDS) == {
            "asctime",
            "levelname",
            "name",
            "message",
            "correlation_id",
            "service",
        }
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_json_formatter_formats_record(self) -> None:
        formatter = create_json_formatter()
        record = _record("outbound_send_completed")
        record.correlation_id = "abc-123"
        record.service = "test_service"
        output = json.loads(formatter.format(record))
        assert output["message"] == "outbound_send_completed"
        assert output["level"] == "INFO"
        assert output["logger"] == "test"
        assert output["correlation_id"] == "abc-123"
        assert output["service"] == "test_service"


class TestLoggingIntegration:
    """Fluxo completo: configure, get_logger, log."""

    def test_full_logging_flow(self) -> None:
        configure_logging(
            level="DEBUG",
            service_name="integration_test",
            correlation_id_getter=lambda: "int-test-001",
        )
        logger = get_logger("integration.test")
        logger.debug("Debug message", extra={"custom_field": "value"})
        logger.info("Info message", extra={"authorization": "Basic abc"})
        logger.warning("Warning message")
        logger.error("Error message")
