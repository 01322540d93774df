"""Testes de normalização de telefones."""

from __future__ import annotations

import pytest

from api.normalizers.sms import PhoneNumberNormalizer, normalize_phone_number


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("0499000100", "61499000100"),
        ("0499 000 100", "61499000100"),
        ("+61 499-000-100", "61499000100"),
        ("(61) 499.000.100", "61499000100"),
        ("0044 20 7946 0000", "442079460000"),
        ("61499000100", "61499000100"),
        ("", ""),
        (None, ""),
        ("abc", ""),
    ],
)
def test_normalize_phone_number(raw: str | None, expected: str) -> None:
    assert normalize_phone_number(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["0499000100", "+61 499 000 100", "00 61 499", "0", "000", "12 34", "x0y"],
)
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize_phone_number(raw)
    assert normalize_phone_number(once) == once
    assert not once.startswith("0")


def test_normalizer_uses_configured_country_code() -> None:
    normalizer = PhoneNumberNormalizer("64")

    assert normalizer.default_country_code == "64"
    assert normalizer.normalize("021 555 0100") == "64215550100"


@pytest.mark.parametrize("code", ["", "0", "044", "abc"])
def test_normalizer_rejects_invalid_country_code(code: str) -> None:
    with pytest.raises(ValueError, match="DDI padrão inválido"):
        PhoneNumberNormalizer(code)
