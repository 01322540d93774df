"""Testes do cliente HTTP base (retry idempotente, timeouts, safe_json)."""

from __future__ import annotations

import httpx
import pytest

from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError, safe_json


def _client(handler: object, max_retries: int = 2) -> HttpClient:
    return HttpClient(
        HttpClientConfig(
            base_url="https://api.example.test",
            max_retries=max_retries,
            backoff_base_seconds=0.0,
            default_headers={"X-Default": "1"},
        ),
        transport=httpx.MockTransport(handler),  # type: ignore[arg-type]
    )


@pytest.mark.asyncio
async def test_get_retries_on_retryable_status() -> None:
    statuses = iter([503, 502, 200])
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(next(statuses), json={"ok": True})

    response = await _client(handler).request("GET", "/things")

    assert response.status_code == 200
    assert len(seen) == 3
    assert seen[0].headers["X-Default"] == "1"


@pytest.mark.asyncio
async def test_get_returns_last_response_when_retries_exhausted() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    response = await _client(handler, max_retries=1).request("GET", "/things")

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_post_is_never_retried() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(503)

    response = await _client(handler).request("POST", "/send", json={"a": 1})

    assert response.status_code == 503
    assert len(seen) == 1


@pytest.mark.asyncio
async def test_timeout_raises_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timeout", request=request)

    with pytest.raises(HttpError) as exc_info:
        await _client(handler, max_retries=0).request("GET", "/things")

    assert exc_info.value.is_timeout is True


@pytest.mark.asyncio
async def test_connection_error_retried_for_get() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200)

    response = await _client(handler).request("GET", "/things")

    assert response.status_code == 200
    assert calls["count"] == 2


def test_safe_json_variants() -> None:
    assert safe_json(httpx.Response(200, json={"a": 1})) == {"a": 1}
    assert safe_json(httpx.Response(200, json=[1, 2])) == {"data": [1, 2]}
    assert safe_json(httpx.Response(200, content=b"not json")) == {}
    assert safe_json(httpx.Response(204)) == {}
