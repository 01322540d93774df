"""Cliente HTTP base para os conectores (provedor e CRM).

Regras:
- Timeout finito em toda requisição (configurável por gateway)
- Retry com backoff exponencial SOMENTE para métodos idempotentes;
  POSTs (envio de SMS, upsert) nunca são repetidos aqui
- Respostas 4xx/5xx são devolvidas ao chamador, que classifica o erro
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
_RETRYABLE_STATUS = frozenset({429, 502, 503, 504})


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    base_url: str = ""
    timeout_seconds: float = 15.0
    max_retries: int = 0
    backoff_base_seconds: float = 0.5
    backoff_max_seconds: float = 8.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Falha de transporte HTTP (sem dados sensíveis)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
        is_timeout: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable
        self.is_timeout = is_timeout


class HttpClient:
    """Cliente HTTP assíncrono simples para chamadas externas.

    `transport` permite injetar `httpx.MockTransport` em testes.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport

    @property
    def config(self) -> HttpClientConfig:
        return self._config

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Executa requisição; levanta HttpError apenas em falha de transporte."""
        method = method.upper()
        merged_headers = {**self._config.default_headers, **(headers or {})}
        attempts = self._config.max_retries + 1 if method in _IDEMPOTENT_METHODS else 1

        for attempt in range(attempts):
            is_last = attempt >= attempts - 1
            try:
                async with httpx.AsyncClient(
                    base_url=self._config.base_url,
                    verify=self._config.verify_ssl,
                    transport=self._transport,
                    timeout=self._config.timeout_seconds,
                ) as client:
                    response = await client.request(
                        method,
                        path,
                        json=json,
                        params=params,
                        headers=merged_headers,
                    )
            except httpx.TimeoutException as exc:
                if is_last:
                    raise HttpError("http_timeout", is_retryable=True, is_timeout=True) from exc
                await _backoff_sleep(attempt, self._config)
                continue
            except httpx.TransportError as exc:
                if is_last:
                    raise HttpError("http_connection_error", is_retryable=True) from exc
                await _backoff_sleep(attempt, self._config)
                continue

            if response.status_code in _RETRYABLE_STATUS and not is_last:
                await _backoff_sleep(attempt, self._config)
                continue
            return response

        raise HttpError("http_retry_exhausted", is_retryable=True)


async def _backoff_sleep(attempt: int, config: HttpClientConfig) -> None:
    backoff = min((2**attempt) * config.backoff_base_seconds, config.backoff_max_seconds)
    logger.info("http_backoff", extra={"backoff_seconds": backoff, "attempt": attempt + 1})
    await asyncio.sleep(backoff)


def safe_json(response: httpx.Response) -> dict[str, Any]:
    """Decodifica JSON do response; corpo vazio/inválido/não-objeto vira {}."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {"data": data}
