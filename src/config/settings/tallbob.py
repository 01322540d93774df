"""Settings específicas do provedor Tall Bob (SMS/MMS).

Autenticação via HTTP Basic (username:api_key). Cada gateway tem seu
próprio arquivo de settings para isolamento.
"""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass
from functools import lru_cache

TALLBOB_API_BASE_URL: str = "https://api.tallbob.com"


@dataclass(frozen=True)
class TallBobSettings:
    """Configurações do provedor Tall Bob.

    Attributes:
        api_username: Usuário da API (painel Tall Bob)
        api_key: Chave da API
        api_base_url: URL base da API v2
        request_timeout_seconds: Timeout por requisição HTTP
        max_retries: Tentativas extras para GETs (envios nunca são repetidos)
        mms_subject: Assunto padrão de MMS
    """

    # Credenciais
    api_username: str = ""
    api_key: str = ""

    # API
    api_base_url: str = TALLBOB_API_BASE_URL

    # Timeouts e retries
    request_timeout_seconds: float = 15.0
    max_retries: int = 1

    # MMS
    mms_subject: str = ""

    @property
    def auth_header(self) -> str:
        """Header Authorization (Basic) a partir das credenciais."""
        raw = f"{self.api_username}:{self.api_key}".encode()
        return f"Basic {base64.b64encode(raw).decode('ascii')}"

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Tall Bob.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_username:
            errors.append("TALLBOB_API_USERNAME não configurado")

        if not self.api_key:
            errors.append("TALLBOB_API_KEY não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("TALLBOB_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("TALLBOB_MAX_RETRIES deve ser >= 0")

        return errors


def _load_from_env() -> TallBobSettings:
    """Carrega TallBobSettings a partir de variáveis de ambiente."""
    return TallBobSettings(
        api_username=os.getenv("TALLBOB_API_USERNAME", ""),
        api_key=os.getenv("TALLBOB_API_KEY", ""),
        api_base_url=os.getenv(
            "TALLBOB_API_BASE_URL", os.getenv("TALLBOB_API_URL", TALLBOB_API_BASE_URL)
        ),
        request_timeout_seconds=float(os.getenv("TALLBOB_REQUEST_TIMEOUT_SECONDS", "15")),
        max_retries=int(os.getenv("TALLBOB_MAX_RETRIES", "1")),
        mms_subject=os.getenv("TALLBOB_MMS_SUBJECT", ""),
    )


@lru_cache(maxsize=1)
def get_tallbob_settings() -> TallBobSettings:
    """Retorna instância cacheada de TallBobSettings."""
    return _load_from_env()
