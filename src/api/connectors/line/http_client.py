"""Cliente HTTP especializado para o Messaging API do LINE.

Estende HttpClient genérico com comportamentos do LINE:
- Autenticação Bearer com channel access token
- Endpoints reply, push, multicast e profile
- Parsing de erros {message, details} com classificação permanente/transitória
- Logging estruturado sem PII (tokens, user ids, conteúdo)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, NoReturn

from api.connectors.line.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.line.line_errors import parse_line_error
from api.connectors.line.line_logging import log_line_error, log_success
from api.payload_builders.line import (
    build_multicast_payload,
    build_push_payload,
    build_reply_payload,
)
from api.validators.line import validate_user_id

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from app.domain.line_messages import OutgoingMessage
    from config.settings import LineSettings

logger: logging.Logger = logging.getLogger(__name__)

REPLY_PATH = "message/reply"
PUSH_PATH = "message/push"
MULTICAST_PATH = "message/multicast"
PROFILE_PATH = "profile"


class LineHttpClient(HttpClient):
    """Cliente HTTP para o Messaging API.

    Tratamento específico:
    - 2xx: sucesso
    - 4xx (exceto 429): erro permanente, sem retry
    - 429/5xx: retry com backoff no HttpClient base
    """

    def __init__(
        self,
        channel_access_token: str,
        api_base_url: str,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config, transport=transport)
        self._channel_access_token = channel_access_token
        self._api_base_url = api_base_url.rstrip("/")

    async def reply_message(
        self,
        reply_token: str,
        messages: Sequence[OutgoingMessage],
    ) -> None:
        """Responde um evento via reply token (uso único)."""
        payload = build_reply_payload(reply_token, messages)
        await self._send(REPLY_PATH, payload)

    async def push_message(
        self,
        to: str,
        messages: Sequence[OutgoingMessage],
    ) -> None:
        """Envia mensagem ativa para um usuário, grupo ou sala."""
        payload = build_push_payload(to, messages)
        await self._send(PUSH_PATH, payload)

    async def multicast_message(
        self,
        to: Sequence[str],
        messages: Sequence[OutgoingMessage],
    ) -> None:
        """Envia a mesma mensagem para vários usuários."""
        payload = build_multicast_payload(to, messages)
        await self._send(MULTICAST_PATH, payload)

    async def get_profile(self, user_id: str) -> dict[str, Any]:
        """Obtém perfil público de um usuário.

        Raises:
            ValidationError: Se user_id não tem o formato do LINE
            HttpError: Se erro HTTP ou resposta inválida
        """
        validate_user_id(user_id)
        endpoint = f"{self._api_base_url}/{PROFILE_PATH}/{user_id}"
        response = await self.get(endpoint, headers=self._auth_headers())
        data = self._decode_json(response, PROFILE_PATH)
        if response.is_success:
            log_success("GET", PROFILE_PATH, response.status_code)
            return data
        self._raise_line_error(response.status_code, data, "GET", PROFILE_PATH)

    def _auth_headers(self) -> dict[str, str]:
        """Monta headers de autenticação.

        Raises:
            ValueError: Se o channel access token não estiver configurado
        """
        if not self._channel_access_token or not self._channel_access_token.strip():
            raise ValueError(
                "channel_access_token é obrigatório. "
                "Verifique se LINE_CHANNEL_ACCESS_TOKEN está configurado."
            )
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._channel_access_token}",
        }

    async def _send(self, path: str, payload: dict[str, Any]) -> None:
        endpoint = f"{self._api_base_url}/{path}"
        response = await self.post(endpoint, json=payload, headers=self._auth_headers())
        if response.is_success:
            log_success("POST", path, response.status_code)
            return
        data = self._decode_json(response, path)
        self._raise_line_error(response.status_code, data, "POST", path)

    def _decode_json(self, response: httpx.Response, path: str) -> Any:
        try:
            return response.json()
        except json.JSONDecodeError as exc:
            logger.error(
                "line_api_invalid_json",
                extra={"endpoint": path, "status_code": response.status_code},
            )
            raise HttpError(
                "Response JSON inválido",
                status_code=response.status_code,
            ) from exc

    def _raise_line_error(
        self,
        status_code: int,
        data: Any,
        method: str,
        path: str,
    ) -> NoReturn:
        line_error = parse_line_error(status_code, data)
        log_line_error(line_error, method, path)
        raise HttpError(
            f"LINE API error: {line_error.message}",
            status_code=status_code,
            is_retryable=not line_error.is_permanent,
        )


def create_line_http_client(
    settings: LineSettings | None = None,
) -> LineHttpClient:
    """Factory para criar cliente LINE com config padrão.

    Args:
        settings: LineSettings opcional. Se None, carrega do ambiente.
    """
    # Import local para evitar dependência circular
    from config.settings import get_line_settings

    line = settings or get_line_settings()
    config = HttpClientConfig(
        timeout_seconds=line.request_timeout_seconds,
        max_retries=line.max_retries,
    )
    return LineHttpClient(
        channel_access_token=line.channel_access_token,
        api_base_url=line.api_base_url,
        config=config,
    )
