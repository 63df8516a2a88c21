"""
HTTP transport to the PaySimple REST API (v4).

Every request is signed with the ``PSSERVER`` scheme: an HMAC-SHA256 of the
current UTC timestamp keyed by the API key, sent alongside the username.

Every response is wrapped in an envelope::

    {"Meta": {"Errors": {...} | null, "HttpStatusCode": 200, ...},
     "Response": {...}}

`GatewayClient` unwraps it and returns the ``Response`` payload, or raises
`GatewayError` when the HTTP status is not a success. Nothing is retried.
"""

import base64
import hashlib
import hmac
import json
import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

import httpx
from pydantic import ValidationError

from paysimple_sample.config import SessionSettings
from paysimple_sample.domain.models import ErrorMessage, ResponseMeta
from paysimple_sample.errors import GatewayError

logger = logging.getLogger(__name__)

API_PREFIX = "/v4"
# Matches the default request timeout of the gateway's own SDKs.
DEFAULT_TIMEOUT = 100.0


def build_authorization_header(settings: SessionSettings, timestamp: datetime | None = None) -> str:
    """Sign `timestamp` (default: now, UTC) with the API key."""
    timestamp = timestamp or datetime.now(timezone.utc)
    stamp = timestamp.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
    digest = hmac.new(settings.api_key.encode(), stamp.encode(), hashlib.sha256).digest()
    signature = base64.b64encode(digest).decode()
    return f"PSSERVER accessid={settings.username}; timestamp={stamp}; signature={signature}"


class GatewayClient:
    """Thin async client over `httpx.AsyncClient`.

    Pass `client` to reuse an existing `httpx.AsyncClient` (tests inject one
    backed by `httpx.MockTransport`); it is then left open on `close()`.
    """

    def __init__(
        self,
        settings: SessionSettings,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.settings = settings
        if client is None:
            self._client = httpx.AsyncClient(base_url=settings.api_url, timeout=timeout)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False
        logger.info("Gateway client initialised (base_url=%s, owns_client=%s)", settings.api_url, self._owns_client)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "GatewayClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def get(self, path: str) -> Any:
        return await self._request("GET", path)

    async def post(self, path: str, body: dict[str, Any]) -> Any:
        return await self._request("POST", path, json=body)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{API_PREFIX}{path}"
        headers = {
            "Authorization": build_authorization_header(self.settings),
            "Accept": "application/json",
        }
        logger.info("%s %s", method, url)
        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.RequestError as exc:
            logger.error("HTTP request failed (%s %s): %s", method, url, exc)
            raise

        logger.info("Received HTTP %s for %s %s", response.status_code, method, url)
        body = self._parse_body(response)
        if response.is_success:
            if isinstance(body, dict):
                return body.get("Response")
            return None
        raise self._to_error(response, body)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except json.JSONDecodeError:
            logger.warning("Non-JSON response from gateway (status=%s)", response.status_code)
            return None

    @staticmethod
    def _to_error(response: httpx.Response, body: Any) -> GatewayError:
        errors: list[ErrorMessage] = []
        error_code = None
        if isinstance(body, dict) and isinstance(body.get("Meta"), dict):
            try:
                meta = ResponseMeta.model_validate(body["Meta"])
            except ValidationError:
                logger.warning("Malformed error envelope from gateway (status=%s)", response.status_code)
            else:
                if meta.errors is not None:
                    errors = meta.errors.error_messages
                    error_code = meta.errors.error_code

        if errors and errors[0].message:
            message = errors[0].message
        else:
            try:
                message = HTTPStatus(response.status_code).phrase
            except ValueError:
                message = response.reason_phrase or "Unknown error"
        return GatewayError(response.status_code, message, errors, error_code)
