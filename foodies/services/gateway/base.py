"""Shared request plumbing for the gateway clients."""
import logging
from typing import Any, Dict, Optional

import httpx

from foodies.services.gateway.envelope import (
    Envelope,
    Failure,
    FailureKind,
    GENERIC_ERROR_MESSAGE,
    Success,
)

logger = logging.getLogger(__name__)


def bearer(token: Optional[str]) -> Dict[str, str]:
    """Authorization header for a session token."""
    return {"Authorization": f"Bearer {token}"} if token else {}


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON, falling back to text or None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class GatewayClient:
    """
    Base class for the Foodies API clients.

    Each operation performs exactly one request and returns an envelope.
    HTTP and transport failures are normalized, never raised.
    """

    def __init__(self, http: httpx.AsyncClient, base_url: str):
        self.http = http
        self.base_url = base_url.rstrip("/")

    def url(self, path: str = "") -> str:
        """Absolute URL for a path below this client's base URL."""
        return f"{self.base_url}{path}"

    async def request(
        self,
        method: str,
        path: str,
        default_message: str,
        *,
        token: Optional[str] = None,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Envelope:
        """Send one request and wrap the outcome in an envelope."""
        url = self.url(path)
        try:
            response = await self.http.request(
                method, url, json=json, params=params, headers=bearer(token)
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            return self.remote_failure(e.response, default_message)
        except httpx.HTTPError as e:
            logger.warning(
                f"[GATEWAY] {method} {url} failed before a response - "
                f"Error: {type(e).__name__}: {str(e)}"
            )
            return Failure.of(
                default_message or GENERIC_ERROR_MESSAGE,
                status=500,
                kind=FailureKind.TRANSPORT,
            )

        logger.debug(f"[GATEWAY] {method} {url} -> {response.status_code}")
        return Success(data=decode_body(response), status=response.status_code)

    @staticmethod
    def remote_failure(response: httpx.Response, default_message: str) -> Failure:
        """Normalize a non-2xx response."""
        body = decode_body(response)
        message = None
        if isinstance(body, dict):
            message = body.get("message")
        logger.info(
            f"[GATEWAY] {response.request.method} {response.request.url} "
            f"-> {response.status_code}: {message or default_message}"
        )
        return Failure.of(
            message or default_message or GENERIC_ERROR_MESSAGE,
            status=response.status_code or 500,
            kind=FailureKind.REMOTE,
            details=body,
        )
