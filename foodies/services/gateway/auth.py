"""Authentication API client."""
import logging
from typing import Any, Dict

import httpx

from foodies.services.gateway.base import GatewayClient
from foodies.services.gateway.envelope import Envelope, Failure, FailureKind, Success
from foodies.services.session.token_store import TokenStore

logger = logging.getLogger(__name__)


class AuthGateway(GatewayClient):
    """Client for registration, login and token validation."""

    def __init__(self, http: httpx.AsyncClient, base_url: str, token_store: TokenStore):
        super().__init__(http, base_url)
        self.token_store = token_store

    async def register(self, user: Dict[str, Any]) -> Envelope:
        """Register a new user."""
        return await self.request("POST", "/register", "Registration failed", json=user)

    async def login(self, credentials: Dict[str, Any]) -> Envelope:
        """Log in; the response carries the session token."""
        return await self.request("POST", "/login", "Login failed", json=credentials)

    async def validate_token(self, token: str) -> Envelope:
        """Check a token against the API."""
        return await self.request(
            "GET", "/validate", "Token validation failed", token=token
        )

    async def logout(self) -> Envelope:
        """Forget the stored token. No remote call is made."""
        try:
            self.token_store.clear()
        except OSError as e:
            logger.error(
                f"[AUTH] Could not clear stored token - Error: {type(e).__name__}: {str(e)}",
                exc_info=True,
            )
            return Failure.of("Logout failed", status=500, kind=FailureKind.UNEXPECTED)
        return Success(data={"message": "Logged out successfully"})
