"""Authentication coordinator."""
import logging
from typing import Any, Dict, Optional

from foodies.services.coordinators.base import Coordinator
from foodies.services.gateway.auth import AuthGateway
from foodies.services.gateway.envelope import Envelope, Failure, FailureKind
from foodies.services.notifications import NotificationBus
from foodies.services.session.token_store import TokenStore

logger = logging.getLogger(__name__)


class AuthCoordinator(Coordinator):
    """Registration, login, logout and token checks."""

    def __init__(
        self, gateway: AuthGateway, token_store: TokenStore, notifier: NotificationBus
    ):
        super().__init__(notifier)
        self.gateway = gateway
        self.token_store = token_store

    async def register_user(self, user: Dict[str, Any]) -> Envelope:
        return await self.run(
            "AUTH",
            lambda: self.gateway.register(user),
            success_message="Registration completed successfully. Please login.",
            failure_message="Registration failed",
            unexpected_message="An unexpected error occurred during registration",
        )

    async def login(self, credentials: Dict[str, Any]) -> Envelope:
        """Log in and persist the returned token."""
        return await self.run(
            "AUTH",
            lambda: self._login(credentials),
            success_message="Login successful!",
            failure_message="Login failed",
            unexpected_message="An unexpected error occurred during login",
        )

    async def _login(self, credentials: Dict[str, Any]) -> Envelope:
        result = await self.gateway.login(credentials)
        if result.success:
            token = (result.data or {}).get("token")
            if not token:
                return Failure.of(
                    "Login failed",
                    status=result.status,
                    kind=FailureKind.REMOTE,
                    details=result.data,
                )
            self.token_store.set(token)
            logger.info("[AUTH] Logged in, token stored")
        return result

    async def logout(self) -> Envelope:
        return await self.run(
            "AUTH",
            self.gateway.logout,
            success_message="Logged out successfully",
            failure_message="Logout failed",
            unexpected_message="An unexpected error occurred during logout",
        )

    async def validate_token(self, token: str) -> Envelope:
        """
        Check a token with the API without notifying.

        An invalid token is removed from the store.
        """
        try:
            result = await self.gateway.validate_token(token)
        except Exception as e:
            logger.error(
                f"[AUTH] Token validation raised - Error: {type(e).__name__}: {str(e)}",
                exc_info=True,
            )
            self.token_store.clear()
            return Failure.of(
                "Token validation failed", status=401, kind=FailureKind.UNEXPECTED
            )

        if not result.success:
            logger.info(f"[AUTH] Stored token rejected (status: {result.error.status})")
            self.token_store.clear()
        return result

    def is_authenticated(self) -> bool:
        return bool(self.token_store.get())

    def get_token(self) -> Optional[str]:
        return self.token_store.get()
