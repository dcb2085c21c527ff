"""Storefront composition root."""
import logging
from typing import Any, Dict, Optional

import httpx

from foodies.core.config import Settings
from foodies.core.dependencies import create_http_client, get_settings, get_token_store
from foodies.core.logging import setup_logging
from foodies.services.checkout.flow import CheckoutFlow
from foodies.services.checkout.payment import PaymentSurface
from foodies.services.coordinators.auth import AuthCoordinator
from foodies.services.coordinators.cart import CartCoordinator
from foodies.services.coordinators.food import FoodCoordinator
from foodies.services.coordinators.orders import OrderCoordinator
from foodies.services.gateway.auth import AuthGateway
from foodies.services.gateway.cart import CartGateway
from foodies.services.gateway.envelope import Envelope
from foodies.services.gateway.food import FoodGateway
from foodies.services.gateway.orders import OrderGateway
from foodies.services.notifications import NotificationBus, log_outcome
from foodies.services.session.store import SessionStore
from foodies.services.session.token_store import TokenStore

logger = logging.getLogger(__name__)


class Storefront:
    """
    Wires gateways, coordinators and the session store around one HTTP client.

    Use as an async context manager so the HTTP client is closed:

        async with Storefront(payment_surface=surface) as store:
            await store.session.load()
    """

    def __init__(
        self,
        payment_surface: PaymentSurface,
        settings: Optional[Settings] = None,
        http: Optional[httpx.AsyncClient] = None,
        token_store: Optional[TokenStore] = None,
        notifier: Optional[NotificationBus] = None,
    ):
        self.settings = settings or get_settings()
        self.http = http or create_http_client(self.settings)
        self.token_store = token_store or get_token_store(self.settings)
        if notifier is None:
            notifier = NotificationBus()
            notifier.subscribe(log_outcome)
        self.notifier = notifier

        base_url = self.settings.api_base_url.rstrip("/")
        self.auth_gateway = AuthGateway(self.http, base_url, self.token_store)
        self.food_gateway = FoodGateway(self.http, f"{base_url}/foods")
        self.cart_gateway = CartGateway(self.http, f"{base_url}/cart")
        self.order_gateway = OrderGateway(self.http, f"{base_url}/orders")

        self.auth = AuthCoordinator(self.auth_gateway, self.token_store, self.notifier)
        self.food = FoodCoordinator(self.food_gateway, self.notifier)
        self.cart = CartCoordinator(
            self.cart_gateway,
            self.notifier,
            tax_rate=self.settings.tax_rate,
            shipping_fee=self.settings.shipping_fee,
        )
        self.checkout = CheckoutFlow(
            self.order_gateway, self.cart, payment_surface, self.notifier, self.settings
        )
        self.orders = OrderCoordinator(self.order_gateway, self.checkout, self.notifier)
        self.session = SessionStore(
            self.food, self.cart, self.orders, self.token_store, self.notifier
        )

    async def restore(self) -> None:
        """Drop a stale stored token, then load the catalog and cart."""
        token = self.token_store.get()
        if token:
            await self.auth.validate_token(token)
        await self.session.load()

    async def login(self, credentials: Dict[str, Any]) -> Envelope:
        result = await self.auth.login(credentials)
        if result.success:
            await self.session.set_token(result.data["token"])
        return result

    async def logout(self) -> Envelope:
        result = await self.auth.logout()
        if result.success:
            await self.session.set_token(None)
        return result

    async def __aenter__(self) -> "Storefront":
        setup_logging(self.settings.log_level)
        logger.info(f"[STOREFRONT] Using API at {self.settings.api_base_url}")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()
