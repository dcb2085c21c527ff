"""Order API client."""
from typing import Any, Dict

from foodies.services.gateway.base import GatewayClient
from foodies.services.gateway.envelope import Envelope
from foodies.services.ordering.models import OrderDraft


class OrderGateway(GatewayClient):
    """Client for the authenticated ``/orders`` endpoints."""

    async def create_order(self, draft: OrderDraft, token: str) -> Envelope:
        """Submit a draft; the response carries the payment-gateway order handle."""
        return await self.request(
            "POST",
            "/create",
            "Failed to create order",
            token=token,
            json=draft.model_dump(by_alias=True, mode="json"),
        )

    async def verify_payment(self, payment: Dict[str, Any], token: str) -> Envelope:
        """Confirm a captured payment and finalize the order."""
        return await self.request(
            "POST", "/verify", "Payment verification failed", token=token, json=payment
        )

    async def list_orders(self, token: str) -> Envelope:
        return await self.request("GET", "", "Failed to fetch orders", token=token)

    async def delete_order(self, order_id: str, token: str) -> Envelope:
        return await self.request(
            "DELETE", f"/{order_id}", "Failed to delete order", token=token
        )
