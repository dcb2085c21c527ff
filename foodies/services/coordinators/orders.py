"""Order coordinator."""
from typing import Any, Dict, Sequence

from foodies.services.checkout.flow import CheckoutFlow, CheckoutResult
from foodies.services.coordinators.base import Coordinator
from foodies.services.gateway.envelope import Envelope
from foodies.services.gateway.orders import OrderGateway
from foodies.services.notifications import NotificationBus
from foodies.services.ordering.draft import build_order_draft
from foodies.services.ordering.models import CartLine, OrderDraft, ShippingDetails


class OrderCoordinator(Coordinator):
    """Order placement, payment verification and order history."""

    def __init__(
        self, gateway: OrderGateway, checkout: CheckoutFlow, notifier: NotificationBus
    ):
        super().__init__(notifier)
        self.gateway = gateway
        self.checkout = checkout

    async def create_order(self, draft: OrderDraft, token: str) -> Envelope:
        return await self.run(
            "ORDER",
            lambda: self.gateway.create_order(draft, token),
            failure_message="Failed to create order",
            unexpected_message="An unexpected error occurred while creating order",
        )

    async def verify_payment(self, payment: Dict[str, Any], token: str) -> Envelope:
        return await self.run(
            "ORDER",
            lambda: self.gateway.verify_payment(payment, token),
            success_message="Payment verified successfully!",
            failure_message="Payment verification failed",
            unexpected_message="An unexpected error occurred during payment verification",
        )

    async def get_user_orders(self, token: str) -> Envelope:
        return await self.run(
            "ORDER",
            lambda: self.gateway.list_orders(token),
            failure_message="Failed to fetch orders",
            unexpected_message="An unexpected error occurred while fetching orders",
        )

    async def delete_order(self, order_id: str, token: str) -> Envelope:
        return await self.run(
            "ORDER",
            lambda: self.gateway.delete_order(order_id, token),
            success_message="Order cancelled successfully!",
            failure_message="Failed to cancel order",
            unexpected_message="An unexpected error occurred while cancelling order",
        )

    async def process_order(
        self, draft: OrderDraft, token: str, shipping: ShippingDetails
    ) -> CheckoutResult:
        """Run the full checkout for a draft."""
        return await self.checkout.run(draft, token, shipping)

    @staticmethod
    def format_order_data(
        shipping: ShippingDetails, lines: Sequence[CartLine], total: float
    ) -> OrderDraft:
        return build_order_draft(shipping, lines, total)
