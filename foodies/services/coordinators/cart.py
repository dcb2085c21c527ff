"""Cart coordinator."""
from typing import Optional, Sequence

from foodies.core.config import settings
from foodies.services.coordinators.base import Coordinator
from foodies.services.gateway.cart import CartGateway
from foodies.services.gateway.envelope import Envelope
from foodies.services.notifications import NotificationBus
from foodies.services.ordering.cart import calculate_cart_totals, validate_cart
from foodies.services.ordering.models import CartLine, CartTotals, CartValidation


class CartCoordinator(Coordinator):
    """Cart mutations, cart fetches and cart arithmetic."""

    def __init__(
        self,
        gateway: CartGateway,
        notifier: NotificationBus,
        tax_rate: Optional[float] = None,
        shipping_fee: Optional[float] = None,
    ):
        super().__init__(notifier)
        self.gateway = gateway
        self.tax_rate = settings.tax_rate if tax_rate is None else tax_rate
        self.shipping_fee = settings.shipping_fee if shipping_fee is None else shipping_fee

    async def add_to_cart(self, food_id: str, token: str) -> Envelope:
        return await self.run(
            "CART",
            lambda: self.gateway.add_item(food_id, token),
            success_message="Item added to cart successfully!",
            failure_message="Failed to add item to cart",
            unexpected_message="An unexpected error occurred while adding item to cart",
        )

    async def remove_from_cart(self, food_id: str, token: str) -> Envelope:
        return await self.run(
            "CART",
            lambda: self.gateway.remove_item(food_id, token),
            success_message="Item quantity updated in cart!",
            failure_message="Failed to remove item from cart",
            unexpected_message="An unexpected error occurred while removing item from cart",
        )

    async def get_cart_data(self, token: str) -> Envelope:
        return await self.run(
            "CART",
            lambda: self.gateway.get_cart(token),
            failure_message="Failed to fetch cart data",
            unexpected_message="An unexpected error occurred while fetching cart data",
        )

    async def clear_cart(self, token: str) -> Envelope:
        return await self.run(
            "CART",
            lambda: self.gateway.clear_cart(token),
            success_message="Cart cleared successfully!",
            failure_message="Failed to clear cart",
            unexpected_message="An unexpected error occurred while clearing cart",
        )

    async def update_cart_item(self, food_id: str, quantity: int, token: str) -> Envelope:
        return await self.run(
            "CART",
            lambda: self.gateway.set_quantity(food_id, quantity, token),
            success_message="Cart item updated successfully!",
            failure_message="Failed to update cart item",
            unexpected_message="An unexpected error occurred while updating cart item",
        )

    def calculate_cart_totals(self, lines: Optional[Sequence[CartLine]]) -> CartTotals:
        return calculate_cart_totals(lines, self.tax_rate, self.shipping_fee)

    @staticmethod
    def validate_cart(lines: Optional[Sequence[CartLine]]) -> CartValidation:
        return validate_cart(lines)
