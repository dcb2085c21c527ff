"""Cart API client."""
from foodies.services.gateway.base import GatewayClient
from foodies.services.gateway.envelope import Envelope


class CartGateway(GatewayClient):
    """Client for the authenticated ``/cart`` endpoints."""

    async def add_item(self, food_id: str, token: str) -> Envelope:
        """Add one unit of a food item."""
        return await self.request(
            "POST", "", "Failed to add item to cart", token=token, json={"foodId": food_id}
        )

    async def remove_item(self, food_id: str, token: str) -> Envelope:
        """Remove one unit of a food item; the line is not deleted."""
        return await self.request(
            "POST",
            "/remove",
            "Failed to remove item from cart",
            token=token,
            json={"foodId": food_id},
        )

    async def get_cart(self, token: str) -> Envelope:
        return await self.request("GET", "", "Failed to fetch cart data", token=token)

    async def clear_cart(self, token: str) -> Envelope:
        return await self.request("DELETE", "", "Failed to clear cart", token=token)

    async def set_quantity(self, food_id: str, quantity: int, token: str) -> Envelope:
        """Set the absolute quantity of a food item."""
        return await self.request(
            "PUT",
            "",
            "Failed to update cart item",
            token=token,
            json={"foodId": food_id, "quantity": quantity},
        )
