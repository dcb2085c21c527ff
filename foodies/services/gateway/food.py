"""Food catalog API client."""
from foodies.services.gateway.base import GatewayClient
from foodies.services.gateway.envelope import Envelope


class FoodGateway(GatewayClient):
    """Client for the public food catalog endpoints under ``/foods``."""

    async def list_foods(self) -> Envelope:
        return await self.request("GET", "", "Failed to fetch food list")

    async def get_food(self, food_id: str) -> Envelope:
        return await self.request("GET", f"/{food_id}", "Failed to fetch food details")

    async def search_foods(self, query: str) -> Envelope:
        return await self.request(
            "GET", "/search", "Failed to search food items", params={"q": query}
        )

    async def list_by_category(self, category: str) -> Envelope:
        return await self.request(
            "GET", f"/category/{category}", "Failed to fetch food by category"
        )

    async def list_categories(self) -> Envelope:
        return await self.request("GET", "/categories", "Failed to fetch categories")
