"""Food catalog coordinator."""
from typing import List, Sequence, Union

from foodies.services.coordinators.base import Coordinator
from foodies.services.gateway.envelope import Envelope, Success
from foodies.services.gateway.food import FoodGateway
from foodies.services.menu.filters import (
    SortKey,
    SortOrder,
    filter_by_price_range,
    sort_food_items,
)
from foodies.services.menu.models import FoodItem
from foodies.services.notifications import NotificationBus


class FoodCoordinator(Coordinator):
    """Catalog lookups; results are returned as ``FoodItem`` models."""

    def __init__(self, gateway: FoodGateway, notifier: NotificationBus):
        super().__init__(notifier)
        self.gateway = gateway

    @staticmethod
    def _as_food_list(result: Envelope) -> Envelope:
        if not result.success:
            return result
        foods = [FoodItem.model_validate(item) for item in (result.data or [])]
        return Success(data=foods, status=result.status)

    async def fetch_food_list(self) -> Envelope:
        async def call() -> Envelope:
            return self._as_food_list(await self.gateway.list_foods())

        return await self.run(
            "FOOD",
            call,
            failure_message="Failed to fetch food list",
            unexpected_message="An unexpected error occurred while fetching food list",
        )

    async def fetch_food_details(self, food_id: str) -> Envelope:
        async def call() -> Envelope:
            result = await self.gateway.get_food(food_id)
            if not result.success:
                return result
            return Success(data=FoodItem.model_validate(result.data), status=result.status)

        return await self.run(
            "FOOD",
            call,
            failure_message="Failed to fetch food details",
            unexpected_message="An unexpected error occurred while fetching food details",
        )

    async def search_food(self, query: str) -> Envelope:
        """Search the catalog; a blank query returns the full list."""
        if not query or not query.strip():
            return await self.fetch_food_list()

        async def call() -> Envelope:
            return self._as_food_list(await self.gateway.search_foods(query.strip()))

        return await self.run(
            "FOOD",
            call,
            failure_message="Search failed",
            unexpected_message="An unexpected error occurred during search",
        )

    async def get_food_by_category(self, category: str) -> Envelope:
        async def call() -> Envelope:
            return self._as_food_list(await self.gateway.list_by_category(category))

        return await self.run(
            "FOOD",
            call,
            failure_message="Failed to fetch food by category",
            unexpected_message="An unexpected error occurred while fetching food by category",
        )

    async def get_categories(self) -> Envelope:
        return await self.run(
            "FOOD",
            self.gateway.list_categories,
            failure_message="Failed to fetch categories",
            unexpected_message="An unexpected error occurred while fetching categories",
        )

    @staticmethod
    def filter_by_price_range(
        foods: Sequence[FoodItem], min_price: float, max_price: float
    ) -> List[FoodItem]:
        return filter_by_price_range(foods, min_price, max_price)

    @staticmethod
    def sort_food_items(
        foods: Sequence[FoodItem],
        sort_by: Union[SortKey, str] = SortKey.NAME,
        order: Union[SortOrder, str] = SortOrder.ASC,
    ) -> List[FoodItem]:
        return sort_food_items(foods, sort_by, order)
