"""Catalog filtering and sorting."""
from enum import Enum
from typing import List, Sequence, Union

from foodies.services.menu.models import FoodItem, parse_price


class SortKey(str, Enum):
    """Fields the catalog can be sorted by."""

    NAME = "name"
    PRICE = "price"
    CATEGORY = "category"

    def __str__(self) -> str:
        return self.value


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"

    def __str__(self) -> str:
        return self.value


def filter_by_price_range(
    foods: Sequence[FoodItem], min_price: float, max_price: float
) -> List[FoodItem]:
    """Keep items priced within ``[min_price, max_price]``, bounds included."""
    if not foods:
        return []
    return [
        food for food in foods if min_price <= parse_price(food.price) <= max_price
    ]


def _sort_value(food: FoodItem, key: SortKey):
    if key == SortKey.PRICE:
        return parse_price(food.price)
    if key == SortKey.CATEGORY:
        return (food.category or "").lower()
    return (food.name or "").lower()


def sort_food_items(
    foods: Sequence[FoodItem],
    sort_by: Union[SortKey, str] = SortKey.NAME,
    order: Union[SortOrder, str] = SortOrder.ASC,
) -> List[FoodItem]:
    """
    Return a sorted copy of ``foods``.

    The sort is stable in both directions. Strings compare case-insensitively,
    an unknown ``sort_by`` sorts by name and an unknown ``order`` is ascending.
    """
    if not foods:
        return []
    try:
        key = SortKey(sort_by)
    except ValueError:
        key = SortKey.NAME
    descending = str(order).lower() == SortOrder.DESC.value
    return sorted(foods, key=lambda food: _sort_value(food, key), reverse=descending)
