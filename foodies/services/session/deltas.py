"""Speculative cart quantity changes and their inverses."""
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class QuantityDelta:
    """A change of ``amount`` units to one food item's cart quantity."""

    food_id: str
    amount: int

    @classmethod
    def decrement(cls, quantities: Dict[str, int], food_id: str) -> "QuantityDelta":
        """One-unit decrement that never takes the quantity below zero."""
        current = quantities.get(food_id, 0)
        return cls(food_id, -1 if current > 0 else 0)

    def apply(self, quantities: Dict[str, int]) -> None:
        """Apply in place, flooring at zero. A zero quantity is stored as no entry."""
        quantity = max(0, quantities.get(self.food_id, 0) + self.amount)
        if quantity:
            quantities[self.food_id] = quantity
        else:
            quantities.pop(self.food_id, None)

    def inverse(self) -> "QuantityDelta":
        return QuantityDelta(self.food_id, -self.amount)
