"""Food catalog models."""
import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


def parse_price(value: Any) -> float:
    """Parse a price, treating anything unparsable as 0."""
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    return price if math.isfinite(price) else 0.0


class FoodItem(BaseModel):
    """Food item as served by the catalog API."""

    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    price: float = 0.0
    category: Optional[str] = None
    image_url: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> float:
        return parse_price(value)
