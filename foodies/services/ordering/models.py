"""Cart and order models."""
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from foodies.services.menu.models import parse_price


class ApiModel(BaseModel):
    """Model exchanged with the API using camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderStatus(str, Enum):
    """Order statuses; transitions are owned by the backend."""

    PREPARING = "Preparing"
    ON_THE_WAY = "On the way"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    def __str__(self) -> str:
        return self.value


class CartLine(BaseModel):
    """A catalog item together with its quantity in the cart."""

    id: Optional[str] = None
    name: Optional[str] = None
    price: Optional[float] = None
    quantity: int = 0
    category: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> Optional[float]:
        return None if value is None else parse_price(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0


class CartTotals(BaseModel):
    """Monetary breakdown of a cart, rounded to two places."""

    subtotal: float = 0.0
    tax: float = 0.0
    shipping: float = 0.0
    total: float = 0.0
    item_count: int = 0


class CartValidation(BaseModel):
    """Outcome of checking whether a cart can be checked out."""

    is_valid: bool
    message: str


class ShippingDetails(BaseModel):
    """Checkout form fields."""

    first_name: str
    last_name: str
    email: str
    phone_number: str
    address: str
    city: str
    state: str
    zip: str
    country: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class OrderedItem(ApiModel):
    """One line of an order; ``price`` is the line total."""

    food_id: str
    quantity: int
    price: float
    category: Optional[str] = None
    image_url: Optional[str] = None
    description: Optional[str] = None
    name: str

    @field_validator("food_id", mode="before")
    @classmethod
    def _food_id_as_string(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


class OrderDraft(ApiModel):
    """Order as submitted by the client, before the backend assigns an id."""

    user_address: str
    phone_number: str
    ordered_items: List[OrderedItem]
    amount: str  # two-decimal fixed string
    order_status: OrderStatus = OrderStatus.PREPARING


class Order(ApiModel):
    """Order as returned by the backend."""

    id: str
    razorpay_order_id: Optional[str] = None
    amount: float = 0.0
    user_address: Optional[str] = None
    phone_number: Optional[str] = None
    ordered_items: List[OrderedItem] = []
    order_status: Optional[str] = None
    payment_status: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return parse_price(value)
