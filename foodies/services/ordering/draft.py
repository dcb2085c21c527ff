"""Order draft construction."""
from typing import Sequence

from foodies.services.ordering.models import (
    CartLine,
    OrderDraft,
    OrderedItem,
    OrderStatus,
    ShippingDetails,
)


def format_address(shipping: ShippingDetails) -> str:
    """Single-line delivery address."""
    parts = [
        shipping.full_name,
        shipping.address,
        shipping.city,
        shipping.state,
        shipping.zip,
    ]
    return ", ".join(part for part in parts if part)


def build_order_draft(
    shipping: ShippingDetails, lines: Sequence[CartLine], total: float
) -> OrderDraft:
    """Build the order payload from the checkout form and the cart."""
    return OrderDraft(
        user_address=format_address(shipping),
        phone_number=shipping.phone_number,
        ordered_items=[
            OrderedItem(
                food_id=line.id,
                quantity=line.quantity,
                price=round((line.price or 0.0) * line.quantity, 2),
                category=line.category,
                image_url=line.image_url,
                description=line.description,
                name=line.name,
            )
            for line in lines
        ],
        amount=f"{total:.2f}",
        order_status=OrderStatus.PREPARING,
    )
