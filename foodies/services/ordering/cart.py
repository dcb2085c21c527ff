"""Cart arithmetic and checkout eligibility."""
from typing import Dict, List, Optional, Sequence

from foodies.services.menu.models import FoodItem
from foodies.services.ordering.models import CartLine, CartTotals, CartValidation

TAX_RATE = 0.10
SHIPPING_FEE = 10.0

EMPTY_CART_MESSAGE = "Your cart is empty. Add some items before checkout."
INVALID_ITEMS_MESSAGE = (
    "Some items in your cart are invalid. Please refresh and try again."
)
VALID_CART_MESSAGE = "Cart is valid for checkout."


def build_cart_lines(
    foods: Sequence[FoodItem], quantities: Dict[str, int]
) -> List[CartLine]:
    """Pair catalog items with their cart quantities, skipping empty lines."""
    return [
        CartLine(
            id=food.id,
            name=food.name,
            price=food.price,
            quantity=quantities[food.id],
            category=food.category,
            description=food.description,
            image_url=food.image_url,
        )
        for food in foods
        if quantities.get(food.id, 0) > 0
    ]


def calculate_cart_totals(
    lines: Optional[Sequence[CartLine]],
    tax_rate: float = TAX_RATE,
    shipping_fee: float = SHIPPING_FEE,
) -> CartTotals:
    """
    Compute subtotal, tax, shipping and total for cart lines.

    Shipping is charged only when the subtotal is positive. Values are
    rounded to two places when returned, not along the way.
    """
    if not lines:
        return CartTotals()

    subtotal = sum((line.price or 0.0) * line.quantity for line in lines)
    tax = subtotal * tax_rate
    shipping = shipping_fee if subtotal > 0 else 0.0
    total = subtotal + tax + shipping

    return CartTotals(
        subtotal=round(subtotal, 2),
        tax=round(tax, 2),
        shipping=round(shipping, 2),
        total=round(total, 2),
        item_count=sum(line.quantity for line in lines),
    )


def validate_cart(lines: Optional[Sequence[CartLine]]) -> CartValidation:
    """Check a cart is non-empty and every line is complete."""
    if not lines:
        return CartValidation(is_valid=False, message=EMPTY_CART_MESSAGE)

    invalid = [
        line
        for line in lines
        if not line.id or not line.name or not line.price or line.quantity <= 0
    ]
    if invalid:
        return CartValidation(is_valid=False, message=INVALID_ITEMS_MESSAGE)

    return CartValidation(is_valid=True, message=VALID_CART_MESSAGE)
