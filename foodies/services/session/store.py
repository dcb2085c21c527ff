"""Client-side session state: catalog, cart quantities and auth token."""
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from foodies.services.checkout.flow import CheckoutResult
from foodies.services.checkout.stages import CheckoutStage
from foodies.services.coordinators.cart import CartCoordinator
from foodies.services.coordinators.food import FoodCoordinator
from foodies.services.coordinators.orders import OrderCoordinator
from foodies.services.gateway.envelope import (
    Envelope,
    ErrorInfo,
    Failure,
    FailureKind,
)
from foodies.services.menu.models import FoodItem
from foodies.services.notifications import NotificationBus
from foodies.services.ordering.cart import build_cart_lines
from foodies.services.ordering.models import CartLine, CartTotals, ShippingDetails
from foodies.services.session.deltas import QuantityDelta
from foodies.services.session.token_store import TokenStore

logger = logging.getLogger(__name__)

LOGIN_REQUIRED_MESSAGE = "Please log in to add items to your cart."


def parse_quantity(value: Any) -> Optional[int]:
    """Whole-number quantity, or None when the value is not one."""
    try:
        quantity = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if isinstance(value, float) and value != quantity:
        return None
    return quantity


def parse_cart_quantities(data: Any) -> Dict[str, int]:
    """
    Quantities from a cart payload, keeping positive whole numbers only.

    A payload without an ``items`` mapping reads as an empty cart.
    """
    if data is None:
        return {}
    items = data.get("items") if isinstance(data, dict) else data
    if items is None:
        return {}
    if not isinstance(items, dict):
        logger.warning(f"[SESSION] Ignoring malformed cart payload: {data!r}")
        return {}

    quantities = {}
    for food_id, value in items.items():
        quantity = parse_quantity(value)
        if quantity is None:
            logger.warning(f"[SESSION] Ignoring cart quantity {value!r} for {food_id}")
            continue
        if quantity > 0:
            quantities[str(food_id)] = quantity
    return quantities


class SessionStore:
    """
    Holds the catalog snapshot, cart quantities and token for one session.

    Cart changes are applied locally first and undone with the inverse delta
    if the API reports a failure. Overlapping changes to the same item are
    not sequenced: responses may land out of order and the last write wins.
    """

    def __init__(
        self,
        food: FoodCoordinator,
        cart: CartCoordinator,
        orders: OrderCoordinator,
        token_store: TokenStore,
        notifier: NotificationBus,
    ):
        self.food = food
        self.cart = cart
        self.orders = orders
        self.token_store = token_store
        self.notifier = notifier
        self.food_list: List[FoodItem] = []
        self.quantities: Dict[str, int] = {}
        self.token: Optional[str] = None

    async def load(self) -> None:
        """Fetch the catalog and, when a token is stored, the remote cart."""
        result = await self.food.fetch_food_list()
        if result.success:
            self.food_list = result.data
            logger.info(f"[SESSION] Catalog loaded - {len(self.food_list)} items")
        else:
            logger.warning(f"[SESSION] Failed to load food list: {result.error.message}")

        saved_token = self.token_store.get()
        if saved_token:
            self.token = saved_token
            await self.load_cart()

    async def load_cart(self) -> Envelope:
        """Replace local quantities with the remote cart."""
        if not self.token:
            return Failure.of(
                LOGIN_REQUIRED_MESSAGE, status=401, kind=FailureKind.VALIDATION
            )
        result = await self.cart.get_cart_data(self.token)
        if result.success:
            self.quantities = parse_cart_quantities(result.data)
        else:
            logger.warning(f"[SESSION] Failed to load cart data: {result.error.message}")
        return result

    async def set_token(self, token: Optional[str]) -> None:
        """Adopt a new token (after login) and hydrate its cart."""
        self.token = token or None
        if self.token:
            self.token_store.set(self.token)
            await self.load_cart()
        else:
            self.quantities = {}

    async def increase_qty(self, food_id: str) -> Envelope:
        if not self.token:
            self.notifier.error("CART", LOGIN_REQUIRED_MESSAGE, status=401)
            return Failure.of(
                LOGIN_REQUIRED_MESSAGE, status=401, kind=FailureKind.VALIDATION
            )
        delta = QuantityDelta(food_id, 1)
        return await self._apply_speculatively(
            delta, lambda: self.cart.add_to_cart(food_id, self.token)
        )

    async def decrease_qty(self, food_id: str) -> Envelope:
        """Remove one unit; at zero the quantity stays put but the request is still sent."""
        delta = QuantityDelta.decrement(self.quantities, food_id)
        return await self._apply_speculatively(
            delta, lambda: self.cart.remove_from_cart(food_id, self.token)
        )

    async def _apply_speculatively(
        self, delta: QuantityDelta, call: Callable[[], Awaitable[Envelope]]
    ) -> Envelope:
        delta.apply(self.quantities)
        result = await call()
        if not result.success:
            delta.inverse().apply(self.quantities)
            logger.info(
                f"[SESSION] Reverted quantity change for {delta.food_id} "
                f"({delta.amount:+d}): {result.error.message}"
            )
        return result

    def remove_item(self, food_id: str) -> None:
        """Drop an item locally; the remote cart is untouched."""
        self.quantities.pop(food_id, None)

    def total_items(self) -> int:
        return sum(self.quantities.values())

    def cart_lines(self) -> List[CartLine]:
        return build_cart_lines(self.food_list, self.quantities)

    def totals(self) -> CartTotals:
        return self.cart.calculate_cart_totals(self.cart_lines())

    async def place_order(self, shipping: ShippingDetails) -> CheckoutResult:
        """Check out the current cart and refresh it once the order completes."""
        lines = self.cart_lines()
        validation = self.cart.validate_cart(lines)
        if not self.token or not validation.is_valid:
            message = validation.message if self.token else LOGIN_REQUIRED_MESSAGE
            status = 400 if self.token else 401
            self.notifier.error("CHECKOUT", message, status=status)
            return CheckoutResult(
                stage=CheckoutStage.FAILED,
                history=[CheckoutStage.DRAFTED, CheckoutStage.FAILED],
                error=ErrorInfo(
                    message=message, status=status, kind=FailureKind.VALIDATION
                ),
            )

        totals = self.cart.calculate_cart_totals(lines)
        draft = self.orders.format_order_data(shipping, lines, totals.total)
        result = await self.orders.process_order(draft, self.token, shipping)
        if result.stage == CheckoutStage.COMPLETED:
            await self.load_cart()
        return result
