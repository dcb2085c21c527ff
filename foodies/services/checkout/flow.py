"""Checkout workflow: create order, collect payment, verify, clear cart."""
import logging
from typing import Any, List, Optional

from pydantic import BaseModel

from foodies.core.config import Settings
from foodies.services.checkout.payment import (
    PaymentDismissal,
    PaymentSurface,
    build_payment_request,
)
from foodies.services.checkout.stages import (
    CheckoutStage,
    InvalidTransition,
    TERMINAL_STAGES,
    can_transition,
)
from foodies.services.coordinators.cart import CartCoordinator
from foodies.services.gateway.envelope import ErrorInfo, FailureKind
from foodies.services.gateway.orders import OrderGateway
from foodies.services.notifications import NotificationBus
from foodies.services.ordering.models import Order, OrderDraft, ShippingDetails

logger = logging.getLogger(__name__)

UNEXPECTED_CHECKOUT_MESSAGE = "An unexpected error occurred during order processing"


class CheckoutAttempt(BaseModel):
    """State of one checkout attempt; it is never persisted."""

    stage: CheckoutStage = CheckoutStage.DRAFTED
    history: List[CheckoutStage] = [CheckoutStage.DRAFTED]
    order: Optional[Order] = None

    @property
    def is_terminal(self) -> bool:
        return self.stage in TERMINAL_STAGES

    def advance(self, target: CheckoutStage) -> None:
        """Move to ``target``, refusing edges the workflow does not have."""
        if not can_transition(self.stage, target):
            raise InvalidTransition(self.stage, target)
        logger.info(f"[CHECKOUT] Stage changed: {self.stage.value} -> {target.value}")
        self.stage = target
        self.history.append(target)


class CheckoutResult(BaseModel):
    """Terminal outcome of a checkout attempt."""

    stage: CheckoutStage
    history: List[CheckoutStage] = []
    order: Optional[Order] = None
    data: Any = None  # verified order payload on completion
    error: Optional[ErrorInfo] = None
    cart_cleared: Optional[bool] = None

    @property
    def success(self) -> bool:
        return self.stage == CheckoutStage.COMPLETED

    @property
    def cancelled(self) -> bool:
        return self.stage == CheckoutStage.CANCELLED


class CheckoutFlow:
    """
    Runs a single checkout attempt to a terminal stage.

    Steps never overlap: each one awaits the previous step's envelope.
    Nothing is retried. A dismissed payment deletes the created order; a
    failed delete is only logged. A failed cart clear after a verified
    payment still completes the order and leaves the remote cart as it was.
    """

    def __init__(
        self,
        orders: OrderGateway,
        cart: CartCoordinator,
        payment_surface: PaymentSurface,
        notifier: NotificationBus,
        settings: Settings,
    ):
        self.orders = orders
        self.cart = cart
        self.payment_surface = payment_surface
        self.notifier = notifier
        self.settings = settings

    async def run(
        self, draft: OrderDraft, token: str, shipping: ShippingDetails
    ) -> CheckoutResult:
        """Run the checkout; always returns, never raises."""
        attempt = CheckoutAttempt()
        try:
            return await self._run(attempt, draft, token, shipping)
        except Exception as e:
            logger.error(
                f"[CHECKOUT] Unexpected error at stage {attempt.stage.value} - "
                f"Error: {type(e).__name__}: {str(e)}",
                exc_info=True,
            )
            self.notifier.error("CHECKOUT", UNEXPECTED_CHECKOUT_MESSAGE, status=500)
            if not attempt.is_terminal:
                attempt.advance(CheckoutStage.FAILED)
            return self._result(
                attempt,
                error=ErrorInfo(
                    message=UNEXPECTED_CHECKOUT_MESSAGE,
                    status=500,
                    kind=FailureKind.UNEXPECTED,
                ),
            )

    async def _run(
        self,
        attempt: CheckoutAttempt,
        draft: OrderDraft,
        token: str,
        shipping: ShippingDetails,
    ) -> CheckoutResult:
        # Drafted -> PaymentPending
        created = await self.orders.create_order(draft, token)
        if not created.success:
            return self._fail(attempt, created.error, "Failed to create order")

        attempt.order = Order.model_validate(created.data)
        attempt.advance(CheckoutStage.PAYMENT_PENDING)
        logger.info(
            f"[CHECKOUT] Order {attempt.order.id} created - "
            f"payment handle: {attempt.order.razorpay_order_id}, amount: {attempt.order.amount}"
        )

        # PaymentPending -> Verifying | Cancelled
        request = build_payment_request(attempt.order, shipping, self.settings)
        outcome = await self.payment_surface.collect(request)
        if isinstance(outcome, PaymentDismissal):
            attempt.advance(CheckoutStage.CANCELLED)
            self.notifier.error("CHECKOUT", "Payment cancelled.")
            await self._discard_order(attempt.order, token)
            return self._result(attempt)

        attempt.advance(CheckoutStage.VERIFYING)

        # Verifying -> Completed
        verified = await self.orders.verify_payment(outcome.model_dump(), token)
        if not verified.success:
            return self._fail(attempt, verified.error, "Payment verification failed")

        cleared = await self.cart.clear_cart(token)
        if not cleared.success:
            logger.warning(
                f"[CHECKOUT] Order {attempt.order.id} paid but the cart could not be "
                f"cleared: {cleared.error.message}"
            )

        self.notifier.success("CHECKOUT", "Order placed successfully!")
        attempt.advance(CheckoutStage.COMPLETED)
        return self._result(attempt, data=verified.data, cart_cleared=cleared.success)

    async def _discard_order(self, order: Order, token: str) -> None:
        deleted = await self.orders.delete_order(order.id, token)
        if deleted.success:
            logger.info(f"[CHECKOUT] Order {order.id} deleted after payment was cancelled")
        else:
            logger.warning(
                f"[CHECKOUT] Could not delete order {order.id} after payment was "
                f"cancelled: {deleted.error.message}"
            )

    def _fail(
        self, attempt: CheckoutAttempt, error: ErrorInfo, fallback_message: str
    ) -> CheckoutResult:
        self.notifier.error("CHECKOUT", error.message or fallback_message, status=error.status)
        attempt.advance(CheckoutStage.FAILED)
        return self._result(attempt, error=error)

    @staticmethod
    def _result(attempt: CheckoutAttempt, **kwargs: Any) -> CheckoutResult:
        return CheckoutResult(
            stage=attempt.stage,
            history=list(attempt.history),
            order=attempt.order,
            **kwargs,
        )
