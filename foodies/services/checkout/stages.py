"""Checkout stages and allowed transitions."""
from enum import Enum
from typing import Dict, FrozenSet


class CheckoutStage(str, Enum):
    """Stages of a single checkout attempt."""

    DRAFTED = "drafted"  # Draft built, nothing sent yet
    PAYMENT_PENDING = "payment_pending"  # Order created, waiting on the payer
    VERIFYING = "verifying"  # Payment confirmed by the payer, verifying with the API
    COMPLETED = "completed"
    CANCELLED = "cancelled"  # Payer dismissed the payment surface
    FAILED = "failed"

    def __str__(self) -> str:
        """Return the string value of the stage."""
        return self.value


TERMINAL_STAGES: FrozenSet[CheckoutStage] = frozenset(
    {CheckoutStage.COMPLETED, CheckoutStage.CANCELLED, CheckoutStage.FAILED}
)

ALLOWED_TRANSITIONS: Dict[CheckoutStage, FrozenSet[CheckoutStage]] = {
    CheckoutStage.DRAFTED: frozenset(
        {CheckoutStage.PAYMENT_PENDING, CheckoutStage.FAILED}
    ),
    CheckoutStage.PAYMENT_PENDING: frozenset(
        {CheckoutStage.VERIFYING, CheckoutStage.CANCELLED, CheckoutStage.FAILED}
    ),
    CheckoutStage.VERIFYING: frozenset(
        {CheckoutStage.COMPLETED, CheckoutStage.FAILED}
    ),
}


class InvalidTransition(ValueError):
    """Raised when a checkout attempt is moved along a forbidden edge."""

    def __init__(self, current: CheckoutStage, target: CheckoutStage):
        super().__init__(f"Cannot move checkout from {current} to {target}")
        self.current = current
        self.target = target


def can_transition(current: CheckoutStage, target: CheckoutStage) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())
