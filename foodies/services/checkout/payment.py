"""Payment collection surface."""
from abc import ABC, abstractmethod
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from foodies.core.config import Settings
from foodies.services.ordering.models import Order, ShippingDetails


class PaymentPrefill(BaseModel):
    """Contact details shown pre-filled to the payer."""

    name: str
    email: str
    contact: str


class PaymentRequest(BaseModel):
    """Everything needed to open the hosted payment surface."""

    key: Optional[str] = None
    amount: int  # minor units (paise)
    currency: str
    name: str
    description: str
    order_id: str  # payment-gateway order handle
    prefill: PaymentPrefill


class PaymentConfirmation(BaseModel):
    """Payload produced by the payment surface after a successful capture."""

    razorpay_payment_id: str
    razorpay_order_id: str
    razorpay_signature: str

    model_config = ConfigDict(extra="allow")


class PaymentDismissal(BaseModel):
    """The payer closed the payment surface without paying."""

    reason: Optional[str] = None


PaymentOutcome = Union[PaymentConfirmation, PaymentDismissal]


class PaymentSurface(ABC):
    """Abstract base class for externally hosted payment collection."""

    @abstractmethod
    async def collect(self, request: PaymentRequest) -> PaymentOutcome:
        """
        Present the payment surface and wait for the payer.

        Returns:
            A confirmation payload, or a dismissal if the payer cancelled
        """
        pass


def to_minor_units(amount: float) -> int:
    return int(round(amount * 100))


def build_payment_request(
    order: Order, shipping: ShippingDetails, settings: Settings
) -> PaymentRequest:
    """Seed the payment surface with the backend order handle and payer details."""
    return PaymentRequest(
        key=settings.razorpay_key,
        amount=to_minor_units(order.amount),
        currency=settings.currency,
        name=settings.merchant_name,
        description=settings.payment_description,
        order_id=order.razorpay_order_id or "",
        prefill=PaymentPrefill(
            name=shipping.full_name,
            email=shipping.email,
            contact=shipping.phone_number,
        ),
    )
