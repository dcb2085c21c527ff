"""Shared test fixtures and configuration."""
import pytest
import httpx

from foodies.core.config import Settings
from foodies.main import Storefront
from foodies.services.checkout.payment import (
    PaymentConfirmation,
    PaymentDismissal,
    PaymentSurface,
)
from foodies.services.notifications import NotificationBus
from foodies.services.ordering.models import ShippingDetails
from foodies.services.session.token_store import InMemoryTokenStore
from tests.fake_api import API_BASE_URL, FakeBackend, create_fake_api

TEST_FOODS = [
    {
        "id": "1",
        "name": "Paneer Tikka",
        "description": "Grilled cottage cheese",
        "price": 250,
        "category": "Starters",
        "imageUrl": "https://cdn.example.com/paneer-tikka.png",
    },
    {
        "id": "2",
        "name": "butter chicken",
        "description": "Creamy tomato curry",
        "price": "320.50",
        "category": "Mains",
        "imageUrl": "https://cdn.example.com/butter-chicken.png",
    },
    {
        "id": "3",
        "name": "Gulab Jamun",
        "description": "Milk dumplings in syrup",
        "price": 90,
        "category": "Desserts",
        "imageUrl": "https://cdn.example.com/gulab-jamun.png",
    },
]


class FakePaymentSurface(PaymentSurface):
    """Payment surface that confirms or dismisses without a payer."""

    def __init__(self, dismiss: bool = False):
        self.dismiss = dismiss
        self.requests = []

    async def collect(self, request):
        self.requests.append(request)
        if self.dismiss:
            return PaymentDismissal(reason="closed by payer")
        return PaymentConfirmation(
            razorpay_payment_id="pay_test_1",
            razorpay_order_id=request.order_id,
            razorpay_signature="sig_test_1",
        )


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at the fake API."""
    return Settings(
        api_base_url=API_BASE_URL,
        token_file=tmp_path / "session.json",
        razorpay_key="rzp_test_key",
        tax_rate=0.10,
        shipping_fee=10.0,
    )


@pytest.fixture
def backend():
    """Fake API state seeded with a small catalog."""
    fake = FakeBackend()
    fake.foods = [dict(food) for food in TEST_FOODS]
    return fake


@pytest.fixture
async def http_client(backend):
    """HTTP client routed to the in-process fake API."""
    transport = httpx.ASGITransport(app=create_fake_api(backend))
    async with httpx.AsyncClient(transport=transport) as client:
        yield client


@pytest.fixture
def user_token(backend):
    """Token of a registered user known to the fake API."""
    return backend.add_user("asha@example.com", "secret123", name="Asha Rao")


@pytest.fixture
def token_store():
    return InMemoryTokenStore()


@pytest.fixture
def notifier():
    return NotificationBus()


@pytest.fixture
def events(notifier):
    """Every outcome event published during the test."""
    recorded = []
    notifier.subscribe(recorded.append)
    return recorded


@pytest.fixture
def payment_surface():
    return FakePaymentSurface()


@pytest.fixture
def storefront(test_settings, http_client, token_store, notifier, payment_surface):
    """Fully wired storefront talking to the fake API."""
    return Storefront(
        payment_surface=payment_surface,
        settings=test_settings,
        http=http_client,
        token_store=token_store,
        notifier=notifier,
    )


@pytest.fixture
def shipping():
    """Checkout form as a customer would fill it in."""
    return ShippingDetails(
        first_name="Asha",
        last_name="Rao",
        email="asha@example.com",
        phone_number="9876543210",
        address="12 Chandni Chowk",
        city="Delhi",
        state="Delhi",
        zip="110006",
        country="India",
    )


@pytest.fixture
async def offline_http_client():
    """HTTP client whose every request fails before a response arrives."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        yield client
