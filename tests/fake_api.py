"""In-process stand-in for the Foodies REST API used by the tests."""
import secrets
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, FastAPI, Header, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel


# Base URL the fake API is reached under
API_BASE_URL = "http://testserver/api"


class ApiError(Exception):
    """Returned to the client as ``{"message": ...}`` with the given status."""

    def __init__(self, status: int, body: Optional[Dict[str, Any]] = None):
        self.status = status
        self.body = body


class FakeBackend:
    """In-memory state behind the fake API."""

    def __init__(self):
        self.users: Dict[str, Dict[str, str]] = {}
        self.tokens: Dict[str, str] = {}  # token -> email
        self.foods: List[Dict[str, Any]] = []
        self.carts: Dict[str, Dict[str, int]] = {}  # email -> {foodId: qty}
        self.orders: Dict[str, Dict[str, Any]] = {}
        self.calls: List[str] = []
        self.payloads: Dict[str, Any] = {}
        self.failures: Dict[str, Tuple[int, Optional[Dict[str, Any]]]] = {}

    def fail_next(self, call: str, status: int, body: Optional[Dict[str, Any]] = None):
        """Make the next ``"METHOD /path"`` call respond with ``status``."""
        self.failures[call] = (status, body)

    def add_user(self, email: str, password: str, name: str = "Test User") -> str:
        """Register a user directly and return a valid token for them."""
        self.users[email] = {"email": email, "password": password, "name": name}
        token = secrets.token_urlsafe(16)
        self.tokens[token] = email
        return token

    def cart_for(self, email: str) -> Dict[str, int]:
        return self.carts.setdefault(email, {})


def get_backend(request: Request) -> FakeBackend:
    return request.app.state.backend


async def track_call(request: Request) -> None:
    backend = get_backend(request)
    call = f"{request.method} {request.url.path}"
    backend.calls.append(call)
    failure = backend.failures.pop(call, None)
    if failure:
        raise ApiError(*failure)


def current_user(
    request: Request, authorization: Optional[str] = Header(None)
) -> str:
    backend = get_backend(request)
    token = (authorization or "").removeprefix("Bearer ").strip()
    email = backend.tokens.get(token)
    if not email:
        raise ApiError(401, {"message": "Unauthorized"})
    return email


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class CartRequest(BaseModel):
    foodId: str
    quantity: Optional[int] = None


router = APIRouter(prefix="/api", dependencies=[Depends(track_call)])


@router.post("/register", status_code=201)
async def register(body: RegisterRequest, request: Request):
    backend = get_backend(request)
    if body.email in backend.users:
        raise ApiError(409, {"message": "Email already registered"})
    backend.users[body.email] = body.model_dump()
    return {"id": str(len(backend.users)), "name": body.name, "email": body.email}


@router.post("/login")
async def login(body: LoginRequest, request: Request):
    backend = get_backend(request)
    user = backend.users.get(body.email)
    if not user or user["password"] != body.password:
        raise ApiError(401, {"message": "Invalid email or password"})
    token = secrets.token_urlsafe(16)
    backend.tokens[token] = body.email
    return {"email": body.email, "token": token}


@router.get("/validate")
async def validate(email: str = Depends(current_user)):
    return {"valid": True, "email": email}


@router.get("/foods")
async def list_foods(request: Request):
    return get_backend(request).foods


@router.get("/foods/categories")
async def list_categories(request: Request):
    categories = []
    for food in get_backend(request).foods:
        if food.get("category") and food["category"] not in categories:
            categories.append(food["category"])
    return categories


@router.get("/foods/search")
async def search_foods(q: str, request: Request):
    needle = q.lower()
    return [
        food
        for food in get_backend(request).foods
        if needle in (food.get("name") or "").lower()
        or needle in (food.get("description") or "").lower()
    ]


@router.get("/foods/category/{category}")
async def foods_by_category(category: str, request: Request):
    return [
        food for food in get_backend(request).foods
        if (food.get("category") or "").lower() == category.lower()
    ]


@router.get("/foods/{food_id}")
async def get_food(food_id: str, request: Request):
    for food in get_backend(request).foods:
        if str(food["id"]) == food_id:
            return food
    raise ApiError(404, {"message": "Food not found"})


def _cart_response(email: str, items: Dict[str, int]) -> Dict[str, Any]:
    return {"userId": email, "items": dict(items)}


@router.get("/cart")
async def get_cart(request: Request, email: str = Depends(current_user)):
    return _cart_response(email, get_backend(request).cart_for(email))


@router.post("/cart")
async def add_to_cart(body: CartRequest, request: Request, email: str = Depends(current_user)):
    items = get_backend(request).cart_for(email)
    items[body.foodId] = items.get(body.foodId, 0) + 1
    return _cart_response(email, items)


@router.post("/cart/remove")
async def remove_from_cart(
    body: CartRequest, request: Request, email: str = Depends(current_user)
):
    items = get_backend(request).cart_for(email)
    if items.get(body.foodId, 0) > 0:
        items[body.foodId] -= 1
    return _cart_response(email, items)


@router.put("/cart")
async def update_cart(body: CartRequest, request: Request, email: str = Depends(current_user)):
    items = get_backend(request).cart_for(email)
    items[body.foodId] = max(0, body.quantity or 0)
    return _cart_response(email, items)


@router.delete("/cart", status_code=204)
async def clear_cart(request: Request, email: str = Depends(current_user)):
    get_backend(request).carts[email] = {}
    return Response(status_code=204)


@router.post("/orders/create")
async def create_order(request: Request, email: str = Depends(current_user)):
    backend = get_backend(request)
    body = await request.json()
    backend.payloads["POST /api/orders/create"] = body
    order_id = f"order-{len(backend.orders) + 1}"
    order = {
        **body,
        "id": order_id,
        "userId": email,
        "amount": float(body["amount"]),
        "razorpayOrderId": f"rzp_{order_id}",
        "paymentStatus": "pending",
    }
    backend.orders[order_id] = order
    return order


@router.post("/orders/verify")
async def verify_payment(request: Request, email: str = Depends(current_user)):
    backend = get_backend(request)
    body = await request.json()
    backend.payloads["POST /api/orders/verify"] = body
    for order in backend.orders.values():
        if order["razorpayOrderId"] == body.get("razorpay_order_id"):
            order["paymentStatus"] = "paid"
            order["razorpayPaymentId"] = body.get("razorpay_payment_id")
            return order
    raise ApiError(400, {"message": "Unknown payment order"})


@router.get("/orders")
async def list_orders(request: Request, email: str = Depends(current_user)):
    return [
        order for order in get_backend(request).orders.values() if order["userId"] == email
    ]


@router.delete("/orders/{order_id}", status_code=204)
async def delete_order(order_id: str, request: Request, email: str = Depends(current_user)):
    backend = get_backend(request)
    if order_id not in backend.orders:
        raise ApiError(404, {"message": "Order not found"})
    del backend.orders[order_id]
    return Response(status_code=204)


async def _api_error_handler(request: Request, exc: ApiError) -> Response:
    if exc.body is None:
        return Response(status_code=exc.status)
    return JSONResponse(status_code=exc.status, content=exc.body)


def create_fake_api(backend: Optional[FakeBackend] = None) -> FastAPI:
    """Build the fake API app around a backend."""
    app = FastAPI(title="Fake Foodies API")
    app.state.backend = backend or FakeBackend()
    app.add_exception_handler(ApiError, _api_error_handler)
    app.include_router(router)
    return app
