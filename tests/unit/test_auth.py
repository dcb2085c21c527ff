"""Unit tests for authentication and token storage."""
import json

import pytest

from foodies.services.gateway.envelope import FailureKind
from foodies.services.notifications import NotificationLevel
from foodies.services.session.token_store import FileTokenStore, InMemoryTokenStore


class TestRegistration:
    """Test user registration."""

    @pytest.mark.asyncio
    async def test_register_user(self, storefront, backend, events):
        """Test a new user is created and asked to log in."""
        result = await storefront.auth.register_user(
            {"name": "Ravi", "email": "ravi@example.com", "password": "pw123456"}
        )

        assert result.success
        assert result.status == 201
        assert result.data["email"] == "ravi@example.com"
        assert "ravi@example.com" in backend.users
        assert events[0].message == "Registration completed successfully. Please login."

    @pytest.mark.asyncio
    async def test_duplicate_email(self, storefront, user_token, events):
        result = await storefront.auth.register_user(
            {"name": "Asha", "email": "asha@example.com", "password": "other"}
        )

        assert result.success is False
        assert result.error.status == 409
        assert events[0].message == "Email already registered"


class TestLogin:
    """Test login and token persistence."""

    @pytest.mark.asyncio
    async def test_login_stores_token(self, storefront, backend, user_token, token_store, events):
        result = await storefront.auth.login(
            {"email": "asha@example.com", "password": "secret123"}
        )

        assert result.success
        assert token_store.get() == result.data["token"]
        assert backend.tokens[token_store.get()] == "asha@example.com"
        assert storefront.auth.is_authenticated()
        assert storefront.auth.get_token() == result.data["token"]
        assert events[0].level == NotificationLevel.SUCCESS

    @pytest.mark.asyncio
    async def test_bad_password(self, storefront, user_token, token_store, events):
        """Test a rejected login stores nothing and reports the API message."""
        result = await storefront.auth.login(
            {"email": "asha@example.com", "password": "wrong"}
        )

        assert result.success is False
        assert result.error.status == 401
        assert result.error.message == "Invalid email or password"
        assert token_store.get() is None
        assert storefront.auth.is_authenticated() is False
        assert events[0].level == NotificationLevel.ERROR

    @pytest.mark.asyncio
    async def test_response_without_token_is_failure(self, storefront, backend, token_store):
        """Test a 200 without a token is not treated as a login."""
        backend.fail_next("POST /api/login", 200, {"email": "asha@example.com"})

        result = await storefront.auth.login(
            {"email": "asha@example.com", "password": "secret123"}
        )

        assert result.success is False
        assert result.error.kind == FailureKind.REMOTE
        assert result.error.message == "Login failed"
        assert token_store.get() is None


class TestLogout:
    """Test logout."""

    @pytest.mark.asyncio
    async def test_logout_clears_token(self, storefront, backend, token_store, events):
        token_store.set("some-token")

        result = await storefront.auth.logout()

        assert result.success
        assert result.data == {"message": "Logged out successfully"}
        assert token_store.get() is None
        assert backend.calls == []
        assert events[0].message == "Logged out successfully"


class TestTokenValidation:
    """Test stored token checks."""

    @pytest.mark.asyncio
    async def test_valid_token_is_kept(self, storefront, user_token, token_store, events):
        token_store.set(user_token)

        result = await storefront.auth.validate_token(user_token)

        assert result.success
        assert result.data["email"] == "asha@example.com"
        assert token_store.get() == user_token
        assert events == []

    @pytest.mark.asyncio
    async def test_invalid_token_is_cleared_quietly(self, storefront, token_store, events):
        """Test a rejected token is removed without notifying."""
        token_store.set("expired")

        result = await storefront.auth.validate_token("expired")

        assert result.success is False
        assert result.error.status == 401
        assert token_store.get() is None
        assert events == []

    @pytest.mark.asyncio
    async def test_unavailable_api_clears_token(self, storefront, token_store, backend):
        backend.fail_next("GET /api/validate", 503)
        token_store.set("maybe-valid")

        result = await storefront.auth.validate_token("maybe-valid")

        assert result.error.message == "Token validation failed"
        assert token_store.get() is None


class TestTokenStores:
    """Test token persistence."""

    def test_in_memory_store(self):
        store = InMemoryTokenStore("abc")

        assert store.get() == "abc"
        store.clear()
        assert store.get() is None

    def test_file_store_round_trip(self, tmp_path):
        """Test the token survives a new store instance on the same file."""
        path = tmp_path / "nested" / "session.json"
        FileTokenStore(path).set("abc123")

        assert FileTokenStore(path).get() == "abc123"
        assert json.loads(path.read_text()) == {"token": "abc123"}

    def test_file_store_clear_keeps_other_keys(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text(json.dumps({"token": "abc", "theme": "dark"}))

        FileTokenStore(path).clear()

        assert json.loads(path.read_text()) == {"theme": "dark"}

    def test_missing_file(self, tmp_path):
        store = FileTokenStore(tmp_path / "absent.json")

        assert store.get() is None
        store.clear()
        assert not (tmp_path / "absent.json").exists()

    def test_unreadable_file_is_ignored(self, tmp_path):
        """Test a corrupt file reads as no token and is replaced on set."""
        path = tmp_path / "session.json"
        path.write_text("{not json")
        store = FileTokenStore(path)

        assert store.get() is None
        store.set("fresh")
        assert store.get() == "fresh"

    def test_file_that_cannot_be_opened_is_ignored(self, tmp_path):
        """Test an OS error while reading reads as no token instead of raising."""
        path = tmp_path / "session.json"
        path.mkdir()
        store = FileTokenStore(path)

        assert store.get() is None
        store.clear()
