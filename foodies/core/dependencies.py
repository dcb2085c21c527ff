"""Factories for the storefront's shared resources."""
from typing import Optional

import httpx

from foodies.core.config import Settings, settings as default_settings
from foodies.services.session.token_store import FileTokenStore, TokenStore


def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return default_settings


def create_http_client(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """Create the HTTP client shared by every gateway."""
    kwargs = {}
    if settings.http_timeout is not None:
        kwargs["timeout"] = settings.http_timeout
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


def get_token_store(settings: Settings) -> TokenStore:
    """Get the token store for the configured session file."""
    return FileTokenStore(settings.token_file)
