"""Async HTTP client singleton for the Supabase REST and Auth APIs.

Creates a cached httpx.AsyncClient bound to the configured project URL,
carrying the anon API key on every request. Per-user bearer tokens are
added per request by the callers.
"""

import httpx

from ideaflow.config import get_settings

_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """Return a cached async HTTP client for the Supabase project.

    Creates the client on first call using supabase_url, supabase_anon_key
    and request_timeout from settings. Subsequent calls return the cached
    instance.
    """
    global _client
    if _client is None:
        settings = get_settings()
        _client = httpx.AsyncClient(
            base_url=settings.supabase_url,
            headers={"apikey": settings.supabase_anon_key},
            timeout=settings.request_timeout,
        )
    return _client


async def close_client() -> None:
    """Close and drop the cached client. Called on application shutdown."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


def reset_client() -> None:
    """Reset the cached client instance. Used for testing."""
    global _client
    _client = None
