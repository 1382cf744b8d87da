"""Access-token verification against Supabase Auth with a TTL cache.

Verified tokens are cached for five minutes so that repeated sign-ins with
the same token do not hit the identity provider each time.
"""

import logging

import httpx
from cachetools import TTLCache

from ideaflow.auth.session import Session
from ideaflow.storage.client import get_http_client
from ideaflow.storage.errors import ErrorKind, StoreError, translate_error

logger = logging.getLogger(__name__)

_token_cache: TTLCache = TTLCache(maxsize=256, ttl=300)  # 5-minute TTL


async def verify_access_token(token: str) -> Session:
    """Resolve a Supabase access token to a Session.

    Calls ``GET /auth/v1/user`` with the token as bearer credentials.
    Raises StoreError(UNAUTHORIZED) for an empty or rejected token and the
    translated StoreError for transport failures.
    """
    if not token:
        raise StoreError(ErrorKind.UNAUTHORIZED, "Missing access token")

    cached = _token_cache.get(token)
    if cached is not None:
        return cached

    client = get_http_client()
    try:
        response = await client.get(
            "/auth/v1/user",
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()
    except httpx.HTTPError as exc:
        error = translate_error(exc)
        if error.kind == ErrorKind.NOT_FOUND:
            error = StoreError(ErrorKind.UNAUTHORIZED, "Unknown user for access token")
        logger.warning("Access token verification failed", extra={"kind": error.kind.value})
        raise error from exc

    try:
        user = response.json()
        session = Session(user_id=user["id"], email=user.get("email"), access_token=token)
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        logger.error("Malformed identity response", extra={"status": response.status_code})
        raise StoreError(ErrorKind.UNKNOWN, "Malformed identity provider response") from exc
    _token_cache[token] = session
    return session


def invalidate_token_cache() -> None:
    """Clear verified tokens. Used on sign-out and in tests."""
    _token_cache.clear()
