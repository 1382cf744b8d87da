"""Store error kinds and translation of persistence faults.

Every fault raised by a persistence medium (file I/O, HTTP transport,
backend rejection, malformed rows) is converted to a StoreError before it
leaves the store.
"""

import logging
from enum import Enum

import httpx
from pydantic import ValidationError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Category of a store failure."""

    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    TRANSIENT = "transient"
    UNKNOWN = "unknown"


class StoreError(Exception):
    """A failed store operation with a kind and a human-readable message."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"StoreError({self.kind.value!r}, {self.message!r})"


def _kind_for_status(status_code: int) -> ErrorKind:
    if status_code in (401, 403):
        return ErrorKind.UNAUTHORIZED
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if status_code in (408, 429) or status_code >= 500:
        return ErrorKind.TRANSIENT
    return ErrorKind.UNKNOWN


def translate_error(exc: Exception) -> StoreError:
    """Map a persistence-medium exception to a StoreError.

    - Timeouts, transport failures and OS-level I/O errors -> TRANSIENT
    - HTTP 401/403 -> UNAUTHORIZED, 404 -> NOT_FOUND
    - HTTP 408/429/5xx -> TRANSIENT, other HTTP statuses -> UNKNOWN
    - Validation failures and anything unexpected -> UNKNOWN
    """
    if isinstance(exc, StoreError):
        return exc

    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        kind = _kind_for_status(status)
        return StoreError(kind, f"Backend rejected request with HTTP {status}")

    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return StoreError(ErrorKind.TRANSIENT, f"Storage request timed out: {exc}")

    if isinstance(exc, (httpx.TransportError, OSError)):
        return StoreError(ErrorKind.TRANSIENT, f"Storage unavailable: {exc}")

    if isinstance(exc, ValidationError):
        logger.error("Malformed record from storage", extra={"error": str(exc)})
        return StoreError(ErrorKind.UNKNOWN, f"Malformed record from storage: {exc}")

    logger.exception("Unexpected storage failure", exc_info=exc)
    return StoreError(ErrorKind.UNKNOWN, f"Unexpected storage failure: {exc}")
