"""Tests for translating persistence faults into StoreError kinds."""

import httpx
import pytest
from pydantic import ValidationError

from ideaflow.models.idea import IdeaInput
from ideaflow.storage.errors import ErrorKind, StoreError, translate_error


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://example.supabase.co/rest/v1/ideas")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError("error", request=request, response=response)


@pytest.mark.parametrize(
    ("status", "kind"),
    [
        (401, ErrorKind.UNAUTHORIZED),
        (403, ErrorKind.UNAUTHORIZED),
        (404, ErrorKind.NOT_FOUND),
        (408, ErrorKind.TRANSIENT),
        (429, ErrorKind.TRANSIENT),
        (503, ErrorKind.TRANSIENT),
        (400, ErrorKind.UNKNOWN),
        (409, ErrorKind.UNKNOWN),
    ],
)
def test_http_status_mapping(status, kind):
    error = translate_error(_status_error(status))
    assert error.kind == kind
    assert str(status) in error.message


def test_timeout_is_transient():
    request = httpx.Request("GET", "https://example.supabase.co")
    error = translate_error(httpx.ReadTimeout("slow", request=request))
    assert error.kind == ErrorKind.TRANSIENT


def test_connect_error_is_transient():
    request = httpx.Request("GET", "https://example.supabase.co")
    error = translate_error(httpx.ConnectError("refused", request=request))
    assert error.kind == ErrorKind.TRANSIENT


def test_os_error_is_transient():
    error = translate_error(PermissionError("read-only file system"))
    assert error.kind == ErrorKind.TRANSIENT


def test_asyncio_timeout_is_transient():
    assert translate_error(TimeoutError()).kind == ErrorKind.TRANSIENT


def test_validation_error_is_unknown():
    with pytest.raises(ValidationError) as exc_info:
        IdeaInput(title="")
    assert translate_error(exc_info.value).kind == ErrorKind.UNKNOWN


def test_unexpected_error_is_unknown():
    error = translate_error(RuntimeError("boom"))
    assert error.kind == ErrorKind.UNKNOWN
    assert "boom" in error.message


def test_store_error_passes_through():
    original = StoreError(ErrorKind.NOT_FOUND, "gone")
    assert translate_error(original) is original
