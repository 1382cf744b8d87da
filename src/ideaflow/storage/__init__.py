"""Idea persistence: store, backends and error kinds."""

from ideaflow.storage.base import IdeaBackend
from ideaflow.storage.client import close_client, get_http_client, reset_client
from ideaflow.storage.errors import ErrorKind, StoreError, translate_error
from ideaflow.storage.local import LocalBackend
from ideaflow.storage.remote import RemoteBackend
from ideaflow.storage.store import IdeaStore, StoreState

__all__ = [
    "close_client",
    "ErrorKind",
    "get_http_client",
    "IdeaBackend",
    "IdeaStore",
    "LocalBackend",
    "RemoteBackend",
    "reset_client",
    "StoreError",
    "StoreState",
    "translate_error",
]
