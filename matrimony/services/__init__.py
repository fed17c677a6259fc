"""Services package."""

from .api_client import api_client, MatrimonyApiClient
from .session_service import session_store, SessionStore, resolve_client_id
from . import filter_service, normalizer_service, lookup_tables

__all__ = [
    "api_client",
    "MatrimonyApiClient",
    "session_store",
    "SessionStore",
    "resolve_client_id",
    "filter_service",
    "normalizer_service",
    "lookup_tables",
]
