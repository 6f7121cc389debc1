"""OAuth helper and REST client for the Dribbble API."""

from dribbble_oauth.client import DribbbleClient
from dribbble_oauth.errors import (
    ApplicationError,
    DecodeError,
    DribbbleError,
    HandshakeInProgressError,
    MalformedResponseError,
    NotAuthenticatedError,
    OAuthError,
    TransportError,
)
from dribbble_oauth.oauth import AuthScope, AuthState, OAuthManager
from dribbble_oauth.paging import collect_pages
from dribbble_oauth.request_builder import BodyKind, RequestSpec
from dribbble_oauth.responses import ApiResult
from dribbble_oauth.token_store import FileKeyValueStore, MemoryKeyValueStore, TokenStore

__version__ = "0.1.0"

__all__ = [
    "ApiResult",
    "ApplicationError",
    "AuthScope",
    "AuthState",
    "BodyKind",
    "DecodeError",
    "DribbbleClient",
    "DribbbleError",
    "FileKeyValueStore",
    "HandshakeInProgressError",
    "MalformedResponseError",
    "MemoryKeyValueStore",
    "NotAuthenticatedError",
    "OAuthError",
    "OAuthManager",
    "RequestSpec",
    "TokenStore",
    "TransportError",
    "collect_pages",
]
