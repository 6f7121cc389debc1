# OAuth Manager — Dribbble authorization code flow.
# Created: 2026-10-19
#
# Flow: authenticate() opens the authorize URL in a browser, the app
# forwards the redirect to handle_auth_callback(), which exchanges the
# code for a bearer token and saves it in the TokenStore.

from __future__ import annotations

import asyncio
import enum
import inspect
import json
import logging
import urllib.parse
import webbrowser
from collections.abc import Callable, Iterable
from typing import Any

import httpx

from dribbble_oauth.config import Settings, get_settings
from dribbble_oauth.errors import (
    DecodeError,
    DribbbleError,
    HandshakeInProgressError,
    MalformedResponseError,
    OAuthError,
    TransportError,
)
from dribbble_oauth.http import open_client
from dribbble_oauth.token_store import FileKeyValueStore, TokenStore

logger = logging.getLogger(__name__)

AuthCompletion = Callable[[DribbbleError | None], Any]


class AuthScope(str, enum.Enum):
    """Permission grants that can be requested during authorization."""

    PUBLIC = "public"
    WRITE = "write"
    COMMENT = "comment"
    UPLOAD = "upload"


class AuthState(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AWAITING_REDIRECT = "awaiting_redirect"
    EXCHANGING_CODE = "exchanging_code"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


class OAuthManager:
    """Dribbble OAuth 2.0 authorization code flow.

    Supports:
    - Restoring a previously saved token
    - Authorization URL generation and browser hand-off
    - Code exchange when the redirect comes back
    - Clearing the token when the provider rejects the exchange

    Only one handshake may be pending at a time.
    """

    def __init__(
        self,
        token_store: TokenStore | None = None,
        settings: Settings | None = None,
        opener: Callable[[str], Any] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings or get_settings()
        self.store = token_store or TokenStore(
            FileKeyValueStore(self.settings.config_dir / "settings.json")
        )
        self._opener = opener or webbrowser.open
        self._http_client = http_client
        self._client_id: str | None = None
        self._client_secret: str | None = None
        self._pending: AuthCompletion | None = None
        self._state = AuthState.UNAUTHENTICATED

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> OAuthManager:
        """Build a manager, restoring it from configured client credentials."""
        settings = settings or get_settings()
        manager = cls(settings=settings, **kwargs)
        if settings.client_id and settings.client_secret:
            manager.restore(settings.client_id, settings.client_secret)
        return manager

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def client_id(self) -> str | None:
        return self._client_id

    @property
    def token(self) -> str | None:
        return self.store.get()

    def restore(self, client_id: str, client_secret: str, token: str | None = None) -> bool:
        """Set client credentials and restore a token.

        Args:
            client_id: OAuth client ID.
            client_secret: OAuth client secret.
            token: Known access token. When omitted, a token saved by an
                earlier handshake is loaded.

        Returns:
            True if a token is available afterwards.
        """
        self._client_id = client_id
        self._client_secret = client_secret
        found = self.store.restore(client_id, token)
        self._state = AuthState.AUTHENTICATED if found else AuthState.UNAUTHENTICATED
        return found

    def is_authenticated(self) -> bool:
        return bool(self.store.get())

    def get_auth_url(self, scopes: Iterable[AuthScope]) -> str:
        """Generate the authorization URL for the requested scopes."""
        if self._client_id is None:
            raise ValueError("No client credentials; call restore() first")

        requested = set(scopes)
        ordered = [scope.value for scope in AuthScope if scope in requested]
        query = urllib.parse.urlencode({"client_id": self._client_id})
        # The provider splits scopes on literal "+"
        return f"{self.settings.authorize_url}?{query}&scope={'+'.join(ordered)}"

    async def authenticate(
        self, scopes: Iterable[AuthScope], completion: AuthCompletion
    ) -> str | None:
        """Start the handshake by opening the authorization URL.

        ``completion`` is invoked later from ``handle_auth_callback`` with
        ``None`` on success or the error that ended the handshake. If a
        handshake is already pending, ``completion`` is invoked right away
        with ``HandshakeInProgressError`` and None is returned.

        Returns:
            The authorization URL that was opened.
        """
        if self._pending is not None:
            logger.warning("Rejected authenticate(): a handshake is already pending")
            await _notify(completion, HandshakeInProgressError())
            return None

        url = self.get_auth_url(scopes)
        self._pending = completion
        self._state = AuthState.AWAITING_REDIRECT
        logger.info("Opening Dribbble authorization page for client %s", self._client_id)
        await asyncio.to_thread(self._opener, url)
        return url

    async def handle_auth_callback(self, url: str) -> DribbbleError | None:
        """Complete the handshake with the redirect URL the app received.

        Returns the same value handed to the pending completion.
        """
        previous, had_pending = self._state, self._pending is not None
        error = await self._complete_handshake(url)
        if error is None:
            self._state = AuthState.AUTHENTICATED
        elif had_pending:
            self._state = AuthState.FAILED
        else:
            # A stray callback does not disturb an existing session
            self._state = previous

        completion, self._pending = self._pending, None
        if completion is None:
            logger.debug("Auth callback handled with no pending completion")
        else:
            await _notify(completion, error)
        return error

    async def _complete_handshake(self, url: str) -> DribbbleError | None:
        params = urllib.parse.parse_qs(urllib.parse.urlsplit(url).query)
        code = params.get("code", [""])[0]
        if not code:
            return OAuthError("No code parameter in callback")

        if self._client_id is None or self._client_secret is None:
            return OAuthError("No client credentials; call restore() first")

        self._state = AuthState.EXCHANGING_CODE
        try:
            async with open_client(self._http_client, self.settings.request_timeout) as client:
                resp = await client.post(
                    self.settings.token_url,
                    content=json.dumps(
                        {
                            "code": code,
                            "client_id": self._client_id,
                            "client_secret": self._client_secret,
                        }
                    ).encode(),
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.warning("Token exchange request failed: %s", e)
            return TransportError(e)

        try:
            data = resp.json()
        except ValueError as e:
            return DecodeError(e)

        if not isinstance(data, dict):
            return MalformedResponseError("Token response is not a JSON object")

        if "error" in data and "error_description" in data:
            logger.warning("Dribbble rejected the token exchange: %s", data["error"])
            self.store.clear()
            return OAuthError(str(data["error"]), str(data["error_description"]))

        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            return MalformedResponseError("Token response has no access_token")

        self.store.set(access_token)
        logger.info("OAuth token obtained for client %s", self._client_id)
        return None

    def sign_out(self) -> None:
        """Forget the current token (memory and persisted)."""
        if self._client_id is not None:
            self.store.clear()
        self._state = AuthState.UNAUTHENTICATED


async def _notify(completion: AuthCompletion, error: DribbbleError | None) -> None:
    result = completion(error)
    if inspect.isawaitable(result):
        await result
