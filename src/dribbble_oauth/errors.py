"""Error types for the Dribbble client.

Request pipeline errors are never raised to callers: they travel inside
``ApiResult.error``. Handshake errors are handed to the pending
authentication completion. Only ``NotAuthenticatedError`` is raised, by
``DribbbleClient`` construction.
"""

from __future__ import annotations

from typing import Any


class DribbbleError(Exception):
    """Base class for all errors produced by this package.

    Errors compare by value (type, args and attributes) so two results
    describing the same failure are equal.
    """

    def _key(self) -> tuple[Any, ...]:
        attrs = tuple(sorted((name, _comparable(value)) for name, value in vars(self).items()))
        return type(self), self.args, attrs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DribbbleError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self), self.args))


def _comparable(value: Any) -> Any:
    if isinstance(value, BaseException):
        return type(value), value.args
    return value


class TransportError(DribbbleError):
    """The HTTP exchange itself failed (connection, timeout, protocol)."""

    def __init__(self, cause: Exception):
        super().__init__(f"Transport error: {cause}")
        self.cause = cause


class DecodeError(DribbbleError):
    """A response labeled as JSON could not be decoded."""

    def __init__(self, cause: Exception):
        super().__init__(f"Could not decode JSON response: {cause}")
        self.cause = cause


class OAuthError(DribbbleError):
    """The authorization-code handshake failed.

    Attributes:
        error: Provider error code, or a short description for local failures.
        description: Provider ``error_description`` when one was returned.
    """

    def __init__(self, error: str, description: str | None = None):
        message = f"{error}: {description}" if description else error
        super().__init__(message)
        self.error = error
        self.description = description


class MalformedResponseError(OAuthError):
    """Token endpoint answered with neither an access token nor an error."""


class HandshakeInProgressError(OAuthError):
    """``authenticate`` was called while another handshake is still pending."""

    def __init__(self) -> None:
        super().__init__("handshake already in progress")


class ApplicationError(DribbbleError):
    """The API answered with a JSON payload describing a logical failure."""

    def __init__(self, message: str, errors: Any = None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class NotAuthenticatedError(DribbbleError):
    """A client was constructed before authentication completed."""
