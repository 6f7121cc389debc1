# Response Classifier — normalizes an HTTP exchange into an ApiResult.
# Created: 2026-10-19

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from dribbble_oauth.errors import ApplicationError, DecodeError, DribbbleError, TransportError

logger = logging.getLogger(__name__)


@dataclass
class ApiResult:
    """Outcome of one API call.

    ``error`` is a TransportError, a DecodeError or an ApplicationError.
    An ApplicationError never coexists with a TransportError, and the
    decoded payload stays available in ``json`` alongside it.

    ``ok`` also requires an HTTP status below 400, so a plain-text 500
    with no ``error`` is still not ok.
    """

    error: DribbbleError | None = None
    status_code: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes | None = None
    json: Any = None

    @property
    def ok(self) -> bool:
        if self.error is not None:
            return False
        return self.status_code is None or self.status_code < 400

    @property
    def app_error(self) -> ApplicationError | None:
        return self.error if isinstance(self.error, ApplicationError) else None


def _is_json(headers: httpx.Headers) -> bool:
    return "application/json" in headers.get("content-type", "").lower()


def _application_error(payload: Any) -> ApplicationError | None:
    if not isinstance(payload, dict):
        return None
    if "message" in payload:
        return ApplicationError(str(payload["message"]), errors=payload.get("errors"))
    if "error_description" in payload:
        return ApplicationError(str(payload["error_description"]), errors=payload.get("error"))
    return None


def classify_response(
    response: httpx.Response | None, error: Exception | None = None
) -> ApiResult:
    """Build the ApiResult for a finished exchange.

    Args:
        response: The HTTP response, if one was received.
        error: Transport failure raised while sending, if any.
    """
    result = ApiResult()
    if response is not None:
        result.status_code = response.status_code
        result.headers = dict(response.headers)
        result.content = response.content

    if error is not None:
        result.error = error if isinstance(error, DribbbleError) else TransportError(error)
        return result

    if response is None or not _is_json(response.headers):
        return result

    # 204 No Content is the only status allowed an empty JSON-labeled body
    if response.status_code == 204 and not response.content:
        return result

    try:
        result.json = json.loads(response.content)
    except ValueError as e:
        logger.warning("Undecodable JSON body (HTTP %s): %s", response.status_code, e)
        result.error = DecodeError(e)
        return result

    app_error = _application_error(result.json)
    if app_error is not None:
        logger.debug("Dribbble reported an error (HTTP %s): %s", response.status_code, app_error)
        result.error = app_error
    return result
