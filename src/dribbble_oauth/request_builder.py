# Request Builder — authenticated httpx requests for the Dribbble API.
# Created: 2026-10-19
#
# Three body shapes: plain (query string + optional raw bytes), a JSON
# body, and multipart/form-data. Every request carries the bearer token
# as the access_token query parameter.

from __future__ import annotations

import enum
import json
import secrets
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

FormValue = str | bytes | int | float


class BodyKind(str, enum.Enum):
    NONE = "none"
    QUERY = "query"
    FORM_JSON = "form_json"
    MULTIPART = "multipart"


@dataclass(frozen=True)
class RequestSpec:
    """One outbound API call, before the token and base URL are applied.

    ``body`` is raw bytes for ``QUERY``, a JSON-serializable mapping for
    ``FORM_JSON`` and a mapping of ``FormValue`` for ``MULTIPART``.
    """

    path: str
    method: str = "GET"
    body_kind: BodyKind = BodyKind.NONE
    query_params: Mapping[str, Any] = field(default_factory=dict)
    body: Any = None


def _require_token(token: str) -> None:
    if not token:
        raise ValueError("An access token is required to build API requests")


def build_simple_request(
    url: str,
    method: str,
    token: str,
    query_params: Mapping[str, Any] | None = None,
    raw_body: bytes | None = None,
) -> httpx.Request:
    """Query parameters in the URL, access_token last, optional raw body."""
    _require_token(token)
    params = {key: str(value) for key, value in (query_params or {}).items()}
    params["access_token"] = token
    return httpx.Request(method, url, params=params, content=raw_body)


def build_form_json_request(
    url: str,
    method: str,
    token: str,
    parameters: Mapping[str, Any],
    content_type: str = "application/json",
) -> httpx.Request:
    """JSON-encoded parameters as the request body."""
    _require_token(token)
    return httpx.Request(
        method,
        url,
        params={"access_token": token},
        content=json.dumps(dict(parameters)).encode(),
        headers={"Content-Type": content_type},
    )


def _form_part(key: str, value: FormValue) -> bytes:
    name = key.replace('"', "%22")
    if isinstance(value, bytes):
        head = (
            f'Content-Disposition: form-data; name="{name}"; filename="{name}"\r\n'
            "Content-Type: application/octet-stream\r\n\r\n"
        )
        return head.encode() + value + b"\r\n"
    # bool is an int subclass but has no sensible form encoding
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return f'Content-Disposition: form-data; name="{name}"\r\n\r\n{value}\r\n'.encode()
    raise TypeError(f"Unsupported form value for {key!r}: {type(value).__name__}")


def encode_multipart(form: Mapping[str, FormValue], boundary: str) -> bytes:
    """Encode ``form`` as a multipart/form-data body."""
    delimiter = f"--{boundary}\r\n".encode()
    body = bytearray()
    for key, value in form.items():
        body += delimiter
        body += _form_part(key, value)
    body += f"--{boundary}--\r\n".encode()
    return bytes(body)


def build_multipart_request(
    url: str,
    method: str,
    token: str,
    form: Mapping[str, FormValue],
    boundary: str | None = None,
) -> httpx.Request:
    """multipart/form-data body; bytes values become file parts."""
    _require_token(token)
    boundary = boundary or secrets.token_hex(16)
    body = encode_multipart(form, boundary)
    return httpx.Request(
        method,
        url,
        params={"access_token": token},
        content=body,
        headers={
            "Content-Type": f"multipart/form-data; boundary={boundary}",
            "Content-Length": str(len(body)),
        },
    )


def build_request(
    spec: RequestSpec,
    base_url: str,
    token: str,
    form_json_content_type: str = "application/json",
) -> httpx.Request:
    """Turn a RequestSpec into an authenticated request under ``base_url``."""
    url = f"{base_url.rstrip('/')}/{spec.path.lstrip('/')}"
    kind = BodyKind(spec.body_kind)

    if kind is BodyKind.NONE:
        return build_simple_request(url, spec.method, token, spec.query_params)
    if kind is BodyKind.QUERY:
        return build_simple_request(url, spec.method, token, spec.query_params, spec.body)
    if kind is BodyKind.FORM_JSON:
        return build_form_json_request(
            url, spec.method, token, spec.body or {}, content_type=form_json_content_type
        )
    if kind is BodyKind.MULTIPART:
        return build_multipart_request(url, spec.method, token, spec.body or {})
    raise ValueError(f"Unknown body kind: {kind}")
