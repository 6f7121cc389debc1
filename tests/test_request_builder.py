# Tests for request_builder.py
# Created: 2026-10-19

import json

import pytest

from dribbble_oauth.request_builder import (
    BodyKind,
    RequestSpec,
    build_form_json_request,
    build_multipart_request,
    build_request,
    build_simple_request,
    encode_multipart,
)

API = "https://api.dribbble.com/v1"

# ---------------------------------------------------------------------------
# Simple requests
# ---------------------------------------------------------------------------


class TestSimpleRequest:
    def test_token_appended(self):
        req = build_simple_request(f"{API}/shots", "GET", "tok")
        assert req.method == "GET"
        assert req.url.path == "/v1/shots"
        assert req.url.params["access_token"] == "tok"

    def test_query_params_before_token(self):
        req = build_simple_request(f"{API}/shots", "GET", "tok", {"list": "debuts", "page": 2})
        assert list(req.url.params.keys()) == ["list", "page", "access_token"]
        assert req.url.params["page"] == "2"

    def test_query_values_are_encoded(self):
        req = build_simple_request(f"{API}/shots", "GET", "tok", {"q": "a b&c"})
        assert req.url.params["q"] == "a b&c"

    def test_raw_body(self):
        req = build_simple_request(f"{API}/shots/1", "PUT", "tok", raw_body=b"payload")
        assert req.content == b"payload"

    def test_empty_token_rejected(self):
        with pytest.raises(ValueError, match="access token"):
            build_simple_request(f"{API}/shots", "GET", "")


# ---------------------------------------------------------------------------
# Form-JSON requests
# ---------------------------------------------------------------------------


class TestFormJsonRequest:
    def test_json_body_and_token(self):
        req = build_form_json_request(f"{API}/buckets", "POST", "tok", {"name": "Faves"})
        assert json.loads(req.content) == {"name": "Faves"}
        assert req.headers["Content-Type"] == "application/json"
        assert dict(req.url.params) == {"access_token": "tok"}

    def test_legacy_content_type(self):
        req = build_form_json_request(
            f"{API}/buckets",
            "POST",
            "tok",
            {"name": "Faves"},
            content_type="application/x-www-form-urlencoded",
        )
        assert req.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert json.loads(req.content) == {"name": "Faves"}


# ---------------------------------------------------------------------------
# Multipart requests
# ---------------------------------------------------------------------------


class TestMultipartRequest:
    def test_binary_and_text_fields(self):
        req = build_multipart_request(
            f"{API}/shots", "POST", "tok", {"image": b"\x89PNG", "title": "Hello"}
        )
        body = req.content
        assert body.count(b"Content-Disposition") == 2
        assert body.count(b"filename=") == 1
        assert b'name="image"; filename="image"' in body
        assert b"Content-Type: application/octet-stream\r\n\r\n\x89PNG\r\n" in body
        assert b'Content-Disposition: form-data; name="title"\r\n\r\nHello\r\n' in body

    def test_headers(self):
        req = build_multipart_request(f"{API}/shots", "POST", "tok", {"title": "x"}, boundary="b0")
        assert req.headers["Content-Type"] == "multipart/form-data; boundary=b0"
        assert req.headers["Content-Length"] == str(len(req.content))
        assert req.url.params["access_token"] == "tok"

    def test_closing_delimiter(self):
        body = encode_multipart({"title": "x", "tags": "a,b"}, "b0")
        assert body.startswith(b"--b0\r\n")
        assert body.endswith(b"--b0--\r\n")
        assert body.count(b"--b0\r\n") == 2

    def test_numbers_inline(self):
        body = encode_multipart({"low_profile": 1, "ratio": 1.5}, "b0")
        assert b'name="low_profile"\r\n\r\n1\r\n' in body
        assert b'name="ratio"\r\n\r\n1.5\r\n' in body

    def test_fresh_boundary_per_request(self):
        first = build_multipart_request(f"{API}/shots", "POST", "tok", {"title": "x"})
        second = build_multipart_request(f"{API}/shots", "POST", "tok", {"title": "x"})
        assert first.headers["Content-Type"] != second.headers["Content-Type"]

    def test_unsupported_value(self):
        with pytest.raises(TypeError, match="tags"):
            encode_multipart({"tags": ["a", "b"]}, "b0")

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            encode_multipart({"low_profile": True}, "b0")


# ---------------------------------------------------------------------------
# build_request dispatch
# ---------------------------------------------------------------------------


class TestBuildRequest:
    def test_path_joined_to_base(self):
        req = build_request(RequestSpec("/shots/42"), API + "/", "tok")
        assert str(req.url) == f"{API}/shots/42?access_token=tok"

    def test_none_kind_ignores_body(self):
        req = build_request(RequestSpec("shots", body=b"ignored"), API, "tok")
        assert req.content == b""

    def test_query_kind(self):
        spec = RequestSpec("shots", "GET", BodyKind.QUERY, {"sort": "recent"})
        req = build_request(spec, API, "tok")
        assert req.url.params["sort"] == "recent"

    def test_form_json_kind(self):
        spec = RequestSpec("shots/1", "PUT", BodyKind.FORM_JSON, body={"title": "New"})
        req = build_request(spec, API, "tok", form_json_content_type="application/json")
        assert req.method == "PUT"
        assert json.loads(req.content) == {"title": "New"}

    def test_multipart_kind(self):
        spec = RequestSpec("shots", "POST", BodyKind.MULTIPART, body={"image": b"img"})
        req = build_request(spec, API, "tok")
        assert req.headers["Content-Type"].startswith("multipart/form-data; boundary=")

    def test_body_kind_by_value(self):
        spec = RequestSpec("shots", "POST", "form_json", body={"a": 1})
        req = build_request(spec, API, "tok")
        assert json.loads(req.content) == {"a": 1}

    def test_unknown_body_kind(self):
        with pytest.raises(ValueError):
            build_request(RequestSpec("shots", body_kind="xml"), API, "tok")

    def test_spec_is_immutable(self):
        spec = RequestSpec("shots")
        with pytest.raises(AttributeError):
            spec.path = "users"
