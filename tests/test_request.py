"""
Unit tests for request construction.
"""

import json
from collections import OrderedDict
from datetime import date
from urllib.parse import parse_qsl, urlsplit

import pytest

from borders_client import InvalidBodyError, build_request, sign
from borders_client.request import (
    build_query,
    normalize_path,
    prepare_body,
    prepare_params
)

PUBLIC_KEY = "a" * 64
PRIVATE_KEY = "b" * 64


class TestNormalizePath:

    def test_adds_leading_slash(self):
        assert normalize_path("foo/bar") == "/foo/bar"

    def test_idempotent(self):
        assert normalize_path("/foo/bar") == "/foo/bar"
        assert normalize_path(normalize_path("foo/bar")) == "/foo/bar"


class TestPrepareParams:

    def test_defaults_injected(self):
        params = prepare_params({"page": 2}, PUBLIC_KEY, 60, now=1000)

        assert list(params.items()) == [
            ("page", "2"),
            ("public_key", PUBLIC_KEY),
            ("expires", "1060"),
        ]

    def test_caller_values_kept(self):
        params = prepare_params(
            {"expires": "5", "public_key": "custom"}, PUBLIC_KEY, 60, now=1000
        )

        assert params == {"expires": "5", "public_key": "custom"}
        assert list(params) == ["expires", "public_key"]

    def test_signature_removed(self):
        params = prepare_params({"signature": "abc"}, PUBLIC_KEY, 60, now=1000)

        assert "signature" not in params

    def test_input_not_mutated(self):
        original = {"signature": "abc"}
        prepare_params(original, PUBLIC_KEY, 60, now=1000)

        assert original == {"signature": "abc"}

    def test_none_params(self):
        params = prepare_params(None, PUBLIC_KEY, 30, now=0)

        assert params == {"public_key": PUBLIC_KEY, "expires": "30"}


class TestPrepareBody:

    def test_none(self):
        assert prepare_body(None) is None

    def test_wraps_body(self):
        assert json.loads(prepare_body({"a": 1})) == {"request": {"a": 1}}

    def test_no_double_wrapping(self):
        assert prepare_body({"request": {"a": 1}}) == prepare_body({"a": 1})

    def test_pretty_printed(self):
        assert prepare_body({"a": 1}) == json.dumps({"request": {"a": 1}}, indent=4)

    @pytest.mark.parametrize("body", [[1, 2], "text", 42, 1.5, True])
    def test_rejects_non_mapping(self, body):
        with pytest.raises(InvalidBodyError):
            prepare_body(body)

    @pytest.mark.parametrize("body", [
        {"when": date(2020, 1, 1)},
        {"ids": {1, 2}},
    ])
    def test_rejects_unserializable_values(self, body):
        with pytest.raises(InvalidBodyError) as exc_info:
            prepare_body(body)

        assert exc_info.value.__cause__ is not None

    def test_accepts_any_mapping(self):
        body = OrderedDict([("b", 1), ("a", 2)])

        assert json.loads(prepare_body(body)) == {"request": {"b": 1, "a": 2}}


class TestBuildQuery:

    def test_values_url_encoded(self):
        assert build_query({"q": "a b&c/d", "n": "1"}) == "q=a+b%26c%2Fd&n=1"

    def test_empty(self):
        assert build_query({}) == ""


class TestBuildRequest:

    def test_get_request(self):
        request = build_request(
            "get", "ping", PUBLIC_KEY, PRIVATE_KEY, 60,
            scheme="http", host="api.example.com", now=1000
        )

        assert request.method == "GET"
        assert request.path == "/ping"
        assert request.body is None
        assert list(request.params) == ["public_key", "expires", "signature"]
        assert request.params["expires"] == "1060"

        expected_signature = sign(
            "GET", PUBLIC_KEY, PRIVATE_KEY, "/ping",
            {"public_key": PUBLIC_KEY, "expires": "1060"}, ""
        )
        assert request.params["signature"] == expected_signature

        parts = urlsplit(request.url)
        assert parts.scheme == "http"
        assert parts.netloc == "api.example.com"
        assert parts.path == "/ping"
        assert parse_qsl(parts.query) == list(request.params.items())

    def test_signature_is_last(self):
        request = build_request(
            "GET", "/items", PUBLIC_KEY, PRIVATE_KEY, 60,
            scheme="https", host="api.example.com",
            params={"signature": "old", "page": "3"}, now=1000
        )

        assert list(request.params) == ["page", "public_key", "expires", "signature"]
        assert request.params["signature"] != "old"
        assert request.url.startswith("https://api.example.com/items?page=3&public_key=")

    def test_post_body_signed(self):
        request = build_request(
            "POST", "/x", PUBLIC_KEY, PRIVATE_KEY, 60,
            scheme="http", host="api.example.com", body={"a": 1}, now=1000
        )

        assert request.body == json.dumps({"request": {"a": 1}}, indent=4)
        params = {k: v for k, v in request.params.items() if k != "signature"}
        assert request.params["signature"] == sign(
            "POST", PUBLIC_KEY, PRIVATE_KEY, "/x", params, request.body
        )

    def test_invalid_body(self):
        with pytest.raises(InvalidBodyError):
            build_request(
                "POST", "/x", PUBLIC_KEY, PRIVATE_KEY, 60,
                scheme="http", host="api.example.com", body=["a"]
            )
