"""
Tests for URL building.
"""

import pytest

from reqflow.exceptions import InvalidArgumentError
from reqflow.url import UrlBuilder


def test_build_url_with_params():
    builder = UrlBuilder("https://api.example.com")
    assert builder.build_url("/users", {"id": 5}) == "https://api.example.com/users?id=5"


def test_build_url_without_params():
    builder = UrlBuilder("https://api.example.com")
    assert builder.build_url("/users") == "https://api.example.com/users"
    assert builder.build_url("/users", {}) == "https://api.example.com/users"


def test_base_url_defaults_to_empty():
    assert UrlBuilder().build_url("/ping") == "/ping"


def test_set_base_url():
    builder = UrlBuilder("https://old.example.com")
    builder.set_base_url("https://new.example.com")
    assert builder.build_url("/a") == "https://new.example.com/a"


@pytest.mark.parametrize("url", [None, 5, b"https://api.example.com"])
def test_set_base_url_rejects_non_strings(url):
    builder = UrlBuilder("https://api.example.com")
    with pytest.raises(InvalidArgumentError):
        builder.set_base_url(url)
    assert builder.base_url == "https://api.example.com"


def test_params_are_key_converted_before_formatting():
    builder = UrlBuilder("https://api.example.com")

    assert builder.build_url("/u", {"userId": 1}, "snakeCase") == "https://api.example.com/u?user_id=1"
    assert builder.build_url("/u", {"user_id": 1}, "camelCase") == "https://api.example.com/u?userId=1"
    assert builder.build_url("/u", {"user_id": 1}, "default") == "https://api.example.com/u?user_id=1"


def test_collaborators_are_called_in_order():
    calls = []

    def converter(params, mode):
        calls.append(("convert", dict(params), mode))
        return {"converted": True}

    def formatter(params):
        calls.append(("format", params))
        return "?q"

    builder = UrlBuilder("base", query_formatter=formatter, key_converter=converter)

    assert builder.build_url("/e", {"a": 1}, "camelCase") == "base/e?q"
    assert calls == [("convert", {"a": 1}, "camelCase"), ("format", {"converted": True})]
