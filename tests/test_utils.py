"""
Tests for key conversion and query formatting.
"""

import pytest

from reqflow.models import ConversionMode
from reqflow.utils import convert_keys, format_query, to_camel_case, to_snake_case


@pytest.mark.parametrize(
    "key,expected",
    [("userId", "user_id"), ("HTTPStatus", "http_status"), ("already_snake", "already_snake"), ("id", "id")],
)
def test_to_snake_case(key, expected):
    assert to_snake_case(key) == expected


@pytest.mark.parametrize(
    "key,expected",
    [("user_id", "userId"), ("created_at_ms", "createdAtMs"), ("_private", "_private"), ("id", "id")],
)
def test_to_camel_case(key, expected):
    assert to_camel_case(key) == expected


def test_convert_keys_nested():
    value = {"user_id": 1, "address_lines": [{"street_name": "Main"}], 3: "x"}

    assert convert_keys(value, "camelCase") == {
        "userId": 1,
        "addressLines": [{"streetName": "Main"}],
        3: "x",
    }


def test_convert_keys_accepts_enum_modes():
    assert convert_keys({"userId": 1}, ConversionMode.SNAKE_CASE) == {"user_id": 1}


def test_convert_keys_default_is_identity():
    value = {"user_id": 1}
    assert convert_keys(value, "default") is value
    assert convert_keys(value, ConversionMode.DEFAULT) is value


def test_convert_keys_leaves_values_alone():
    assert convert_keys({"some_key": "snake_value"}, "camelCase") == {"someKey": "snake_value"}
    assert convert_keys("plain_string", "camelCase") == "plain_string"


def test_format_query():
    assert format_query({"id": 5}) == "?id=5"
    assert format_query({"a": 1, "b": "x y"}) == "?a=1&b=x+y"
    assert format_query({"tag": ["a", "b"]}) == "?tag=a&tag=b"


def test_format_query_empty():
    assert format_query({}) == ""
    assert format_query(None) == ""
    assert format_query({"skip": None}) == ""
