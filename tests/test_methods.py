"""
Tests for the method registry.
"""

import pytest

from reqflow.exceptions import InvalidMethodError
from reqflow.methods import Method, MethodRegistry, normalize_method


@pytest.fixture
def registry():
    return MethodRegistry()


def test_canonical_method_set(registry):
    assert set(registry.get_valid_methods()) == {"GET", "POST", "PUT", "PATCH", "DELETE"}
    assert registry.methods["PATCH"] == "PATCH"


@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "PATCH", "DELETE"])
def test_valid_methods(registry, method):
    assert registry.is_valid(method) is True
    registry.validate_or_fail(method)


@pytest.mark.parametrize("method", ["HEAD", "OPTIONS", "FETCH", "get", 5, ["GET"]])
def test_invalid_methods(registry, method):
    assert registry.is_valid(method) is False
    with pytest.raises(InvalidMethodError) as exc_info:
        registry.validate_or_fail(method)
    assert exc_info.value.method == method
    assert "GET, POST, PUT, PATCH, DELETE" in str(exc_info.value)


def test_omitted_method_is_no_constraint(registry):
    """None and empty string mean "every method", not an invalid one."""
    registry.validate_or_fail(None)
    registry.validate_or_fail("")
    assert registry.is_valid(None) is False
    assert registry.resolve(None) is None


def test_resolve_normalizes_case(registry):
    assert registry.resolve("patch") is Method.PATCH
    assert registry.resolve(Method.GET) is Method.GET

    with pytest.raises(InvalidMethodError):
        registry.resolve("trace")


def test_normalize_method():
    assert normalize_method("delete") == "DELETE"
    assert normalize_method(None) is None
    assert normalize_method(7) == 7
