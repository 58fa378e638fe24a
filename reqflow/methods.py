"""
Supported HTTP methods and their validation.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from .exceptions import InvalidMethodError


class Method(str, Enum):
    """HTTP methods the client can dispatch."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


BODY_METHODS = frozenset({Method.POST, Method.PUT, Method.PATCH})


def normalize_method(method: Any) -> Any:
    """Uppercase string input; anything else is returned untouched."""
    if isinstance(method, str):
        return method.upper()
    return method


class MethodRegistry:
    """
    Registry of the canonical method set.

    Comparison is case-sensitive against the uppercase names, so callers
    pass their input through ``normalize_method`` first.
    """

    def __init__(self) -> None:
        self._methods: List[str] = [method.value for method in Method]

    @property
    def methods(self) -> Dict[str, str]:
        """Mapping of each method name to itself."""
        return {method: method for method in self._methods}

    def get_valid_methods(self) -> List[str]:
        return list(self._methods)

    def is_valid(self, method: Any) -> bool:
        """
        Check whether ``method`` is one of the supported method names.

        Args:
            method: Candidate method, already uppercased

        Returns:
            True if the value is a string in the canonical set
        """
        return isinstance(method, str) and method in self._methods

    def validate_or_fail(self, method: Any) -> None:
        """
        Validate a method, treating an omitted one as "no constraint".

        ``None`` and the empty string pass, since configuration calls use
        them to mean "every method".

        Args:
            method: Candidate method, already uppercased

        Raises:
            InvalidMethodError: If ``method`` is given and not supported
        """
        if method is None or method == "":
            return
        if not self.is_valid(method):
            raise InvalidMethodError(method, self._methods)

    def resolve(self, method: Any) -> Optional[Method]:
        """
        Normalize and validate ``method``.

        Returns:
            The matching ``Method`` member, or None when omitted

        Raises:
            InvalidMethodError: If ``method`` is given and not supported
        """
        parsed = normalize_method(method)
        self.validate_or_fail(parsed)
        if parsed is None or parsed == "":
            return None
        return Method(parsed)
