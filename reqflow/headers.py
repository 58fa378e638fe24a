"""
Per-method default headers.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from .exceptions import InvalidArgumentError
from .methods import Method, MethodRegistry

logger = logging.getLogger("reqflow.headers")

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"

DEFAULT_HEADERS: Dict[Method, Dict[str, str]] = {
    Method.GET: {},
    Method.POST: {"Content-Type": JSON_CONTENT_TYPE},
    Method.PUT: {"Content-Type": JSON_CONTENT_TYPE},
    Method.PATCH: {"Content-Type": JSON_CONTENT_TYPE},
    Method.DELETE: {"Content-Type": JSON_CONTENT_TYPE},
}


class HeaderResolver:
    """
    Holds the default header table and merges it with per-call headers.

    Every method always has an entry in the table. Omitting the method in
    ``set_default`` / ``remove_default`` applies the change to all of them.

    Examples:
        >>> resolver = HeaderResolver(MethodRegistry())
        >>> resolver.set_default("X-Trace", "abc")
        >>> resolver.headers_for("GET")
        {'X-Trace': 'abc'}
    """

    def __init__(
        self,
        method_registry: MethodRegistry,
        headers: Optional[Mapping[str, Mapping[str, str]]] = None,
    ):
        """
        Initialize the header table.

        Args:
            method_registry: Registry used to validate method names
            headers: Caller defaults per method; they win over the built-in
                defaults key by key

        Raises:
            InvalidMethodError: If ``headers`` names an unsupported method
            InvalidArgumentError: If a header key or value is not a string
        """
        self.method_registry = method_registry
        self._headers: Dict[Method, Dict[str, str]] = {
            method: dict(defaults) for method, defaults in DEFAULT_HEADERS.items()
        }

        for method, custom in (headers or {}).items():
            parsed = self.method_registry.resolve(method)
            if parsed is None:
                raise InvalidArgumentError("Default headers must be keyed by method")
            for key, value in custom.items():
                self._validate_pair(key, value)
            self._headers[parsed].update(custom)

    @staticmethod
    def _validate_pair(key: Any, value: Any) -> None:
        if not isinstance(key, str):
            raise InvalidArgumentError("The key must be a string")
        if not isinstance(value, str):
            raise InvalidArgumentError("The value must be a string")

    def set_default(self, key: str, value: str, method: Optional[str] = None) -> None:
        """
        Set a default header.

        Args:
            key: Header name
            value: Header value
            method: Method to set it for; None sets it for every method

        Raises:
            InvalidArgumentError: If ``key`` or ``value`` is not a string
            InvalidMethodError: If ``method`` is given and not supported
        """
        self._validate_pair(key, value)
        parsed = self.method_registry.resolve(method)

        targets = [parsed] if parsed is not None else list(self._headers)
        for target in targets:
            self._headers[target][key] = value

        logger.debug("Default header %s set for %s", key, [t.value for t in targets])

    def remove_default(self, key: str, method: Optional[str] = None) -> None:
        """
        Remove a default header. Missing keys are ignored.

        Args:
            key: Header name
            method: Method to remove it from; None removes it everywhere

        Raises:
            InvalidArgumentError: If ``key`` is not a string
            InvalidMethodError: If ``method`` is given and not supported
        """
        if not isinstance(key, str):
            raise InvalidArgumentError("The key must be a string")
        parsed = self.method_registry.resolve(method)

        targets = [parsed] if parsed is not None else list(self._headers)
        for target in targets:
            self._headers[target].pop(key, None)

    def headers_for(self, method: str, custom: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """
        Return the headers for ``method`` with ``custom`` applied on top.

        The returned dict is a fresh copy; the table itself is never touched.

        Raises:
            InvalidMethodError: If ``method`` is not supported
        """
        parsed = self.method_registry.resolve(method)
        defaults = self._headers[parsed] if parsed is not None else {}

        merged = dict(defaults)
        merged.update(custom or {})
        return merged

