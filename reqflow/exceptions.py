"""
Exception classes for reqflow.
"""

from typing import Any, Iterable, Optional


class ReqflowError(Exception):
    """Base exception for all reqflow errors."""

    pass


class InvalidArgumentError(ReqflowError, TypeError):
    """
    Invalid configuration argument.

    Raised when a setter receives a value of the wrong type, e.g. a
    non-string header key or base URL, or when request options fail
    validation.
    """

    pass


class InvalidMethodError(ReqflowError, ValueError):
    """
    Unsupported HTTP method.

    Raised before any request context is built or dispatched.
    """

    def __init__(self, method: Any, valid_methods: Iterable[str]):
        """
        Initialize method error.

        Args:
            method: The rejected method value
            valid_methods: The supported method names
        """
        self.method = method
        self.valid_methods = list(valid_methods)
        super().__init__(
            f"The method must be a string and one of {', '.join(self.valid_methods)}"
        )

    def __repr__(self) -> str:
        return f"InvalidMethodError(method={self.method!r})"


class InvalidMiddlewareError(InvalidArgumentError):
    """Raised when a non-callable is added to or removed from a middleware chain."""

    def __init__(self, middleware: Any, message: Optional[str] = None):
        self.middleware = middleware
        super().__init__(message or "The middleware must be a function")


class NetworkError(ReqflowError):
    """
    Network connectivity error.

    Raised by the bundled transports when the underlying HTTP library fails.
    """

    pass
