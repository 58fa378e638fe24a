"""
Middleware chains run around every request.

``GateChain`` runs before dispatch and can veto the call. ``TransformChain``
runs after the outcome is known and can rewrite it. Interceptors may be
plain callables or coroutine functions.
"""

import inspect
import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from .exceptions import InvalidMiddlewareError

logger = logging.getLogger("reqflow.middleware")

Middleware = Callable[..., Any]


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class MiddlewareChain:
    """Ordered list of interceptors; insertion order is application order."""

    def __init__(self, middlewares: Optional[Iterable[Middleware]] = None):
        self._middlewares: List[Middleware] = []
        for middleware in middlewares or ():
            self.add(middleware)

    @property
    def middlewares(self) -> Tuple[Middleware, ...]:
        return tuple(self._middlewares)

    def __len__(self) -> int:
        return len(self._middlewares)

    def __iter__(self) -> Iterator[Middleware]:
        return iter(tuple(self._middlewares))

    def add(self, middleware: Middleware) -> None:
        """
        Append an interceptor.

        Raises:
            InvalidMiddlewareError: If ``middleware`` is not callable
        """
        self._validate(middleware)
        self._middlewares.append(middleware)

    def remove(self, middleware: Middleware) -> None:
        """
        Remove every registration of ``middleware`` (by identity).

        Removing something never added is a no-op.

        Raises:
            InvalidMiddlewareError: If ``middleware`` is not callable
        """
        self._validate(middleware)
        self._middlewares = [mw for mw in self._middlewares if mw is not middleware]

    @staticmethod
    def _validate(middleware: Any) -> None:
        if not callable(middleware):
            raise InvalidMiddlewareError(middleware)


class GateChain(MiddlewareChain):
    """
    Pre-send interceptors: ``gate(context) -> bool``.

    Stops at the first falsy result.
    """

    async def apply(self, context: Any) -> bool:
        """
        Run the gates in order.

        Args:
            context: The request context

        Returns:
            True if every gate passed (or there are none), False otherwise
        """
        for middleware in self:
            if not callable(middleware):
                continue
            if not await _resolve(middleware(context)):
                logger.debug("Gate %r rejected the request", middleware)
                return False
        return True


class TransformChain(MiddlewareChain):
    """
    Post-receive interceptors: ``transform(outcome, context) -> outcome``.
    """

    async def apply(self, outcome: Any, context: Any) -> Any:
        """
        Fold ``outcome`` through every interceptor in order.

        Args:
            outcome: Transport response or timeout outcome
            context: The request context

        Returns:
            The last interceptor's return value, or ``outcome`` if the
            chain is empty
        """
        accumulated = outcome
        for middleware in self:
            if callable(middleware):
                accumulated = await _resolve(middleware(accumulated, context))
        return accumulated
