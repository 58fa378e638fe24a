"""
reqflow Main Client
"""

import logging
from typing import Any, Awaitable, Dict, Mapping, Optional

from .headers import HeaderResolver
from .http.adapter import Transport
from .http.aiohttp_adapter import AiohttpTransport
from .logging_setup import setup_logging
from .methods import MethodRegistry
from .middleware import GateChain, Middleware, TransformChain
from .models import ClientConfig
from .sender import OptionsInput, RequestSender
from .url import UrlBuilder
from .__version__ import __version__

logger = logging.getLogger("reqflow.client")


class RequestClient:
    """
    Configurable HTTP request client.

    Holds the base URL, the default headers and both middleware chains,
    and sends every call through a ``RequestSender``.

    Features:
    - Per-method default headers
    - Before-send middleware that can veto a call
    - After-receive middleware that can rewrite the outcome
    - Response timeout resolving to a ``TimeoutOutcome`` instead of an error

    Example:
        >>> import asyncio
        >>> from reqflow import RequestClient, ClientConfig
        >>>
        >>> async def main():
        ...     async with RequestClient(ClientConfig(base_url="https://api.example.com")) as client:
        ...         client.set_default_header("X-Trace", "abc")
        ...         response = await client.get("/users", {"id": 5})
        ...         print(response.status)
        >>>
        >>> asyncio.run(main())
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration; defaults to ``ClientConfig()``
            transport: Transport to dispatch with; an ``AiohttpTransport``
                owned by the client is created when omitted

        Raises:
            InvalidMethodError: If ``config.headers`` names an unsupported method
            InvalidArgumentError: If a default header or the base URL is invalid
        """
        self.config = config or ClientConfig()

        if self.config.debug:
            setup_logging(debug=True)

        self.method_registry = MethodRegistry()
        self.url_builder = UrlBuilder(self.config.base_url)
        self.header_resolver = HeaderResolver(self.method_registry, self.config.headers)
        self.before_send_middleware = GateChain()
        self.after_receive_middleware = TransformChain()

        self._owns_transport = transport is None
        self.transport = transport or AiohttpTransport()

        self.sender = RequestSender(
            self.method_registry,
            self.url_builder,
            self.header_resolver,
            self.before_send_middleware,
            self.after_receive_middleware,
            self.transport,
            default_options=self.config.options,
        )

        logger.debug("reqflow client initialized (version %s)", __version__)

    async def __aenter__(self) -> "RequestClient":
        """Context manager entry"""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - closes an owned transport"""
        await self.close()

    async def close(self) -> None:
        """Close the transport if the client created it."""
        if self._owns_transport:
            await self.transport.close()

    # ========================================================================
    # Configuration
    # ========================================================================

    def set_base_url(self, url: str) -> None:
        """Set the base URL prepended to every endpoint."""
        self.url_builder.set_base_url(url)

    def set_default_header(self, key: str, value: str, method: Optional[str] = None) -> None:
        """
        Set a default header for one method, or for all when ``method`` is None.
        """
        self.header_resolver.set_default(key, value, method)

    def remove_default_header(self, key: str, method: Optional[str] = None) -> None:
        """Remove a default header from one method, or from all when ``method`` is None."""
        self.header_resolver.remove_default(key, method)

    def get_headers_for(self, method: str) -> Dict[str, str]:
        """Return a copy of the default headers sent with ``method``."""
        return self.header_resolver.headers_for(method)

    def add_before_send_middleware(self, middleware: Middleware) -> None:
        """
        Register a gate ``fn(context) -> bool``; a falsy result cancels the call.
        """
        self.before_send_middleware.add(middleware)

    def remove_before_send_middleware(self, middleware: Middleware) -> None:
        """Unregister a gate; unknown middleware is ignored."""
        self.before_send_middleware.remove(middleware)

    def add_after_receive_middleware(self, middleware: Middleware) -> None:
        """
        Register a transform ``fn(outcome, context) -> outcome``.
        """
        self.after_receive_middleware.add(middleware)

    def remove_after_receive_middleware(self, middleware: Middleware) -> None:
        """Unregister a transform; unknown middleware is ignored."""
        self.after_receive_middleware.remove(middleware)

    # ========================================================================
    # Requests
    # ========================================================================

    def get(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        options: OptionsInput = None,
    ) -> Awaitable[Any]:
        """Send a GET request; await the result for the outcome."""
        return self.sender.get(url, params, headers, options)

    def post(
        self,
        url: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        options: OptionsInput = None,
    ) -> Awaitable[Any]:
        """Send a POST request with a JSON body; await the result for the outcome."""
        return self.sender.post(url, body, params, headers, options)

    def put(
        self,
        url: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        options: OptionsInput = None,
    ) -> Awaitable[Any]:
        """Send a PUT request with a JSON body; await the result for the outcome."""
        return self.sender.put(url, body, params, headers, options)

    def patch(
        self,
        url: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        options: OptionsInput = None,
    ) -> Awaitable[Any]:
        """Send a PATCH request with a JSON body; await the result for the outcome."""
        return self.sender.patch(url, body, params, headers, options)

    def delete(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        options: OptionsInput = None,
    ) -> Awaitable[Any]:
        """Send a DELETE request; await the result for the outcome."""
        return self.sender.delete(url, params, headers, options)
