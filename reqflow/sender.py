"""
Request orchestration.

Turns a logical call into a dispatched transport operation:

1. validate the method
2. merge per-call options over the client-wide ones
3. build the request context (URL, converted body, headers)
4. run the before-send gates; a rejection resolves to ``{}``
5. race the transport call against the response timeout
6. fold the winning outcome through the after-receive transforms
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Mapping, Optional, Union

from pydantic import ValidationError

from .exceptions import InvalidArgumentError, InvalidMethodError
from .headers import HeaderResolver
from .http.adapter import Transport
from .logging_setup import sanitize_headers
from .methods import BODY_METHODS, MethodRegistry
from .metrics import (
    OUTCOME_ERROR,
    OUTCOME_RESPONSE,
    OUTCOME_TIMEOUT,
    OUTCOME_VETOED,
    metrics_request,
)
from .middleware import GateChain, TransformChain
from .models import RequestContext, RequestOptions, TimeoutOutcome, thaw
from .url import UrlBuilder

logger = logging.getLogger("reqflow.sender")

OptionsInput = Union[RequestOptions, Mapping[str, Any], None]


class RequestSender:
    """
    Sends requests through the middleware chains and the transport.

    The verb methods are not coroutines: they validate and build the
    request context right away, so configuration errors raise at call time,
    and return an awaitable that performs the rest of the pipeline.

    Examples:
        >>> sender = RequestSender(registry, urls, headers, gates, transforms, transport)
        >>> result = await sender.get("/users", params={"id": 5})
    """

    def __init__(
        self,
        method_registry: MethodRegistry,
        url_builder: UrlBuilder,
        header_resolver: HeaderResolver,
        gate_chain: GateChain,
        transform_chain: TransformChain,
        transport: Transport,
        default_options: OptionsInput = None,
    ):
        self.method_registry = method_registry
        self.url_builder = url_builder
        self.header_resolver = header_resolver
        self.gate_chain = gate_chain
        self.transform_chain = transform_chain
        self.transport = transport
        self.default_options = RequestOptions.parse(default_options)

    def get(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        options: OptionsInput = None,
    ) -> Awaitable[Any]:
        return self.send_request("GET", endpoint, None, params, headers, options)

    def post(
        self,
        endpoint: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        options: OptionsInput = None,
    ) -> Awaitable[Any]:
        return self.send_request("POST", endpoint, body, params, headers, options)

    def put(
        self,
        endpoint: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        options: OptionsInput = None,
    ) -> Awaitable[Any]:
        return self.send_request("PUT", endpoint, body, params, headers, options)

    def patch(
        self,
        endpoint: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        options: OptionsInput = None,
    ) -> Awaitable[Any]:
        return self.send_request("PATCH", endpoint, body, params, headers, options)

    def delete(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        options: OptionsInput = None,
    ) -> Awaitable[Any]:
        return self.send_request("DELETE", endpoint, None, params, headers, options)

    def prepare_request(
        self,
        method: Any,
        endpoint: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        options: OptionsInput = None,
    ) -> RequestContext:
        """
        Validate the call and build its request context.

        Args:
            method: HTTP method, any case
            endpoint: Path appended to the base URL
            body: Request body
            params: Query parameters
            headers: Per-call headers, applied over the defaults
            options: Per-call options, applied over the client-wide ones

        Returns:
            RequestContext for this call

        Raises:
            InvalidMethodError: If ``method`` is missing or not supported
            InvalidArgumentError: If the endpoint or an option is invalid
        """
        parsed_method = self.method_registry.resolve(method)
        if parsed_method is None:
            raise InvalidMethodError(method, self.method_registry.get_valid_methods())

        combined_options = self.default_options.merge(options)
        conversion_mode = combined_options.before_send_conversion_mode

        raw_body = {} if body is None else body
        raw_params = dict(params or {})

        url = self.url_builder.build_url(endpoint, raw_params, conversion_mode)
        converted_body = self.url_builder.key_converter(raw_body, conversion_mode)
        resolved_headers = self.header_resolver.headers_for(parsed_method, headers)

        try:
            return RequestContext(
                endpoint=endpoint,
                method=parsed_method,
                url=url,
                body=converted_body,
                headers=resolved_headers,
                options=combined_options,
                raw_parameters=raw_params,
                raw_method=method,
                raw_body=raw_body,
            )
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid request: {e}") from e

    def send_request(
        self,
        method: Any,
        endpoint: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        options: OptionsInput = None,
    ) -> Awaitable[Any]:
        """
        Build the context now and return an awaitable for the outcome.

        Raises:
            InvalidMethodError: If ``method`` is missing or not supported
            InvalidArgumentError: If the endpoint or an option is invalid
        """
        context = self.prepare_request(method, endpoint, body, params, headers, options)
        return self.execute(context)

    async def execute(self, context: RequestContext) -> Any:
        """
        Run gates, dispatch, race and transforms for a prepared context.

        Returns:
            The transformed outcome, or ``{}`` if a gate rejected the call

        Raises:
            Exception: Whatever the transport raised, unchanged
        """
        method = context.method.value
        start = time.monotonic()

        if not await self.gate_chain.apply(context):
            logger.info("Request %s %s rejected by before-send middleware", method, context.url)
            metrics_request(method, OUTCOME_VETOED, time.monotonic() - start)
            return {}

        logger.debug(
            "Request %s %s headers=%s",
            method,
            context.url,
            sanitize_headers(context.headers),
            extra={"method": method, "url": context.url},
        )

        try:
            outcome = await self.race_against_timeout(context)
        except Exception as e:
            logger.warning("Request %s %s failed: %s", method, context.url, e)
            metrics_request(method, OUTCOME_ERROR, time.monotonic() - start)
            raise

        if isinstance(outcome, TimeoutOutcome):
            metrics_request(method, OUTCOME_TIMEOUT, time.monotonic() - start)
        else:
            metrics_request(method, OUTCOME_RESPONSE, time.monotonic() - start)

        return await self.transform_chain.apply(outcome, context)

    async def dispatch(self, context: RequestContext) -> Any:
        """Hand the resolved request to the transport. GET and DELETE carry no body."""
        body = thaw(context.body) if context.method in BODY_METHODS else None
        return await self.transport.send(
            context.method.value,
            context.url,
            thaw(context.headers),
            json=body,
        )

    async def race_against_timeout(self, context: RequestContext) -> Any:
        """
        Dispatch and wait for the response or the timeout, whichever is first.

        The loser is cancelled and reaped before returning, so a late
        response never surfaces after a timeout and a pending timer never
        fires after a response. If both finish together the response wins.

        Returns:
            The transport result or a ``TimeoutOutcome``
        """
        timeout = context.options.response_timeout
        if not timeout:
            return await self.dispatch(context)

        request_task = asyncio.ensure_future(self.dispatch(context))
        timer_task = asyncio.ensure_future(self._timeout_after(timeout))

        try:
            done, _ = await asyncio.wait(
                {request_task, timer_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            request_task.cancel()
            timer_task.cancel()

        await asyncio.gather(request_task, timer_task, return_exceptions=True)

        if request_task in done:
            return request_task.result()

        logger.warning(
            "Request %s %s timed out after %sms",
            context.method.value,
            context.url,
            timeout,
            extra={"method": context.method.value, "url": context.url},
        )
        return timer_task.result()

    @staticmethod
    async def _timeout_after(timeout_ms: float) -> TimeoutOutcome:
        await asyncio.sleep(timeout_ms / 1000)
        return TimeoutOutcome(timeout_ms=timeout_ms)
