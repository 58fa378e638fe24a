"""
reqflow - configurable asynchronous HTTP request client

Default headers per method, before-send and after-receive middleware, and
a response timeout raced against every call.
"""

from reqflow.client import RequestClient
from reqflow.sender import RequestSender
from reqflow.methods import Method, MethodRegistry
from reqflow.headers import HeaderResolver
from reqflow.url import UrlBuilder
from reqflow.middleware import GateChain, TransformChain
from reqflow.models import (
    ClientConfig,
    ConversionMode,
    RequestContext,
    RequestOptions,
    TimeoutOutcome,
    TransportResponse,
    is_timeout,
)
from reqflow.exceptions import (
    ReqflowError,
    InvalidArgumentError,
    InvalidMethodError,
    InvalidMiddlewareError,
    NetworkError,
)
from reqflow.__version__ import __version__

__all__ = [
    "RequestClient",
    "RequestSender",
    "Method",
    "MethodRegistry",
    "HeaderResolver",
    "UrlBuilder",
    "GateChain",
    "TransformChain",
    "ClientConfig",
    "ConversionMode",
    "RequestContext",
    "RequestOptions",
    "TimeoutOutcome",
    "TransportResponse",
    "is_timeout",
    "ReqflowError",
    "InvalidArgumentError",
    "InvalidMethodError",
    "InvalidMiddlewareError",
    "NetworkError",
    "__version__",
]
