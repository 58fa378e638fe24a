"""
HTTP transports for reqflow.
"""

from .adapter import Transport
from .requests_adapter import RequestsTransport
from .aiohttp_adapter import AiohttpTransport

__all__ = ["Transport", "RequestsTransport", "AiohttpTransport"]
