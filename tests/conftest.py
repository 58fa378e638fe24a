"""
Pytest configuration and fixtures
"""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from reqflow import ClientConfig, RequestClient
from reqflow.http.adapter import Transport
from reqflow.models import TransportResponse


class RecordingTransport(Transport):
    """Transport double that records calls and answers after an optional delay."""

    def __init__(self, status: int = 200, text: str = '{"ok": true}', delay: Optional[float] = None):
        self.calls: List[Dict[str, Any]] = []
        self.status = status
        self.text = text
        self.delay = delay
        self.error: Optional[BaseException] = None
        self.cancelled = False
        self.completed = False
        self.closed = False

    async def send(self, method, url, headers, json=None):
        self.calls.append({"method": method, "url": url, "headers": headers, "json": json})
        try:
            if self.delay is not None:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        self.completed = True
        return TransportResponse(status=self.status, text=self.text, url=url, method=method)

    async def close(self):
        self.closed = True


class HangingTransport(Transport):
    """Transport double whose calls never resolve on their own."""

    def __init__(self):
        self.calls = 0
        self.cancelled = False

    async def send(self, method, url, headers, json=None):
        self.calls += 1
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise


@pytest.fixture
def transport():
    """Create recording transport fixture"""
    return RecordingTransport()


@pytest.fixture
def client(transport):
    """Create test client fixture"""
    config = ClientConfig(base_url="https://api.example.com")
    return RequestClient(config, transport=transport)
