"""
Requests-based transport (blocking calls run in a worker thread).
"""

import asyncio
from typing import Any, Dict, Optional

import requests

from .adapter import Transport
from ..exceptions import NetworkError
from ..models import TransportResponse


class RequestsTransport(Transport):
    """
    Transport using the requests library.

    Each call runs ``Session.request`` in a worker thread. A call whose
    awaiting task is cancelled still finishes in its thread, but the result
    is discarded.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        """
        Initialize requests transport.

        Args:
            session: Optional requests.Session instance
        """
        self._external_session = session is not None
        self.session = session or requests.Session()

    def _send_blocking(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        json: Optional[Any] = None,
    ) -> TransportResponse:
        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=headers,
                json=json,
            )
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Network request failed: {e}") from e

        return TransportResponse(
            status=response.status_code,
            headers=dict(response.headers),
            text=response.text,
            url=url,
            method=method,
        )

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        json: Optional[Any] = None,
    ) -> TransportResponse:
        """
        Send HTTP request using requests.

        Raises:
            NetworkError: On requests exceptions
        """
        return await asyncio.to_thread(self._send_blocking, method, url, headers, json)

    async def close(self) -> None:
        if not self._external_session:
            self.session.close()
