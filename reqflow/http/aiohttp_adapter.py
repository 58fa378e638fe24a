"""
Aiohttp-based transport (asynchronous).
"""

import logging
from typing import Any, Dict, Optional

import aiohttp

from .adapter import Transport
from ..exceptions import NetworkError
from ..models import TransportResponse

logger = logging.getLogger("reqflow.http")


class AiohttpTransport(Transport):
    """
    Asynchronous transport using the aiohttp library.

    The session is created on first use unless one is passed in. Only a
    session created here is closed by ``close()``.
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize aiohttp transport.

        Args:
            session: Optional aiohttp.ClientSession instance
        """
        self._external_session = session is not None
        self.session = session

    async def __aenter__(self) -> "AiohttpTransport":
        """Context manager entry."""
        self._get_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()
            self._external_session = False
        return self.session

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        json: Optional[Any] = None,
    ) -> TransportResponse:
        """
        Send HTTP request using aiohttp.

        Returns:
            TransportResponse with status, headers and body text

        Raises:
            NetworkError: On aiohttp client errors
        """
        session = self._get_session()

        try:
            async with session.request(
                method=method,
                url=url,
                headers=headers,
                json=json,
            ) as response:
                text = await response.text()
                return TransportResponse(
                    status=response.status,
                    headers=dict(response.headers),
                    text=text,
                    url=url,
                    method=method,
                )

        except aiohttp.ClientError as e:
            raise NetworkError(f"Network request failed: {e}") from e

    async def close(self) -> None:
        """Close the session if this transport created it."""
        if not self._external_session and self.session and not self.session.closed:
            await self.session.close()
