"""
Base transport interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class Transport(ABC):
    """
    Abstract base class for transports.

    A transport performs the actual network call. Its result is handed to
    the after-receive middleware untouched, and anything it raises reaches
    the caller unchanged.
    """

    @abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        json: Optional[Any] = None,
    ) -> Any:
        """
        Send HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Fully built request URL
            headers: Request headers
            json: JSON request body; None for bodiless methods

        Returns:
            Transport-defined response value

        Raises:
            NetworkError: On network connectivity issues
        """
        raise NotImplementedError

    async def close(self) -> None:
        """Release any resources held by the transport."""
        return None
