"""
URL building from a base URL, an endpoint and query params.
"""

from typing import Any, Callable, Mapping, Optional

from .exceptions import InvalidArgumentError
from .utils.keys import convert_keys
from .utils.query import format_query


class UrlBuilder:
    """
    Concatenates the base URL with an endpoint and a formatted query string.

    Query params are key-converted before formatting. Both collaborators can
    be swapped for custom implementations.
    """

    def __init__(
        self,
        base_url: str = "",
        query_formatter: Callable[[Optional[Mapping[str, Any]]], str] = format_query,
        key_converter: Callable[[Any, Any], Any] = convert_keys,
    ):
        self.base_url = ""
        self.set_base_url(base_url)
        self.query_formatter = query_formatter
        self.key_converter = key_converter

    def set_base_url(self, url: str) -> None:
        """
        Replace the base URL.

        Raises:
            InvalidArgumentError: If ``url`` is not a string
        """
        if not isinstance(url, str):
            raise InvalidArgumentError("The url must be a string")

        self.base_url = url

    def build_url(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        conversion_mode: Any = "default",
    ) -> str:
        """
        Build the full request URL.

        Args:
            endpoint: Path appended verbatim to the base URL
            params: Query parameters
            conversion_mode: Key-case policy applied to ``params``

        Returns:
            ``base_url + endpoint + query``

        Examples:
            >>> UrlBuilder("https://api.example.com").build_url("/users", {"id": 5})
            'https://api.example.com/users?id=5'
        """
        if not isinstance(endpoint, str):
            raise InvalidArgumentError("The endpoint must be a string")

        query = self.query_formatter(self.key_converter(params or {}, conversion_mode))
        return f"{self.base_url}{endpoint}{query}"
