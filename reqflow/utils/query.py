"""
Query-string formatting.
"""

from typing import Any, Mapping, Optional
from urllib.parse import urlencode


def format_query(params: Optional[Mapping[str, Any]]) -> str:
    """
    Format a mapping as a query string with a leading ``?``.

    Keys whose value is None are omitted. Sequence values repeat the key.

    Args:
        params: Query parameters

    Returns:
        ``"?a=1&b=2"``, or ``""`` when there is nothing to encode

    Examples:
        >>> format_query({"id": 5})
        '?id=5'
        >>> format_query({})
        ''
    """
    if not params:
        return ""

    pairs = {key: value for key, value in params.items() if value is not None}
    if not pairs:
        return ""

    return "?" + urlencode(pairs, doseq=True)
