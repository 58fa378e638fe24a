"""
Utility modules for reqflow.
"""

from .keys import convert_keys, to_camel_case, to_snake_case
from .query import format_query

__all__ = [
    "convert_keys",
    "to_camel_case",
    "to_snake_case",
    "format_query",
]
