"""
Key-case conversion for request params and bodies.
"""

import re
from typing import Any, Callable

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SNAKE_SEPARATOR = re.compile(r"_+([a-zA-Z0-9])")


def to_snake_case(key: str) -> str:
    """
    Convert a camelCase key to snake_case.

    Examples:
        >>> to_snake_case("userId")
        'user_id'
        >>> to_snake_case("HTTPStatus")
        'http_status'
    """
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def to_camel_case(key: str) -> str:
    """
    Convert a snake_case key to camelCase.

    Leading underscores are kept as-is.

    Examples:
        >>> to_camel_case("user_id")
        'userId'
    """
    stripped = key.lstrip("_")
    prefix = key[: len(key) - len(stripped)]
    return prefix + _SNAKE_SEPARATOR.sub(lambda m: m.group(1).upper(), stripped)


def _convert(value: Any, convert_key: Callable[[str], str]) -> Any:
    if isinstance(value, dict):
        return {
            (convert_key(k) if isinstance(k, str) else k): _convert(v, convert_key)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(_convert(item, convert_key) for item in value)
    return value


def convert_keys(value: Any, mode: Any = "default") -> Any:
    """
    Convert mapping keys according to a conversion mode.

    Args:
        value: A dict, list or scalar; nested containers are walked
        mode: ``"camelCase"``, ``"snakeCase"`` or ``"default"`` (identity)

    Returns:
        A converted copy, or ``value`` itself for the identity mode
    """
    mode = getattr(mode, "value", mode)

    if mode == "camelCase":
        return _convert(value, to_camel_case)
    if mode == "snakeCase":
        return _convert(value, to_snake_case)
    return value
