"""
reqflow Data Models
"""

import json
import os
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import InvalidArgumentError
from .methods import Method

DEFAULT_RESPONSE_TIMEOUT_MS = 5000
TIMEOUT_STATUS = 408


class ConversionMode(str, Enum):
    """Key-case policy applied to params and bodies"""

    DEFAULT = "default"
    CAMEL_CASE = "camelCase"
    SNAKE_CASE = "snakeCase"


class RequestOptions(BaseModel):
    """
    Per-call and client-wide request options.

    Accepts the camelCase names (``responseTimeout``) as well as the field
    names. Unknown keys are kept so middleware can read caller-defined
    options from the request context.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    before_send_conversion_mode: ConversionMode = Field(
        ConversionMode.DEFAULT,
        alias="beforeSendConversionMode",
        description="Key-case policy for params and body before dispatch",
    )
    after_receive_conversion_mode: ConversionMode = Field(
        ConversionMode.DEFAULT,
        alias="afterReceiveConversionMode",
        description="Key-case policy reserved for responses, propagated only",
    )
    response_timeout: Optional[float] = Field(
        DEFAULT_RESPONSE_TIMEOUT_MS,
        alias="responseTimeout",
        ge=0,
        description="Response timeout in milliseconds, 0 or None disables it",
    )

    @classmethod
    def parse(cls, options: Union["RequestOptions", Mapping[str, Any], None]) -> "RequestOptions":
        """
        Build options from a mapping, raising ``InvalidArgumentError`` on bad values.
        """
        if isinstance(options, RequestOptions):
            return options
        try:
            return cls.model_validate(dict(options or {}))
        except (TypeError, ValueError, ValidationError) as e:
            raise InvalidArgumentError(f"Invalid request options: {e}") from e

    def merge(self, overrides: Union["RequestOptions", Mapping[str, Any], None]) -> "RequestOptions":
        """
        Return new options with ``overrides`` applied key by key.

        Only keys the caller actually set win; everything else keeps the
        value from ``self``.

        Args:
            overrides: Per-call options

        Returns:
            Merged options

        Raises:
            InvalidArgumentError: If an override value is invalid
        """
        parsed = RequestOptions.parse(overrides)
        update = parsed.model_dump(exclude_unset=True)
        return RequestOptions.parse({**self.model_dump(), **update})


class ClientConfig(BaseModel):
    """Client configuration"""

    base_url: str = Field("", description="Prefix for every endpoint")
    headers: Dict[str, Dict[str, str]] = Field(
        default_factory=dict,
        description="Default headers per method, merged over the built-in defaults",
    )
    options: RequestOptions = Field(
        default_factory=RequestOptions, description="Client-wide request options"
    )
    debug: bool = Field(False, description="Enable debug logging")

    @field_validator("options", mode="before")
    @classmethod
    def validate_options(cls, v):
        if v is None:
            return RequestOptions()
        return v

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """
        Build configuration from environment variables.

        Supported variables:
        - REQFLOW_BASE_URL: base URL (default: empty)
        - REQFLOW_RESPONSE_TIMEOUT: response timeout in milliseconds
        - REQFLOW_DEBUG: enable debug logging (1/true/yes)

        Keyword arguments win over the environment.
        """
        data: Dict[str, Any] = {}

        base_url = os.getenv("REQFLOW_BASE_URL")
        if base_url is not None:
            data["base_url"] = base_url

        timeout = os.getenv("REQFLOW_RESPONSE_TIMEOUT")
        if timeout:
            data["options"] = {"response_timeout": timeout}

        debug = os.getenv("REQFLOW_DEBUG")
        if debug:
            data["debug"] = debug.strip().lower() in ("1", "true", "yes")

        data.update(overrides)
        return cls(**data)


def freeze(value: Any) -> Any:
    """Return a read-only copy of nested mappings and lists; other values are shared."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Return a plain, mutable copy of a value built by ``freeze``."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


class RequestContext(BaseModel):
    """
    Everything known about one call once it has been resolved.

    Built once per call and handed to both middleware chains and the
    transport. Mappings are stored as read-only views and lists as tuples,
    so middleware cannot change what gets dispatched. The ``raw_*`` fields
    hold the caller's input before method normalization and key conversion.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str
    method: Method
    url: str
    body: Any = None
    headers: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    options: RequestOptions = Field(default_factory=RequestOptions)
    raw_parameters: Any = None
    raw_method: Any = None
    raw_body: Any = None

    @field_validator("body", "headers", "raw_parameters", "raw_body", mode="after")
    @classmethod
    def _snapshot(cls, value: Any) -> Any:
        return freeze(value)



class TimeoutOutcome(BaseModel):
    """Result of a call whose response did not arrive in time"""

    model_config = ConfigDict(frozen=True)

    timeout: bool = True
    status: int = TIMEOUT_STATUS
    timeout_ms: Optional[float] = None


def is_timeout(value: Any) -> bool:
    """Return True for a ``TimeoutOutcome`` or a ``{"timeout": True}`` mapping."""
    if isinstance(value, TimeoutOutcome):
        return True
    if isinstance(value, Mapping):
        return value.get("timeout") is True
    return False


class TransportResponse(BaseModel):
    """Response returned by the bundled transports"""

    status: int
    headers: Dict[str, str] = Field(default_factory=dict)
    text: str = ""
    url: str = ""
    method: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def parse_json(self) -> Any:
        """Decode the body as JSON; an empty body decodes to None."""
        if not self.text:
            return None
        return json.loads(self.text)
