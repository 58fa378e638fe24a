"""
Tests for configuration and data models.
"""

import pytest
from pydantic import ValidationError

from reqflow.exceptions import InvalidArgumentError
from reqflow.methods import Method
from reqflow.models import (
    ClientConfig,
    ConversionMode,
    RequestContext,
    RequestOptions,
    TimeoutOutcome,
    TransportResponse,
    freeze,
    is_timeout,
    thaw,
)


class TestRequestOptions:
    """Test option parsing and merging."""

    def test_defaults(self):
        options = RequestOptions()

        assert options.before_send_conversion_mode is ConversionMode.DEFAULT
        assert options.after_receive_conversion_mode is ConversionMode.DEFAULT
        assert options.response_timeout == 5000

    def test_accepts_camel_case_names(self):
        options = RequestOptions.parse({"beforeSendConversionMode": "snakeCase", "responseTimeout": 100})

        assert options.before_send_conversion_mode is ConversionMode.SNAKE_CASE
        assert options.response_timeout == 100

    def test_merge_per_call_wins(self):
        base = RequestOptions.parse({"responseTimeout": 100, "beforeSendConversionMode": "camelCase"})
        merged = base.merge({"responseTimeout": 0})

        assert merged.response_timeout == 0
        assert merged.before_send_conversion_mode is ConversionMode.CAMEL_CASE
        assert base.response_timeout == 100

    def test_merge_keeps_extra_options(self):
        merged = RequestOptions().merge({"offlineAware": True})
        assert merged.model_dump()["offlineAware"] is True

    @pytest.mark.parametrize(
        "options",
        [{"beforeSendConversionMode": "kebabCase"}, {"responseTimeout": -1}, {"responseTimeout": "soon"}],
    )
    def test_invalid_options(self, options):
        with pytest.raises(InvalidArgumentError, match="Invalid request options"):
            RequestOptions().merge(options)

    def test_options_are_frozen(self):
        with pytest.raises(ValidationError):
            RequestOptions().response_timeout = 1


class TestClientConfig:
    """Test client configuration."""

    def test_defaults(self):
        config = ClientConfig()

        assert config.base_url == ""
        assert config.headers == {}
        assert config.options.response_timeout == 5000
        assert config.debug is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("REQFLOW_BASE_URL", "https://env.example.com")
        monkeypatch.setenv("REQFLOW_RESPONSE_TIMEOUT", "250")
        monkeypatch.setenv("REQFLOW_DEBUG", "true")

        config = ClientConfig.from_env()

        assert config.base_url == "https://env.example.com"
        assert config.options.response_timeout == 250
        assert config.debug is True

    def test_from_env_overrides_win(self, monkeypatch):
        monkeypatch.setenv("REQFLOW_BASE_URL", "https://env.example.com")

        config = ClientConfig.from_env(base_url="https://explicit.example.com")
        assert config.base_url == "https://explicit.example.com"

    def test_from_env_without_variables(self, monkeypatch):
        for name in ("REQFLOW_BASE_URL", "REQFLOW_RESPONSE_TIMEOUT", "REQFLOW_DEBUG"):
            monkeypatch.delenv(name, raising=False)

        assert ClientConfig.from_env() == ClientConfig()

    def test_options_from_mapping(self):
        config = ClientConfig(options={"responseTimeout": 0})
        assert config.options.response_timeout == 0


class TestOutcomes:
    """Test timeout outcome and transport response models."""

    def test_timeout_outcome(self):
        outcome = TimeoutOutcome(timeout_ms=50)

        assert outcome.timeout is True
        assert outcome.status == 408
        assert is_timeout(outcome)

    def test_is_timeout_for_mappings(self):
        assert is_timeout({"timeout": True, "status": 408})
        assert not is_timeout({"status": 200})
        assert not is_timeout(TransportResponse(status=200))

    def test_transport_response(self):
        response = TransportResponse(status=201, text='{"id": 1}')

        assert response.ok
        assert response.parse_json() == {"id": 1}
        assert TransportResponse(status=500).parse_json() is None
        assert not TransportResponse(status=500).ok

    def test_request_context_is_frozen(self):
        context = RequestContext(endpoint="/a", method=Method.GET, url="/a")

        with pytest.raises(ValidationError):
            context.url = "/b"

    def test_request_context_containers_are_read_only(self):
        context = RequestContext(
            endpoint="/a",
            method=Method.POST,
            url="/a",
            body={"items": [1, {"n": 2}]},
            headers={"X-Id": "1"},
        )

        with pytest.raises(TypeError):
            context.headers["X-Id"] = "2"
        with pytest.raises(TypeError):
            context.body["items"] = []
        with pytest.raises(TypeError):
            context.body["items"][1]["n"] = 3

        assert context.body == {"items": (1, {"n": 2})}
        assert context.headers == {"X-Id": "1"}

    def test_request_context_default_headers_are_read_only(self):
        context = RequestContext(endpoint="/a", method=Method.GET, url="/a")

        with pytest.raises(TypeError):
            context.headers["X-Id"] = "1"

    def test_thaw_returns_plain_copies(self):
        frozen = freeze({"items": [1, {"n": 2}]})
        thawed = thaw(frozen)

        assert thawed == {"items": [1, {"n": 2}]}
        assert isinstance(thawed, dict)
        assert isinstance(thawed["items"], list)
        thawed["items"].append(3)
        assert frozen["items"] == (1, {"n": 2})
