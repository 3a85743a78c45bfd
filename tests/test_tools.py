"""Tests for the tool definitions and the registry."""

import asyncio
import json

import httpx
import pytest

from llm_relay._exceptions import ToolArgumentError
from llm_relay.tools import (
    EmailArgs,
    ToolKind,
    ToolRegistry,
    WeatherArgs,
    default_registry,
    email_tool,
    get_weather,
    send_email,
    weather_tool,
)


class TestToolRegistry:
    """Lookup and schema export."""

    def test_default_registry_has_weather_and_email(self):
        """Test the built-in tool set."""
        registry = default_registry()

        assert registry.names() == ["get_weather", "send_email"]
        assert len(registry) == 2
        assert "get_weather" in registry

    def test_find_returns_tool_by_exact_name(self):
        """Test lookup by exact name."""
        registry = default_registry()

        tool = registry.find("get_weather")

        assert tool is not None
        assert tool.kind is ToolKind.GET_WEATHER

    def test_find_unknown_returns_none(self):
        """Test that unknown names return None instead of raising."""
        registry = default_registry()

        assert registry.find("get_stock_price") is None
        assert registry.find("GET_WEATHER") is None
        assert registry.find("") is None

    def test_schemas_match_function_tool_shape(self):
        """Test the exported function declarations."""
        schemas = default_registry().schemas()

        assert [s["name"] for s in schemas] == ["get_weather", "send_email"]
        for schema in schemas:
            assert set(schema) == {"type", "name", "description", "parameters", "strict"}
            assert schema["type"] == "function"
            assert schema["strict"] is True
            assert schema["parameters"]["additionalProperties"] is False

    def test_duplicate_names_rejected(self):
        """Test that two tools cannot share a name."""
        with pytest.raises(ValueError):
            ToolRegistry([weather_tool(), weather_tool()])


class TestArgumentDecoding:
    """Typed argument decoding from the JSON-encoded string."""

    def test_decodes_weather_arguments(self):
        """Test decoding into the typed argument model."""
        args = weather_tool().decode_arguments('{"latitude": 48.85, "longitude": 2.35}')

        assert args == WeatherArgs(latitude=48.85, longitude=2.35)

    def test_malformed_json_raises_tool_argument_error(self):
        """Test that malformed JSON is a tool argument error."""
        with pytest.raises(ToolArgumentError) as info:
            weather_tool().decode_arguments("{latitude: 48.85")

        assert info.value.tool_name == "get_weather"
        assert info.value.errors[0]["type"] == "json_invalid"
        assert info.value.errors[0]["loc"] == ("withToolCall", "arguments")

    def test_missing_field_is_located_under_arguments(self):
        """Test that field issues are located under the arguments."""
        with pytest.raises(ToolArgumentError) as info:
            weather_tool().decode_arguments('{"latitude": 48.85}')

        locs = [issue["loc"] for issue in info.value.errors]
        assert ("withToolCall", "arguments", "longitude") in locs

    def test_extra_fields_rejected(self):
        """Test that undeclared argument fields are rejected."""
        with pytest.raises(ToolArgumentError):
            email_tool().decode_arguments(
                '{"to": "a@example.com", "subject": "s", "body": "b", "cc": "x"}'
            )


class TestWeatherTool:
    """Open-Meteo lookup through an injected httpx transport."""

    def test_returns_current_block_as_json(self):
        """Test the Open-Meteo query and the returned payload."""
        seen = []

        def respond(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"current": {"temperature_2m": 15.0, "wind_speed_10m": 3.2}},
            )

        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(respond)) as client:
                return await get_weather(WeatherArgs(latitude=48.85, longitude=2.35), client=client)

        result = asyncio.run(run())

        assert json.loads(result) == {"temperature_2m": 15.0, "wind_speed_10m": 3.2}
        params = seen[0].url.params
        assert params["latitude"] == "48.85"
        assert params["longitude"] == "2.35"
        assert "temperature_2m" in params["current"]

    def test_upstream_failure_propagates(self):
        """Test that HTTP errors from the weather API propagate."""
        def respond(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="unavailable")

        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(respond)) as client:
                tool = weather_tool(client)
                return await tool.run(WeatherArgs(latitude=0, longitude=0))

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(run())


class TestEmailTool:
    def test_send_email_echoes_payload(self):
        """Test the stubbed email result."""
        args = EmailArgs(to="ada@example.com", subject="Hi", body="Hello there")

        result = json.loads(asyncio.run(send_email(args, delay=0)))

        assert result["noteForLLM"] == "The email is sent successfully using the email tool."
        assert result["emailPayload"] == {
            "to": "ada@example.com",
            "subject": "Hi",
            "body": "Hello there",
        }
