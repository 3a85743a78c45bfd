"""Shared fakes for the relay test suite."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import pytest

from llm_relay.tools.base import Tool, ToolKind
from llm_relay.tools.email import email_tool
from llm_relay.tools.registry import ToolRegistry
from llm_relay.tools.weather import WeatherArgs, weather_tool


class FakeLLM:
    """Deterministic stand-in for the completion client that records every call."""

    def __init__(self, reply: Optional[dict[str, Any]] = None, exc: Optional[Exception] = None):
        self.reply = reply if reply is not None else {"type": "message", "content": "ok"}
        self.exc = exc
        self.calls: list[tuple[dict[str, Any], Optional[list[dict[str, Any]]]]] = []

    async def complete(self, prompt, tools: Optional[Sequence[dict[str, Any]]] = None):
        self.calls.append((dict(prompt), list(tools) if tools is not None else None))
        if self.exc is not None:
            raise self.exc
        return self.reply


class RecordingHandler:
    """Async tool handler returning a fixed payload (or raising) and remembering its inputs."""

    def __init__(self, result: str = "", exc: Optional[Exception] = None):
        self.result = result
        self.exc = exc
        self.calls: list[Any] = []

    async def __call__(self, args):
        self.calls.append(args)
        if self.exc is not None:
            raise self.exc
        return self.result


def stub_weather(handler: RecordingHandler) -> Tool:
    real = weather_tool()
    return Tool(
        kind=ToolKind.GET_WEATHER,
        description=real.description,
        parameters=real.parameters,
        args_model=WeatherArgs,
        handler=handler,
    )


@pytest.fixture
def weather_handler() -> RecordingHandler:
    return RecordingHandler(result='{"temperature_2m": 15.0, "wind_speed_10m": 3.2}')


@pytest.fixture
def registry(weather_handler) -> ToolRegistry:
    return ToolRegistry([stub_weather(weather_handler), email_tool(delay=0)])


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()
