"""
Registry for the fixed set of tools offered to the model.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional

import httpx

from llm_relay.tools.base import Tool
from llm_relay.tools.email import DEFAULT_SEND_DELAY, email_tool
from llm_relay.tools.weather import weather_tool


class ToolRegistry:
    """Name to tool mapping. Built once, never mutated afterwards."""

    def __init__(self, tools: Iterable[Tool]) -> None:
        self._tools: Dict[str, Tool] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise ValueError(f"Tool '{tool.name}' is registered twice.")
            self._tools[tool.name] = tool

    def find(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def schemas(self) -> List[dict[str, Any]]:
        return [tool.to_openai() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


def default_registry(
    http_client: Optional[httpx.AsyncClient] = None,
    *,
    email_delay: float = DEFAULT_SEND_DELAY,
) -> ToolRegistry:
    """The tools served by ``POST /message``: weather lookup and email sending."""
    return ToolRegistry([weather_tool(http_client), email_tool(delay=email_delay)])


__all__ = ["ToolRegistry", "default_registry"]
