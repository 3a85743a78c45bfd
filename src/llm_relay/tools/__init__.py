"""
Tool abstractions and built-in implementations.
"""

from .base import Tool, ToolKind
from .email import EmailArgs, email_tool, send_email
from .registry import ToolRegistry, default_registry
from .weather import WeatherArgs, get_weather, weather_tool

__all__ = [
    "Tool",
    "ToolKind",
    "ToolRegistry",
    "default_registry",
    "WeatherArgs",
    "get_weather",
    "weather_tool",
    "EmailArgs",
    "send_email",
    "email_tool",
]
