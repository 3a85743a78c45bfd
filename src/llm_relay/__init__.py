"""
LLM Relay - forward chat messages to an LLM, optionally folding in one tool call.
"""

__version__ = "0.1.0"

from .client import CompletionClient, OpenAIResponsesLLM
from .handler import MessageHandler
from .provider import Settings, ToolFailureMode, get_api_key
from .tools import Tool, ToolKind, ToolRegistry, default_registry
from .types import IncomingMessage, Prompt, PromptRole, ToolCallRequest
from ._exceptions import (
    ConfigError,
    RelayError,
    ToolArgumentError,
    ToolExecutionError,
    UpstreamLLMError,
)
from .app import create_app

__all__ = [
    "CompletionClient",
    "OpenAIResponsesLLM",
    "MessageHandler",
    "Settings",
    "ToolFailureMode",
    "get_api_key",
    "Tool",
    "ToolKind",
    "ToolRegistry",
    "default_registry",
    "IncomingMessage",
    "Prompt",
    "PromptRole",
    "ToolCallRequest",
    "ConfigError",
    "RelayError",
    "ToolArgumentError",
    "ToolExecutionError",
    "UpstreamLLMError",
    "create_app",
]
