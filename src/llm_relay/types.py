"""
Core types for llm-relay.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "PromptRole",
    "Prompt",
    "ToolCallRequest",
    "IncomingMessage",
    "OutputItem",
]


class PromptRole(str, Enum):
    USER = "user"
    SYSTEM = "system"


class Prompt(TypedDict):
    """The single input item sent to the completion API."""

    role: Literal["user", "system"]
    content: str


# First entry of the completion's ``output`` list, dumped to plain JSON types
OutputItem = dict[str, Any]


class ToolCallRequest(BaseModel):
    """A caller-selected tool invocation with JSON-encoded arguments."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    arguments: str


class IncomingMessage(BaseModel):
    """Body of ``POST /message``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_message: str = Field(alias="userMessage", min_length=1)
    with_tool_call: Optional[ToolCallRequest] = Field(default=None, alias="withToolCall")
