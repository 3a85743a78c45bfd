"""
Provider-neutral tool definition.

A tool is a named, JSON-Schema described capability with a typed argument
model and an async handler returning the string folded into the prompt.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Type

from pydantic import BaseModel, ValidationError

from llm_relay._exceptions import ToolArgumentError

__all__ = ["ToolKind", "Tool", "ToolHandler", "ARGUMENTS_LOC"]

# Location prefix used when reporting argument issues back to the caller
ARGUMENTS_LOC: tuple[str, ...] = ("withToolCall", "arguments")

ToolHandler = Callable[[Any], Awaitable[str]]


class ToolKind(str, Enum):
    GET_WEATHER = "get_weather"
    SEND_EMAIL = "send_email"


@dataclass(frozen=True)
class Tool:
    kind: ToolKind
    description: str
    parameters: dict[str, Any]
    args_model: Type[BaseModel]
    handler: ToolHandler = field(repr=False)
    strict: bool = True

    @property
    def name(self) -> str:
        return self.kind.value

    def decode_arguments(self, raw: str) -> BaseModel:
        """
        Parse the JSON-encoded ``raw`` arguments into this tool's argument model.

        Raises:
            ToolArgumentError: on malformed JSON or a schema mismatch.
        """
        try:
            return self.args_model.model_validate_json(raw)
        except ValidationError as exc:
            issues = exc.errors(include_url=False, include_context=False)
            for issue in issues:
                issue["loc"] = ARGUMENTS_LOC + tuple(issue["loc"])
            raise ToolArgumentError(self.name, issues) from exc

    async def run(self, args: BaseModel) -> str:
        return await self.handler(args)

    def to_openai(self) -> dict[str, Any]:
        """Function declaration in the shape the Responses API expects."""
        return {
            "type": "function",
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
            "strict": self.strict,
        }
