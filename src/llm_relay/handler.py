"""
Request lifecycle of ``POST /message``.

The caller either sends a plain message, which is forwarded as a user turn
together with the tool declarations, or names one tool call to run first. In
the second case the tool result is folded into a system prompt and no tools
are offered, so the model answers instead of asking for another call.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from llm_relay import prompts
from llm_relay._exceptions import ToolExecutionError
from llm_relay.client import CompletionClient
from llm_relay.provider import ToolFailureMode
from llm_relay.tools.registry import ToolRegistry
from llm_relay.types import IncomingMessage, OutputItem, Prompt, PromptRole, ToolCallRequest

_logger = logging.getLogger(__name__)


class MessageHandler:
    """
    Validates an incoming message, runs the optional tool call and forwards one prompt.

    Args:
        llm: Completion client, constructed once per process.
        registry: Tools that may be offered to the model or run on request.
        tool_failure: Whether a failing tool handler aborts the request (``RAISE``)
            or is replaced by an empty result (``EMPTY``).
    """

    def __init__(
        self,
        llm: CompletionClient,
        registry: ToolRegistry,
        *,
        tool_failure: ToolFailureMode = ToolFailureMode.RAISE,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.llm = llm
        self.registry = registry
        self.tool_failure = tool_failure
        self.logger = logger or _logger

    @staticmethod
    def parse(body: Union[bytes, str]) -> IncomingMessage:
        """Raises pydantic ``ValidationError`` for malformed JSON or a bad shape."""
        return IncomingMessage.model_validate_json(body)

    async def handle(self, body: Union[bytes, str]) -> OutputItem:
        message = self.parse(body)
        return await self.respond(message)

    async def respond(self, message: IncomingMessage) -> OutputItem:
        prompt = await self.build_prompt(message)
        tools = self.registry.schemas() if prompt["role"] == PromptRole.USER.value else None
        return await self.llm.complete(prompt, tools)

    async def build_prompt(self, message: IncomingMessage) -> Prompt:
        if message.with_tool_call is None:
            return prompts.user_prompt(message.user_message)

        tool_result = await self.run_tool_call(message.with_tool_call)
        return prompts.system_prompt(message.user_message, tool_result)

    async def run_tool_call(self, call: ToolCallRequest) -> str:
        """
        Run the named tool and return its string result.

        An unknown tool name yields an empty result. Argument decoding errors
        always propagate; handler failures follow ``tool_failure``.
        """
        tool = self.registry.find(call.name)
        if tool is None:
            self.logger.warning("Unknown tool %r requested; continuing without data", call.name)
            result = ""
        else:
            args = tool.decode_arguments(call.arguments)
            try:
                result = await tool.run(args)
            except Exception as exc:
                if self.tool_failure is ToolFailureMode.RAISE:
                    raise ToolExecutionError(call.name, exc) from exc
                self.logger.warning("Tool %r failed, using empty result: %s", call.name, exc)
                result = ""

        self.logger.info("[TOOL CALL] <%s> %s", call.name, result)
        return result
