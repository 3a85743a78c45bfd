"""OpenAI Responses API adapter for pure request/response transformations."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from llm_relay.types import OutputItem, Prompt, PromptRole


class OpenAIRequestAdapter:
    """Adapter for converting between relay prompts and the Responses API format."""

    def to_provider(
        self, prompt: Prompt, tools: Optional[Sequence[dict[str, Any]]] = None
    ) -> dict[str, Any]:
        """Build ``responses.create`` arguments (without the model) for a single prompt."""
        request: dict[str, Any] = {
            "input": [{"role": prompt["role"], "content": prompt["content"]}],
        }

        # Tools are only offered on the direct user turn; once a tool result has
        # been folded into a system prompt the model must answer, not call again.
        if tools and prompt["role"] == PromptRole.USER.value:
            request["tools"] = list(tools)

        return request

    def from_provider(self, raw: Any) -> Optional[OutputItem]:
        """Return the first output item as JSON-compatible data, or None if there is none."""
        output = getattr(raw, "output", None)
        if output is None and isinstance(raw, dict):
            output = raw.get("output")
        if not output:
            return None

        first = output[0]
        if hasattr(first, "model_dump"):
            return first.model_dump(mode="json")
        return dict(first)
