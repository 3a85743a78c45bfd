"""
LLM client wrapper with a single ``complete()`` operation.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Self, Sequence

from openai import AsyncOpenAI

from llm_relay._exceptions import UpstreamLLMError, classify_error
from llm_relay.adapters import OpenAIRequestAdapter
from llm_relay.provider import Settings
from llm_relay.types import OutputItem, Prompt


class CompletionClient(Protocol):
    """Anything the message handler can submit a prompt to."""

    async def complete(
        self, prompt: Prompt, tools: Optional[Sequence[dict[str, Any]]] = None
    ) -> OutputItem:
        """Submit one prompt and return the first output item."""
        ...


class OpenAIResponsesLLM:
    """
    OpenAI Responses API client (async-only).

    Use ``OpenAIResponsesLLM.from_client`` when you already have an ``AsyncOpenAI`` instance.
    """

    def __init__(
        self,
        model: str,
        *,
        api_key: str,
        timeout: float = 60.0,
        max_retries: int = 2,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self.model = model
        self.logger = logger or logging.getLogger(__name__)
        self.name = name or self.__class__.__name__
        self._client = AsyncOpenAI(
            api_key=api_key,
            timeout=timeout,
            max_retries=max_retries,
            base_url=base_url,
        )
        self._adapter = OpenAIRequestAdapter()

    @classmethod
    def from_client(
        cls,
        model: str,
        client: AsyncOpenAI,
        *,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> Self:
        """
        Build an ``OpenAIResponsesLLM`` around an already-configured ``AsyncOpenAI`` client.
        """
        if not isinstance(client, AsyncOpenAI):
            raise TypeError(
                f"OpenAIResponsesLLM.from_client expects AsyncOpenAI; got {type(client).__name__}"
            )

        self = cls.__new__(cls)  # bypass __init__
        self.model = model
        self.logger = logger or logging.getLogger(__name__)
        self.name = name or cls.__name__
        self._client = client
        self._adapter = OpenAIRequestAdapter()
        return self

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> Self:
        return cls(
            settings.model,
            api_key=settings.api_key,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
            **kwargs,
        )

    @property
    def adapter(self) -> OpenAIRequestAdapter:
        return self._adapter

    async def complete(
        self,
        prompt: Prompt,
        tools: Optional[Sequence[dict[str, Any]]] = None,
    ) -> OutputItem:
        """
        Submit ``prompt`` (with ``tools`` on user turns only) and return the first output item.

        Raises:
            UpstreamLLMError: if the API call fails or the response has no output.
        """
        args = {"model": self.model, **self._adapter.to_provider(prompt, tools)}

        self._log(
            f"Sending {prompt['role']} prompt to OpenAI model {self.model} "
            f"(tools: {len(args.get('tools', []))})"
        )

        try:
            raw = await self._client.responses.create(**args)
        except Exception as exc:
            raise classify_error(exc, self.logger) from exc

        item = self._adapter.from_provider(raw)
        if item is None:
            raise UpstreamLLMError("LLM response contained no output items")
        return item

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")

    # --- lifecycle ---------------------------------------------------------
    async def aclose(self) -> None:
        """
        Close the underlying async HTTP client. Safe to call multiple times.
        """
        close = getattr(self._client, "close", None)
        if close:
            await close()

    async def __aenter__(self) -> "OpenAIResponsesLLM":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
