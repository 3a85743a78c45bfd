"""Pure transformation adapters for LLM providers."""

from .openai import OpenAIRequestAdapter

__all__ = [
    "OpenAIRequestAdapter",
]
