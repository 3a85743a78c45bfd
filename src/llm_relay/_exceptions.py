"""
Exception taxonomy for the relay, plus translation of noisy OpenAI SDK
tracebacks into a single `UpstreamLLMError` that keeps the original
exception for full tracebacks.
"""

from __future__ import annotations

import logging
from typing import Any, Final, Optional, Sequence, Type

import openai

__all__: tuple[str, ...] = (
    "RelayError",
    "ConfigError",
    "ToolArgumentError",
    "ToolExecutionError",
    "UpstreamLLMError",
    "classify_error",
)


class RelayError(RuntimeError):
    """Base class for every error raised by llm-relay."""


class ConfigError(RelayError):
    """Missing or invalid configuration, raised at startup."""


class ToolArgumentError(RelayError):
    """The JSON-encoded tool arguments did not decode into the tool's argument model.

    Attributes:
        tool_name: Name of the tool whose arguments were rejected.
        errors: Field-level issues, shaped like pydantic's ``ValidationError.errors()``.
    """

    def __init__(self, tool_name: str, errors: Sequence[dict[str, Any]]) -> None:
        super().__init__(f"Invalid arguments for tool '{tool_name}'")
        self.tool_name = tool_name
        self.errors = list(errors)


class ToolExecutionError(RelayError):
    """A tool handler raised while running."""

    def __init__(self, tool_name: str, original_exc: Exception) -> None:
        super().__init__(f"Tool '{tool_name}' failed: {original_exc}")
        self.tool_name = tool_name
        self.original_exc = original_exc
        self.__cause__ = original_exc


class UpstreamLLMError(RelayError):
    """The completion API call failed or returned nothing usable.

    Attributes:
        original_exc: The underlying SDK exception, if any.
    """

    original_exc: Optional[Exception]

    def __init__(self, message: str, original_exc: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.original_exc = original_exc
        self.__cause__ = original_exc


RATE_LIMIT_ERRORS: Final[tuple[Type[Exception], ...]] = (openai.RateLimitError,)

CONN_ERRORS: Final[tuple[Type[Exception], ...]] = (
    openai.APIConnectionError,
    TimeoutError,
    ConnectionError,
)

API_ERRORS: Final[tuple[Type[Exception], ...]] = (openai.APIError,)


def classify_error(
    exc: Exception,
    logger: Optional[logging.Logger] = None,
) -> UpstreamLLMError:
    """Wrap an SDK exception in UpstreamLLMError with a friendly, concise message."""
    log = logger or logging.getLogger("llm_relay.exceptions")

    # RateLimitError and APIConnectionError are both APIError subclasses, check them first
    if isinstance(exc, RATE_LIMIT_ERRORS):
        msg = "Rate-limit exceeded, please retry later"
    elif isinstance(exc, CONN_ERRORS):
        msg = "Connection problem, unable to reach the LLM provider"
    elif isinstance(exc, API_ERRORS):
        status = getattr(exc, "status_code", None)
        msg = f"Provider reported an error ({status})" if status else "Provider reported an error"
    else:
        msg = exc.__class__.__name__

    log.warning("Wrapping provider exception: %r", exc)
    return UpstreamLLMError(f"{msg}: {exc}", exc)
