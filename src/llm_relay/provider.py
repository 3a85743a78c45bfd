from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from dotenv import load_dotenv

from llm_relay._exceptions import ConfigError

DEFAULT_MODEL = "gpt-4o-mini"

API_KEY_ENV = "OPENAI_API_KEY"


class ToolFailureMode(str, Enum):
    """What to do when a tool handler raises."""

    RAISE = "raise"  # surface as 500
    EMPTY = "empty"  # log and continue with an empty tool result


def get_api_key(env: Optional[Mapping[str, str]] = None) -> str:
    if env is None:
        load_dotenv()
        env = os.environ
    key = env.get(API_KEY_ENV)
    if not key:
        raise ConfigError(f"{API_KEY_ENV} missing")
    return key


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup."""

    api_key: str
    model: str = DEFAULT_MODEL
    tool_failure: ToolFailureMode = ToolFailureMode.RAISE
    timeout: float = 60.0
    max_retries: int = 2
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables (and a ``.env`` file).

        Args:
            env: Mapping to read instead of ``os.environ``; skips ``.env`` loading.

        Raises:
            ConfigError: if the API key is missing or a value does not parse.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        failure = env.get("LLM_RELAY_TOOL_FAILURE", ToolFailureMode.RAISE.value).lower()
        try:
            tool_failure = ToolFailureMode(failure)
        except ValueError as exc:
            choices = ", ".join(m.value for m in ToolFailureMode)
            raise ConfigError(
                f"LLM_RELAY_TOOL_FAILURE must be one of: {choices}; got {failure!r}"
            ) from exc

        return cls(
            api_key=get_api_key(env),
            model=env.get("LLM_RELAY_MODEL") or DEFAULT_MODEL,
            tool_failure=tool_failure,
            timeout=_get_float(env, "LLM_RELAY_TIMEOUT", 60.0),
            max_retries=_get_int(env, "LLM_RELAY_MAX_RETRIES", 2),
            log_level=(env.get("LLM_RELAY_LOG_LEVEL") or "INFO").upper(),
            host=env.get("LLM_RELAY_HOST") or "0.0.0.0",
            port=_get_int(env, "LLM_RELAY_PORT", 3000),
        )
