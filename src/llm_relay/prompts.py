from __future__ import annotations

from llm_relay.types import Prompt

SYSTEM_PROMPT_TEMPLATE = """You are a helpful assistant that answers requests based on the user's request and the system data.

If the user's request is not related to the system data or you don't have the information to answer the question, try the best to answer with your own knowledge, if you don't have the information, say some apologetic message.

Please use markdown to format your response.

<user-request>
{user_message}
</user-request>

<system-data>
{tool_result}
</system-data>
"""


def user_prompt(user_message: str) -> Prompt:
    return {"role": "user", "content": user_message}


def system_prompt(user_message: str, tool_result: str) -> Prompt:
    """Fold the user's request and a tool result into one system turn."""
    content = SYSTEM_PROMPT_TEMPLATE.format(
        user_message=user_message, tool_result=tool_result
    )
    return {"role": "system", "content": content}
