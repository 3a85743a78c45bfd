"""
Email sending tool.

There is no outbound mail service behind it yet: the handler waits for a fixed
delay and reports success, echoing the payload back for the model.
"""

from __future__ import annotations

import asyncio
import functools
import json

from pydantic import BaseModel, ConfigDict

from llm_relay.tools.base import Tool, ToolKind

DEFAULT_SEND_DELAY = 2.0


class EmailArgs(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    to: str
    subject: str
    body: str


async def send_email(args: EmailArgs, *, delay: float = DEFAULT_SEND_DELAY) -> str:
    await asyncio.sleep(delay)
    result = {
        "noteForLLM": "The email is sent successfully using the email tool.",
        "emailPayload": args.model_dump(),
    }
    return json.dumps(result, indent=2)


def email_tool(*, delay: float = DEFAULT_SEND_DELAY) -> Tool:
    return Tool(
        kind=ToolKind.SEND_EMAIL,
        description="Send an email to a given recipient with a subject and message.",
        parameters={
            "type": "object",
            "properties": {
                "to": {
                    "type": "string",
                    "description": "The recipient email address.",
                },
                "subject": {
                    "type": "string",
                    "description": "Email subject line.",
                },
                "body": {
                    "type": "string",
                    "description": "Body of the email message.",
                },
            },
            "required": ["to", "subject", "body"],
            "additionalProperties": False,
        },
        args_model=EmailArgs,
        handler=functools.partial(send_email, delay=delay),
    )
