from __future__ import annotations

import argparse
import asyncio
import logging

import httpx

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


async def tool_roundtrip(base_url: str, question: str) -> None:
    """
    Run the two-request tool flow against a running relay.

    1) Send the user message; the model may answer or ask for a tool call
    2) If it asked, send the same message back naming the tool and its arguments
    3) The relay runs the tool, folds the result into a system prompt and answers
    """
    async with httpx.AsyncClient(base_url=base_url, timeout=60.0) as client:
        # Step 1 → plain message, tools are offered to the model
        rsp1 = await client.post("/message", json={"userMessage": question})
        rsp1.raise_for_status()
        item = rsp1.json()

        if item.get("type") != "function_call":
            logger.warning("Model answered directly: %s", item)
            return

        logger.info("Model asked for %s(%s)", item["name"], item["arguments"])

        # Step 2 → caller-selected tool call, executed server-side
        rsp2 = await client.post(
            "/message",
            json={
                "userMessage": question,
                "withToolCall": {"name": item["name"], "arguments": item["arguments"]},
            },
        )
        rsp2.raise_for_status()
        logger.info("Relay says: %s", rsp2.json())


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--base-url", default="http://localhost:3000")
    parser.add_argument("--question", default="What's the weather in Paris?")
    args = parser.parse_args()

    asyncio.run(tool_roundtrip(args.base_url, args.question))
