"""HTTP application for llm-relay.

Exposes ``POST /message`` and translates every failure into a JSON body:
- 400 for request or tool-argument validation errors,
- 404 for unmatched routes,
- 500 for everything else, with the raw error message.
"""

from __future__ import annotations

import argparse
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from llm_relay import __version__
from llm_relay._exceptions import ConfigError, RelayError, ToolArgumentError
from llm_relay.client import CompletionClient, OpenAIResponsesLLM
from llm_relay.handler import MessageHandler
from llm_relay.logging_setup import setup_logging
from llm_relay.provider import Settings, ToolFailureMode
from llm_relay.tools.registry import ToolRegistry, default_registry

LOG = logging.getLogger(__name__)


def _validation_response(errors: list) -> JSONResponse:
    issues = []
    for issue in errors:
        # json_invalid issues carry the raw body, which need not be valid UTF-8
        if isinstance(issue.get("input"), bytes):
            issue = {**issue, "input": issue["input"].decode("utf-8", "replace")}
        issues.append(issue)
    return JSONResponse(
        {"message": "Validation Error", "error": jsonable_encoder(issues)},
        status_code=400,
    )


def _internal_error_response(exc: Exception) -> JSONResponse:
    return JSONResponse(
        {"message": "Internal Server Error", "error": str(exc)},
        status_code=500,
    )


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse({"message": "Not Found"}, status_code=404)
    return JSONResponse({"message": exc.detail}, status_code=exc.status_code, headers=exc.headers)


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _validation_response(exc.errors(include_url=False, include_context=False))


async def handle_tool_argument_error(request: Request, exc: ToolArgumentError) -> JSONResponse:
    return _validation_response(exc.errors)


async def handle_error(request: Request, exc: Exception) -> JSONResponse:
    LOG.error("Request to %s failed: %s", request.url.path, exc, exc_info=exc)
    return _internal_error_response(exc)


async def catch_unexpected_errors(request: Request, call_next) -> Response:
    """Turn errors no exception handler claimed into the 500 envelope, inside the CORS layer."""
    try:
        return await call_next(request)
    except Exception as exc:
        return await handle_error(request, exc)


def get_handler(request: Request) -> MessageHandler:
    return request.app.state.handler


def create_app(
    settings: Optional[Settings] = None,
    *,
    llm: Optional[CompletionClient] = None,
    registry: Optional[ToolRegistry] = None,
    tool_failure: Optional[ToolFailureMode] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Process configuration. Read from the environment when both
            ``settings`` and ``llm`` are omitted.
        llm: Completion client to use instead of one built from ``settings``.
        registry: Tool registry; defaults to the built-in weather and email tools.
        tool_failure: Overrides ``settings.tool_failure``.

    Raises:
        ConfigError: if the client has to be built and the API key is missing.
    """
    owns_llm = llm is None
    if llm is None:
        settings = settings or Settings.from_env()
        llm = OpenAIResponsesLLM.from_settings(settings)

    if tool_failure is None:
        tool_failure = settings.tool_failure if settings else ToolFailureMode.RAISE

    handler = MessageHandler(llm, registry or default_registry(), tool_failure=tool_failure)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if owns_llm:
            await llm.aclose()

    app = FastAPI(title="LLM Relay", version=__version__, lifespan=lifespan)
    app.state.handler = handler

    # Added before CORSMiddleware so it sits inside it
    app.middleware("http")(catch_unexpected_errors)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(ToolArgumentError, handle_tool_argument_error)
    app.add_exception_handler(RelayError, handle_error)

    @app.post("/message")
    async def post_message(
        request: Request, handler: MessageHandler = Depends(get_handler)
    ) -> JSONResponse:
        item = await handler.handle(await request.body())
        return JSONResponse(item)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="llm-relay", description="Serve the LLM relay over HTTP.")
    parser.add_argument("--host", default=None, help="Bind address (default: LLM_RELAY_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: LLM_RELAY_PORT or 3000)")
    parser.add_argument("--log-level", default=None, help="Log level (default: LLM_RELAY_LOG_LEVEL or INFO)")
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        raise SystemExit(f"Configuration error: {exc}") from exc

    log_level = (args.log_level or settings.log_level).upper()
    setup_logging(log_level)

    app = create_app(settings)
    host = args.host or settings.host
    port = args.port or settings.port
    LOG.info("Server is running on http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())


if __name__ == "__main__":
    main()
