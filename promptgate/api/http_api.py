"""
HTTP API adapter for the promptgate orchestrator.

Architectural role:
- Expose the chat and health endpoints.
- Enforce adapter-level input validation.
- Build the typed `RequestContext` from inbound headers.
- Delegate generation/publishing to `ChatOrchestrator.process_chat`.

Endpoint responsibilities:
- `POST /api/v1/chat/ask`: validate the prompt, invoke the orchestrator and
  return the canonical `{"response": ...}` body.
- `GET /health`: liveness check.

API request lifecycle (`POST /api/v1/chat/ask`):
1. Middleware assigns a request id (`X-Request-Id` or a fresh uuid4) and logs
   the request once it completes.
2. Parse request JSON and validate `prompt`.
3. Read `X-Correlation-ID` / `X-Routing-ID` into a `RequestContext` carrying
   the configured deadline.
4. Run the synchronous orchestrator in the threadpool while a watcher polls
   `request.is_disconnected()`; a disconnect cancels the context so no
   further outbound call (provider or publish) is started.
5. Map orchestrator failures to HTTP 500.

Input validation behavior:
- Unparsable JSON -> HTTP 400.
- Body is not an object, or `prompt` is missing / not a string -> HTTP 400.
- Empty `prompt` -> HTTP 400.

Error handling strategy:
- Provider and publish failures return `{"error": "Error processing chat: ..."}`
  with HTTP 500 and the lower-layer cause in the message.
- Anything else escaping a handler is answered by the catch-all handler with
  a structured `internal_server_error` body.
"""

import asyncio
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from promptgate.config import Settings
from promptgate.core.errors import PromptGateError
from promptgate.core.orchestrator import ChatOrchestrator
from promptgate.core.types import PromptRequest, RequestContext

logger = logging.getLogger(__name__)

SERVICE_NAME = "promptgate"

REQUEST_ID_HEADER = "X-Request-Id"
CORRELATION_ID_HEADER = "X-Correlation-ID"
ROUTING_ID_HEADER = "X-Routing-ID"

CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
CORS_ALLOWED_HEADERS = [
    "Origin",
    "Content-Length",
    "Content-Type",
    "Authorization",
    "X-Routing-Id",
    "X-Correlation-Id",
    "X-Request-Id",
]
CORS_MAX_AGE = 12 * 60 * 60

DISCONNECT_POLL_INTERVAL = 0.05


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": f"Invalid request format: {message}"})


def parse_prompt_request(body) -> PromptRequest:
    """
    Validate a decoded JSON body into a `PromptRequest`.

    Raises `ValueError` with a caller-facing message on any validation failure.
    The core itself accepts empty prompts; rejecting them is a boundary rule.
    """
    if not isinstance(body, dict):
        raise ValueError("request body must be a JSON object")
    try:
        request = PromptRequest.model_validate(body)
    except ValidationError as err:
        first = err.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "body"
        raise ValueError(f"{field}: {first.get('msg', 'invalid value')}") from err
    if not request.prompt:
        raise ValueError("prompt: field required")
    return request


async def watch_disconnect(request: Request, ctx: RequestContext) -> None:
    """
    Cancel `ctx` as soon as the client disconnects.

    Runs alongside the orchestrator and is cancelled once it returns.
    """
    while not ctx.cancelled:
        if await request.is_disconnected():
            logger.info("Client disconnected, cancelling request_id=%s", ctx.request_id)
            ctx.cancel()
            return
        await asyncio.sleep(DISCONNECT_POLL_INTERVAL)


class RequestIdMiddleware:
    """
    Assign a request id, echo it in the response and log the request.

    Plain ASGI rather than `BaseHTTPMiddleware` so the route handler keeps the
    server's own `receive` and `request.is_disconnected()` sees disconnects.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        status = 500

        async def send_with_request_id(message: Message) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        started = time.perf_counter()
        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            logger.info(
                "HTTP Request method=%s path=%s status=%s latency_ms=%.1f client_ip=%s "
                "user_agent=%r request_id=%s",
                request.method,
                request.url.path,
                status,
                (time.perf_counter() - started) * 1000,
                request.client.host if request.client else "-",
                request.headers.get("user-agent", ""),
                request_id,
            )


def create_app(orchestrator: ChatOrchestrator, settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application around an already-constructed orchestrator.

    The orchestrator (and the provider/publisher behind it) is selected once at
    bootstrap; this factory only wires routes and middleware.
    """
    settings = settings or Settings()
    app = FastAPI(title=SERVICE_NAME)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=CORS_ALLOWED_HEADERS,
        expose_headers=["Content-Length"],
        allow_credentials=True,
        max_age=CORS_MAX_AGE,
    )

    app.add_middleware(RequestIdMiddleware)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred",
                "code": 500,
            },
        )

    # ============================================================
    # Routes
    # ============================================================

    @app.get("/health")
    def health():
        return {"status": "OK", "message": f"{SERVICE_NAME} API is running"}

    @app.post("/api/v1/chat/ask")
    async def ask(request: Request):
        try:
            body = await request.json()
        except ValueError as err:
            return _bad_request(str(err))

        try:
            prompt_request = parse_prompt_request(body)
        except ValueError as err:
            return _bad_request(str(err))

        ctx = RequestContext.with_timeout(
            settings.request_timeout,
            correlation_id=request.headers.get(CORRELATION_ID_HEADER),
            routing_id=request.headers.get(ROUTING_ID_HEADER),
            request_id=getattr(request.state, "request_id", None),
        )
        logger.info(
            "%s received: %s, %s received: %s",
            CORRELATION_ID_HEADER,
            ctx.correlation_id,
            ROUTING_ID_HEADER,
            ctx.routing_id,
        )

        watcher = asyncio.create_task(watch_disconnect(request, ctx))
        try:
            result = await run_in_threadpool(orchestrator.process_chat, ctx, prompt_request)
        except PromptGateError as err:
            return JSONResponse(
                status_code=500,
                content={"error": f"Error processing chat: {err}"},
            )
        finally:
            watcher.cancel()

        return result.model_dump()

    return app
