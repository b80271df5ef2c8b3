"""FastAPI application receiving Slack Events API webhooks.

WHY: Slack delivers reaction_added events by POSTing to a public URL and
expects an answer within 3 seconds. Translating and posting takes longer,
so the endpoint verifies the request, acknowledges it immediately and
hands the event to the relay as a background task.

HOW: create_app() builds a FastAPI app around an immutable Settings record
and a ReactionRelay. POST /slack/events verifies the Slack signature over
the raw body, parses the envelope, answers url_verification handshakes and
schedules reaction_added events with FastAPI BackgroundTasks (run in the
thread pool after the response is sent).

RULES:
- Bad, missing or stale signatures → 401 "Unauthorized", nothing parsed
- url_verification → 200 with the challenge as text/plain
- event_callback and anything else → 200 "OK"
- Malformed payloads → 500 "Internal Server Error"
- Unknown paths and methods → 404 "Not Found"
- Background task errors never reach the HTTP response
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, FastAPI, Request
from fastapi.responses import PlainTextResponse, Response

from reaction_translator import __version__
from reaction_translator.config import Settings, load_settings
from reaction_translator.core.relay import ReactionRelay
from reaction_translator.core.signature import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    verify_signature,
)
from reaction_translator.server.models import (
    EVENT_CALLBACK,
    REACTION_ADDED,
    URL_VERIFICATION,
    HealthResponse,
    SlackEnvelope,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def create_app(settings: Settings, relay: Optional[ReactionRelay] = None) -> FastAPI:
    """Create the FastAPI app.

    RULES:
    - If relay is None, one is built from settings with real clients
    - The relay's clients are closed on shutdown
    - OpenAPI docs are disabled: only the documented routes exist
    """
    if relay is None:
        relay = ReactionRelay.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        relay.close()

    app = FastAPI(
        lifespan=lifespan,
        title="Reaction Translator",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.relay = relay
    app.include_router(router)
    app.add_exception_handler(404, _not_found)
    app.add_exception_handler(405, _not_found)
    return app


async def _not_found(request: Request, exc: Exception) -> PlainTextResponse:
    logger.info(
        "Unhandled HTTP request (%s) made to %s", request.method, request.url.path
    )
    return PlainTextResponse("Not Found", status_code=404)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/")
async def root() -> PlainTextResponse:
    return PlainTextResponse("OK")


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@router.post("/slack/events")
async def slack_events(request: Request, background_tasks: BackgroundTasks) -> Response:
    settings = request.app.state.settings  # type: Settings
    relay = request.app.state.relay  # type: ReactionRelay

    body = await request.body()
    timestamp = request.headers.get(TIMESTAMP_HEADER)
    signature = request.headers.get(SIGNATURE_HEADER)

    if not timestamp or not signature:
        logger.error("Missing Slack signature headers")
        return PlainTextResponse("Unauthorized", status_code=401)

    if not verify_signature(body, timestamp, signature, settings.slack_signing_secret):
        logger.error("Invalid Slack request signature or stale timestamp")
        return PlainTextResponse("Unauthorized", status_code=401)

    try:
        envelope = SlackEnvelope.model_validate(json.loads(body))

        if envelope.type == URL_VERIFICATION:
            if envelope.challenge is None:
                raise ValueError("url_verification request without a challenge")
            return PlainTextResponse(envelope.challenge)

        if envelope.type == EVENT_CALLBACK and envelope.event_type == REACTION_ADDED:
            background_tasks.add_task(relay.handle_reaction_added, envelope.event)

        return PlainTextResponse("OK")
    except Exception:
        logger.exception("Error processing request")
        return PlainTextResponse("Internal Server Error", status_code=500)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> None:
    """Start the webhook server with uvicorn.

    RULES:
    - Refuses to start (exit 1) when required settings are missing
    - --host/--port override HOST/PORT from the environment
    """
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    parser = argparse.ArgumentParser(
        prog="reaction-translator",
        description="Translate Slack messages when someone reacts with a flag emoji.",
    )
    parser.add_argument("--host", default=None, help="Interface to bind (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: $PORT or 10000)")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    if args.host:
        settings = replace(settings, host=args.host)
    if args.port:
        settings = replace(settings, port=args.port)

    app = create_app(settings)
    logger.info("Starting server on %s:%d...", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
