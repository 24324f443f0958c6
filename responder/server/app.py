"""FastAPI application exposing the webhook endpoints."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from responder.config import Settings
from responder.webhook.controller import WebhookController
from responder.webhook.models import WebhookResponse

logger = logging.getLogger(__name__)

ROOT_TEXT = "server up and running!"


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    return create_app(Settings.from_env())


def create_app(
    settings: Settings,
    controller: WebhookController | None = None,
) -> FastAPI:
    """Create the webhook FastAPI app for ``settings``."""
    if controller is None:
        controller = WebhookController.from_settings(settings)
    webhook_path = f"/webhook/{settings.webhook_provider}"

    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/")
    async def root() -> PlainTextResponse:
        return PlainTextResponse(ROOT_TEXT)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get(webhook_path)
    async def crc_check(request: Request) -> Response:
        tokens = request.query_params.getlist("crc_token")
        result = controller.handle_crc(tokens[0] if tokens else None)
        return _to_response(result)

    @app.post(webhook_path)
    async def receive_event(request: Request) -> Response:
        body = await request.body()
        result = await controller.handle_event(body)
        return _to_response(result)

    logger.info("Webhook endpoint registered at %s", webhook_path)
    return app


def _to_response(result: WebhookResponse) -> Response:
    if result.payload is not None:
        return JSONResponse(result.payload, status_code=result.status_code)
    return PlainTextResponse(result.text, status_code=result.status_code)
