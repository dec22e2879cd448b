"""FastAPI application: Telegram webhook ingress plus service endpoints."""

from __future__ import annotations

import asyncio
import contextlib
import hmac
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.config import AppConfig
from src.logging_setup import configure_logging
from src.server.service_routes import create_service_router
from src.telegram.client import TelegramBotClient
from src.telegram.models import Update
from src.webhook.dispatcher import UpdateDispatcher

logger = logging.getLogger(__name__)

_MAX_WEBHOOK_BODY_SIZE = 1024 * 1024  # 1MB
_SECRET_HEADER = "x-telegram-bot-api-secret-token"


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    config = AppConfig.from_env()
    configure_logging(config.log_level)
    return create_app(config)


async def register_webhook_in_background(client: TelegramBotClient, config: AppConfig) -> bool:
    """One-shot setWebhook call; logs the outcome and never raises."""
    telegram = config.telegram
    logger.info("Initializing Telegram webhook at %s", client.webhook_url(telegram.domain))
    try:
        success = await client.register_webhook(telegram.domain, telegram.webhook_secret)
    except Exception:
        logger.exception("Failed to initialize webhook")
        return False
    if success:
        logger.info("Webhook registration completed successfully")
    else:
        logger.error("Webhook registration failed")
    return success


def create_app(config: AppConfig, client: TelegramBotClient | None = None) -> FastAPI:
    """Create the bot app. A client is built from ``config`` unless injected."""
    owns_client = client is None
    bot_client = client if client is not None else TelegramBotClient(
        config.telegram.bot_token, api_base=config.telegram.api_base,
    )
    dispatcher = UpdateDispatcher(bot_client)
    webhook_secret = config.telegram.webhook_secret

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        task: asyncio.Task[bool] | None = None
        if config.register_webhook:
            task = asyncio.create_task(register_webhook_in_background(bot_client, config))
        app.state.webhook_registration = task
        try:
            yield
        finally:
            if task is not None and not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            if owns_client:
                await bot_client.aclose()

    app = FastAPI(docs_url=None, redoc_url=None, lifespan=lifespan)
    app.state.config = config
    app.state.bot_client = bot_client

    @app.post("/webhook")
    async def telegram_webhook(request: Request) -> Response:
        if webhook_secret is not None:
            provided = request.headers.get(_SECRET_HEADER, "")
            if not hmac.compare_digest(provided.encode(), webhook_secret.encode()):
                return JSONResponse({"error": "Invalid webhook signature"}, status_code=401)

        try:
            body = await request.body()
            if len(body) > _MAX_WEBHOOK_BODY_SIZE:
                return JSONResponse({"error": "Request body too large"}, status_code=413)

            try:
                update = Update.model_validate_json(body)
            except ValidationError as e:
                logger.warning("Rejected malformed update: %d validation errors", e.error_count())
                return Response(status_code=400)

            logger.info("Received update: %d", update.update_id)
            success = await dispatcher.process_update(update)
        except Exception:
            logger.exception("Error processing webhook")
            return Response(status_code=400)

        return Response(status_code=200 if success else 500)

    app.include_router(create_service_router(bot_client, config.version_file))

    return app
