"""Operational endpoints: health check, service info and build metadata."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src.version import SERVICE_NAME, fallback_build_info, load_build_info, service_version

if TYPE_CHECKING:
    from src.telegram.client import TelegramBotClient

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def create_service_router(client: TelegramBotClient, version_file: str) -> APIRouter:
    """Create the router for /health, / and /version."""
    router = APIRouter()

    @router.get("/health")
    async def health() -> JSONResponse:
        """Probe the Bot API with getMe."""
        try:
            bot_info = await client.get_bot_info()
        except Exception as e:
            logger.exception("Health check failed")
            return JSONResponse(
                {"status": "error", "error": str(e), "timestamp": _now_ms()},
                status_code=500,
            )

        if bot_info is None:
            return JSONResponse(
                {
                    "status": "unhealthy",
                    "error": "Bot API connection failed",
                    "timestamp": _now_ms(),
                },
                status_code=503,
            )
        return JSONResponse({
            "status": "healthy",
            "bot": {
                "id": bot_info.id,
                "username": bot_info.username,
                "firstName": bot_info.first_name,
            },
            "timestamp": _now_ms(),
        })

    @router.get("/")
    async def info() -> dict[str, str]:
        return {
            "service": SERVICE_NAME,
            "version": service_version(),
            "status": "running",
        }

    @router.get("/version")
    async def build_version() -> JSONResponse:
        try:
            build_info = load_build_info(version_file)
        except Exception as e:
            logger.exception("Error reading version information from %s", version_file)
            return JSONResponse(
                {"error": "Failed to read version information", "message": str(e)},
                status_code=500,
            )
        return JSONResponse(build_info if build_info is not None else fallback_build_info())

    return router
