"""Async client for the Telegram Bot API methods used by the bot.

Every call collapses its outcome to a boolean or an optional result:
transport faults, undecodable bodies and ``ok: false`` envelopes are logged
here and never raised to the caller.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from src.config import DEFAULT_API_BASE
from src.telegram.models import ApiResponse, BotInfo

logger = logging.getLogger(__name__)

ALLOWED_UPDATES = ("message", "channel_post")


class TelegramBotClient:
    """Thin request/response mapping over a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        bot_token: str,
        http_client: httpx.AsyncClient | None = None,
        api_base: str = DEFAULT_API_BASE,
    ) -> None:
        self._bot_api_url = f"{api_base.rstrip('/')}/bot{bot_token}"
        self._owns_client = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient(verify=True)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    @staticmethod
    def webhook_url(domain: str) -> str:
        return f"https://{domain}/webhook"

    async def register_webhook(self, domain: str, secret_token: str | None = None) -> bool:
        """Point Telegram at ``https://{domain}/webhook``."""
        payload: dict[str, Any] = {
            "url": self.webhook_url(domain),
            "allowed_updates": list(ALLOWED_UPDATES),
        }
        if secret_token:
            payload["secret_token"] = secret_token
        response = await self._call("setWebhook", json=payload)
        return response is not None and response.ok

    async def delete_message(self, chat_id: int, message_id: int) -> bool:
        response = await self._call(
            "deleteMessage", json={"chat_id": chat_id, "message_id": message_id},
        )
        return response is not None and response.ok

    async def get_bot_info(self) -> BotInfo | None:
        """Probe connectivity; returns the bot identity or None."""
        response = await self._call("getMe", http_method="GET")
        if response is None or not response.ok or response.result is None:
            return None
        try:
            return BotInfo.model_validate(response.result)
        except ValidationError:
            logger.error("Unexpected getMe result: %s", response.result)
            return None

    async def _call(
        self,
        method: str,
        http_method: str = "POST",
        json: dict[str, Any] | None = None,
    ) -> ApiResponse | None:
        url = f"{self._bot_api_url}/{method}"
        try:
            resp = await self._http.request(http_method, url, json=json)
        except httpx.HTTPError as exc:
            # str(exc) can embed the request URL, which carries the token
            logger.error("Bot API %s failed: %s", method, type(exc).__name__)
            return None

        try:
            response = ApiResponse.model_validate_json(resp.content)
        except ValidationError:
            logger.error(
                "Bot API %s returned an undecodable body (HTTP %d)", method, resp.status_code,
            )
            return None

        if not response.ok:
            logger.warning(
                "Bot API %s not ok: error_code=%s description=%s",
                method, response.error_code, response.description,
            )
        return response
