"""Shared test fixtures for the moderation bot."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from src.config import AppConfig, TelegramConfig
from src.telegram.client import TelegramBotClient
from src.telegram.models import BotInfo, Update

TEST_TOKEN = "123456:TEST-TOKEN"
TEST_DOMAIN = "bot.example.com"


@pytest.fixture
def telegram_config() -> TelegramConfig:
    return TelegramConfig(bot_token=TEST_TOKEN, domain=TEST_DOMAIN)


@pytest.fixture
def app_config(telegram_config: TelegramConfig) -> AppConfig:
    return AppConfig(telegram=telegram_config, register_webhook=False)


@pytest.fixture
def mock_bot_client() -> AsyncMock:
    client = AsyncMock(spec=TelegramBotClient)
    client.delete_message.return_value = True
    client.register_webhook.return_value = True
    client.get_bot_info.return_value = make_bot_info()
    client.webhook_url.side_effect = TelegramBotClient.webhook_url
    return client


# --- Factory functions for test data ---


def make_user(**kwargs: Any) -> dict[str, Any]:
    defaults: dict[str, Any] = {"id": 7, "is_bot": False, "first_name": "Alice"}
    defaults.update(kwargs)
    return defaults


def make_message(**kwargs: Any) -> dict[str, Any]:
    """Telegram wire-format message; defaults to a plain group text message."""
    defaults: dict[str, Any] = {
        "message_id": 5,
        "chat": {"id": 100, "type": "group"},
        "text": "hello",
    }
    defaults.update(kwargs)
    return defaults


def make_update_payload(**kwargs: Any) -> dict[str, Any]:
    defaults: dict[str, Any] = {"update_id": 1, "message": make_message()}
    defaults.update(kwargs)
    return defaults


def make_update(**kwargs: Any) -> Update:
    return Update.model_validate(make_update_payload(**kwargs))


def make_bot_info(**kwargs: Any) -> BotInfo:
    defaults: dict[str, Any] = {
        "id": 42,
        "is_bot": True,
        "first_name": "Moderator",
        "username": "moderator_bot",
    }
    defaults.update(kwargs)
    return BotInfo.model_validate(defaults)
