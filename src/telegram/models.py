"""Pydantic models for the subset of the Telegram Bot API used by the bot.

Fields accept the Bot API wire names (``update_id``) as well as their
camelCase aliases (``updateId``).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TelegramModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ChatType(str, Enum):
    PRIVATE = "private"
    GROUP = "group"
    SUPERGROUP = "supergroup"
    CHANNEL = "channel"


class User(TelegramModel):
    """https://core.telegram.org/bots/api#user"""

    id: int
    is_bot: bool
    first_name: str
    last_name: str | None = None
    username: str | None = None


class Chat(TelegramModel):
    """https://core.telegram.org/bots/api#chat"""

    id: int
    type: ChatType
    title: str | None = None
    username: str | None = None


class Message(TelegramModel):
    """https://core.telegram.org/bots/api#message"""

    message_id: int
    chat: Chat
    date: int | None = None
    text: str | None = None
    new_chat_members: list[User] | None = None
    left_chat_member: User | None = None

    @property
    def has_new_members(self) -> bool:
        return bool(self.new_chat_members)


class Update(TelegramModel):
    """https://core.telegram.org/bots/api#update"""

    update_id: int
    message: Message | None = None
    channel_post: Message | None = None


class BotInfo(TelegramModel):
    """Bot identity returned by ``getMe``."""

    id: int
    is_bot: bool
    first_name: str
    username: str | None = None


class ApiResponse(TelegramModel):
    """Envelope wrapping every Bot API response."""

    ok: bool
    result: Any = None
    description: str | None = None
    error_code: int | None = None
