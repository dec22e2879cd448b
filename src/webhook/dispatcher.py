"""Update dispatcher: delete membership-change service messages.

Performs at most one outbound ``deleteMessage`` per update and reports a
boolean outcome. Faults are logged and reported as failure, never raised.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.webhook.models import UpdateKind, classify_update

if TYPE_CHECKING:
    from src.telegram.client import TelegramBotClient
    from src.telegram.models import Message, Update

logger = logging.getLogger(__name__)


class UpdateDispatcher:
    """Classifies updates and issues the matching moderation action."""

    def __init__(self, client: TelegramBotClient) -> None:
        self._client = client

    async def process_update(self, update: Update) -> bool:
        try:
            classification = classify_update(update)
            message = classification.message
            target = classification.target

            if classification.kind is UpdateKind.IGNORED or message is None or target is None:
                logger.debug("Ignoring update %d", update.update_id)
                return True

            if classification.kind is UpdateKind.MEMBER_LEFT:
                logger.info(
                    "Member left message detected in chat %d", message.chat.id,
                )
            else:
                self._log_new_members(classification.kind, message)

            return await self._delete(*target)
        except Exception:
            logger.exception("Error processing update %d", update.update_id)
            return False

    async def _delete(self, chat_id: int, message_id: int) -> bool:
        deleted = await self._client.delete_message(chat_id, message_id)
        if deleted:
            logger.info("Deleted message %d in chat %d", message_id, chat_id)
        else:
            logger.warning("Failed to delete message %d in chat %d", message_id, chat_id)
        return deleted

    @staticmethod
    def _log_new_members(kind: UpdateKind, message: Message) -> None:
        members = message.new_chat_members or []
        where = "channel" if kind is UpdateKind.CHANNEL_MEMBERS_JOINED else "chat"
        logger.info(
            "New member message detected in %s %d with %d members",
            where, message.chat.id, len(members),
        )
        for member in members:
            logger.debug(
                "New member: id=%d, firstName=%r, username=%r",
                member.id, member.first_name, member.username,
            )
