"""Classification of inbound updates for the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.telegram.models import Message, Update


class UpdateKind(str, Enum):
    MEMBERS_JOINED = "members_joined"
    CHANNEL_MEMBERS_JOINED = "channel_members_joined"
    MEMBER_LEFT = "member_left"
    IGNORED = "ignored"


@dataclass(frozen=True)
class Classification:
    """Tagged result of classifying an update.

    ``message`` is set for every kind except IGNORED.
    """

    kind: UpdateKind
    message: Message | None = None

    @property
    def target(self) -> tuple[int, int] | None:
        """(chat_id, message_id) to delete, if any."""
        if self.message is None:
            return None
        return self.message.chat.id, self.message.message_id


_IGNORED = Classification(UpdateKind.IGNORED)


def classify_update(update: Update) -> Classification:
    """Classify an update; the first matching rule wins."""
    if update.message is not None and update.message.has_new_members:
        return Classification(UpdateKind.MEMBERS_JOINED, update.message)
    if update.channel_post is not None and update.channel_post.has_new_members:
        return Classification(UpdateKind.CHANNEL_MEMBERS_JOINED, update.channel_post)
    if update.message is not None and update.message.left_chat_member is not None:
        return Classification(UpdateKind.MEMBER_LEFT, update.message)
    return _IGNORED
