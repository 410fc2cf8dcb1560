from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

from channels.db import database_sync_to_async

from seatcall.chat.services import create_message

if TYPE_CHECKING:  # import for type checking only
    from collections.abc import Awaitable
    from collections.abc import Callable

    from seatcall.chat.models import Message
    from seatcall.realtime.registry import ConnectionRegistry

logger = logging.getLogger(__name__)


def build_message_payload(message: Message) -> dict[str, Any]:
    return {
        "id": message.id,
        "content": message.content,
        "user_id": message.user_id,
        "created_at": message.created_at.isoformat(),
    }


class MessageRelay:
    """Persist a chat message, then fan it out to registered connections."""

    def __init__(
        self,
        registry: ConnectionRegistry,
        emit: Callable[..., Awaitable[Any]],
    ) -> None:
        self.registry = registry
        self._emit = emit

    async def relay(self, sender: str, content: object) -> dict[str, Any]:
        author_id = self.registry.resolve(sender)
        message = await database_sync_to_async(create_message)(content, author_id)
        payload = build_message_payload(message)

        # Snapshot after the write: only connections registered now get it.
        targets = self.registry.broadcast_targets()
        for target in targets:
            await self._emit("message", payload, to=target)
        logger.debug("Message %s broadcast to %d connections", message.id, len(targets))
        return payload
