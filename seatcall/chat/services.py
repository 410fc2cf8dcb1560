from __future__ import annotations

from django.db import transaction
from rest_framework.exceptions import ValidationError

from seatcall.chat.models import Message
from seatcall.core.store import record_store


def create_message(content: object, user_id: int | None) -> Message:
    """Persist one chat message; ``user_id`` is None for unregistered senders."""

    if not isinstance(content, str) or not content.strip():
        msg = "Message content must be a non-empty string."
        raise ValidationError({"content": [msg]})

    with record_store("Message"), transaction.atomic():
        return Message.objects.create(content=content, user_id=user_id)
