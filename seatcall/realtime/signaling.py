"""Pass-through relay for WebRTC negotiation messages.

The router never looks inside a payload and never resolves recipients: the
sender names the target connection id (learned out of band, e.g. from a
previous ``offer``) and the router delivers to it if it is still registered.
Delivery is best-effort; a vanished target is not an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import Any

from rest_framework.exceptions import ValidationError

if TYPE_CHECKING:  # import for type checking only
    from collections.abc import Awaitable
    from collections.abc import Callable

    from seatcall.realtime.registry import ConnectionRegistry

logger = logging.getLogger(__name__)

SIGNAL_KINDS = frozenset({"offer", "answer", "ice-candidate", "call-ended"})


def _coerce_call_id(value: Any) -> int:
    if isinstance(value, bool):
        msg = "Must be an integer."
        raise ValidationError({"call_id": [msg]})
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    msg = "Must be an integer."
    raise ValidationError({"call_id": [msg]})


@dataclass(frozen=True)
class SignalMessage:
    """One inbound negotiation message.

    Accepted keys: ``target`` (or ``targetConnectionId``), ``payload`` and an
    optional ``call_id`` (or ``callId``).
    """

    target: str
    payload: Any = None
    call_id: int | None = None

    @classmethod
    def from_payload(cls, data: Any) -> SignalMessage:
        if not isinstance(data, dict):
            msg = "Signaling message must be an object."
            raise ValidationError([msg])

        target = data.get("target", data.get("targetConnectionId"))
        if not isinstance(target, str) or not target:
            msg = "Target connection id is required."
            raise ValidationError({"target": [msg]})

        call_id = data.get("call_id", data.get("callId"))
        return cls(
            target=target,
            payload=data.get("payload"),
            call_id=None if call_id is None else _coerce_call_id(call_id),
        )


class SignalingRouter:
    def __init__(
        self,
        registry: ConnectionRegistry,
        emit: Callable[..., Awaitable[Any]],
    ) -> None:
        self.registry = registry
        self._emit = emit

    async def relay(self, sender: str, kind: str, message: SignalMessage) -> bool:
        """Forward ``message`` to its target as ``kind``; True if it was sent."""

        if kind not in SIGNAL_KINDS:
            msg = f"Unknown signaling message kind: {kind}"
            raise ValueError(msg)

        if not self.registry.is_registered(message.target):
            logger.debug(
                "Dropping %s from %s: target %s is not connected",
                kind,
                sender,
                message.target,
            )
            return False

        envelope: dict[str, Any] = {"from": sender, "payload": message.payload}
        if message.call_id is not None:
            envelope["call_id"] = message.call_id
        await self._emit(kind, envelope, to=message.target)
        return True
