from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:  # import for type checking only
    from seatcall.calls.models import Call
from seatcall.realtime.socketio import emit_event_to_user


def build_call_payload(call: Call) -> dict[str, Any]:
    return {
        "id": call.id,
        "caller_id": call.caller_id,
        "receiver_id": call.receiver_id,
        "status": call.status,
        "started_at": call.started_at.isoformat() if call.started_at else None,
        "ended_at": call.ended_at.isoformat() if call.ended_at else None,
    }


def publish_call_updated(call: Call) -> None:
    """Push the call's current state to both participants in realtime."""

    payload = build_call_payload(call)
    for user_id in {call.caller_id, call.receiver_id}:
        emit_event_to_user(user_id, "call-updated", payload)
