from unittest import mock

import pytest

from seatcall.calls.models import Call
from seatcall.realtime.events.calls import build_call_payload
from seatcall.realtime.events.calls import publish_call_updated
from seatcall.realtime.socketio import emit_event_to_user


@pytest.mark.django_db
def test_publish_call_updated_targets_both_participants(user, other_user):
    call = Call.objects.create(caller=user, receiver=other_user)

    with mock.patch("seatcall.realtime.events.calls.emit_event_to_user") as emit:
        publish_call_updated(call)

    payload = build_call_payload(call)
    assert payload["status"] == "pending"
    assert payload["ended_at"] is None
    emit.assert_has_calls(
        [
            mock.call(user.id, "call-updated", payload),
            mock.call(other_user.id, "call-updated", payload),
        ],
        any_order=True,
    )
    assert emit.call_count == 2


def test_emit_event_to_user_uses_user_room():
    with mock.patch(
        "seatcall.realtime.socketio.sio.emit", new_callable=mock.AsyncMock
    ) as emit:
        emit_event_to_user(4, "call-updated", {"id": 1})
    emit.assert_awaited_once_with("call-updated", {"id": 1}, to="user_4")
