"""Socket.IO event handlers for the signaling relay.

Inbound events:
- ``register``: bind this connection to a user id
- ``offer`` / ``answer`` / ``ice-candidate`` / ``call-ended``: relayed to the
  target connection; ``answer`` and ``call-ended`` carrying a ``call_id`` also
  advance the call record
- ``message``: persisted, then broadcast to every registered connection

Every handler returns an ack dict. Rejections are also emitted to the sender
as ``relay-error``.
"""

from __future__ import annotations

import logging
from typing import Any

import socketio
from channels.db import database_sync_to_async
from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError
from socketio.exceptions import ConnectionRefusedError as ConnectionRefused

from seatcall.calls.services import answer_call
from seatcall.calls.services import end_call
from seatcall.core.exceptions import NotFound
from seatcall.core.exceptions import Unauthorized
from seatcall.core.exceptions import rejection_payload
from seatcall.core.store import record_store
from seatcall.realtime.events.calls import build_call_payload
from seatcall.realtime.events.chat import MessageRelay
from seatcall.realtime.registry import ConnectionRegistry
from seatcall.realtime.signaling import SignalingRouter
from seatcall.realtime.signaling import SignalMessage
from seatcall.realtime.socketio import extract_token
from seatcall.realtime.socketio import room_for_user
from seatcall.users.identity import verify

logger = logging.getLogger(__name__)

User = get_user_model()


def _parse_user_id(data: Any) -> int:
    value = data.get("user_id", data.get("userId")) if isinstance(data, dict) else data
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, bool) or not isinstance(value, int):
        msg = "A numeric user id is required."
        raise ValidationError({"user_id": [msg]})
    return value


def _user_exists(user_id: int) -> bool:
    with record_store("User"):
        return User.objects.filter(pk=user_id, is_active=True).exists()


class SignalingNamespace(socketio.AsyncNamespace):
    def __init__(
        self,
        namespace: str | None = None,
        *,
        registry: ConnectionRegistry | None = None,
    ) -> None:
        super().__init__(namespace)
        self.registry = registry if registry is not None else ConnectionRegistry()
        self.router = SignalingRouter(self.registry, self.emit)
        self.chat = MessageRelay(self.registry, self.emit)

    async def trigger_event(self, event: str, *args):
        # "ice-candidate" -> on_ice_candidate, "call-ended" -> on_call_ended
        return await super().trigger_event(event.replace("-", "_"), *args)

    # Connection lifecycle ---------------------------------------------------
    async def on_connect(self, sid: str, environ: dict[str, Any], auth: Any = None):
        token = extract_token(environ, auth)
        if not token:
            if settings.SIGNALING_REQUIRE_AUTH:
                msg = "unauthorized"
                raise ConnectionRefused(msg)
            logger.info("Anonymous connection %s", sid)
            return

        try:
            user_id = await database_sync_to_async(verify)(token)
        except Unauthorized as exc:
            raise ConnectionRefused(exc.get_codes()) from exc
        except Exception as exc:
            logger.exception("Socket.IO connect error")
            msg = "server_error"
            raise ConnectionRefused(msg) from exc

        await self.save_session(sid, {"user_id": user_id})
        await self._register(sid, user_id)

    async def on_disconnect(self, sid: str, reason: Any = None):
        user_id = self.registry.forget(sid)
        logger.info("Connection %s closed (user %s, reason %s)", sid, user_id, reason)

    async def on_register(self, sid: str, data: Any):
        try:
            user_id = _parse_user_id(data)
            session = await self.get_session(sid)
            verified = session.get("user_id") if isinstance(session, dict) else None
            if verified is not None and verified != user_id:
                msg = "Connection is authenticated as another user."
                raise Unauthorized(msg)
            if not await database_sync_to_async(_user_exists)(user_id):
                msg = f"User {user_id} not found."
                raise NotFound(msg)
        except APIException as exc:
            return await self._reject(sid, exc)

        await self._register(sid, user_id)
        return {"ok": True, "user_id": user_id, "connection_id": sid}

    # Signaling --------------------------------------------------------------
    async def on_offer(self, sid: str, data: Any):
        return await self._signal(sid, "offer", data)

    async def on_answer(self, sid: str, data: Any):
        return await self._signal(sid, "answer", data, transition=answer_call)

    async def on_ice_candidate(self, sid: str, data: Any):
        return await self._signal(sid, "ice-candidate", data)

    async def on_call_ended(self, sid: str, data: Any):
        return await self._signal(sid, "call-ended", data, transition=end_call)

    # Chat -------------------------------------------------------------------
    async def on_message(self, sid: str, data: Any):
        content = data.get("content") if isinstance(data, dict) else data
        try:
            payload = await self.chat.relay(sid, content)
        except APIException as exc:
            return await self._reject(sid, exc)
        return {"ok": True, "message": payload}

    # Helpers ----------------------------------------------------------------
    async def _register(self, sid: str, user_id: int) -> None:
        previous = self.registry.register(sid, user_id)
        if previous is not None and previous != user_id:
            await self.leave_room(sid, room_for_user(previous))
        await self.enter_room(sid, room_for_user(user_id))
        logger.info("Connection %s registered as user %s", sid, user_id)

    async def _signal(self, sid: str, kind: str, data: Any, transition=None):
        try:
            message = SignalMessage.from_payload(data)
        except ValidationError as exc:
            return await self._reject(sid, exc)

        ack: dict[str, Any] = {"ok": True}
        if transition is not None and message.call_id is not None:
            actor_id = self.registry.resolve(sid)
            try:
                call, changed = await database_sync_to_async(transition)(
                    message.call_id, actor_id=actor_id
                )
            except APIException as exc:
                # The negotiation metadata is still relayed; only the record
                # update failed.
                ack = dict(await self._reject(sid, exc))
            else:
                ack["call"] = build_call_payload(call)
                ack["changed"] = changed

        ack["delivered"] = await self.router.relay(sid, kind, message)
        return ack

    async def _reject(self, sid: str, exc: APIException) -> dict[str, Any]:
        payload = rejection_payload(exc)
        logger.info("Rejected event from %s: %s", sid, payload["error"])
        await self.emit("relay-error", payload, to=sid)
        return payload
