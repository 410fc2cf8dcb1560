"""Socket.IO server for the signaling relay.

Frontend convention:
- URL base: ws://<host>:8000
- Socket.IO path: settings.SIGNALING_SOCKETIO_PATH (default /ws/signaling/)
- Auth (optional unless SIGNALING_REQUIRE_AUTH): `query.token` or
  `auth: { token }` carrying a JWT access token

Event handlers live in ``seatcall.realtime.namespace``; config/asgi.py
registers them on ``sio``. The helpers below let sync Django code publish to
connected users.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qs

import socketio
from asgiref.sync import async_to_sync
from django.conf import settings

logger = logging.getLogger(__name__)


def _cors_allowed_origins() -> str | list[str]:
    origins = list(settings.SIGNALING_CORS_ALLOWED_ORIGINS)
    return "*" if "*" in origins else origins


sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=_cors_allowed_origins(),
    # Each connection's events are handled in arrival order by that
    # connection's own task; other connections are not blocked.
    async_handlers=False,
    logger=False,
    engineio_logger=False,
)


def room_for_user(user_id: int) -> str:
    return f"user_{int(user_id)}"


def extract_token(environ: dict[str, Any], auth: Any | None) -> str | None:
    """Extract JWT token from Socket.IO environ/auth.

    Handles python-socketio environ shapes across ASGI/WSGI servers.
    """

    scope: Any = environ
    if isinstance(environ, dict) and "asgi.scope" in environ:
        inner = environ.get("asgi.scope")
        if isinstance(inner, dict):
            scope = inner

    query_string: str | bytes = ""
    if isinstance(scope, dict) and "query_string" in scope:
        query_string = scope.get("query_string", b"")
    elif isinstance(scope, dict) and "QUERY_STRING" in scope:
        query_string = scope.get("QUERY_STRING", "")

    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")

    token = parse_qs(str(query_string)).get("token", [None])[0]
    if isinstance(token, str) and token:
        return token

    # Allow `auth: { token }` as fallback.
    if isinstance(auth, dict):
        auth_token = auth.get("token")
        if isinstance(auth_token, str) and auth_token:
            return auth_token

    return None


def emit_event_to_room(room: str, event: str, payload: dict[str, Any]) -> None:
    """Emit an event to a room from sync Django code.

    If nobody is in the room this is effectively a no-op.
    """

    async_to_sync(sio.emit)(event, payload, to=room)


def emit_event_to_user(user_id: int, event: str, payload: dict[str, Any]) -> None:
    emit_event_to_room(room_for_user(user_id), event, payload)
