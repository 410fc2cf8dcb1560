from __future__ import annotations

import threading


class ConnectionRegistry:
    """Live connection id -> user id map.

    One instance per Socket.IO namespace, nothing is global. Every method
    takes the same lock, so concurrent register/resolve/forget calls from
    independent connections are safe.
    """

    def __init__(self) -> None:
        self._users: dict[str, int] = {}
        self._lock = threading.Lock()

    def register(self, connection_id: str, user_id: int) -> int | None:
        """Associate ``connection_id`` with ``user_id``; returns the previous user id."""
        with self._lock:
            previous = self._users.get(connection_id)
            self._users[connection_id] = user_id
        return previous

    def resolve(self, connection_id: str) -> int | None:
        with self._lock:
            return self._users.get(connection_id)

    def forget(self, connection_id: str) -> int | None:
        """Drop ``connection_id``; a no-op for connections that never registered."""
        with self._lock:
            return self._users.pop(connection_id, None)

    def is_registered(self, connection_id: str) -> bool:
        with self._lock:
            return connection_id in self._users

    def broadcast_targets(self) -> frozenset[str]:
        """Snapshot of the connections registered right now."""
        with self._lock:
            return frozenset(self._users)

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
