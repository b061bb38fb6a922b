"""Thread-safe lookup of resolved users and channels by name."""

from __future__ import annotations

import threading

from giftbuyer.models import Channel, User


class IdCache:
    """Maps usernames to resolved users and channels."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._channels: dict[str, Channel] = {}
        self._lock = threading.Lock()

    def set_user(self, key: str, user: User | None) -> None:
        """Store ``user`` under ``key``; None is ignored."""
        if user is None:
            return
        with self._lock:
            self._users[key] = user

    def get_user(self, key: str) -> User:
        """Return the user stored under ``key`` or raise KeyError."""
        with self._lock:
            try:
                return self._users[key]
            except KeyError:
                raise KeyError("user not found") from None

    def set_channel(self, key: str, channel: Channel | None) -> None:
        """Store ``channel`` under ``key``; None is ignored."""
        if channel is None:
            return
        with self._lock:
            self._channels[key] = channel

    def get_channel(self, key: str) -> Channel:
        """Return the channel stored under ``key`` or raise KeyError."""
        with self._lock:
            try:
                return self._channels[key]
            except KeyError:
                raise KeyError("channel not found") from None