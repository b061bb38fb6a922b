"""Resolves receiver usernames and stores the results in the caches."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from giftbuyer.models import Channel, ResolvedPeer, User

_log = logging.getLogger(__name__)


class AccountError(Exception):
    """Receiver accounts could not be resolved."""


class _ResolveApi(Protocol):
    def resolve_username(self, username: str) -> ResolvedPeer: ...


class _UserCache(Protocol):
    def set_user(self, key: str, user: User | None) -> None: ...


class _ChannelCache(Protocol):
    def set_channel(self, key: str, channel: Channel | None) -> None: ...


class AccountManager:
    """Loads receiver users and channels by username into the caches."""

    def __init__(
        self,
        api: _ResolveApi | None,
        usernames: Iterable[str],
        channel_names: Iterable[str],
        user_cache: _UserCache | None,
        channel_cache: _ChannelCache | None,
    ) -> None:
        self.api = api
        self.usernames = list(usernames)
        self.channel_names = list(channel_names)
        self.user_cache = user_cache
        self.channel_cache = channel_cache

    def set_ids(self) -> None:
        """Resolve all configured users and channels.

        A user that cannot be resolved raises AccountError; channels that
        cannot be found are logged and skipped.
        """
        if self.api is None:
            raise AccountError("API client is nil")
        if self.usernames:
            try:
                self._load_users()
            except AccountError as exc:
                raise AccountError(f"failed to load users to cache: {exc}") from exc
        if self.channel_names:
            self._load_channels()

    def _resolve(self, name: str) -> ResolvedPeer:
        if self.api is None:
            raise AccountError("API client is nil")
        try:
            return self.api.resolve_username(name)
        except Exception as exc:
            raise AccountError(f"failed to resolve username: {exc}") from exc

    def _load_users(self) -> None:
        for username in self.usernames:
            name = username.removeprefix("@")
            resolved = self._resolve(name)
            for user in resolved.users:
                if isinstance(user, User):
                    self.user_cache.set_user(name, user)  # type: ignore[union-attr]

    def _load_channels(self) -> None:
        not_found = []
        for channel_name in self.channel_names:
            name = channel_name.removeprefix("@")
            try:
                channel = self._load_single_channel(name)
            except AccountError as exc:
                _log.error("failed to load channel %s: %s", channel_name, exc)
                not_found.append(channel_name)
                continue
            self.channel_cache.set_channel(name, channel)  # type: ignore[union-attr]
        if not_found:
            _log.warning("Channels not found or inaccessible: %s", not_found)

    def _load_single_channel(self, name: str) -> Channel:
        resolved = self._resolve(name)
        channel = next((chat for chat in resolved.chats if isinstance(chat, Channel)), None)
        if channel is None:
            raise AccountError(f"channel {name} not found in response")
        return channel