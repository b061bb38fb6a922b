"""Thread-safe gift cache that is periodically persisted to a JSON file."""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path

from giftbuyer.models import StarGift

_log = logging.getLogger(__name__)


class GiftCache:
    """Keeps seen gifts in memory and appends new ones to a JSON file."""

    def __init__(self, path: str | Path = "cache.json", interval: float = 5.0) -> None:
        self.path = Path(path)
        self.interval = interval
        self._gifts: dict[int, StarGift] = {}
        self._lock = threading.RLock()
        self._save_lock = threading.Lock()
        self._stop = threading.Event()
        self._load()
        self._thread = threading.Thread(target=self._periodic_save, daemon=True)
        self._thread.start()

    def _periodic_save(self) -> None:
        while not self._stop.wait(self.interval):
            self.save()
        self.save()

    def _read_file(self) -> dict:
        data = json.loads(self.path.read_bytes())
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError("cache file does not hold a JSON object")
        return data

    def _load(self) -> None:
        try:
            data = self._read_file()
        except FileNotFoundError:
            return
        except (OSError, ValueError) as exc:
            _log.warning("Failed to read cache file: %s", exc)
            return
        loaded = {}
        try:
            for cached in data.values():
                cached = cached or {}
                gift = StarGift(id=int(cached.get("id", 0)), stars=int(cached.get("stars", 0)))
                loaded[gift.id] = gift
        except (AttributeError, TypeError, ValueError) as exc:
            _log.warning("Failed to unmarshal cache file: %s", exc)
            return
        with self._lock:
            self._gifts.update(loaded)
        _log.info("Loaded %d gifts from cache file", len(loaded))

    def set_gift(self, gift_id: int, gift: StarGift) -> None:
        """Store ``gift`` under ``gift_id``."""
        with self._lock:
            self._gifts[gift_id] = gift

    def get_gift(self, gift_id: int) -> StarGift | None:
        """Return the cached gift, or None when it is not cached."""
        with self._lock:
            return self._gifts.get(gift_id)

    def get_all_gifts(self) -> dict[int, StarGift]:
        """Return a copy of all cached gifts."""
        with self._lock:
            return dict(self._gifts)

    def has_gift(self, gift_id: int) -> bool:
        """Tell whether a gift with ``gift_id`` is cached."""
        with self._lock:
            return gift_id in self._gifts

    def delete_gift(self, gift_id: int) -> None:
        """Remove a gift from the cache if present."""
        with self._lock:
            self._gifts.pop(gift_id, None)

    def clear(self) -> None:
        """Remove all gifts from the cache."""
        with self._lock:
            self._gifts = {}

    def save(self) -> int:
        """Add gifts not yet in the file to it and return how many were added."""
        with self._save_lock:
            existing: dict = {}
            try:
                existing = self._read_file()
            except FileNotFoundError:
                pass
            except (OSError, ValueError) as exc:
                _log.warning("Failed to unmarshal existing cache: %s", exc)
                existing = {}
            with self._lock:
                snapshot = list(self._gifts.items())
            added = 0
            for gift_id, gift in snapshot:
                key = str(gift_id)
                if key not in existing:
                    existing[key] = {"id": gift.id, "stars": gift.stars}
                    added += 1
            if not added:
                return 0
            text = json.dumps(existing, indent=2, sort_keys=True)
            try:
                fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(text)
            except OSError as exc:
                _log.error("Failed to write cache to file: %s", exc)
                return 0
            _log.info("Saved %d new gifts to cache file", added)
            return added

    def close(self) -> None:
        """Stop periodic saving after a final save."""
        if not self._stop.is_set():
            self._stop.set()
            self._thread.join()

    def __enter__(self) -> GiftCache:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()