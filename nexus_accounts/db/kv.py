"""
Account Service — Key-value store port and adapters

The whole account core persists through three string keys holding JSON text.
Writers announce each change on a ChangeSignal with the key name only;
readers that care must re-read the key.

Adapters:
  - InMemoryKeyValueStore: tests and single-process use; optional byte quota
  - RedisKeyValueStore:    shared store; change signal over Redis pub/sub
"""
import logging
from typing import Callable, Protocol

import redis

from nexus_accounts.core.errors import StorageError

logger = logging.getLogger(__name__)

ChangeListener = Callable[[str], None]


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

    def ping(self) -> bool: ...


# ─── Change signal ────────────────────────────────────────────────────────────

class LocalChangeSignal:
    """In-process change signal. Listeners run synchronously, in order."""

    def __init__(self):
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, key: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(key)
            except Exception:
                # A broken reader must not fail the write that triggered it.
                logger.exception("Change listener failed for key %s", key)


class RedisChangeSignal(LocalChangeSignal):
    """
    Publishes changed key names on a Redis channel so other processes see
    them, and still notifies listeners registered in this process.
    """

    def __init__(self, client: redis.Redis, channel: str):
        super().__init__()
        self._client = client
        self.channel = channel

    def publish(self, key: str) -> None:
        try:
            self._client.publish(self.channel, key)
        except redis.RedisError as exc:
            # The write already landed; remote readers just miss this signal.
            logger.warning("Change signal for %s not published: %s", key, exc)
        super().publish(key)


# ─── Adapters ─────────────────────────────────────────────────────────────────

class InMemoryKeyValueStore:
    """
    Dict-backed store. `quota_bytes` caps the total size of stored values,
    the way a browser's local storage raises a quota error.
    """

    def __init__(self, signal: LocalChangeSignal | None = None, quota_bytes: int | None = None):
        self._data: dict[str, str] = {}
        self.signal = signal or LocalChangeSignal()
        self.quota_bytes = quota_bytes

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            used = sum(len(v.encode()) for k, v in self._data.items() if k != key)
            if used + len(value.encode()) > self.quota_bytes:
                raise StorageError(f"Storage quota exceeded writing '{key}'.")
        self._data[key] = value
        self.signal.publish(key)

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self.signal.publish(key)

    def ping(self) -> bool:
        return True


class RedisKeyValueStore:
    """Redis-backed store. Every RedisError surfaces as StorageError."""

    def __init__(self, client: redis.Redis, signal: RedisChangeSignal | None = None, prefix: str = ""):
        self._client = client
        self.signal = signal
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(self._key(key))
        except redis.RedisError as exc:
            raise StorageError(f"Could not read '{key}': {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(self._key(key), value)
        except redis.RedisError as exc:
            raise StorageError(f"Could not write '{key}': {exc}") from exc
        if self.signal:
            self.signal.publish(key)

    def remove(self, key: str) -> None:
        try:
            removed = self._client.delete(self._key(key))
        except redis.RedisError as exc:
            raise StorageError(f"Could not remove '{key}': {exc}") from exc
        if removed and self.signal:
            self.signal.publish(key)

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError as exc:
            raise StorageError(f"Redis unreachable: {exc}") from exc
