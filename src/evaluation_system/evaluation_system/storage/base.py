from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageEvent:
    """Emitted after a key is written or removed.

    new_value is None when the key was removed or the whole storage cleared
    (key is None in that case).
    """

    key: Optional[str]
    old_value: Optional[str]
    new_value: Optional[str]


StorageListener = Callable[[StorageEvent], None]


class LocalStorage(Protocol):
    """String key/value store with change notification.

    Note (DIP): repositories depend on this interface, never on a concrete backend.
    """

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> Iterable[str]:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def subscribe(self, listener: StorageListener) -> Callable[[], None]:
        raise NotImplementedError


class ObservableStorage(ABC):
    """Shared event plumbing; backends implement the raw reads/writes.

    Writes are last-write-wins: there is no locking between writers.
    """

    def __init__(self) -> None:
        self._listeners: list[StorageListener] = []

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def _write(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def _delete(self, key: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def _delete_all(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def keys(self) -> list[str]:
        raise NotImplementedError

    def get_item(self, key: str) -> Optional[str]:
        return self._read(key)

    def set_item(self, key: str, value: str) -> None:
        old = self._read(key)
        self._write(key, value)
        if old != value:
            self._emit(StorageEvent(key=key, old_value=old, new_value=value))

    def remove_item(self, key: str) -> None:
        old = self._read(key)
        if old is None:
            return
        self._delete(key)
        self._emit(StorageEvent(key=key, old_value=old, new_value=None))

    def clear(self) -> None:
        self._delete_all()
        self._emit(StorageEvent(key=None, old_value=None, new_value=None))

    def subscribe(self, listener: StorageListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: StorageEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # A broken listener must not undo a write that already happened.
                logger.exception("Storage listener failed for key=%s", event.key)


def read_json(storage: LocalStorage, key: str, default: Any) -> Any:
    """Decode a stored JSON value.

    Corrupt values, and objects stored where a list is expected, fall back to
    the default (logged).
    """
    raw = storage.get_item(key)
    if not raw:
        return default
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Corrupt JSON under storage key %r, using default", key)
        return default

    if isinstance(default, list) and not isinstance(parsed, list):
        logger.warning("Expected array for key %r but got %s, using default", key, type(parsed).__name__)
        return default
    if isinstance(default, dict) and not isinstance(parsed, dict):
        logger.warning("Expected object for key %r but got %s, using default", key, type(parsed).__name__)
        return default
    return parsed


def write_json(storage: LocalStorage, key: str, data: Any) -> None:
    storage.set_item(key, json.dumps(data, ensure_ascii=False))
