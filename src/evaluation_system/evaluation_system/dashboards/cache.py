from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from ..storage.base import LocalStorage, StorageEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    keys: tuple[str, ...]
    stamp: tuple[Optional[str], ...]
    value: Any


class ViewCache:
    """Memoised dashboard views, keyed on the storage keys they read.

    Writes through this process's storage object drop entries at once via
    StorageEvents. Writes by other workers sharing the backend (JSON file,
    MySQL) are caught by comparing a digest of each dependency key before an
    entry is served.
    """

    def __init__(self, storage: LocalStorage):
        self._storage = storage
        self._entries: dict[str, _Entry] = {}
        storage.subscribe(self._on_change)

    def _stamp(self, keys: tuple[str, ...]) -> tuple[Optional[str], ...]:
        out = []
        for key in keys:
            raw = self._storage.get_item(key)
            out.append(None if raw is None else hashlib.sha1(raw.encode("utf-8")).hexdigest())
        return tuple(out)

    def get_or_compute(self, name: str, depends_on: Iterable[str], compute: Callable[[], Any]) -> Any:
        keys = tuple(sorted(set(depends_on)))
        stamp = self._stamp(keys)
        entry = self._entries.get(name)
        if entry is not None and entry.keys == keys and entry.stamp == stamp:
            return entry.value
        if entry is not None:
            logger.debug("View %s is stale, recomputing", name)

        value = compute()
        self._entries[name] = _Entry(keys=keys, stamp=stamp, value=value)
        return value

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def _on_change(self, event: StorageEvent) -> None:
        if event.key is None:
            self.clear()
            return
        stale = [name for name, entry in self._entries.items() if event.key in entry.keys]
        for name in stale:
            del self._entries[name]
        if stale:
            logger.debug("Storage key %s changed, dropped views: %s", event.key, ", ".join(stale))
