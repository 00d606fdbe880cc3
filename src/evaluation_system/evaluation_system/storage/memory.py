from __future__ import annotations

from typing import Optional

from .base import ObservableStorage


class MemoryStorage(ObservableStorage):
    """Process-local storage (tests, throwaway demo runs)."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        super().__init__()
        self._data: dict[str, str] = dict(initial or {})

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, value: str) -> None:
        self._data[key] = value

    def _delete(self, key: str) -> None:
        self._data.pop(key, None)

    def _delete_all(self) -> None:
        self._data.clear()

    def keys(self) -> list[str]:
        return list(self._data)
