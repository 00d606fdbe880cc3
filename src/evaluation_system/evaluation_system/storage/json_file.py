from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from .base import ObservableStorage

logger = logging.getLogger(__name__)


class JsonFileStorage(ObservableStorage):
    """Whole storage kept as one JSON object on disk.

    The file is re-read on every access so separate processes sharing the
    file see each other's writes (last write wins).
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except ValueError:
            logger.warning("Storage file %s is not valid JSON; starting empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s does not hold an object; starting empty", self._path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _dump(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=self._path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except Exception:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def _read(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def _write(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def _delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data)

    def _delete_all(self) -> None:
        self._dump({})

    def keys(self) -> list[str]:
        return list(self._load())
