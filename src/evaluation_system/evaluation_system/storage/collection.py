from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .base import LocalStorage, read_json, write_json

logger = logging.getLogger(__name__)


def same_id(a: Any, b: Any) -> bool:
    """Ids arrive as ints from JSON and as strings from URLs/forms."""
    if a is None or b is None:
        return False
    return str(a) == str(b)


class JsonCollection:
    """A JSON array of objects stored under one key, addressed by an id field.

    Every call reads and rewrites the whole array, like the browser code it
    replaces.
    """

    def __init__(self, storage: LocalStorage, key: str, *, id_field: str = "id"):
        self._storage = storage
        self._key = key
        self._id_field = id_field

    @property
    def key(self) -> str:
        return self._key

    def all(self) -> list[dict]:
        return [row for row in read_json(self._storage, self._key, []) if isinstance(row, dict)]

    def identified(self) -> list[dict]:
        """Rows that carry an id; rows without one are skipped and logged."""
        rows = []
        for row in self.all():
            if row.get(self._id_field) is None:
                logger.warning("Skipping row without %r under storage key %r", self._id_field, self._key)
                continue
            rows.append(row)
        return rows

    def replace_all(self, rows: list[dict]) -> None:
        write_json(self._storage, self._key, rows)

    def find(self, predicate: Callable[[dict], bool]) -> Optional[dict]:
        for row in self.all():
            if predicate(row):
                return row
        return None

    def get(self, row_id: Any) -> Optional[dict]:
        return self.find(lambda r: same_id(r.get(self._id_field), row_id))

    def put(self, row: dict) -> dict:
        """Insert or replace by id."""
        rows = self.all()
        for i, existing in enumerate(rows):
            if same_id(existing.get(self._id_field), row.get(self._id_field)):
                rows[i] = row
                break
        else:
            rows.append(row)
        self.replace_all(rows)
        return row

    def delete(self, row_id: Any) -> bool:
        rows = self.all()
        kept = [r for r in rows if not same_id(r.get(self._id_field), row_id)]
        if len(kept) == len(rows):
            return False
        self.replace_all(kept)
        return True


class JsonIdSet:
    """A JSON array of ids (deletedEmployees, seenEvaluationSubmissions, ...)."""

    def __init__(self, storage: LocalStorage, key: str):
        self._storage = storage
        self._key = key

    def all(self) -> list:
        return list(read_json(self._storage, self._key, []))

    def contains(self, value: Any) -> bool:
        return any(same_id(v, value) for v in self.all())

    def add(self, value: Any) -> bool:
        values = self.all()
        if any(same_id(v, value) for v in values):
            return False
        values.append(value)
        write_json(self._storage, self._key, values)
        return True

    def discard(self, value: Any) -> bool:
        values = self.all()
        kept = [v for v in values if not same_id(v, value)]
        if len(kept) == len(values):
            return False
        write_json(self._storage, self._key, kept)
        return True
