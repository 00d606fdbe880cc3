from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import StorageKeys
from ..storage.base import LocalStorage
from ..storage.collection import JsonCollection
from .model import SuspendedEmployee
from .repository import SuspensionRepository


class StorageSuspensionRepository(SuspensionRepository):
    """suspendedEmployees key; one record per employee id."""

    def __init__(self, storage: LocalStorage):
        self._rows = JsonCollection(storage, StorageKeys.SUSPENDED_EMPLOYEES)

    def get(self, employee_id: int) -> Optional[SuspendedEmployee]:
        row = self._rows.get(employee_id)
        return SuspendedEmployee.from_dict(row) if row else None

    def find_by_email(self, email: str) -> Optional[SuspendedEmployee]:
        needle = (email or "").strip().lower()
        if not needle:
            return None
        row = self._rows.find(lambda r: str(r.get("email") or "").lower() == needle)
        return SuspendedEmployee.from_dict(row) if row else None

    def list(self) -> Sequence[SuspendedEmployee]:
        return [SuspendedEmployee.from_dict(r) for r in self._rows.identified()]

    def put(self, record: SuspendedEmployee) -> SuspendedEmployee:
        self._rows.put(record.to_dict())
        return record

    def delete(self, employee_id: int) -> bool:
        return self._rows.delete(employee_id)
