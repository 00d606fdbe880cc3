from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SuspendedEmployee


class SuspensionRepository(Protocol):
    def get(self, employee_id: int) -> Optional[SuspendedEmployee]:
        raise NotImplementedError

    def find_by_email(self, email: str) -> Optional[SuspendedEmployee]:
        raise NotImplementedError

    def list(self) -> Sequence[SuspendedEmployee]:
        raise NotImplementedError

    def put(self, record: SuspendedEmployee) -> SuspendedEmployee:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        raise NotImplementedError
