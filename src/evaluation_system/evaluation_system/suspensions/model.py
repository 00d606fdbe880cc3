from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..common.records import record_from_row, record_to_row
from ..core.enums import SuspensionStatus


@dataclass(frozen=True)
class SuspendedEmployee:
    id: int
    name: str
    email: str
    status: SuspensionStatus
    suspension_date: str
    suspension_reason: str
    suspension_duration: Optional[str] = None
    suspended_by: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    branch: Optional[str] = None
    reinstated_date: Optional[str] = None
    reinstated_by: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_active_suspension(self) -> bool:
        return self.status == SuspensionStatus.SUSPENDED

    @classmethod
    def from_dict(cls, row: dict) -> "SuspendedEmployee":
        try:
            status = SuspensionStatus(row.get("status") or SuspensionStatus.SUSPENDED.value)
        except ValueError:
            status = SuspensionStatus.SUSPENDED
        return record_from_row(
            cls,
            row,
            name=row.get("name") or "",
            email=row.get("email") or "",
            status=status,
            suspension_date=row.get("suspensionDate") or "",
            suspension_reason=row.get("suspensionReason") or "",
        )

    def to_dict(self) -> dict:
        return record_to_row(self)
