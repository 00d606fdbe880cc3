from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..common.records import record_from_row, record_to_row
from ..core.enums import NotificationType

ALL_ROLES = "all"


@dataclass(frozen=True)
class Notification:
    id: int
    message: str
    type: NotificationType = NotificationType.INFO
    roles: tuple[str, ...] = ()
    timestamp: Optional[str] = None
    is_read: bool = False
    action_url: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def is_for(self, role: str) -> bool:
        return role in self.roles or ALL_ROLES in self.roles

    def same_audience(self, message: str, roles) -> bool:
        return self.message == message and sorted(self.roles) == sorted(roles)

    @classmethod
    def from_dict(cls, row: dict) -> "Notification":
        try:
            kind = NotificationType(row.get("type") or NotificationType.INFO.value)
        except ValueError:
            kind = NotificationType.INFO
        return record_from_row(
            cls,
            row,
            message=str(row.get("message") or ""),
            type=kind,
            roles=tuple(row.get("roles") or ()),
            is_read=bool(row.get("isRead")),
        )

    def to_dict(self) -> dict:
        row = record_to_row(self)
        row["roles"] = list(self.roles)
        return row
