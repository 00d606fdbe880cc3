from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    def get(self, notification_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def list(self) -> Sequence[Notification]:
        raise NotImplementedError

    def put(self, notification: Notification) -> Notification:
        raise NotImplementedError

    def replace_all(self, notifications: Sequence[Notification]) -> None:
        raise NotImplementedError

    def delete(self, notification_id: int) -> bool:
        raise NotImplementedError
