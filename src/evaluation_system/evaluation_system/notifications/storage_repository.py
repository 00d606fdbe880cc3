from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import StorageKeys
from ..storage.base import LocalStorage
from ..storage.collection import JsonCollection
from .model import Notification
from .repository import NotificationRepository


class StorageNotificationRepository(NotificationRepository):
    def __init__(self, storage: LocalStorage):
        self._rows = JsonCollection(storage, StorageKeys.NOTIFICATIONS)

    def get(self, notification_id: int) -> Optional[Notification]:
        row = self._rows.get(notification_id)
        return Notification.from_dict(row) if row else None

    def list(self) -> Sequence[Notification]:
        return [Notification.from_dict(r) for r in self._rows.identified()]

    def put(self, notification: Notification) -> Notification:
        self._rows.put(notification.to_dict())
        return notification

    def replace_all(self, notifications: Sequence[Notification]) -> None:
        self._rows.replace_all([n.to_dict() for n in notifications])

    def delete(self, notification_id: int) -> bool:
        return self._rows.delete(notification_id)
