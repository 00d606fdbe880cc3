from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional, Sequence, Union

from ..common.datetime_utils import now_utc, timestamp_id, to_iso
from ..common.validators import require_non_empty
from ..core.enums import NotificationType
from ..core.exceptions import NotFoundError, ValidationError
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Use case: role-targeted notifications."""

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def create(
        self,
        *,
        message: str,
        roles: Iterable[str],
        type: Union[NotificationType, str] = NotificationType.INFO,
        action_url: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Notification:
        """Post a notification; an identical message to the same roles is returned instead of duplicated."""
        message = require_non_empty(message, "Message")
        roles = tuple(r for r in roles if r)
        if not roles:
            raise ValidationError("At least one role is required")
        try:
            kind = NotificationType(type)
        except ValueError:
            raise ValidationError(f"Unknown notification type: {type}")

        existing = self._notifications.list()
        for n in existing:
            if n.same_audience(message, roles):
                return n

        now = now or now_utc()
        notification_id = timestamp_id(now)
        taken = {n.id for n in existing}
        while notification_id in taken:
            notification_id += 1

        notification = Notification(
            id=notification_id,
            message=message,
            type=kind,
            roles=roles,
            timestamp=to_iso(now),
            action_url=action_url,
        )
        self._notifications.put(notification)
        logger.info("Notification %s posted to %s", notification.id, ",".join(roles))
        return notification

    def list_for_role(self, role: str) -> Sequence[Notification]:
        out = [n for n in self._notifications.list() if n.is_for(role)]
        out.sort(key=lambda n: n.timestamp or "", reverse=True)
        return out

    def mark_read(self, notification_id: int) -> Notification:
        notification = self._notifications.get(notification_id)
        if not notification:
            raise NotFoundError("Notification not found")
        if notification.is_read:
            return notification
        return self._notifications.put(replace(notification, is_read=True))

    def mark_all_read(self, role: str) -> int:
        changed = 0
        updated = []
        for n in self._notifications.list():
            if n.is_for(role) and not n.is_read:
                n = replace(n, is_read=True)
                changed += 1
            updated.append(n)
        if changed:
            self._notifications.replace_all(updated)
        return changed

    def unread_count(self, role: str) -> int:
        return sum(1 for n in self.list_for_role(role) if not n.is_read)

    def delete(self, notification_id: int) -> bool:
        return self._notifications.delete(notification_id)
