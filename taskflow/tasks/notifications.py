"""Capped activity log derived from task store mutations."""

import logging
from collections.abc import Callable, Iterable
from typing import Optional

from .models import Notification

logger = logging.getLogger(__name__)

DEFAULT_NOTIFICATION_LIMIT = 100

NotificationsChanged = Callable[[list[Notification]], None]


class NotificationStore:
    """Most-recent-first notification log.

    The collection never grows past ``limit`` entries; appending beyond the
    cap drops the oldest entries. ``on_change`` is called with a snapshot of
    the collection after every mutation so the caller can persist it.
    """

    def __init__(
        self,
        notifications: Optional[Iterable[Notification]] = None,
        limit: int = DEFAULT_NOTIFICATION_LIMIT,
        on_change: Optional[NotificationsChanged] = None,
    ):
        if limit <= 0:
            raise ValueError("Notification limit must be positive")
        self._limit = limit
        self._on_change = on_change
        self._notifications: list[Notification] = list(notifications or [])[:limit]

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def notifications(self) -> list[Notification]:
        """Snapshot of the log, most recent first."""
        return list(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.read)

    def __len__(self) -> int:
        return len(self._notifications)

    def append(self, message: str) -> Notification:
        """Record a new unread notification at the front of the log.

        Args:
            message: Rendered notification text

        Returns:
            The created notification
        """
        notification = Notification(message=message)
        self._notifications = [notification, *self._notifications][: self._limit]
        logger.debug(f"Notification added: {message}")
        self._changed()
        return notification

    def mark_all_read(self) -> None:
        """Mark every notification as read. Idempotent."""
        if all(n.read for n in self._notifications):
            return
        self._notifications = [n if n.read else n.model_copy(update={"read": True}) for n in self._notifications]
        self._changed()

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.notifications)
