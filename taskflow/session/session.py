"""User session owning the task and notification stores.

A session is constructed with a persistence adapter and bound to one user
at a time. Activating a user loads both collections and wires every
mutation to be written back; deactivating drops the in-memory state and
leaves stored records untouched.
"""

import logging
from typing import Optional

from taskflow.core.errors.errors import ErrorContext, SessionError
from taskflow.persistence.adapter import PersistenceAdapter, RecordKind
from taskflow.tasks.models import Notification, Task
from taskflow.tasks.notifications import DEFAULT_NOTIFICATION_LIMIT, NotificationStore
from taskflow.tasks.store import TaskStore

from .identity import IdentityProvider, UserIdentity

logger = logging.getLogger(__name__)


class Session:
    """Stores for the active user."""

    def __init__(self, adapter: PersistenceAdapter, notification_limit: int = DEFAULT_NOTIFICATION_LIMIT):
        self._adapter = adapter
        self._notification_limit = notification_limit
        self._user: Optional[UserIdentity] = None
        self._tasks: Optional[TaskStore] = None
        self._notifications: Optional[NotificationStore] = None

    @property
    def adapter(self) -> PersistenceAdapter:
        return self._adapter

    @property
    def user(self) -> Optional[UserIdentity]:
        return self._user

    @property
    def active(self) -> bool:
        return self._user is not None

    @property
    def tasks(self) -> TaskStore:
        """Task store of the active user.

        Raises:
            SessionError: If no user is active
        """
        if self._tasks is None:
            raise self._no_user("tasks")
        return self._tasks

    @property
    def notifications(self) -> NotificationStore:
        """Notification store of the active user.

        Raises:
            SessionError: If no user is active
        """
        if self._notifications is None:
            raise self._no_user("notifications")
        return self._notifications

    def activate(self, user: UserIdentity) -> None:
        """Load the user's collections and make them the active stores."""
        if self._user is not None and self._user.uid == user.uid:
            return
        if self._user is not None:
            self.deactivate()

        uid = user.uid

        def save_tasks(tasks: list[Task]) -> None:
            self._adapter.save(uid, RecordKind.TASKS, tasks)

        def save_notifications(notifications: list[Notification]) -> None:
            self._adapter.save(uid, RecordKind.NOTIFICATIONS, notifications)

        self._notifications = NotificationStore(
            notifications=self._adapter.load(uid, RecordKind.NOTIFICATIONS),
            limit=self._notification_limit,
            on_change=save_notifications,
        )
        self._tasks = TaskStore(
            notifications=self._notifications,
            tasks=self._adapter.load(uid, RecordKind.TASKS),
            on_change=save_tasks,
        )
        self._user = user
        logger.info(f"Session activated for {uid} with {len(self._tasks)} tasks")

    def deactivate(self) -> None:
        """Clear in-memory state. Stored records are kept."""
        if self._user is not None:
            logger.info(f"Session deactivated for {self._user.uid}")
        self._user = None
        self._tasks = None
        self._notifications = None

    def sync(self, identity_provider: IdentityProvider) -> Optional[UserIdentity]:
        """Follow the identity provider's current user.

        Returns:
            The active user after syncing, or None when signed out
        """
        user = identity_provider.current_user()
        if user is None:
            self.deactivate()
        else:
            self.activate(user)
        return self._user

    def _no_user(self, store: str) -> SessionError:
        return SessionError(
            message=f"No active user; sign in before accessing {store}",
            context=ErrorContext.create(
                flow_name="session",
                error_type="SessionError",
                error_location=f"Session.{store}",
                component="session",
                operation=f"access_{store}",
            ),
        )
