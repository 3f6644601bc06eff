"""Per-user persistence of the task and notification collections.

Records are JSON arrays stored under ``taskflow-<kind>-<user id>``. Dates
are written as ISO-8601 strings and task fields use the camelCase names
of the stored format (``dueDate``, ``imageUrl``).

Loading never fails: a missing or unreadable record yields the fallback
collection (the seed tasks for a new user, or no notifications). Saving
never raises: a failed write is logged and the in-memory state stays
authoritative.
"""

import json
import logging
from collections.abc import Sequence
from enum import Enum
from typing import Literal, Union, overload

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from taskflow.core.errors.errors import ErrorContext, PersistenceError
from taskflow.core.errors.models import PersistenceErrorContext
from taskflow.providers.storage.base import KeyValueStore
from taskflow.tasks.models import Notification, Task
from taskflow.tasks.seed import initial_tasks

logger = logging.getLogger(__name__)

KEY_PREFIX = "taskflow"


class RecordKind(str, Enum):
    """Kinds of per-user record."""

    TASKS = "tasks"
    NOTIFICATIONS = "notifications"


KindLike = Union[RecordKind, Literal["tasks", "notifications"]]

_tasks_adapter = TypeAdapter(list[Task])
_notifications_adapter = TypeAdapter(list[Notification])


def storage_key(user_id: str, kind: KindLike) -> str:
    """Deterministic storage key for a user's record."""
    return f"{KEY_PREFIX}-{RecordKind(kind).value}-{user_id}"


class PersistenceAdapter:
    """Loads and saves per-user collections through a KeyValueStore."""

    def __init__(self, store: KeyValueStore, seed_new_users: bool = True):
        self._store = store
        self._seed_new_users = seed_new_users

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @overload
    def load(self, user_id: str, kind: Literal[RecordKind.TASKS, "tasks"]) -> list[Task]: ...

    @overload
    def load(
        self, user_id: str, kind: Literal[RecordKind.NOTIFICATIONS, "notifications"]
    ) -> list[Notification]: ...

    def load(self, user_id: str, kind: KindLike) -> Union[list[Task], list[Notification]]:
        """Load a user's collection.

        Args:
            user_id: Identity provider user id
            kind: ``tasks`` or ``notifications``

        Returns:
            The stored collection, or the fallback collection if there is
            no record or it cannot be parsed
        """
        kind = RecordKind(kind)
        key = storage_key(user_id, kind)
        raw = self._store.get(key)
        if raw is None:
            logger.info(f"No stored {kind.value} for user {user_id}; using defaults")
            return self._fallback(kind)

        adapter = _tasks_adapter if kind == RecordKind.TASKS else _notifications_adapter
        try:
            collection = adapter.validate_json(raw)
        except PydanticValidationError as e:
            error = self._error(f"Could not parse stored {kind.value}", key, kind, "load", e)
            logger.error(str(error))
            return self._fallback(kind)

        logger.debug(f"Loaded {len(collection)} {kind.value} for user {user_id}")
        return collection

    def save(self, user_id: str, kind: KindLike, collection: Sequence[BaseModel]) -> bool:
        """Serialize and write a user's collection.

        Returns:
            True if the write succeeded. Failures are logged, never raised.
        """
        kind = RecordKind(kind)
        key = storage_key(user_id, kind)
        try:
            payload = json.dumps([item.model_dump(mode="json", by_alias=True) for item in collection])
            ok = self._store.set(key, payload)
        except (TypeError, ValueError, OSError) as e:
            logger.error(str(self._error(f"Could not save {kind.value}", key, kind, "save", e)))
            return False
        if not ok:
            logger.error(str(self._error(f"Storage rejected write of {kind.value}", key, kind, "save")))
            return False
        logger.debug(f"Saved {len(collection)} {kind.value} for user {user_id}")
        return True

    def _fallback(self, kind: RecordKind) -> Union[list[Task], list[Notification]]:
        if kind == RecordKind.TASKS and self._seed_new_users:
            return initial_tasks()
        return []

    def _error(
        self,
        message: str,
        key: str,
        kind: RecordKind,
        operation: str,
        cause: Union[Exception, None] = None,
    ) -> PersistenceError:
        return PersistenceError(
            message=message,
            context=ErrorContext.create(
                flow_name="persistence",
                error_type="PersistenceError",
                error_location=f"PersistenceAdapter.{operation}",
                component="persistence_adapter",
                operation=operation,
            ),
            persistence_context=PersistenceErrorContext(key=key, kind=kind.value, operation=operation),
            cause=cause,
        )
