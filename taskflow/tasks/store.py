"""Authoritative in-memory task collection for the signed-in user.

Every mutation updates the collection, appends a notification describing
it, and then hands a snapshot of the collection to ``on_change`` (normally
the persistence adapter). Operations referencing an unknown task id are
silent no-ops.
"""

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import TYPE_CHECKING, Any, Optional, Union

from taskflow.core.validation import validate_data

from .models import Priority, Status, Task, TaskDraft, TaskPatch, generate_id
from .notifications import NotificationStore

if TYPE_CHECKING:
    from taskflow.flows.task_flows.models import PrioritizeTasksOutput

logger = logging.getLogger(__name__)

TasksChanged = Callable[[list[Task]], None]
DraftLike = Union[TaskDraft, dict[str, Any]]
PatchLike = Union[TaskPatch, dict[str, Any]]


class TaskStore:
    """Task collection with notification side effects.

    Tasks are kept newest first. Inputs may be models or plain dicts; dicts
    are validated and a ``ValidationError`` is raised before anything
    changes.
    """

    def __init__(
        self,
        notifications: NotificationStore,
        tasks: Optional[Iterable[Task]] = None,
        on_change: Optional[TasksChanged] = None,
    ):
        self._notifications = notifications
        self._on_change = on_change
        self._tasks: list[Task] = list(tasks or [])

    @property
    def notifications(self) -> NotificationStore:
        return self._notifications

    @property
    def tasks(self) -> list[Task]:
        """Snapshot of the collection, newest first."""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def get(self, task_id: str) -> Optional[Task]:
        index = self._index_of(task_id)
        return None if index is None else self._tasks[index]

    def create(self, draft: DraftLike) -> Task:
        """Add a new To Do task at the front of the collection.

        Args:
            draft: Title, description, priority and the optional fields

        Returns:
            The created task
        """
        draft = validate_data(draft, TaskDraft, location="draft", component="task_store")
        task = Task(id=f"task-{generate_id()}", status=Status.TODO, **draft.model_dump())
        self._tasks.insert(0, task)
        logger.info(f"Created task {task.id}")
        self._notifications.append(f'New task added: "{task.title}"')
        self._changed()
        return task

    def update(self, task_id: str, patch: PatchLike) -> Optional[Task]:
        """Merge the fields set on ``patch`` into the task with ``task_id``.

        A transition into Done emits a completed notification. Any other
        patch that changes at least one field value emits an updated
        notification; a patch that changes nothing emits nothing.

        Returns:
            The task after the update, or None if the id is unknown
        """
        patch = validate_data(patch, TaskPatch, location="patch", component="task_store")
        index = self._index_of(task_id)
        if index is None:
            logger.debug(f"Ignoring update for unknown task {task_id}")
            return None

        current = self._tasks[index]
        updated = _merge(current, patch)
        if updated is None:
            return current

        self._tasks[index] = updated
        if updated.status == Status.DONE and current.status != Status.DONE:
            self._notifications.append(f'Task completed: "{current.title}"')
        else:
            self._notifications.append(f'Task updated: "{current.title}"')
        self._changed()
        return updated

    def update_many(self, updates: Sequence[tuple[str, PatchLike]]) -> list[Task]:
        """Apply a batch of patches as a single transition.

        Emits exactly one notification naming the batch size. Unknown ids
        in the batch are skipped. An empty batch does nothing.

        Returns:
            The tasks that were found and patched
        """
        if not updates:
            return []
        patches = [
            (task_id, validate_data(patch, TaskPatch, location="patch", component="task_store"))
            for task_id, patch in updates
        ]

        applied = []
        for task_id, patch in patches:
            index = self._index_of(task_id)
            if index is None:
                logger.debug(f"Skipping batch update for unknown task {task_id}")
                continue
            updated = _merge(self._tasks[index], patch)
            if updated is not None:
                self._tasks[index] = updated
            applied.append(self._tasks[index])

        self._notifications.append(f"AI has re-prioritized {len(updates)} tasks.")
        self._changed()
        return applied

    def delete(self, task_id: str) -> Optional[Task]:
        """Remove a task. Returns the removed task, or None if unknown."""
        index = self._index_of(task_id)
        if index is None:
            logger.debug(f"Ignoring delete for unknown task {task_id}")
            return None
        task = self._tasks.pop(index)
        logger.info(f"Deleted task {task_id}")
        self._notifications.append(f'Task deleted: "{task.title}"')
        self._changed()
        return task

    def move(self, task_id: str, new_status: Status) -> Optional[Task]:
        """Change a task's status, e.g. after a drag between board columns."""
        return self.update(task_id, TaskPatch(status=new_status))

    def apply_priorities(self, result: "PrioritizeTasksOutput") -> list[Task]:
        """Apply a Smart Sort result as one batch update."""
        updates: list[tuple[str, PatchLike]] = [
            (item.id, TaskPatch(priority=Priority(item.priority))) for item in result.prioritized_tasks
        ]
        return self.update_many(updates)

    def _index_of(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.tasks)


def _merge(task: Task, patch: TaskPatch) -> Optional[Task]:
    """Return ``task`` with the patch applied, or None if nothing differs."""
    changes = {name: value for name, value in patch.changes().items() if getattr(task, name) != value}
    if not changes:
        return None
    return Task.model_validate({**task.model_dump(), **changes})
