"""Task domain: models, the task and notification stores, and views."""

from .models import (
    Notification,
    Priority,
    Status,
    Subtask,
    Task,
    TaskDraft,
    TaskPatch,
    generate_id,
    subtasks_from_texts,
)
from .notifications import DEFAULT_NOTIFICATION_LIMIT, NotificationStore
from .seed import initial_tasks
from .store import TaskStore
from .views import (
    DashboardStats,
    dashboard_stats,
    filter_tasks,
    group_by_day,
    group_by_status,
    summary_input,
    tasks_for_day,
)

__all__ = [
    "DEFAULT_NOTIFICATION_LIMIT",
    "DashboardStats",
    "Notification",
    "NotificationStore",
    "Priority",
    "Status",
    "Subtask",
    "Task",
    "TaskDraft",
    "TaskPatch",
    "TaskStore",
    "dashboard_stats",
    "filter_tasks",
    "generate_id",
    "group_by_day",
    "group_by_status",
    "initial_tasks",
    "subtasks_from_texts",
    "summary_input",
    "tasks_for_day",
]
