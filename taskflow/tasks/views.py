"""Pure derivations over a task list.

Dashboard statistics, board columns, search filtering and calendar
groupings are recomputed on demand from the current collection.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Optional

from pydantic import Field

from taskflow.core.models import StrictBaseModel

from .models import Priority, Status, Task

UPCOMING_WINDOW = timedelta(days=7)


class DashboardStats(StrictBaseModel):
    """Counts shown on the dashboard."""

    total: int = Field(..., ge=0)
    todo: int = Field(..., ge=0)
    in_progress: int = Field(..., ge=0)
    completed: int = Field(..., ge=0)
    overdue: list[Task] = Field(default_factory=list)
    upcoming: list[Task] = Field(default_factory=list)
    completion_rate: int = Field(..., ge=0, le=100, description="Rounded percentage of Done tasks")
    by_priority: dict[Priority, int] = Field(default_factory=dict)


def _naive(value: datetime) -> datetime:
    # Stored dates may carry an offset; compare on local wall-clock time
    return value.astimezone().replace(tzinfo=None) if value.tzinfo else value


def dashboard_stats(tasks: Iterable[Task], now: Optional[datetime] = None) -> DashboardStats:
    """Compute dashboard statistics for ``tasks`` as of ``now``."""
    tasks = list(tasks)
    now = _naive(now or datetime.now())
    completed = sum(1 for t in tasks if t.status == Status.DONE)
    open_with_due = [t for t in tasks if t.status != Status.DONE and t.due_date is not None]

    overdue = [t for t in open_with_due if _naive(t.due_date) < now]
    upcoming = sorted(
        (t for t in open_with_due if now <= _naive(t.due_date) <= now + UPCOMING_WINDOW),
        key=lambda t: _naive(t.due_date),
    )
    return DashboardStats(
        total=len(tasks),
        todo=sum(1 for t in tasks if t.status == Status.TODO),
        in_progress=sum(1 for t in tasks if t.status == Status.IN_PROGRESS),
        completed=completed,
        overdue=overdue,
        upcoming=upcoming,
        completion_rate=round(completed / len(tasks) * 100) if tasks else 0,
        by_priority={p: sum(1 for t in tasks if t.priority == p) for p in Priority},
    )


def summary_input(stats: DashboardStats) -> dict[str, int]:
    """Build the summarize-dashboard flow input from dashboard stats."""
    return {
        "total_tasks": stats.total,
        "completed_tasks": stats.completed,
        "overdue_tasks": len(stats.overdue),
        "upcoming_tasks": len(stats.upcoming),
    }


def filter_tasks(
    tasks: Iterable[Task],
    query: str = "",
    priority: Optional[Priority] = None,
    status: Optional[Status] = None,
) -> list[Task]:
    """Case-insensitive search over title and description plus exact filters."""
    needle = query.strip().lower()
    result = []
    for task in tasks:
        if needle and needle not in task.title.lower() and needle not in task.description.lower():
            continue
        if priority is not None and task.priority != priority:
            continue
        if status is not None and task.status != status:
            continue
        result.append(task)
    return result


def group_by_status(tasks: Iterable[Task]) -> dict[Status, list[Task]]:
    """Board columns in status order; every status has a (possibly empty) column."""
    columns: dict[Status, list[Task]] = {status: [] for status in Status}
    for task in tasks:
        columns[task.status].append(task)
    return columns


def tasks_for_day(tasks: Iterable[Task], day: date) -> list[Task]:
    """Tasks due on the given calendar day."""
    return [t for t in tasks if t.due_date is not None and _naive(t.due_date).date() == day]


def group_by_day(tasks: Iterable[Task]) -> dict[date, list[Task]]:
    """Tasks with a due date keyed by calendar day, days in ascending order."""
    days: dict[date, list[Task]] = {}
    for task in tasks:
        if task.due_date is None:
            continue
        days.setdefault(_naive(task.due_date).date(), []).append(task)
    return dict(sorted(days.items()))
