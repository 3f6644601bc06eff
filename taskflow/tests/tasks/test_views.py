"""Tests for the derived task views."""

from datetime import date, datetime, timedelta

from taskflow.tasks.models import Priority, Status
from taskflow.tasks.views import (
    dashboard_stats,
    filter_tasks,
    group_by_day,
    group_by_status,
    summary_input,
    tasks_for_day,
)

NOW = datetime(2024, 6, 3, 12, 0)


class TestDashboardStats:
    def test_empty(self):
        stats = dashboard_stats([], now=NOW)
        assert stats.total == 0
        assert stats.completion_rate == 0
        assert stats.overdue == [] and stats.upcoming == []

    def test_counts_and_rate(self, make_task):
        tasks = [
            make_task(status=Status.TODO),
            make_task(status=Status.IN_PROGRESS),
            make_task(status=Status.DONE),
        ]
        stats = dashboard_stats(tasks, now=NOW)
        assert (stats.total, stats.todo, stats.in_progress, stats.completed) == (3, 1, 1, 1)
        assert stats.completion_rate == 33
        assert stats.by_priority == {Priority.LOW: 0, Priority.MEDIUM: 3, Priority.HIGH: 0}

    def test_overdue_and_upcoming(self, make_task):
        late = make_task(title="late", due_date=NOW - timedelta(days=1))
        late_but_done = make_task(title="done", status=Status.DONE, due_date=NOW - timedelta(days=1))
        soon = make_task(title="soon", due_date=NOW + timedelta(days=2))
        sooner = make_task(title="sooner", due_date=NOW + timedelta(hours=3))
        far = make_task(title="far", due_date=NOW + timedelta(days=30))
        undated = make_task(title="undated")

        stats = dashboard_stats([late, late_but_done, soon, sooner, far, undated], now=NOW)

        assert [t.title for t in stats.overdue] == ["late"]
        assert [t.title for t in stats.upcoming] == ["sooner", "soon"]

    def test_summary_input(self, make_task):
        stats = dashboard_stats(
            [make_task(status=Status.DONE), make_task(due_date=NOW - timedelta(days=2))], now=NOW
        )
        assert summary_input(stats) == {
            "total_tasks": 2,
            "completed_tasks": 1,
            "overdue_tasks": 1,
            "upcoming_tasks": 0,
        }


class TestFilterTasks:
    def test_search_title_and_description(self, make_task):
        tasks = [make_task(title="Fix login bug"), make_task(title="Docs", description="Explain LOGIN flow"), make_task(title="Other")]
        assert [t.title for t in filter_tasks(tasks, query="login")] == ["Fix login bug", "Docs"]

    def test_priority_and_status(self, make_task):
        tasks = [
            make_task(title="a", priority=Priority.HIGH, status=Status.DONE),
            make_task(title="b", priority=Priority.HIGH),
            make_task(title="c", priority=Priority.LOW),
        ]
        assert [t.title for t in filter_tasks(tasks, priority=Priority.HIGH, status=Status.TODO)] == ["b"]


class TestGroupings:
    def test_group_by_status_has_every_column(self, make_task):
        columns = group_by_status([make_task(status=Status.DONE)])
        assert list(columns) == [Status.TODO, Status.IN_PROGRESS, Status.DONE]
        assert len(columns[Status.DONE]) == 1
        assert columns[Status.TODO] == []

    def test_calendar(self, make_task):
        a = make_task(title="a", due_date=datetime(2024, 6, 5, 9))
        b = make_task(title="b", due_date=datetime(2024, 6, 3, 18))
        c = make_task(title="c", due_date=datetime(2024, 6, 5, 17))
        tasks = [a, b, c, make_task(title="undated")]

        assert [t.title for t in tasks_for_day(tasks, date(2024, 6, 5))] == ["a", "c"]
        days = group_by_day(tasks)
        assert list(days) == [date(2024, 6, 3), date(2024, 6, 5)]
