"""Tests for task, patch and notification models."""

import json
from datetime import datetime

import pytest
from pydantic import ValidationError

from taskflow.tasks.models import (
    Notification,
    Priority,
    Status,
    Task,
    TaskDraft,
    TaskPatch,
    generate_id,
    subtasks_from_texts,
)


class TestGenerateId:
    def test_format(self):
        stamp, suffix = generate_id().split("-")
        assert stamp.isdigit()
        assert len(suffix) == 7

    def test_unique(self):
        assert len({generate_id() for _ in range(500)}) == 500


class TestTask:
    def test_reads_camel_case_record(self):
        task = Task.model_validate(
            {
                "id": "task-1",
                "title": "Ship",
                "description": "",
                "priority": "High",
                "status": "In Progress",
                "dueDate": "2024-06-07T00:00:00.000Z",
                "imageUrl": "https://example.com/a.png",
            }
        )
        assert task.priority is Priority.HIGH
        assert task.status is Status.IN_PROGRESS
        assert isinstance(task.due_date, datetime)
        assert task.image_url == "https://example.com/a.png"
        assert task.subtasks == []

    def test_null_subtasks_become_empty(self):
        task = Task.model_validate({"id": "t", "title": "x", "subtasks": None})
        assert task.subtasks == []

    def test_dumps_camel_case(self):
        task = Task(id="t", title="x", due_date=datetime(2024, 6, 7))
        data = json.loads(task.model_dump_json(by_alias=True))
        assert data["dueDate"] == "2024-06-07T00:00:00"
        assert "imageUrl" in data

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            Task(id="t", title="   ")

    def test_unknown_priority_rejected(self):
        with pytest.raises(ValidationError):
            Task(id="t", title="x", priority="Urgent")


class TestTaskDraft:
    def test_defaults(self):
        draft = TaskDraft(title="Write tests")
        assert draft.priority is Priority.MEDIUM
        assert draft.description == ""
        assert draft.subtasks == []

    def test_no_status_field(self):
        with pytest.raises(ValidationError):
            TaskDraft(title="x", status=Status.DONE)


class TestTaskPatch:
    def test_changes_only_explicit_fields(self):
        assert TaskPatch(priority=Priority.HIGH).changes() == {"priority": Priority.HIGH}

    def test_clearing_due_date(self):
        assert TaskPatch(due_date=None).changes() == {"due_date": None}

    def test_clearing_required_field_rejected(self):
        with pytest.raises(ValidationError):
            TaskPatch(title=None)
        with pytest.raises(ValidationError):
            TaskPatch(status=None)

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            TaskPatch(title="")

    def test_alias_accepted(self):
        assert "image_url" in TaskPatch.model_validate({"imageUrl": None}).changes()


class TestSubtasksFromTexts:
    def test_skips_blank_and_numbers_ids(self):
        subtasks = subtasks_from_texts(["Outline", "  ", " Draft "])
        assert [s.text for s in subtasks] == ["Outline", "Draft"]
        assert len({s.id for s in subtasks}) == 2
        assert all(not s.completed for s in subtasks)


class TestNotification:
    def test_defaults(self):
        notification = Notification(message="hello")
        assert notification.read is False
        assert notification.id
        assert isinstance(notification.timestamp, datetime)
