"""Task, subtask and notification models.

Records round-trip through JSON using the camelCase field names of the
stored format (``dueDate``, ``imageUrl``) while Python code uses
snake_case attributes.
"""

import random
import string
import time
from datetime import datetime
from enum import Enum
from typing import Annotated, Optional

from pydantic import AfterValidator, ConfigDict, Field, field_validator, model_validator

from taskflow.core.models import StrictBaseModel


class Priority(str, Enum):
    """Task priority."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Status(str, Enum):
    """Task status; governs board column placement."""

    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


def generate_id() -> str:
    """Return ``<epoch millis>-<7 random base36 chars>``."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=7))
    return f"{int(time.time() * 1000)}-{suffix}"


def _non_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be empty")
    return v


NonEmptyStr = Annotated[str, AfterValidator(_non_blank)]

CLEARABLE_FIELDS = frozenset({"due_date", "image_url"})


class Subtask(StrictBaseModel):
    """One checklist line within a task."""

    id: str = Field(..., min_length=1, description="Unique within the parent task")
    text: NonEmptyStr = Field(..., description="Short checklist text")
    completed: bool = Field(default=False)


def subtasks_from_texts(texts: list[str], prefix: str = "sub") -> list[Subtask]:
    """Build subtasks from plain text items, e.g. AI suggestions.

    Blank items are skipped. Ids share a per-call stamp and are numbered, so
    they stay unique within the task they are attached to.
    """
    stamp = generate_id()
    subtasks = []
    for text in texts:
        if not text.strip():
            continue
        subtasks.append(Subtask(id=f"{prefix}-{stamp}-{len(subtasks) + 1}", text=text.strip()))
    return subtasks


class Task(StrictBaseModel):
    """One unit of work."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    title: NonEmptyStr
    description: str = ""
    priority: Priority = Priority.MEDIUM
    status: Status = Status.TODO
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    subtasks: list[Subtask] = Field(default_factory=list)
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    @field_validator("subtasks", mode="before")
    @classmethod
    def _missing_subtasks(cls, v: object) -> object:
        # Older records may store null here
        return [] if v is None else v


class TaskDraft(StrictBaseModel):
    """Caller-supplied fields for a new task. The store assigns id and status."""

    model_config = ConfigDict(populate_by_name=True)

    title: NonEmptyStr
    description: str = ""
    priority: Priority = Priority.MEDIUM
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    subtasks: list[Subtask] = Field(default_factory=list)
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class TaskPatch(StrictBaseModel):
    """Partial update for a task.

    Only fields explicitly set on the patch are applied, so a field can be
    cleared by passing ``None`` (e.g. ``TaskPatch(due_date=None)``).
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    status: Optional[Status] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    subtasks: Optional[list[Subtask]] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _non_blank(v)

    @model_validator(mode="after")
    def _only_optional_fields_cleared(self) -> "TaskPatch":
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in CLEARABLE_FIELDS:
                raise ValueError(f"{name} cannot be cleared")
        return self

    def changes(self) -> dict[str, object]:
        """Return the explicitly set fields keyed by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class Notification(StrictBaseModel):
    """One historical activity record."""

    id: str = Field(default_factory=generate_id)
    message: str
    timestamp: datetime = Field(default_factory=datetime.now)
    read: bool = False
