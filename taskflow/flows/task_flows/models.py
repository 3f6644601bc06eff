"""Input and output models for the task flows."""

from datetime import date, datetime, time
from typing import Any, Optional

from pydantic import Field, field_validator

from taskflow.core.models import StrictBaseModel
from taskflow.tasks.models import NonEmptyStr, Priority, Task, TaskDraft, subtasks_from_texts


def _normalize_priority(v: Any) -> Any:
    # Models sometimes answer "high" or "HIGH"
    if isinstance(v, str) and v.strip():
        return v.strip().capitalize()
    if isinstance(v, str):
        return None
    return v


class DescribeTaskInput(StrictBaseModel):
    title: NonEmptyStr = Field(..., description="The title of the task.")


class DescribeTaskOutput(StrictBaseModel):
    description: str = Field(..., description="The AI-generated detailed description of the task.")


class SuggestSubtasksInput(StrictBaseModel):
    title: NonEmptyStr = Field(..., description="The title of the main task.")
    description: str = Field(default="", description="The description of the main task.")


class SuggestSubtasksOutput(StrictBaseModel):
    subtasks: list[str] = Field(..., description="A list of short, actionable subtask descriptions.")


class TaskDetails(StrictBaseModel):
    """Text half of a Smart Create draft, as returned by the model."""

    description: str = Field(..., description="The AI-generated detailed description of the task.")
    priority: Priority = Field(..., description="The AI-determined priority of the task.")
    subtasks: list[str] = Field(..., description="A list of short, actionable AI-generated subtask descriptions.")

    @field_validator("priority", mode="before")
    @classmethod
    def _priority_case(cls, v: Any) -> Any:
        return _normalize_priority(v)


class DraftFullTaskInput(StrictBaseModel):
    title: NonEmptyStr = Field(..., description="The title of the task.")


class DraftFullTaskOutput(StrictBaseModel):
    description: str
    priority: Priority
    subtasks: list[str]
    image_url: str = Field(..., description="The generated image as a data URI.")

    def to_draft(self, title: str) -> TaskDraft:
        """Task draft combining the user's title with the generated content."""
        return TaskDraft(
            title=title,
            description=self.description,
            priority=self.priority,
            subtasks=subtasks_from_texts(self.subtasks),
            image_url=self.image_url,
        )


class GenerateTaskImageInput(StrictBaseModel):
    title: NonEmptyStr = Field(..., description="The title of the task.")


class GenerateTaskImageOutput(StrictBaseModel):
    image_url: str = Field(..., description="The generated image as a data URI.")


class ParseTaskInput(StrictBaseModel):
    text: NonEmptyStr = Field(..., description="The natural language text describing the task.")
    current_date: date = Field(default_factory=date.today, description="Reference date for relative expressions.")


class ParsedTaskResponse(StrictBaseModel):
    """Fields extracted by the model before date resolution."""

    title: str = Field(..., description="The extracted title of the task.")
    description: Optional[str] = Field(default=None, description="A detailed description if provided.")
    priority: Optional[Priority] = Field(default=None, description="The extracted priority of the task.")
    due_date: Optional[str] = Field(default=None, description="The extracted due date in 'YYYY-MM-DD' format.")

    @field_validator("priority", mode="before")
    @classmethod
    def _priority_case(cls, v: Any) -> Any:
        return _normalize_priority(v)


class ParseTaskOutput(StrictBaseModel):
    title: NonEmptyStr
    description: Optional[str] = None
    priority: Optional[Priority] = None
    due_date: Optional[date] = None

    def to_draft(self) -> TaskDraft:
        """Task draft for Quick Add; unset priority falls back to Medium."""
        return TaskDraft(
            title=self.title,
            description=self.description or "",
            priority=self.priority or Priority.MEDIUM,
            due_date=datetime.combine(self.due_date, time()) if self.due_date else None,
        )


class SummarizeDashboardInput(StrictBaseModel):
    total_tasks: int = Field(..., ge=0, description="The total number of tasks.")
    completed_tasks: int = Field(..., ge=0, description="The number of completed tasks.")
    overdue_tasks: int = Field(..., ge=0, description="The number of tasks that are past their due date.")
    upcoming_tasks: int = Field(..., ge=0, description="The number of tasks due in the next 7 days.")


class SummarizeDashboardOutput(StrictBaseModel):
    summary: str = Field(..., description="A short, insightful, and motivational summary for the user.")


class TaskInfo(StrictBaseModel):
    id: NonEmptyStr = Field(..., description="The unique identifier for the task.")
    title: NonEmptyStr = Field(..., description="The title of the task.")
    description: Optional[str] = Field(default=None, description="The description of the task.")


class PrioritizeTasksInput(StrictBaseModel):
    tasks: list[TaskInfo] = Field(..., description="The list of tasks to be prioritized.")

    @classmethod
    def from_tasks(cls, tasks: list[Task]) -> "PrioritizeTasksInput":
        return cls(tasks=[TaskInfo(id=t.id, title=t.title, description=t.description or None) for t in tasks])


class PrioritizedTask(StrictBaseModel):
    id: str = Field(..., description="The unique identifier for the task.")
    priority: Priority = Field(..., description="The AI-assigned priority for the task.")

    @field_validator("priority", mode="before")
    @classmethod
    def _priority_case(cls, v: Any) -> Any:
        return _normalize_priority(v)


class PrioritizeTasksOutput(StrictBaseModel):
    prioritized_tasks: list[PrioritizedTask] = Field(..., description="The list of tasks with their new priorities.")


class NarrateSummaryInput(StrictBaseModel):
    summary: NonEmptyStr = Field(..., description="Summary text to read aloud.")


class NarrateSummaryOutput(StrictBaseModel):
    audio_url: str = Field(..., description="WAV audio as a data URI.")
