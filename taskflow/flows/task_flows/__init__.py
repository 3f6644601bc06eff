"""Task flows. Importing this package registers every flow."""

from .content import DescribeTaskFlow, DraftFullTaskFlow, GenerateTaskImageFlow, SuggestSubtasksFlow
from .dashboard import EMPTY_BOARD_SUMMARY, NarrateSummaryFlow, SummarizeDashboardFlow
from .models import (
    DescribeTaskInput,
    DescribeTaskOutput,
    DraftFullTaskInput,
    DraftFullTaskOutput,
    GenerateTaskImageInput,
    GenerateTaskImageOutput,
    NarrateSummaryInput,
    NarrateSummaryOutput,
    ParseTaskInput,
    ParseTaskOutput,
    PrioritizedTask,
    PrioritizeTasksInput,
    PrioritizeTasksOutput,
    SuggestSubtasksInput,
    SuggestSubtasksOutput,
    SummarizeDashboardInput,
    SummarizeDashboardOutput,
    TaskDetails,
    TaskInfo,
)
from .parse import ParseTaskFlow
from .prioritize import PrioritizeTasksFlow

__all__ = [
    "EMPTY_BOARD_SUMMARY",
    "DescribeTaskFlow",
    "DescribeTaskInput",
    "DescribeTaskOutput",
    "DraftFullTaskFlow",
    "DraftFullTaskInput",
    "DraftFullTaskOutput",
    "GenerateTaskImageFlow",
    "GenerateTaskImageInput",
    "GenerateTaskImageOutput",
    "NarrateSummaryFlow",
    "NarrateSummaryInput",
    "NarrateSummaryOutput",
    "ParseTaskFlow",
    "ParseTaskInput",
    "ParseTaskOutput",
    "PrioritizeTasksFlow",
    "PrioritizeTasksInput",
    "PrioritizeTasksOutput",
    "PrioritizedTask",
    "SuggestSubtasksFlow",
    "SuggestSubtasksInput",
    "SuggestSubtasksOutput",
    "SummarizeDashboardFlow",
    "SummarizeDashboardInput",
    "SummarizeDashboardOutput",
    "TaskDetails",
    "TaskInfo",
]
