"""Prompts for the task flows."""

from typing import ClassVar

from taskflow.providers.llm.base import PromptConfigOverride
from taskflow.providers.llm.prompts import prompt


@prompt("describe-task-prompt")
class DescribeTaskPrompt:
    """Writes a description from a task title."""

    template: ClassVar[str] = """You are an expert project manager. Your goal is to take a task title and write a detailed, helpful description for it.
The description should clarify the task's purpose and scope.

Task Title: {{title}}
"""


@prompt("suggest-subtasks-prompt")
class SuggestSubtasksPrompt:
    """Breaks a task into short checklist items."""

    template: ClassVar[str] = """You are an expert project manager. Based on the task title and description, break it down into a list of smaller, actionable subtasks. Each subtask should be a short phrase.

Task Title: {{title}}
Task Description: {{description}}

Generate a list of subtasks. If the description is brief, create general subtasks appropriate for the title.
"""


@prompt("task-details-prompt")
class TaskDetailsPrompt:
    """Fleshes a bare title out into description, priority and subtasks."""

    template: ClassVar[str] = """You are an expert project manager. Your goal is to take a simple task title and flesh it out into a detailed, actionable task.
Based on the provided title, generate a detailed description, determine an appropriate priority (High, Medium, or Low), and break it down into a list of 2-4 smaller, actionable subtasks.

Task Title: {{title}}
"""


@prompt("task-image-prompt")
class TaskImagePrompt:
    template: ClassVar[str] = (
        'Generate a clean, modern, and professional image that visually represents the following task: "{{title}}". '
        "The image should be suitable for a project management application. Avoid text and logos."
    )


@prompt("parse-task-prompt")
class ParseTaskPrompt:
    """Extracts task fields from free text."""

    template: ClassVar[str] = """You are an intelligent task parsing assistant. Your job is to extract structured information from a user's text input to create a task.

Current Date: {{current_date}}

Analyze the user's text and extract the following information:
- A concise title for the task, without the date or priority wording.
- A detailed description, if one is provided.
- The priority (High, Medium, or Low). If not specified, you can infer it from keywords (e.g., 'urgent' implies High). If no inference can be made, leave it blank.
- The due date. If relative dates like "tomorrow", "next Friday", or "in 2 weeks" are used, convert them to a specific 'YYYY-MM-DD' format based on the current date.

User Input: "{{text}}"
"""
    config: ClassVar[PromptConfigOverride] = PromptConfigOverride(temperature=0.2)


@prompt("dashboard-summary-prompt")
class DashboardSummaryPrompt:
    """Short motivational summary of the dashboard statistics."""

    template: ClassVar[str] = """You are a friendly and encouraging productivity assistant. Based on the following task statistics, write a short, insightful, and motivational summary for the user.

Your tone should be positive and encouraging, even when mentioning overdue tasks.
Keep the summary to 2-3 sentences.

Statistics:
- Total Tasks: {{total_tasks}}
- Completed Tasks: {{completed_tasks}}
- Overdue Tasks: {{overdue_tasks}}
- Upcoming Tasks: {{upcoming_tasks}}
"""


@prompt("prioritize-tasks-prompt")
class PrioritizeTasksPrompt:
    """Assigns a priority to every task on the board."""

    template: ClassVar[str] = """You are an expert project manager. Your goal is to intelligently prioritize a list of tasks.

Analyze the provided list of tasks, paying close attention to keywords in the title and description that imply urgency or importance (e.g., "bug", "urgent", "critical", "ASAP" vs. "plan", "research", "later").

Based on your analysis, assign a priority (High, Medium, or Low) to each task.
Return the full list of tasks with their newly assigned priorities, using the IDs exactly as given.

Tasks to prioritize:
{{task_list}}
"""
    config: ClassVar[PromptConfigOverride] = PromptConfigOverride(temperature=0.3)
