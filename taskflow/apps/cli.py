"""Command-line front end for a local TaskFlow board.

Examples:
  taskflow list --status "In Progress"
  taskflow add "Write report" --priority High --due 2025-07-01
  taskflow quick "Call the dentist next Friday, urgent"
  taskflow smart "Plan team offsite"
  taskflow sort
  taskflow summary --narrate summary.wav
"""

import argparse
import asyncio
import base64
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from taskflow.core.errors.errors import BaseError
from taskflow.core.settings.settings import TaskflowSettings, configure_logging, load_settings
from taskflow.flows import flow_registry
from taskflow.flows.task_flows.models import PrioritizeTasksInput
from taskflow.persistence.adapter import PersistenceAdapter
from taskflow.providers.core.registry import provider_registry
from taskflow.providers.llm.base import LLMProvider
from taskflow.providers.storage.local.provider import LocalStorageProvider, LocalStorageSettings
from taskflow.session.identity import StaticIdentityProvider, UserIdentity
from taskflow.session.session import Session
from taskflow.tasks.models import Priority, Status, Task, TaskDraft
from taskflow.tasks.views import dashboard_stats, filter_tasks, group_by_status, summary_input

logger = logging.getLogger(__name__)

STATUS_NAMES = {
    "todo": Status.TODO,
    "to do": Status.TODO,
    "in-progress": Status.IN_PROGRESS,
    "in progress": Status.IN_PROGRESS,
    "done": Status.DONE,
}


def parse_status(value: str) -> Status:
    try:
        return STATUS_NAMES[value.strip().lower()]
    except KeyError:
        raise argparse.ArgumentTypeError(f"Unknown status '{value}' (use todo, in-progress or done)")


def parse_priority(value: str) -> Priority:
    try:
        return Priority(value.strip().capitalize())
    except ValueError:
        raise argparse.ArgumentTypeError(f"Unknown priority '{value}' (use low, medium or high)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskflow",
        description="Manage a TaskFlow board from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", type=Path, help="YAML or JSON settings file")
    parser.add_argument("--storage-dir", type=Path, help="Directory holding stored records")
    parser.add_argument("--user", default="local", help="User id whose board to open (default: local)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Show the board")
    list_parser.add_argument("--search", default="", help="Case-insensitive title/description filter")
    list_parser.add_argument("--priority", type=parse_priority, help="Only tasks with this priority")
    list_parser.add_argument("--status", type=parse_status, help="Only tasks with this status")

    add_parser = subparsers.add_parser("add", help="Add a task")
    add_parser.add_argument("title")
    add_parser.add_argument("--description", default="")
    add_parser.add_argument("--priority", type=parse_priority, default=Priority.MEDIUM)
    add_parser.add_argument("--due", type=datetime.fromisoformat, help="Due date (YYYY-MM-DD)")

    quick_parser = subparsers.add_parser("quick", help="Quick Add a task from natural language")
    quick_parser.add_argument("text")

    smart_parser = subparsers.add_parser("smart", help="Smart Create a task from a title")
    smart_parser.add_argument("title")

    move_parser = subparsers.add_parser("move", help="Move a task to another column")
    move_parser.add_argument("task_id")
    move_parser.add_argument("status", type=parse_status)

    done_parser = subparsers.add_parser("done", help="Mark a task as done")
    done_parser.add_argument("task_id")

    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("task_id")

    subparsers.add_parser("sort", help="Smart Sort: let the model reassign priorities")

    summary_parser = subparsers.add_parser("summary", help="Dashboard statistics and AI summary")
    summary_parser.add_argument("--narrate", type=Path, help="Write a spoken summary to this WAV file")

    notifications_parser = subparsers.add_parser("notifications", help="Show notifications")
    notifications_parser.add_argument("--mark-read", action="store_true", help="Mark all notifications as read")

    return parser


def format_task(task: Task) -> str:
    due = f" due {task.due_date.date().isoformat()}" if task.due_date else ""
    subtasks = f" [{sum(s.completed for s in task.subtasks)}/{len(task.subtasks)}]" if task.subtasks else ""
    return f"  {task.id}  ({task.priority.value}) {task.title}{due}{subtasks}"


def print_board(tasks: list[Task]) -> None:
    for status, column in group_by_status(tasks).items():
        print(f"{status.value} ({len(column)})")
        for task in column:
            print(format_task(task))


def open_session(settings: TaskflowSettings, user_id: str) -> Session:
    storage = LocalStorageProvider(settings=LocalStorageSettings(base_path=str(settings.storage_dir)))
    adapter = PersistenceAdapter(storage, seed_new_users=settings.seed_new_users)
    session = Session(adapter, notification_limit=settings.notification_limit)
    session.sync(StaticIdentityProvider(UserIdentity(uid=user_id)))
    return session


def create_generation(settings: TaskflowSettings) -> LLMProvider:
    provider = provider_registry.create(
        "llm",
        "googleai",
        {
            "api_key": settings.google_api_key,
            "text_model": settings.text_model,
            "image_model": settings.image_model,
            "speech_model": settings.speech_model,
            "speech_voice": settings.speech_voice,
            "temperature": settings.temperature,
            "max_tokens": settings.max_tokens,
            "timeout": settings.request_timeout,
        },
    )
    if not isinstance(provider, LLMProvider):
        raise TypeError(f"Provider {provider.name} is not an LLM provider")
    return provider


async def run_flow(settings: TaskflowSettings, flow_name: str, data: Any) -> Any:
    """Run a registered flow against a freshly initialized generation provider."""
    generation = create_generation(settings)
    await generation.initialize()
    try:
        return await flow_registry.create(flow_name, generation).execute(data)
    finally:
        await generation.shutdown()


async def dispatch(args: argparse.Namespace, settings: TaskflowSettings, session: Session) -> int:
    store = session.tasks

    if args.command == "list":
        print_board(filter_tasks(store.tasks, query=args.search, priority=args.priority, status=args.status))
        return 0

    if args.command == "add":
        task = store.create(
            TaskDraft(title=args.title, description=args.description, priority=args.priority, due_date=args.due)
        )
        print(f"Added {task.id}")
        return 0

    if args.command == "quick":
        parsed = await run_flow(settings, "parse-task", {"text": args.text})
        task = store.create(parsed.to_draft())
        print(f"Added {task.id}")
        print(format_task(task))
        return 0

    if args.command == "smart":
        draft = await run_flow(settings, "draft-full-task", {"title": args.title})
        task = store.create(draft.to_draft(args.title))
        print(f"Added {task.id}")
        print(f"  {task.description}")
        for subtask in task.subtasks:
            print(f"  - {subtask.text}")
        return 0

    if args.command in ("move", "done", "delete"):
        if args.command == "delete":
            result = store.delete(args.task_id)
        else:
            result = store.move(args.task_id, Status.DONE if args.command == "done" else args.status)
        if result is None:
            print(f"No task with id {args.task_id}", file=sys.stderr)
            return 1
        print(format_task(result))
        return 0

    if args.command == "sort":
        result = await run_flow(settings, "prioritize-tasks", PrioritizeTasksInput.from_tasks(store.tasks))
        updated = store.apply_priorities(result)
        print(f"Re-prioritized {len(updated)} tasks")
        print_board(store.tasks)
        return 0

    if args.command == "summary":
        stats = dashboard_stats(store.tasks)
        print(
            f"Total {stats.total} | To Do {stats.todo} | In Progress {stats.in_progress} | "
            f"Done {stats.completed} ({stats.completion_rate}%)"
        )
        print(f"Overdue {len(stats.overdue)} | Due this week {len(stats.upcoming)}")
        summary = await run_flow(settings, "summarize-dashboard", summary_input(stats))
        print(summary.summary)
        if args.narrate:
            narration = await run_flow(settings, "narrate-summary", {"summary": summary.summary})
            args.narrate.write_bytes(base64.b64decode(narration.audio_url.split(",", 1)[1]))
            print(f"Wrote {args.narrate}")
        return 0

    if args.command == "notifications":
        notifications = session.notifications
        for notification in notifications.notifications:
            marker = " " if notification.read else "*"
            print(f"{marker} {notification.timestamp:%Y-%m-%d %H:%M}  {notification.message}")
        if args.mark_read:
            notifications.mark_all_read()
        return 0

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Console entry point."""
    args = build_parser().parse_args(argv)

    overrides: dict[str, Any] = {}
    if args.storage_dir is not None:
        overrides["storage_dir"] = args.storage_dir
    if args.debug:
        overrides["log_level"] = "DEBUG"
    settings = load_settings(args.config, **overrides)
    configure_logging(settings)

    session = open_session(settings, args.user)
    try:
        return asyncio.run(dispatch(args, settings, session))
    except BaseError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    finally:
        session.deactivate()


if __name__ == "__main__":
    sys.exit(main())
