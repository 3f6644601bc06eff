"""TaskFlow: task board domain with AI-assisted task flows."""

__version__ = "0.1.0"

from taskflow.flows import Flow, flow, flow_registry, pipeline
from taskflow.persistence import PersistenceAdapter
from taskflow.session import Session, StaticIdentityProvider, UserIdentity
from taskflow.tasks import NotificationStore, Priority, Status, Task, TaskDraft, TaskPatch, TaskStore

__all__ = [
    "Flow",
    "NotificationStore",
    "PersistenceAdapter",
    "Priority",
    "Session",
    "StaticIdentityProvider",
    "Status",
    "Task",
    "TaskDraft",
    "TaskPatch",
    "TaskStore",
    "UserIdentity",
    "__version__",
    "flow",
    "flow_registry",
    "pipeline",
]
