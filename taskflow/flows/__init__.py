"""Flow framework and the task flows."""

from .base import Flow
from .decorators import flow, pipeline
from .registry import FlowMetadata, FlowRegistry, flow_registry
from . import task_flows  # noqa: F401  registers the task flows

__all__ = ["Flow", "FlowMetadata", "FlowRegistry", "flow", "flow_registry", "pipeline"]
