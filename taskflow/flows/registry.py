"""Flow registry for tracking and creating flows.

Flows are registered as classes because each instance needs its own
generation service; ``create`` builds one on demand.
"""

import logging
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict

from taskflow.providers.llm.base import GenerationService

if TYPE_CHECKING:
    from .base import Flow

logger = logging.getLogger(__name__)


class FlowMetadata(BaseModel):
    """Descriptive information about a registered flow."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    description: str
    input_model: Optional[str] = None
    output_model: Optional[str] = None


class FlowRegistry:
    """Registry of flow classes keyed by flow name."""

    def __init__(self) -> None:
        self._flows: dict[str, type["Flow"]] = {}

    def register_flow(self, flow_name: str, flow_class: type["Flow"]) -> None:
        """Register a flow class.

        Raises:
            ValueError: If a different class is already registered under the name
        """
        existing = self._flows.get(flow_name)
        if existing is not None and existing is not flow_class:
            raise ValueError(f"Flow '{flow_name}' is already registered by {existing.__name__}")
        self._flows[flow_name] = flow_class
        logger.debug(f"Registered flow: {flow_name}")

    def get_flow_class(self, flow_name: str) -> type["Flow"]:
        if flow_name not in self._flows:
            raise KeyError(f"Flow '{flow_name}' not found in registry")
        return self._flows[flow_name]

    def get_flows(self) -> list[str]:
        """All registered flow names, sorted."""
        return sorted(self._flows)

    def create(self, flow_name: str, generation: GenerationService) -> "Flow":
        """Instantiate a registered flow bound to ``generation``."""
        return self.get_flow_class(flow_name)(generation)

    def get_flow_metadata(self, flow_name: str) -> FlowMetadata:
        flow_class = self.get_flow_class(flow_name)
        input_model = flow_class.get_pipeline_input_model()
        output_model = flow_class.get_pipeline_output_model()
        return FlowMetadata(
            name=flow_name,
            description=flow_class.description,
            input_model=input_model.__name__ if input_model else None,
            output_model=output_model.__name__ if output_model else None,
        )


flow_registry = FlowRegistry()
