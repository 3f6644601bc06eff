"""Smart Sort: reassign priorities across the board."""

import logging

from taskflow.flows.base import Flow
from taskflow.flows.decorators import flow, pipeline

from .models import PrioritizedTask, PrioritizeTasksInput, PrioritizeTasksOutput
from .prompts import PrioritizeTasksPrompt

logger = logging.getLogger(__name__)


def format_task_list(input_data: PrioritizeTasksInput) -> str:
    return "\n".join(
        f'- ID: {t.id}, Title: "{t.title}", Description: "{t.description or ""}"' for t in input_data.tasks
    )


@flow(name="prioritize-tasks", description="Smart Sort: assign a priority to every task")
class PrioritizeTasksFlow(Flow):
    """Returns one priority per known task id.

    Ids the model invents are dropped and only the first answer for an
    id is kept. An empty board short-circuits without calling the model.
    """

    @pipeline(input_model=PrioritizeTasksInput, output_model=PrioritizeTasksOutput)
    async def run_pipeline(self, input_data: PrioritizeTasksInput) -> PrioritizeTasksOutput:
        if not input_data.tasks:
            return PrioritizeTasksOutput(prioritized_tasks=[])

        result = await self.generation.generate_structured(
            prompt=PrioritizeTasksPrompt,
            output_type=PrioritizeTasksOutput,
            prompt_variables={"task_list": format_task_list(input_data)},
        )

        known_ids = {t.id for t in input_data.tasks}
        seen: set[str] = set()
        prioritized: list[PrioritizedTask] = []
        for item in result.prioritized_tasks:
            if item.id not in known_ids:
                logger.warning(f"Dropping priority for unknown task id '{item.id}'")
                continue
            if item.id in seen:
                continue
            seen.add(item.id)
            prioritized.append(item)

        if not prioritized:
            raise self.generation_error("The model returned no priorities for the given tasks.")
        return PrioritizeTasksOutput(prioritized_tasks=prioritized)
