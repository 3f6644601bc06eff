"""Quick Add: turn free text into task fields."""

import logging

from taskflow.flows.base import Flow
from taskflow.flows.dates import resolve_due_date
from taskflow.flows.decorators import flow, pipeline

from .models import ParsedTaskResponse, ParseTaskInput, ParseTaskOutput
from .prompts import ParseTaskPrompt

logger = logging.getLogger(__name__)


@flow(name="parse-task", description="Quick Add: parse natural language into a task")
class ParseTaskFlow(Flow):
    """Extracts title, description, priority and due date.

    Relative date expressions are resolved against ``current_date``
    locally; the model's own date is used only when the text contains no
    recognizable expression. A date that cannot be resolved is dropped.
    """

    @pipeline(input_model=ParseTaskInput, output_model=ParseTaskOutput)
    async def run_pipeline(self, input_data: ParseTaskInput) -> ParseTaskOutput:
        response = await self.generation.generate_structured(
            prompt=ParseTaskPrompt,
            output_type=ParsedTaskResponse,
            prompt_variables={"text": input_data.text, "current_date": input_data.current_date.isoformat()},
        )
        title = response.title.strip()
        if not title:
            raise self.generation_error("The model did not extract a task title.")

        due_date = resolve_due_date(response.due_date, input_data.current_date, text=input_data.text)
        logger.debug(f"Parsed '{input_data.text}' -> title='{title}', due={due_date}")
        return ParseTaskOutput(
            title=title,
            description=(response.description or "").strip() or None,
            priority=response.priority,
            due_date=due_date,
        )
