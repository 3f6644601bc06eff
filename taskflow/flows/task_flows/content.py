"""Flows that draft task content: description, subtasks, image, full task."""

import asyncio
import logging

from taskflow.flows.base import Flow
from taskflow.flows.decorators import flow, pipeline

from .models import (
    DescribeTaskInput,
    DescribeTaskOutput,
    DraftFullTaskInput,
    DraftFullTaskOutput,
    GenerateTaskImageInput,
    GenerateTaskImageOutput,
    SuggestSubtasksInput,
    SuggestSubtasksOutput,
    TaskDetails,
)
from .prompts import DescribeTaskPrompt, SuggestSubtasksPrompt, TaskDetailsPrompt, TaskImagePrompt

logger = logging.getLogger(__name__)


def _clean_items(items: list[str]) -> list[str]:
    return [item.strip() for item in items if item.strip()]


@flow(name="describe-task", description="Write a detailed description for a task title")
class DescribeTaskFlow(Flow):
    @pipeline(input_model=DescribeTaskInput, output_model=DescribeTaskOutput)
    async def run_pipeline(self, input_data: DescribeTaskInput) -> DescribeTaskOutput:
        result = await self.generation.generate_structured(
            prompt=DescribeTaskPrompt,
            output_type=DescribeTaskOutput,
            prompt_variables={"title": input_data.title},
        )
        if not result.description.strip():
            raise self.generation_error("The model returned an empty description.")
        return DescribeTaskOutput(description=result.description.strip())


@flow(name="suggest-subtasks", description="Break a task into short actionable subtasks")
class SuggestSubtasksFlow(Flow):
    @pipeline(input_model=SuggestSubtasksInput, output_model=SuggestSubtasksOutput)
    async def run_pipeline(self, input_data: SuggestSubtasksInput) -> SuggestSubtasksOutput:
        result = await self.generation.generate_structured(
            prompt=SuggestSubtasksPrompt,
            output_type=SuggestSubtasksOutput,
            prompt_variables={"title": input_data.title, "description": input_data.description},
        )
        subtasks = _clean_items(result.subtasks)
        if not subtasks:
            raise self.generation_error("The model suggested no subtasks.")
        return SuggestSubtasksOutput(subtasks=subtasks)


@flow(name="generate-task-image", description="Generate a cover image for a task")
class GenerateTaskImageFlow(Flow):
    @pipeline(input_model=GenerateTaskImageInput, output_model=GenerateTaskImageOutput)
    async def run_pipeline(self, input_data: GenerateTaskImageInput) -> GenerateTaskImageOutput:
        media = await self.generation.generate_image(prompt=TaskImagePrompt, prompt_variables={"title": input_data.title})
        return GenerateTaskImageOutput(image_url=media.data_uri)


@flow(name="draft-full-task", description="Smart Create: draft description, priority, subtasks and image from a title")
class DraftFullTaskFlow(Flow):
    """Issues the text and image requests concurrently.

    Both must succeed. If either fails the other is cancelled and the
    flow fails as a whole, so no partial draft is ever returned.
    """

    @pipeline(input_model=DraftFullTaskInput, output_model=DraftFullTaskOutput)
    async def run_pipeline(self, input_data: DraftFullTaskInput) -> DraftFullTaskOutput:
        variables = {"title": input_data.title}
        details_task = asyncio.ensure_future(
            self.generation.generate_structured(
                prompt=TaskDetailsPrompt, output_type=TaskDetails, prompt_variables=variables
            )
        )
        image_task = asyncio.ensure_future(
            self.generation.generate_image(prompt=TaskImagePrompt, prompt_variables=variables)
        )
        try:
            details, media = await asyncio.gather(details_task, image_task)
        except BaseException:
            for task in (details_task, image_task):
                task.cancel()
            # Let cancelled branches settle before the failure propagates
            await asyncio.gather(details_task, image_task, return_exceptions=True)
            logger.warning(f"Smart Create failed for '{input_data.title}'")
            raise

        if not details.description.strip():
            raise self.generation_error("Failed to generate task details.")
        return DraftFullTaskOutput(
            description=details.description.strip(),
            priority=details.priority,
            subtasks=_clean_items(details.subtasks),
            image_url=media.data_uri,
        )
