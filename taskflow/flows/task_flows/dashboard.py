"""Dashboard flows: motivational summary and its spoken narration."""

import logging

from taskflow.flows.base import Flow
from taskflow.flows.decorators import flow, pipeline

from .models import (
    NarrateSummaryInput,
    NarrateSummaryOutput,
    SummarizeDashboardInput,
    SummarizeDashboardOutput,
)
from .prompts import DashboardSummaryPrompt

logger = logging.getLogger(__name__)

EMPTY_BOARD_SUMMARY = "No tasks yet! Add a new task to get started and see your progress here."


@flow(name="summarize-dashboard", description="Write a short motivational summary of task statistics")
class SummarizeDashboardFlow(Flow):
    @pipeline(input_model=SummarizeDashboardInput, output_model=SummarizeDashboardOutput)
    async def run_pipeline(self, input_data: SummarizeDashboardInput) -> SummarizeDashboardOutput:
        if input_data.total_tasks == 0:
            return SummarizeDashboardOutput(summary=EMPTY_BOARD_SUMMARY)

        result = await self.generation.generate_structured(
            prompt=DashboardSummaryPrompt,
            output_type=SummarizeDashboardOutput,
            prompt_variables=input_data.model_dump(),
        )
        if not result.summary.strip():
            raise self.generation_error("The model returned an empty summary.")
        return SummarizeDashboardOutput(summary=result.summary.strip())


@flow(name="narrate-summary", description="Read a dashboard summary aloud")
class NarrateSummaryFlow(Flow):
    @pipeline(input_model=NarrateSummaryInput, output_model=NarrateSummaryOutput)
    async def run_pipeline(self, input_data: NarrateSummaryInput) -> NarrateSummaryOutput:
        media = await self.generation.generate_speech(input_data.summary)
        return NarrateSummaryOutput(audio_url=media.data_uri)
