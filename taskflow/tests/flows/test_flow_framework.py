"""Tests for Flow execution, the flow decorators and the flow registry."""

from unittest.mock import Mock

import pytest

from taskflow.core.errors.errors import ErrorManager, ExecutionError, GenerationError, ValidationError
from taskflow.core.models import StrictBaseModel
from taskflow.flows.base import Flow
from taskflow.flows.decorators import flow, pipeline
from taskflow.flows.registry import FlowRegistry, flow_registry
from taskflow.tasks.models import NonEmptyStr


class EchoInput(StrictBaseModel):
    text: NonEmptyStr


class EchoOutput(StrictBaseModel):
    text: str


@flow(name="test-echo", description="Echo the input text")
class EchoFlow(Flow):
    @pipeline(input_model=EchoInput, output_model=EchoOutput)
    async def run_pipeline(self, input_data: EchoInput) -> EchoOutput:
        return EchoOutput(text=input_data.text)


@flow(name="test-wrong-output", description="Returns a dict instead of its output model")
class WrongOutputFlow(Flow):
    @pipeline(input_model=EchoInput, output_model=EchoOutput)
    async def run_pipeline(self, input_data: EchoInput):
        return {"text": input_data.text}


@flow(name="test-crashing", description="Fails with an unexpected exception")
class CrashingFlow(Flow):
    @pipeline(input_model=EchoInput, output_model=EchoOutput)
    async def run_pipeline(self, input_data: EchoInput) -> EchoOutput:
        raise KeyError("boom")


@flow(name="test-speaking", description="Calls the speech service")
class SpeakingFlow(Flow):
    @pipeline(input_model=EchoInput, output_model=EchoOutput)
    async def run_pipeline(self, input_data: EchoInput) -> EchoOutput:
        media = await self.generation.generate_speech(input_data.text)
        return EchoOutput(text=media.data_uri)


class TestFlowExecute:
    async def test_accepts_dict_and_model(self, fake_generation):
        echo = EchoFlow(fake_generation)
        assert (await echo.execute({"text": "hi"})).text == "hi"
        assert (await echo.execute(EchoInput(text="yo"))).text == "yo"

    async def test_invalid_input_raises_validation_error(self, fake_generation):
        with pytest.raises(ValidationError) as exc_info:
            await SpeakingFlow(fake_generation).execute({"text": ""})
        assert exc_info.value.validation_errors[0].location == "pipeline_input.text"
        assert fake_generation.calls == []

    async def test_output_type_checked(self, fake_generation):
        with pytest.raises(ValidationError, match="EchoOutput"):
            await WrongOutputFlow(fake_generation).execute({"text": "hi"})

    async def test_unexpected_exception_becomes_execution_error(self, fake_generation):
        with pytest.raises(ExecutionError) as exc_info:
            await CrashingFlow(fake_generation).execute({"text": "hi"})
        assert isinstance(exc_info.value.cause, KeyError)

    async def test_provider_error_becomes_generation_error(self, fake_generation, provider_error):
        fake_generation.speech = provider_error("quota exceeded")
        with pytest.raises(GenerationError, match="quota exceeded"):
            await SpeakingFlow(fake_generation).execute({"text": "hi"})

    async def test_error_manager_handlers_run(self, fake_generation):
        manager = ErrorManager()
        handler = Mock()
        manager.register(ExecutionError, handler)
        with pytest.raises(ExecutionError):
            await CrashingFlow(fake_generation, error_manager=manager).execute({"text": "hi"})
        handler.assert_called_once()


class TestDecorators:
    def test_flow_metadata_set(self):
        assert EchoFlow.name == "test-echo"
        assert EchoFlow.description == "Echo the input text"
        assert EchoFlow.get_pipeline_input_model() is EchoInput
        assert EchoFlow.get_pipeline_output_model() is EchoOutput

    def test_requires_flow_subclass(self):
        with pytest.raises(TypeError):

            @flow(name="test-not-a-flow", description="x")
            class NotAFlow:
                pass

    def test_requires_a_pipeline(self):
        with pytest.raises(ValueError, match="exactly one"):

            @flow(name="test-no-pipeline", description="x")
            class NoPipeline(Flow):
                pass

    def test_rejects_two_pipelines(self):
        with pytest.raises(ValueError, match="multiple"):

            @flow(name="test-two-pipelines", description="x")
            class TwoPipelines(Flow):
                @pipeline(input_model=EchoInput, output_model=EchoOutput)
                async def first(self, input_data):
                    pass

                @pipeline(input_model=EchoInput, output_model=EchoOutput)
                async def second(self, input_data):
                    pass

    def test_pipeline_models_must_be_pydantic(self):
        with pytest.raises(ValueError):
            pipeline(input_model=dict, output_model=EchoOutput)


class TestFlowRegistry:
    def test_task_flows_registered(self):
        expected = {
            "describe-task",
            "suggest-subtasks",
            "draft-full-task",
            "generate-task-image",
            "parse-task",
            "summarize-dashboard",
            "prioritize-tasks",
            "narrate-summary",
        }
        assert expected <= set(flow_registry.get_flows())

    def test_create_binds_generation(self, fake_generation):
        instance = flow_registry.create("test-echo", fake_generation)
        assert isinstance(instance, EchoFlow)
        assert instance.generation is fake_generation

    def test_metadata(self):
        metadata = flow_registry.get_flow_metadata("parse-task")
        assert metadata.input_model == "ParseTaskInput"
        assert metadata.output_model == "ParseTaskOutput"

    def test_conflicting_registration(self):
        registry = FlowRegistry()
        registry.register_flow("echo", EchoFlow)
        registry.register_flow("echo", EchoFlow)
        with pytest.raises(ValueError):
            registry.register_flow("echo", CrashingFlow)

    def test_unknown_flow(self):
        with pytest.raises(KeyError):
            FlowRegistry().get_flow_class("missing")
