"""Tests for prompt formatting, prompt registration and LLM provider helpers."""

from typing import ClassVar

import pytest

from taskflow.flows.task_flows.prompts import ParseTaskPrompt, PrioritizeTasksPrompt
from taskflow.providers.llm.base import GenerationService, PromptConfigOverride, format_template
from taskflow.providers.llm.google_ai.provider import GoogleAIProvider, GoogleAISettings
from taskflow.providers.llm.prompts import PromptRegistry, prompt, prompt_registry


class TestFormatTemplate:
    def test_substitutes_placeholders(self):
        assert format_template("Task: {{title}} ({{ priority }})", {"title": "Ship", "priority": "High"}) == (
            "Task: Ship (High)"
        )

    def test_missing_variable_is_error(self):
        with pytest.raises(ValueError, match="title"):
            format_template("Task: {{title}}", {})

    def test_values_not_rescanned(self):
        assert format_template("{{text}}", {"text": "literal {{braces}}"}) == "literal {{braces}}"

    def test_single_braces_untouched(self):
        assert format_template('{"key": "{{v}}"}', {"v": 1}) == '{"key": "1"}'


class TestPromptConfigOverride:
    def test_range_checks(self):
        with pytest.raises(ValueError):
            PromptConfigOverride(temperature=2.5)
        with pytest.raises(ValueError):
            PromptConfigOverride(top_p=1.5)


class TestPromptDecorator:
    def test_task_prompts_registered(self):
        names = prompt_registry.list_prompts()
        for name in (
            "describe-task-prompt",
            "suggest-subtasks-prompt",
            "task-details-prompt",
            "task-image-prompt",
            "parse-task-prompt",
            "dashboard-summary-prompt",
            "prioritize-tasks-prompt",
        ):
            assert name in names
        assert prompt_registry.get("parse-task-prompt") is ParseTaskPrompt

    def test_requires_template(self):
        with pytest.raises(ValueError):

            @prompt("no-template")
            class NoTemplate:
                pass

    def test_rejects_wrong_config_type(self):
        with pytest.raises(TypeError):

            @prompt("bad-config")
            class BadConfig:
                template: ClassVar[str] = "x"
                config: ClassVar[dict] = {"temperature": 0.1}

    def test_registry_conflict(self):
        registry = PromptRegistry()
        registry.register("p", ParseTaskPrompt)
        registry.register("p", ParseTaskPrompt)
        with pytest.raises(ValueError):
            registry.register("p", PrioritizeTasksPrompt)
        with pytest.raises(KeyError):
            registry.get("missing")


class TestLLMProviderHelpers:
    @pytest.fixture
    def llm(self):
        return GoogleAIProvider(settings=GoogleAISettings(api_key="k", temperature=0.7, max_tokens=512))

    def test_satisfies_generation_service(self, llm):
        assert isinstance(llm, GenerationService)

    def test_prompt_config_overrides_settings(self, llm):
        params = llm._generation_params(ParseTaskPrompt)
        assert params == {"temperature": 0.2, "max_tokens": 512}

    def test_settings_used_without_prompt_config(self, llm):
        class Plain:
            template = "x"

        assert llm._generation_params(Plain) == {"temperature": 0.7, "max_tokens": 512}

    def test_render_prompt(self, llm):
        rendered = llm.render_prompt(PrioritizeTasksPrompt, {"task_list": "- ID: a"})
        assert "- ID: a" in rendered

    def test_render_prompt_requires_template(self, llm):
        with pytest.raises(TypeError):
            llm.render_prompt(object())
