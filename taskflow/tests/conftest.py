"""Shared fixtures: a recording fake generation service and store helpers."""

import asyncio
from datetime import datetime
from typing import Any, Optional

import pytest
from pydantic import BaseModel

from taskflow.core.errors.errors import ErrorContext, ProviderError
from taskflow.core.errors.models import ProviderErrorContext
from taskflow.persistence.adapter import PersistenceAdapter
from taskflow.providers.llm.base import MediaOutput
from taskflow.providers.storage.memory.provider import MemoryStorageProvider
from taskflow.tasks.models import Priority, Status, Task
from taskflow.tasks.notifications import NotificationStore
from taskflow.tasks.store import TaskStore

IMAGE_URI = "data:image/png;base64,iVBORw0KGgo="
AUDIO_URI = "data:audio/wav;base64,UklGRg=="


def make_provider_error(message: str = "service unavailable") -> ProviderError:
    return ProviderError(
        message=message,
        context=ErrorContext.create(
            flow_name="llm_provider",
            error_type="ProviderError",
            error_location="FakeGenerationService",
            component="fake",
            operation="generate",
        ),
        provider_context=ProviderErrorContext(provider_name="fake", provider_type="llm", operation="generate"),
    )


class FakeGenerationService:
    """GenerationService double that records every call.

    ``responses`` maps an output model class to the value to return (a model
    instance, a dict to validate, or an exception to raise). ``delays`` maps
    ``structured``/``image``/``speech`` to seconds to wait before answering;
    branches cancelled while waiting are recorded in ``cancelled``.
    """

    def __init__(self) -> None:
        self.responses: dict[type, Any] = {}
        self.image: Any = MediaOutput(mime_type="image/png", data_uri=IMAGE_URI)
        self.speech: Any = MediaOutput(mime_type="audio/wav", data_uri=AUDIO_URI)
        self.delays: dict[str, float] = {}
        self.calls: list[tuple[str, Any, Optional[dict[str, Any]]]] = []
        self.cancelled: list[str] = []

    async def _pause(self, kind: str) -> None:
        delay = self.delays.get(kind)
        if not delay:
            return
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self.cancelled.append(kind)
            raise

    async def generate_structured(self, prompt, output_type, prompt_variables=None):
        self.calls.append(("structured", prompt, prompt_variables))
        await self._pause("structured")
        response = self.responses[output_type]
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, BaseModel):
            return response
        return output_type.model_validate(response)

    async def generate_image(self, prompt, prompt_variables=None):
        self.calls.append(("image", prompt, prompt_variables))
        await self._pause("image")
        if isinstance(self.image, BaseException):
            raise self.image
        return self.image

    async def generate_speech(self, text):
        self.calls.append(("speech", None, {"text": text}))
        await self._pause("speech")
        if isinstance(self.speech, BaseException):
            raise self.speech
        return self.speech


@pytest.fixture
def fake_generation() -> FakeGenerationService:
    return FakeGenerationService()


@pytest.fixture
def provider_error():
    return make_provider_error


@pytest.fixture
def memory_storage() -> MemoryStorageProvider:
    return MemoryStorageProvider()


@pytest.fixture
def adapter(memory_storage) -> PersistenceAdapter:
    return PersistenceAdapter(memory_storage)


@pytest.fixture
def notification_store() -> NotificationStore:
    return NotificationStore()


@pytest.fixture
def task_store(notification_store) -> TaskStore:
    return TaskStore(notification_store)


@pytest.fixture
def make_task():
    """Factory for tasks with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(
        title: str = "Task",
        status: Status = Status.TODO,
        priority: Priority = Priority.MEDIUM,
        due_date: Optional[datetime] = None,
        **kwargs: Any,
    ) -> Task:
        task_id = kwargs.pop("id", f"task-{next(counter)}")
        return Task(id=task_id, title=title, status=status, priority=priority, due_date=due_date, **kwargs)

    return _make
