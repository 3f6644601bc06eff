"""Flow base class.

A flow is a named request/response operation. Its single ``@pipeline``
method declares an input and an output model; ``execute`` validates the
input before any generation call, runs the pipeline inside an error
boundary and checks the result type.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, ClassVar, Optional

from pydantic import BaseModel

from taskflow.core.errors.errors import (
    ErrorContext,
    ErrorManager,
    ExecutionError,
    GenerationError,
    ProviderError,
    ValidationError,
    default_manager,
)
from taskflow.core.errors.models import ValidationErrorDetail
from taskflow.core.validation import validate_data
from taskflow.providers.llm.base import GenerationService

logger = logging.getLogger(__name__)


class Flow:
    """Base class for all flows.

    Flows receive their generation service by constructor injection. The
    ``@flow`` decorator fills in ``name``, ``description`` and the
    pipeline method name.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    __pipeline_method__: ClassVar[Optional[str]] = None

    def __init__(self, generation: GenerationService, error_manager: Optional[ErrorManager] = None):
        self.generation = generation
        self.error_manager = error_manager or default_manager

    @classmethod
    def get_pipeline_method_cls(cls) -> Optional[Callable[..., Any]]:
        if cls.__pipeline_method__ is None:
            return None
        return getattr(cls, cls.__pipeline_method__)

    @classmethod
    def get_pipeline_input_model(cls) -> Optional[type[BaseModel]]:
        method = cls.get_pipeline_method_cls()
        return getattr(method, "__input_model__", None) if method else None

    @classmethod
    def get_pipeline_output_model(cls) -> Optional[type[BaseModel]]:
        method = cls.get_pipeline_method_cls()
        return getattr(method, "__output_model__", None) if method else None

    async def execute(self, data: Any) -> Any:
        """Run the flow on ``data`` (an input model instance or a dict).

        Returns:
            An instance of the pipeline's output model

        Raises:
            ValidationError: If the input does not match the input model
            GenerationError: If the generation service yields no usable output
            ExecutionError: If the pipeline fails for another reason
        """
        started = datetime.now()
        async with self.error_manager.error_boundary(
            flow_name=self.name, component="flow_execution", operation="execute_pipeline"
        ):
            if self.__pipeline_method__ is None:
                raise ExecutionError(
                    "No pipeline method found on flow. Each flow must have exactly one @pipeline method.",
                    self._error_context("ExecutionError", "execute"),
                )
            pipeline_method = getattr(self, self.__pipeline_method__)
            input_model = self.get_pipeline_input_model()
            output_model = self.get_pipeline_output_model()

            pipeline_input = data
            if input_model is not None:
                pipeline_input = validate_data(data, input_model, location="pipeline_input", component=self.name)

            try:
                result = await pipeline_method(pipeline_input)
            except ProviderError as e:
                raise GenerationError(
                    message=f"Generation failed: {e.message}",
                    context=self._error_context("GenerationError", "execute_pipeline"),
                    cause=e,
                ) from e

            if output_model is not None and not isinstance(result, output_model):
                raise ValidationError(
                    f"Pipeline must return an instance of {output_model.__name__}, got {type(result).__name__}",
                    validation_errors=[
                        ValidationErrorDetail(
                            location="pipeline_output",
                            message=f"Expected {output_model.__name__}, got {type(result).__name__}",
                            error_type="TypeMismatchError",
                        )
                    ],
                    context=self._error_context("OutputValidationError", "output_validation"),
                )

        logger.info(f"Flow '{self.name}' completed in {(datetime.now() - started).total_seconds():.3f}s")
        return result

    def generation_error(self, message: str, cause: Optional[Exception] = None) -> GenerationError:
        """Build the error a pipeline raises when output is empty or unusable."""
        return GenerationError(
            message=message,
            context=self._error_context("GenerationError", "execute_pipeline"),
            cause=cause,
        )

    def _error_context(self, error_type: str, operation: str) -> ErrorContext:
        return ErrorContext.create(
            flow_name=self.name,
            error_type=error_type,
            error_location=f"{self.__class__.__name__}.{operation}",
            component=self.name,
            operation=operation,
        )

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
