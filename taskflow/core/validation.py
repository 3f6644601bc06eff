"""Pydantic-based validation that raises framework errors."""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from taskflow.core.errors.errors import ErrorContext, ValidationError
from taskflow.core.errors.models import ValidationErrorDetail

T = TypeVar("T", bound=BaseModel)


def validate_data(
    data: Any,
    model_type: type[T],
    location: str = "data",
    component: str = "data_validator",
) -> T:
    """Validate data against a Pydantic model.

    Instances of ``model_type`` pass through unchanged; anything else is
    validated with ``model_validate``.

    Args:
        data: Data to validate
        model_type: Pydantic model class
        location: Location identifier for error reporting
        component: Component name recorded in the error context

    Returns:
        Validated model instance

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(data, model_type):
        return data
    try:
        return model_type.model_validate(data)
    except PydanticValidationError as e:
        validation_errors = []
        for error in e.errors():
            loc_path = ".".join(str(loc) for loc in error["loc"])
            validation_errors.append(
                ValidationErrorDetail(
                    location=f"{location}.{loc_path}" if loc_path else location,
                    message=error["msg"],
                    error_type=error["type"],
                )
            )
        raise ValidationError(
            message=f"Validation failed for {model_type.__name__}",
            validation_errors=validation_errors,
            context=ErrorContext.create(
                flow_name="validation",
                error_type="ValidationError",
                error_location=f"validation.{model_type.__name__}",
                component=component,
                operation="validate_data",
            ),
            cause=e,
        ) from e
