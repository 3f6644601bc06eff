"""Base error classes with structured error context.

This module provides the error hierarchy used by flows, providers, the
persistence adapter and the session, together with an error manager that
turns unexpected exceptions into framework errors at flow boundaries.
"""

import inspect
import logging
import traceback
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

from .models import (
    ErrorContextData,
    PersistenceErrorContext,
    ProviderErrorContext,
    ValidationErrorDetail,
)

logger = logging.getLogger(__name__)


class ErrorContext:
    """Structured context attached to every TaskFlow error."""

    def __init__(self, context_data: ErrorContextData):
        """Initialize error context.

        Args:
            context_data: Required error context data
        """
        self._data = context_data

    @classmethod
    def create(
        cls, flow_name: str, error_type: str, error_location: str, component: str, operation: str
    ) -> "ErrorContext":
        """Create a new error context with required data.

        Args:
            flow_name: Name of the flow
            error_type: Type of error
            error_location: Location in code
            component: Component raising error
            operation: Operation being performed

        Returns:
            New ErrorContext instance
        """
        context_data = ErrorContextData(
            flow_name=flow_name,
            error_type=error_type,
            error_location=error_location,
            component=component,
            operation=operation,
        )
        return cls(context_data)

    @property
    def data(self) -> ErrorContextData:
        """Get the context data."""
        return self._data

    @property
    def timestamp(self) -> datetime:
        """Get the context creation timestamp."""
        return self._data.timestamp

    def __str__(self) -> str:
        return f"ErrorContext({self._data.model_dump()})"


class BaseError(Exception):
    """Base class for all TaskFlow errors.

    Carries a message, a structured context and an optional cause.
    """

    def __init__(self, message: str, context: ErrorContext, cause: Exception | None = None):
        """Initialize error.

        Args:
            message: Error message
            context: Required error context
            cause: Optional cause exception
        """
        self.message = message
        self.context = context
        self.cause = cause
        self.timestamp = datetime.now()
        self.traceback = traceback.format_exc()
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary.

        Returns:
            Dictionary representation of error
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context.data.model_dump(),
            "cause": str(self.cause) if self.cause else None,
            "traceback": self.traceback,
        }

    def __str__(self) -> str:
        cause_str = f" (caused by: {self.cause})" if self.cause else ""
        return f"{self.__class__.__name__}: {self.message}{cause_str}"


class ValidationError(BaseError):
    """Raised when flow input or a task edit fails its field constraints."""

    def __init__(
        self,
        message: str,
        validation_errors: list[ValidationErrorDetail],
        context: ErrorContext,
        cause: Exception | None = None,
    ):
        """Initialize validation error.

        Args:
            message: Error message
            validation_errors: List of validation error details
            context: Required error context
            cause: Optional cause exception
        """
        self.validation_errors = validation_errors
        super().__init__(message, context, cause)

    def __str__(self) -> str:
        base_str = super().__str__()
        if self.validation_errors:
            errors_str = "; ".join(f"{e.location}: {e.message}" for e in self.validation_errors[:3])
            if len(self.validation_errors) > 3:
                errors_str += f" (and {len(self.validation_errors) - 3} more)"
            return f"{base_str} - {errors_str}"
        return base_str


class ExecutionError(BaseError):
    """Raised when a flow pipeline fails for an unexpected reason."""


class GenerationError(BaseError):
    """Raised when the generation service yields no usable output.

    The caller surfaces this to the user; no state is mutated and no retry
    is attempted.
    """


class ProviderError(BaseError):
    """Raised when a provider operation fails."""

    def __init__(
        self,
        message: str,
        context: ErrorContext,
        provider_context: ProviderErrorContext,
        cause: Exception | None = None,
    ):
        """Initialize provider error.

        Args:
            message: Error message
            context: Required error context
            provider_context: Required provider error context
            cause: Optional cause exception
        """
        self.provider_context = provider_context
        super().__init__(message, context, cause)


class PersistenceError(BaseError):
    """Describes a failed load or save. Logged, never raised to store callers."""

    def __init__(
        self,
        message: str,
        context: ErrorContext,
        persistence_context: PersistenceErrorContext,
        cause: Exception | None = None,
    ):
        self.persistence_context = persistence_context
        super().__init__(message, context, cause)


class SessionError(BaseError):
    """Raised when store access is attempted without a signed-in user."""


ErrorHandlerFunc = Callable[[BaseError, dict[str, Any]], None | dict[str, Any]]
AsyncErrorHandlerFunc = Callable[
    [BaseError, dict[str, Any]], Awaitable[None | dict[str, Any]]
]

ErrorHandler = ErrorHandlerFunc | AsyncErrorHandlerFunc


class ErrorManager:
    """Centralized error management with customizable handlers.

    This class provides:
    1. Error boundary capabilities
    2. Customizable error handlers
    3. Error logging
    """

    def __init__(self) -> None:
        self._handlers: dict[type[BaseError], list[ErrorHandler]] = {}
        self._global_handlers: list[ErrorHandler] = []

    def register(self, error_type: type[BaseError], handler: ErrorHandler) -> None:
        """Register an error handler for a specific error type.

        Args:
            error_type: Type of error to handle
            handler: Handler function or coroutine
        """
        self._handlers.setdefault(error_type, []).append(handler)

    def register_global(self, handler: ErrorHandler) -> None:
        """Register a global error handler that processes all errors.

        Args:
            handler: Handler function or coroutine
        """
        self._global_handlers.append(handler)

    async def _handle_error(self, error: BaseError, context: dict[str, Any]) -> None:
        handlers: list[ErrorHandler] = []
        for error_type, type_handlers in self._handlers.items():
            if isinstance(error, error_type):
                handlers.extend(type_handlers)
        handlers.extend(self._global_handlers)

        for handler in handlers:
            try:
                if inspect.iscoroutinefunction(handler):
                    await handler(error, context)
                else:
                    handler(error, context)
            except Exception as e:
                # Handler errors are logged, never propagated
                logger.error(f"Error in error handler: {e}")
                logger.error(traceback.format_exc())

    @asynccontextmanager
    async def error_boundary(
        self, flow_name: str, component: str, operation: str
    ) -> AsyncIterator[None]:
        """Create an error boundary that handles errors with registered handlers.

        Framework errors are handled and re-raised unchanged; any other
        exception is converted to an ExecutionError first.

        Args:
            flow_name: Name of the flow
            component: Component name
            operation: Operation being performed

        Raises:
            BaseError: Propagated after handling
        """
        context = {"flow_name": flow_name, "component": component, "operation": operation}

        try:
            yield

        except BaseError as e:
            await self._handle_error(e, context)
            raise

        except Exception as e:
            error_context = ErrorContext.create(
                flow_name=flow_name,
                error_type=type(e).__name__,
                error_location=f"{component}.{operation}",
                component=component,
                operation=operation,
            )

            error = ExecutionError(message=str(e), context=error_context, cause=e)
            await self._handle_error(error, context)
            raise error from e


default_manager = ErrorManager()


def default_logging_handler(error: BaseError, context: dict[str, Any]) -> None:
    """Default logging handler for errors.

    Args:
        error: Error to log
        context: Context data
    """
    logger.error(f"{error.__class__.__name__}: {error.message}")
    if error.cause:
        logger.debug(f"Caused by: {error.cause}")
    logger.debug(f"Context: {error.context.data.model_dump()}")


default_manager.register_global(default_logging_handler)
