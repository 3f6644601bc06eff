"""Error hierarchy and error management."""

from .errors import (
    BaseError,
    ErrorContext,
    ErrorManager,
    ExecutionError,
    GenerationError,
    PersistenceError,
    ProviderError,
    SessionError,
    ValidationError,
    default_logging_handler,
    default_manager,
)
from .models import (
    ErrorContextData,
    PersistenceErrorContext,
    ProviderErrorContext,
    ValidationErrorDetail,
)

__all__ = [
    "BaseError",
    "ErrorContext",
    "ErrorContextData",
    "ErrorManager",
    "ExecutionError",
    "GenerationError",
    "PersistenceError",
    "PersistenceErrorContext",
    "ProviderError",
    "ProviderErrorContext",
    "SessionError",
    "ValidationError",
    "ValidationErrorDetail",
    "default_logging_handler",
    "default_manager",
]
