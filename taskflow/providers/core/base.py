"""Provider base class and common provider settings.

Providers are frozen pydantic models that carry a name, a type and a
settings model. Runtime state (clients, flags) lives in private
attributes so it can change on a frozen instance.
"""

import logging
from typing import Any, ClassVar, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from taskflow.core.errors.errors import ErrorContext, ProviderError
from taskflow.core.errors.models import ProviderErrorContext
from taskflow.core.models import StrictBaseModel

logger = logging.getLogger(__name__)


class ProviderSettings(StrictBaseModel):
    """Base settings for providers.

    Contains only fields that apply to every provider type.
    """

    timeout: float = Field(default=60.0, description="Operation timeout in seconds")


SettingsT = TypeVar("SettingsT", bound=ProviderSettings)


class Provider(BaseModel, Generic[SettingsT]):
    """Base class for all providers.

    Subclasses implement ``_initialize`` and optionally ``_shutdown``;
    ``initialize`` runs at most once and wraps failures in ProviderError.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, validate_assignment=True)

    # Set by the @provider decorator
    settings_class: ClassVar[Optional[type[ProviderSettings]]] = None

    name: str = Field(..., min_length=1, description="Provider name must not be empty")
    provider_type: str = Field(..., min_length=1, description="Provider type must not be empty")
    settings: SettingsT

    _initialized: bool = PrivateAttr(default=False)

    def __init__(self, name: str, provider_type: str, settings: Optional[SettingsT] = None, **kwargs: Any):
        if settings is None:
            if self.__class__.settings_class is None:
                raise TypeError(
                    f"Provider class {self.__class__.__name__} must specify settings type. "
                    f"Use the @provider(settings_class=...) decorator or pass settings explicitly."
                )
            settings = self.__class__.settings_class()
        super().__init__(name=name, provider_type=provider_type, settings=settings, **kwargs)
        logger.debug(f"Created provider: {name} ({provider_type})")

    @property
    def initialized(self) -> bool:
        """Check if provider is initialized."""
        return self._initialized

    async def initialize(self) -> None:
        """Initialize the provider once.

        Raises:
            ProviderError: If initialization fails
        """
        if self._initialized:
            return
        try:
            await self._initialize()
        except ProviderError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize provider '{self.name}': {str(e)}")
            raise self._provider_error(
                f"Failed to initialize provider: {str(e)}", operation="initialize", cause=e
            ) from e
        self._initialized = True
        logger.info(f"Provider '{self.name}' initialized successfully")

    async def shutdown(self) -> None:
        """Close provider resources. Errors are logged, not raised."""
        if not self._initialized:
            return
        try:
            await self._shutdown()
        except Exception as e:
            logger.error(f"Error shutting down provider '{self.name}': {str(e)}")
        self._initialized = False
        logger.info(f"Provider '{self.name}' shut down successfully")

    async def _initialize(self) -> None:
        """Concrete initialization logic implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement _initialize().")

    async def _shutdown(self) -> None:
        pass

    def _provider_error(
        self,
        message: str,
        operation: str,
        cause: Optional[Exception] = None,
        error_type: str = "ProviderError",
    ) -> ProviderError:
        """Build a ProviderError carrying this provider's context.

        Args:
            message: Error message
            operation: Operation being performed
            cause: Original exception
            error_type: Error type recorded in the context

        Returns:
            ProviderError with provider context
        """
        return ProviderError(
            message=message,
            context=ErrorContext.create(
                flow_name=f"{self.provider_type}_provider",
                error_type=error_type,
                error_location=f"{self.__class__.__name__}.{operation}",
                component=self.name,
                operation=operation,
            ),
            provider_context=ProviderErrorContext(
                provider_name=self.name,
                provider_type=self.provider_type,
                operation=operation,
                retry_count=0,
            ),
            cause=cause,
        )
