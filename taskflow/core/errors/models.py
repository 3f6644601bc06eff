"""Pydantic models carried by TaskFlow errors.

All fields are required unless a default is given explicitly.
"""

from datetime import datetime

from pydantic import Field

from taskflow.core.models import StrictBaseModel


class ErrorContextData(StrictBaseModel):
    """Where and during what an error happened."""

    flow_name: str = Field(..., description="Name of the flow or component family")
    error_type: str = Field(..., description="Type of error")
    error_location: str = Field(..., description="Location in code where error occurred")
    timestamp: datetime = Field(default_factory=datetime.now, description="When error occurred")
    component: str = Field(..., description="Component that raised the error")
    operation: str = Field(..., description="Operation being performed")


class ValidationErrorDetail(StrictBaseModel):
    """One field-level validation failure."""

    location: str = Field(..., description="Field or location of validation error")
    message: str = Field(..., description="Validation error message")
    error_type: str = Field(..., description="Type of validation error")


class ProviderErrorContext(StrictBaseModel):
    """Provider-specific failure details."""

    provider_name: str = Field(..., description="Name of the provider")
    provider_type: str = Field(..., description="Type of provider")
    operation: str = Field(..., description="Operation that failed")
    retry_count: int = Field(default=0, description="Number of retries attempted")


class PersistenceErrorContext(StrictBaseModel):
    """Failure details for a key-value read or write."""

    key: str = Field(..., description="Storage key involved")
    kind: str = Field(..., description="Record kind (tasks or notifications)")
    operation: str = Field(..., description="load or save")
