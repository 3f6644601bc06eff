"""Strict Pydantic base models shared across TaskFlow.

Every request/response contract, domain record, provider setting and error
context in the package derives from this base so validation behaves the same
everywhere.
"""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Immutable model that rejects unknown fields.

    It enforces:
    - extra="forbid": unknown fields are an error
    - validate_assignment=True: assignments are validated
    - frozen=True: instances are immutable

    Type coercion stays enabled so that values read back from JSON
    (ISO date strings, enum values) validate into their proper types.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        frozen=True,
        validate_default=True,
        use_enum_values=False,    # Keep enum members, not their raw values
        arbitrary_types_allowed=False,
    )


__all__ = [
    "StrictBaseModel",
]
