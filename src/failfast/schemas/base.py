"""Base Pydantic model with strict defaults for failfast configs.

All failfast config schemas inherit from this base to ensure consistent
validation behavior across param, user, environment, and internal configs.
"""

from pydantic import BaseModel, ConfigDict


class FailFastBaseModel(BaseModel):
    """Base model for all failfast configuration schemas.

    Enforces strict validation:
    - No extra fields allowed
    - Validates assignments after initialization
    - Stores enum values, not enum members
    """

    model_config = ConfigDict(
        extra='forbid',           # Reject unknown fields
        validate_assignment=True, # Validate on field mutation
        use_enum_values=True,     # Convert enums to values
        str_strip_whitespace=True,# Strip whitespace from strings
    )
