"""InternalConfig: authoritative runtime configuration.

The only config schema runtime code sees. Fully validated, immutable, and
explicit: dotted exception paths are already resolved to classes.
"""

from typing import Literal
from pydantic import ConfigDict, Field, ImportString, field_validator
from failfast.failure import FailurePolicy
from failfast.schemas.base import FailFastBaseModel


class InternalHandlerConfig(FailFastBaseModel):
    """Runtime handler configuration."""
    policy: FailurePolicy
    exit_code: int = Field(ge=1, le=255)
    trace: bool
    match_subclasses: bool
    extra_reserved_faults: tuple[ImportString, ...] = ()

    model_config = ConfigDict(
        extra='forbid',
        frozen=True,
        use_enum_values=False,
    )

    @field_validator("extra_reserved_faults", mode="after")
    @classmethod
    def require_exception_classes(cls, v):
        """Each resolved path must name an exception class."""
        for obj in v:
            if not (isinstance(obj, type) and issubclass(obj, BaseException)):
                raise ValueError(f"{obj!r} is not an exception class")
        return v


class InternalLoggingConfig(FailFastBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    console: bool
    fmt: str
    datefmt: str

    model_config = ConfigDict(extra='forbid', frozen=True)


class InternalConfig(FailFastBaseModel):
    """Authoritative runtime configuration.

    Usage
    -----
        handler = Handler.from_config(config)
        setup_logging(config.logging)

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO validation in runtime code
    """

    handler: InternalHandlerConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
