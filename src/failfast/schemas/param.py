"""ParamConfig: defaults for the failfast handler and its logging.

Single source of truth for defaults. Runtime code never reads ParamConfig
directly; it only receives InternalConfig from resolve_config().
"""

from typing import Literal
from pydantic import Field, field_validator
from failfast.failure import FailurePolicy
from failfast.schemas.base import FailFastBaseModel


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class HandlerConfig(FailFastBaseModel):
    """Process-wide handler behaviour."""
    policy: FailurePolicy = Field(
        FailurePolicy.EXIT,
        description="What the process-wide handler does with failures it will not convert",
    )
    exit_code: int = Field(1, ge=1, le=255)
    trace: bool = False
    match_subclasses: bool = False
    extra_reserved_faults: list[str] = Field(
        default_factory=list,
        description="Dotted paths of additional exception classes that always escape a boundary",
    )

    @field_validator("policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        """Accept 'EXIT', ' raise ', etc."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class LoggingConfig(FailFastBaseModel):
    """Logging configuration for the ``failfast`` logger."""
    level: LogLevel = "WARNING"
    console: bool = False
    fmt: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    datefmt: str = '%Y-%m-%d %H:%M:%S'

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.upper().strip()
        return v


class ParamConfig(FailFastBaseModel):
    """Complete configuration with all defaults.

    Usage
    -----
    Base layer of config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, env_cfg)
    """

    handler: HandlerConfig = Field(default_factory=HandlerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
