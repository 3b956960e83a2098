"""EnvConfig: environment-variable overrides.

Deployment-time policy knobs, highest priority in config resolution:

    FAILFAST_POLICY      exit | raise
    FAILFAST_EXIT_CODE   integer
    FAILFAST_TRACE       1/0, true/false, yes/no
    FAILFAST_LOG_LEVEL   DEBUG .. CRITICAL
"""

import os
from typing import Literal, Mapping, Optional
from pydantic import field_validator
from failfast.schemas.base import FailFastBaseModel


ENV_PREFIX = "FAILFAST_"


class EnvConfig(FailFastBaseModel):
    """Overrides read from the process environment."""

    policy: Optional[Literal["exit", "raise"]] = None
    exit_code: Optional[int] = None
    trace: Optional[bool] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    @field_validator("policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "EnvConfig":
        """Collect ``FAILFAST_*`` variables (empty values are ignored)."""
        environ = os.environ if environ is None else environ
        values = {}
        for field in cls.model_fields:
            raw = environ.get(ENV_PREFIX + field.upper())
            if raw is not None and raw.strip():
                values[field] = raw
        return cls.model_validate(values)

    def to_internal_overrides(self) -> dict:
        overrides = {}
        handler = {}
        if self.policy is not None:
            handler["policy"] = self.policy
        if self.exit_code is not None:
            handler["exit_code"] = self.exit_code
        if self.trace is not None:
            handler["trace"] = self.trace
        if handler:
            overrides["handler"] = handler
        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}
        return overrides
