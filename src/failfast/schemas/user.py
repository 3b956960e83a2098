"""UserConfig: forgiving, minimal user-facing configuration.

Users only specify what they want to override. Keys are accepted in either
case, flat (``policy=...``) or nested (``handler={...}``).
"""

from typing import Any, Optional
from pydantic import field_validator, model_validator
from failfast.schemas.base import FailFastBaseModel


class UserHandlerConfig(FailFastBaseModel):
    """User-facing handler overrides."""
    policy: Optional[str] = None
    exit_code: Optional[int] = None
    trace: Optional[bool] = None
    match_subclasses: Optional[bool] = None
    extra_reserved_faults: Optional[list[str]] = None

    @field_validator("policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        """Accept any case for the policy name."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserLoggingConfig(FailFastBaseModel):
    """User-facing logging overrides."""
    level: Optional[str] = None
    console: Optional[bool] = None
    fmt: Optional[str] = None
    datefmt: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.upper().strip()
        return v


_HANDLER_KEYS = set(UserHandlerConfig.model_fields)
_LOGGING_ALIASES = {"log_level": "level", "log_console": "console"}


class UserConfig(FailFastBaseModel):
    """User configuration overrides.

    Flat keys are folded into their section before validation:

        UserConfig(POLICY="raise", LOG_LEVEL="debug")
        # == UserConfig(handler={"policy": "raise"}, logging={"level": "debug"})
    """

    handler: Optional[UserHandlerConfig] = None
    logging: Optional[UserLoggingConfig] = None

    @model_validator(mode="before")
    @classmethod
    def fold_flat_keys(cls, data: Any):
        """Lower-case keys and move flat keys into their section."""
        if not isinstance(data, dict):
            return data
        data = {str(k).lower(): v for k, v in data.items()}
        handler = dict(data.pop("handler", None) or {})
        logging_ = dict(data.pop("logging", None) or {})
        for key in list(data):
            if key in _HANDLER_KEYS:
                handler[key] = data.pop(key)
            elif key in _LOGGING_ALIASES:
                logging_[_LOGGING_ALIASES[key]] = data.pop(key)
        if handler:
            data["handler"] = handler
        if logging_:
            data["logging"] = logging_
        return data

    def to_internal_overrides(self) -> dict:
        """Convert to the nested structure of InternalConfig, dropping unset values."""
        overrides = {}
        if self.handler is not None:
            section = self.handler.model_dump(exclude_none=True)
            if section:
                overrides["handler"] = section
        if self.logging is not None:
            section = self.logging.model_dump(exclude_none=True)
            if section:
                overrides["logging"] = section
        return overrides
