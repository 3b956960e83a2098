"""Pydantic configuration schemas for failfast.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Defaults (complete)
UserConfig : class
    Caller-facing overrides (forgiving, minimal)
EnvConfig : class
    FAILFAST_* environment overrides
"""

from failfast.schemas.resolve import resolve_config
from failfast.schemas.internal import InternalConfig
from failfast.schemas.param import ParamConfig
from failfast.schemas.user import UserConfig
from failfast.schemas.env import EnvConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'EnvConfig',
]
