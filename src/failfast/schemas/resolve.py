"""Configuration resolution and merging logic.

Single entrypoint: resolve_config(). Merges ParamConfig, UserConfig, and
EnvConfig in precedence order and returns a validated InternalConfig.

Precedence (highest to lowest):
1. EnvConfig (FAILFAST_* environment variables)
2. UserConfig (caller-supplied overrides)
3. ParamConfig (defaults)
"""

from typing import Mapping, Optional, Union
from failfast.schemas.param import ParamConfig
from failfast.schemas.user import UserConfig
from failfast.schemas.env import EnvConfig
from failfast.schemas.internal import InternalConfig


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Deep merge multiple dictionaries.

    Later dictionaries override earlier ones. Nested dictionaries are
    merged recursively; other values are replaced.

    Examples
    --------
    >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 4}})
    {'a': 1, 'b': {'c': 2, 'd': 4}}
    """
    result = base.copy()

    for override in overrides:
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            else:
                result[key] = value

    return result


def resolve_config(
    param_cfg: Optional[Union[dict, ParamConfig]] = None,
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    env_cfg: Optional[Union[Mapping[str, str], EnvConfig]] = None,
) -> InternalConfig:
    """Resolve final runtime configuration.

    Parameters
    ----------
    param_cfg : dict or ParamConfig, optional
        Defaults. ``None`` uses ``ParamConfig()``.
    user_cfg : dict or UserConfig, optional
        Caller overrides.
    env_cfg : mapping or EnvConfig, optional
        Environment overrides. A mapping is read like ``os.environ``
        (``FAILFAST_*`` keys). ``None`` reads ``os.environ``.

    Returns
    -------
    InternalConfig
        Fully validated, immutable runtime configuration

    Raises
    ------
    ValidationError
        If any layer fails Pydantic validation

    Examples
    --------
    >>> config = resolve_config(user_cfg={"policy": "raise"}, env_cfg={})
    >>> config.handler.policy
    <FailurePolicy.RAISE: 'raise'>
    """
    if param_cfg is None:
        param = ParamConfig()
    elif not isinstance(param_cfg, ParamConfig):
        param = ParamConfig.model_validate(param_cfg)
    else:
        param = param_cfg

    if user_cfg is None or (isinstance(user_cfg, dict) and not user_cfg):
        user = UserConfig()
    elif not isinstance(user_cfg, UserConfig):
        user = UserConfig.model_validate(user_cfg)
    else:
        user = user_cfg

    if isinstance(env_cfg, EnvConfig):
        env = env_cfg
    else:
        env = EnvConfig.from_environ(env_cfg)

    # Deep merge: param < user < env
    merged = deep_merge(
        param.model_dump(),
        user.to_internal_overrides(),
        env.to_internal_overrides(),
    )

    return InternalConfig.model_validate(merged)
