"""Tests for resolve_config precedence and InternalConfig output."""

import pytest
from pydantic import ValidationError

from failfast import FailurePolicy, Handler
from failfast.kinds import RESERVED_FAULTS
from failfast.schemas import EnvConfig, InternalConfig, ParamConfig, UserConfig, resolve_config
from failfast.schemas.resolve import deep_merge

pytestmark = pytest.mark.unit


def test_defaults(internal_config):
    """Defaults resolve to exit policy, status 1, WARNING logging."""
    assert isinstance(internal_config, InternalConfig)
    assert internal_config.handler.policy is FailurePolicy.EXIT
    assert internal_config.handler.exit_code == 1
    assert internal_config.handler.trace is False
    assert internal_config.handler.match_subclasses is False
    assert internal_config.handler.extra_reserved_faults == ()
    assert internal_config.logging.level == "WARNING"
    assert internal_config.logging.console is False


def test_no_arguments_reads_environment(monkeypatch):
    """resolve_config() with no arguments reads os.environ."""
    monkeypatch.setenv("FAILFAST_EXIT_CODE", "9")
    config = resolve_config()
    assert config.handler.exit_code == 9


def test_user_overrides_param():
    """User overrides take precedence over defaults."""
    config = resolve_config(ParamConfig(), UserConfig(policy="raise", trace=True), {})
    assert config.handler.policy is FailurePolicy.RAISE
    assert config.handler.trace is True


def test_env_overrides_user():
    """Environment overrides take precedence over user overrides."""
    config = resolve_config(
        None,
        {"policy": "raise", "log_level": "INFO"},
        {"FAILFAST_POLICY": "exit", "FAILFAST_LOG_LEVEL": "debug"},
    )
    assert config.handler.policy is FailurePolicy.EXIT
    assert config.logging.level == "DEBUG"


def test_env_config_instance_accepted():
    """An EnvConfig instance can be passed directly."""
    config = resolve_config(None, None, EnvConfig(trace=True))
    assert config.handler.trace is True


def test_param_dict_accepted():
    """A plain dict is validated as ParamConfig."""
    config = resolve_config({"handler": {"exit_code": 3}}, None, {})
    assert config.handler.exit_code == 3


def test_internal_config_is_frozen(internal_config):
    """InternalConfig rejects mutation."""
    with pytest.raises(ValidationError):
        internal_config.handler = internal_config.handler


def test_extra_reserved_faults_resolved_to_classes(make_config):
    """Dotted fault paths become classes and extend the reserved tuple."""
    config = make_config(extra_reserved_faults=["builtins.LookupError"])
    assert config.handler.extra_reserved_faults == (LookupError,)
    handler = Handler.from_config(config)
    assert handler.reserved_faults == RESERVED_FAULTS + (LookupError,)


def test_extra_reserved_fault_must_be_exception(make_config):
    """A dotted path to a non-exception is rejected."""
    with pytest.raises(ValidationError):
        make_config(extra_reserved_faults=["os.path.join"])


def test_unknown_import_path_rejected(make_config):
    """An unimportable dotted path is rejected."""
    with pytest.raises(ValidationError):
        make_config(extra_reserved_faults=["no_such_module.Error"])


def test_invalid_policy_rejected(make_config):
    """Unknown policy names are rejected."""
    with pytest.raises(ValidationError):
        make_config(policy="ignore")


def test_exit_code_bounds(make_config):
    """Exit code 0 is rejected."""
    with pytest.raises(ValidationError):
        make_config(exit_code=0)


def test_from_config_passes_through_kwargs(make_config):
    """from_config() applies config and forwards keyword arguments."""
    factory = lambda msg: ValueError(msg)
    handler = Handler.from_config(make_config(policy="raise"), assert_factory=factory)
    assert handler.policy is FailurePolicy.RAISE
    assert handler.assert_factory is factory


def test_deep_merge_nested():
    """deep_merge() merges nested dicts without mutating the base."""
    base = {"a": 1, "b": {"c": 2, "d": 3}}
    assert deep_merge(base, {"b": {"d": 4, "e": 5}}, {"f": 6}) == {
        "a": 1,
        "b": {"c": 2, "d": 4, "e": 5},
        "f": 6,
    }
    assert base == {"a": 1, "b": {"c": 2, "d": 3}}
