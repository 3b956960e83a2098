"""Root-level pytest fixtures for the failfast test suite.

Configuration fixtures always pass an explicit (empty) environment so the
suite never depends on FAILFAST_* variables of the machine running it.
"""

import logging

import pytest

import failfast
from failfast import Handler
from failfast.logging_setup import PACKAGE_LOGGER, console_handler
from failfast.schemas import ParamConfig, UserConfig, resolve_config


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Defaults for every setting."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None, {})


@pytest.fixture
def make_config(param_config):
    """Factory fixture for configs with UserConfig-compatible overrides.

    Examples
    --------
    >>> def test_raise_policy(make_config):
    ...     config = make_config(policy="raise")
    ...     assert config.handler.policy == "raise"
    """
    def _make(**user_overrides):
        user = UserConfig(**user_overrides) if user_overrides else None
        return resolve_config(param_config, user, {})

    return _make


# =============================================================================
# Handler Fixtures
# =============================================================================

@pytest.fixture
def handler():
    """Unconfigured handler: re-raises what it will not convert."""
    return Handler()


@pytest.fixture(autouse=True)
def clean_default_handler():
    """Each test starts without a process-wide handler or console handler."""
    failfast.reset()
    yield
    failfast.reset()
    pkg = logging.getLogger(PACKAGE_LOGGER)
    ch = console_handler(pkg)
    if ch is not None:
        pkg.removeHandler(ch)
    pkg.setLevel(logging.NOTSET)
