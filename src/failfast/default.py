"""Process-wide default handler.

Construct it explicitly at process start with ``configure()``; the
module-level ``must``/``require``/``requiref``/``catch``/``guard`` delegate
to it. Without ``configure()`` a handler is built from ``resolve_config()``
on first use, without touching logging.

The default policy is ``FailurePolicy.EXIT``: a domain error of a kind the
boundary does not accept is logged at CRITICAL and the process exits.
Reserved faults are re-raised unchanged, whatever the policy.
"""

import functools
import logging
import threading
from typing import Any, Callable, Optional

from failfast.handler import ErrorSlot, Handler
from failfast.logging_setup import setup_logging
from failfast.schemas import InternalConfig, resolve_config

__all__ = [
    'configure',
    'default_handler',
    'reset',
    'must',
    'require',
    'requiref',
    'catch',
    'guard',
]

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_handler: Optional[Handler] = None


def configure(
    config: Optional[InternalConfig] = None,
    assert_factory: Optional[Callable[[str], BaseException]] = None,
    on_unmatched: Optional[Callable[[BaseException], None]] = None,
) -> Handler:
    """Build and install the process-wide handler.

    Parameters
    ----------
    config : InternalConfig, optional
        Resolved configuration. ``None`` resolves defaults plus
        ``FAILFAST_*`` environment overrides.
    assert_factory : callable, optional
        Custom assertion error factory for ``requiref``.
    on_unmatched : callable, optional
        Hook for domain errors of a kind the boundary does not accept.

    Returns
    -------
    Handler
        The installed handler.
    """
    global _handler
    config = config if config is not None else resolve_config()
    setup_logging(config.logging)
    handler = Handler.from_config(
        config,
        assert_factory=assert_factory,
        on_unmatched=on_unmatched,
    )
    with _lock:
        _handler = handler
    logger.debug("Default handler configured: policy=%s", handler.policy.value)
    return handler


def default_handler() -> Handler:
    """Return the process-wide handler, building it on first use.

    The lazily built handler follows ``resolve_config()`` but leaves logging
    alone; only an explicit ``configure()`` applies logging settings.
    """
    global _handler
    handler = _handler
    if handler is not None:
        return handler
    with _lock:
        if _handler is None:
            _handler = Handler.from_config(resolve_config())
            logger.debug("Default handler built on first use: policy=%s", _handler.policy.value)
        return _handler


def reset() -> None:
    """Forget the process-wide handler; the next use builds a new one."""
    global _handler
    with _lock:
        _handler = None


def must(err: Optional[BaseException]) -> None:
    """Abort with ``err`` unless it is None."""
    default_handler().must(err)


def require(cond: Any, err: BaseException) -> None:
    """Abort with ``err`` if ``cond`` is false."""
    default_handler().require(cond, err)


def requiref(cond: Any, fmt: str, *args) -> None:
    """Abort with an ``AssertError`` if ``cond`` is false."""
    default_handler().requiref(cond, fmt, *args)


def catch(*kinds, into: Optional[ErrorSlot] = None):
    """Boundary backed by the process-wide handler. See ``Handler.catch``."""
    return default_handler().catch(*kinds, into=into)


def guard(*kinds) -> Callable:
    """Decorator form of ``catch`` backed by the process-wide handler.

    The handler is looked up per call, so ``configure()`` after decoration
    takes effect.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            return default_handler().guard(*kinds)(func)(*args, **kwargs)
        return wrapper
    return decorator
