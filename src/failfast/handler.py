"""The fail-fast handler.

Embed ``Handler`` in a unit (as a base class or a held instance), abort
eagerly with ``must``/``require``/``requiref`` anywhere below the unit, and
resolve the abort once at the unit's boundary with ``catch`` or ``guard``.

    class Parser(Handler):
        def parse(self, raw):
            with self.catch(ParseError) as slot:
                params = self.parse_json(raw)
                self.require(params.limit > 0, ParseError("limit must be > 0"))
                self.requiref(params.offset >= 0, "offset must be >= 0, got %d", params.offset)
                return params, None
            return None, slot.error
"""

import functools
import logging
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, TYPE_CHECKING

from failfast.failure import AssertError, FailurePolicy
from failfast.kinds import RESERVED_FAULTS, classify, kind_of

if TYPE_CHECKING:
    from failfast.schemas import InternalConfig

__all__ = ['Handler', 'ErrorSlot', 'Result']

logger = logging.getLogger(__name__)


class ErrorSlot:
    """Output slot a boundary writes the converted error into."""

    __slots__ = ("error",)

    def __init__(self, error: Optional[BaseException] = None):
        self.error = error

    def __bool__(self) -> bool:
        return self.error is not None

    def __repr__(self) -> str:
        return f"ErrorSlot({self.error!r})"


@dataclass(frozen=True)
class Result:
    """Outcome of a ``guard``-decorated unit."""
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self, handler: Optional["Handler"] = None):
        """Return the value, or abort with the stored error.

        Lets one guarded unit propagate another's failure without an
        explicit check.
        """
        (handler or _PLAIN).must(self.error)
        return self.value


class Handler:
    """Abort/catch protocol for a single unit.

    Attributes
    ----------
    assert_factory : callable, optional
        ``message -> Exception``. When set, ``requiref`` aborts with the
        factory's error instead of ``AssertError``.
    on_unmatched : callable, optional
        Called with a domain error of a kind the boundary does not accept.
        If it returns, the original exception is re-raised. Reserved faults
        and non-Exception aborts never reach it.
    policy : FailurePolicy
        Applied to unaccepted domain errors when ``on_unmatched`` is not set.
    exit_code : int
        Exit status used by ``FailurePolicy.EXIT``.
    trace : bool
        Log every abort raised through ``must`` at DEBUG.
    match_subclasses : bool
        Accept subclasses of an accepted kind (default: exact class only).
    reserved_faults : tuple of exception classes
        Faults that always escape a boundary.

    Class-level defaults make the handler usable as a mixin whose
    subclasses never call ``Handler.__init__``.
    """

    assert_factory: Optional[Callable[[str], BaseException]] = None
    on_unmatched: Optional[Callable[[BaseException], None]] = None
    policy: FailurePolicy = FailurePolicy.RAISE
    exit_code: int = 1
    trace: bool = False
    match_subclasses: bool = False
    reserved_faults: tuple = RESERVED_FAULTS

    def __init__(
        self,
        assert_factory: Optional[Callable[[str], BaseException]] = None,
        on_unmatched: Optional[Callable[[BaseException], None]] = None,
        policy: FailurePolicy = FailurePolicy.RAISE,
        exit_code: int = 1,
        trace: bool = False,
        match_subclasses: bool = False,
        reserved_faults: tuple = RESERVED_FAULTS,
    ):
        self.assert_factory = assert_factory
        self.on_unmatched = on_unmatched
        self.policy = FailurePolicy(policy)
        self.exit_code = exit_code
        self.trace = trace
        self.match_subclasses = match_subclasses
        self.reserved_faults = tuple(reserved_faults)

    @classmethod
    def from_config(cls, config: "InternalConfig", **kwargs) -> "Handler":
        """Build a handler from resolved configuration.

        Keyword arguments (e.g. ``assert_factory``) are passed through.
        """
        hc = config.handler
        return cls(
            policy=hc.policy,
            exit_code=hc.exit_code,
            trace=hc.trace,
            match_subclasses=hc.match_subclasses,
            reserved_faults=RESERVED_FAULTS + tuple(hc.extra_reserved_faults),
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Abort operations
    # ------------------------------------------------------------------

    def must(self, err: Optional[BaseException]) -> None:
        """Abort with ``err`` unless it is None."""
        if err is None:
            return
        if not isinstance(err, BaseException):
            raise TypeError(f"must() expects an exception or None, got {type(err).__name__}")
        if self.trace:
            logger.debug("abort: %s: %s", type(err).__name__, err)
        raise err

    def require(self, cond: Any, err: BaseException) -> None:
        """Abort with ``err`` if ``cond`` is false."""
        if cond:
            return
        self.must(err)

    def requiref(self, cond: Any, fmt: str, *args) -> None:
        """Abort with an ``AssertError`` (or the factory's error) if ``cond`` is false.

        The message is rendered printf-style, only when the condition fails.
        A single mapping argument fills named placeholders, as in ``logging``.
        """
        if cond:
            return
        if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
            args = args[0]
        msg = fmt % args if args else fmt
        if self.assert_factory is None:
            self.must(AssertError(msg))
            return
        err = self.assert_factory(msg)
        if not isinstance(err, BaseException):
            raise TypeError(
                f"assert_factory must return an exception, got {type(err).__name__}"
            )
        self.must(err)

    # ------------------------------------------------------------------
    # Boundary
    # ------------------------------------------------------------------

    @contextmanager
    def catch(self, *kinds, into: Optional[ErrorSlot] = None) -> Iterator[ErrorSlot]:
        """Boundary of a unit.

        With no ``kinds``, converts every error except reserved faults.
        Otherwise converts only errors of the given kinds (instances or
        classes) and ``AssertError``. Converted errors land in the yielded
        slot; everything else keeps propagating.

        Usage
        -----
            with h.catch() as slot:
                ...
            return slot.error

            with h.catch(json.JSONDecodeError, ParseError) as slot:
                ...
        """
        for entry in kinds:
            kind_of(entry)
        slot = into if into is not None else ErrorSlot()
        try:
            yield slot
        except BaseException as exc:
            verdict = classify(exc, kinds, self.reserved_faults, self.match_subclasses)
            if verdict == "converted":
                logger.debug("caught %s: %s", type(exc).__name__, exc)
                slot.error = exc
                return
            logger.debug("re-raising %s failure %s: %s", verdict, type(exc).__name__, exc)
            if verdict == "unmatched":
                self._unmatched(exc)
            raise

    def guard(self, *kinds) -> Callable:
        """Decorator form of ``catch``; the wrapped function returns a ``Result``."""
        def decorator(func):
            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                with self.catch(*kinds) as slot:
                    return Result(value=func(*args, **kwargs))
                return Result(error=slot.error)
            return wrapper
        return decorator

    def _unmatched(self, exc: BaseException) -> None:
        if self.on_unmatched is not None:
            self.on_unmatched(exc)
            return
        if FailurePolicy(self.policy) is FailurePolicy.EXIT:
            logger.critical("unhandled failure: %s: %s", type(exc).__name__, exc)
            raise SystemExit(self.exit_code) from exc


_PLAIN = Handler()
