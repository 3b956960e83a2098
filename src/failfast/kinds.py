"""Kind classification for in-flight aborts.

The kind of an error is its concrete class. Accepted kinds may be given
either as example instances or as classes; both reduce to the class.
"""

from typing import Iterable, Optional, Sequence

from failfast.failure import AssertError


# Faults the interpreter raises for programming defects. These are never
# converted into a returned error.
RESERVED_FAULTS: tuple[type[BaseException], ...] = (
    TypeError,
    IndexError,
    AttributeError,
    NameError,
    ArithmeticError,
    RecursionError,
    MemoryError,
    SystemError,
    AssertionError,
)


def kind_of(entry) -> type:
    """Return the error class an accepted-kind entry stands for.

    Parameters
    ----------
    entry : BaseException or type
        An example error (content discarded) or an error class.

    Raises
    ------
    TypeError
        If ``entry`` is neither an exception instance nor an exception class.

    Examples
    --------
    >>> kind_of(ValueError("ignored")) is kind_of(ValueError)
    True
    """
    if isinstance(entry, type) and issubclass(entry, BaseException):
        return entry
    if isinstance(entry, BaseException):
        return type(entry)
    raise TypeError(f"not an error kind: {entry!r}")


def is_unclassified(exc: BaseException) -> bool:
    """True for aborts that are not errors at all (KeyboardInterrupt, SystemExit, ...)."""
    return not isinstance(exc, Exception)


def is_reserved(exc: BaseException, reserved: Sequence[type[BaseException]] = RESERVED_FAULTS) -> bool:
    return isinstance(exc, tuple(reserved))


def matches(exc: BaseException, kinds: Iterable, match_subclasses: bool = False) -> bool:
    """Decide whether ``exc`` is one of the accepted ``kinds``.

    ``AssertError`` itself (not its subclasses) always matches. Otherwise
    kinds are compared by class identity, or by ``issubclass`` when
    ``match_subclasses`` is set.
    """
    typ = type(exc)
    if typ is AssertError:
        return True
    for entry in kinds:
        kind = kind_of(entry)
        if typ is kind or (match_subclasses and issubclass(typ, kind)):
            return True
    return False


def classify(
    exc: Optional[BaseException],
    kinds: Sequence,
    reserved: Sequence[type[BaseException]] = RESERVED_FAULTS,
    match_subclasses: bool = False,
) -> str:
    """Classify an in-flight abort at a boundary.

    Returns
    -------
    str
        One of ``"none"``, ``"unclassified"``, ``"reserved"``, ``"converted"``
        or ``"unmatched"``.
    """
    if exc is None:
        return "none"
    if is_unclassified(exc):
        return "unclassified"
    if is_reserved(exc, reserved):
        return "reserved"
    if not kinds:
        return "converted"
    if matches(exc, kinds, match_subclasses):
        return "converted"
    return "unmatched"
