"""Failure types and the policy applied to failures a boundary will not convert.

An abort is a raised exception. Which aborts a boundary converts into a
returned error, and which keep propagating, is decided in ``failfast.kinds``.
"""

from enum import Enum


class FailurePolicy(str, Enum):
    """What a handler does with a failure its boundary refuses to convert.

    RAISE (default): re-raise the original exception unchanged
    EXIT: log at CRITICAL and terminate the process (``SystemExit``)
    """
    RAISE = "raise"
    EXIT = "exit"


class FailFastError(Exception):
    """Base class for exceptions defined by this package."""
    pass


class AssertError(FailFastError):
    """Raised by ``requiref`` when its condition does not hold.

    A boundary always converts it, whatever kinds it accepts: assertion
    failures come from this same protocol and are never unexpected.

    Not to be confused with the builtin ``AssertionError`` raised by the
    ``assert`` statement, which is a reserved fault.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.message == other.message

    def __hash__(self):
        return hash((type(self), self.message))


class UnmatchedFailure(FailFastError):
    """Wrapper available to ``on_unmatched`` hooks that re-raise.

    Keeps the original failure on ``__cause__`` and ``original``.
    """

    def __init__(self, original: BaseException):
        super().__init__(f"unmatched failure: {type(original).__name__}: {original}")
        self.original = original
