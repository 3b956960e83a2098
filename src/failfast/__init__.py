"""`failfast` - fail-fast error propagation with a single boundary per unit.

Deeply nested code aborts eagerly; one boundary per unit turns the abort
into a returned error, filtered by error kind.

    from failfast import Handler

    class Parser(Handler):
        def parse(self, raw):
            with self.catch() as slot:
                self.must(validate(raw))
                self.requiref(len(raw) > 0, "empty input")
                return build(raw), None
            return None, slot.error

Modules:
- handler: Handler, ErrorSlot, Result
- failure: AssertError, FailurePolicy
- kinds: reserved faults and kind matching
- default: process-wide handler and module-level shortcuts
- schemas: pydantic configuration
"""

__version__ = "0.1.0"

from failfast.failure import AssertError, FailFastError, FailurePolicy, UnmatchedFailure
from failfast.kinds import RESERVED_FAULTS
from failfast.handler import ErrorSlot, Handler, Result
from failfast.default import (
    catch,
    configure,
    default_handler,
    guard,
    must,
    require,
    requiref,
    reset,
)

__all__ = [
    "__version__",
    "AssertError",
    "FailFastError",
    "FailurePolicy",
    "UnmatchedFailure",
    "RESERVED_FAULTS",
    "ErrorSlot",
    "Handler",
    "Result",
    "catch",
    "configure",
    "default_handler",
    "guard",
    "must",
    "require",
    "requiref",
    "reset",
]
