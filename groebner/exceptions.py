"""
Error taxonomy for the Gröbner basis engine.

User input errors derive from ValueError, arithmetic defects from the
matching builtin, so callers can catch either the specific class or the
familiar builtin.
"""


class GroebnerError(Exception):
    """Base class for every error raised by this package."""


class NotDivisible(GroebnerError, ArithmeticError):
    """An exact monomial division was attempted where it is not exact."""

    def __init__(self, dividend, divisor):
        self.dividend = dividend
        self.divisor = divisor
        super().__init__(f"{dividend!r} is not divisible by {divisor!r}")


class DegreeMismatch(GroebnerError, ValueError):
    """Exponent vectors or orders whose arity does not match the ring."""


class EmptyRing(GroebnerError, ValueError):
    """A non-constant polynomial was given to a ring without variables."""


class FieldInversionOfZero(GroebnerError, ZeroDivisionError):
    """The zero element of a coefficient field was inverted."""


class InvariantViolation(GroebnerError):
    """
    An arithmetic invariant broke during a basis computation.

    Always chained over the NotDivisible / FieldInversionOfZero that
    triggered it. Seeing one of these means a bug, not bad input.
    """


class Cancelled(GroebnerError):
    """The computation was stopped before completion; no basis is available."""

    def __init__(self, message: str, stats=None):
        super().__init__(message)
        self.stats = stats


class BudgetExceeded(Cancelled):
    """The step budget ran out."""


class DeadlineExceeded(Cancelled):
    """The wall-clock deadline passed."""
