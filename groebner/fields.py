"""
Coefficient fields.

A Field bundles the capability set the polynomial layer relies on:
zero, one, add, negate, multiply, invert-if-nonzero and the zero test.
Elements are the native elements of a sympy coefficient domain (QQ or
GF(p)), so the hot loops in the polynomial code use plain Python
operators on them and only go through the Field for conversion and
inversion.

Example:
    >>> F = PrimeField(7)
    >>> F.inv(F.convert(3))
    5 mod 7
"""

import re
from fractions import Fraction
from typing import Any, Union

from sympy import isprime, sympify
from sympy.core.sympify import SympifyError
from sympy.polys.domains import GF, QQ

from .exceptions import FieldInversionOfZero


class Field:
    """
    Exact arithmetic over a sympy domain.

    Subclasses only choose the domain; every operation is shared.
    """

    name = "K"

    def __init__(self, domain):
        self.domain = domain
        self.zero = domain.zero
        self.one = domain.one

    def __repr__(self):
        return f"{type(self).__name__}()"

    def __str__(self):
        return self.name

    def __eq__(self, other):
        if not isinstance(other, Field):
            return NotImplemented
        return self.domain == other.domain

    def __hash__(self):
        return hash(self.domain)

    @property
    def characteristic(self) -> int:
        return 0

    # Conversion

    def convert(self, value: Any):
        """
        Coerce ``value`` into this field.

        Accepts ints, Fractions, sympy numbers, numeric strings like
        ``"3/4"`` and elements that already belong to the field.
        """
        if self.domain.of_type(value):
            return value
        if isinstance(value, int):
            return self.domain.convert(value)
        if isinstance(value, Fraction):
            return self._quotient(value, value.numerator, value.denominator)
        try:
            expr = sympify(value)
        except (SympifyError, TypeError) as exc:
            raise ValueError(f"Cannot convert {value!r} to an element of {self}") from exc
        if expr.is_Integer:
            return self.domain.convert(int(expr))
        if expr.is_Rational:
            return self._quotient(value, int(expr.p), int(expr.q))
        raise ValueError(f"Cannot convert {value!r} to an element of {self}")

    def _quotient(self, value, numerator: int, denominator: int):
        den = self.domain.convert(denominator)
        if not den:
            raise ValueError(f"Cannot convert {value!r} to an element of {self}: denominator vanishes")
        return self.domain.convert(numerator) / den

    def to_sympy(self, a):
        """Return ``a`` as a sympy number."""
        return self.domain.to_sympy(a)

    # Arithmetic

    def is_zero(self, a) -> bool:
        return not a

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def neg(self, a):
        return -a

    def mul(self, a, b):
        return a * b

    def inv(self, a):
        """Multiplicative inverse; zero raises FieldInversionOfZero."""
        if not a:
            raise FieldInversionOfZero(f"Attempted to invert zero in {self}")
        return self.one / a

    def div(self, a, b):
        if not b:
            raise FieldInversionOfZero(f"Attempted to divide {a} by zero in {self}")
        return a / b


class RationalField(Field):
    """The rationals, with arbitrary-precision numerators and denominators."""

    name = "QQ"

    def __init__(self):
        super().__init__(QQ)


class PrimeField(Field):
    """
    Integers modulo a prime p.

    Elements use the canonical representatives 0..p-1.

    Example:
        >>> F = PrimeField(5)
        >>> F.convert(-1)
        4 mod 5
    """

    def __init__(self, prime: int):
        prime = int(prime)
        if prime < 2 or not isprime(prime):
            raise ValueError(f"Modulus must be a prime, got {prime}")
        self.prime = prime
        super().__init__(GF(prime, symmetric=False))

    def __repr__(self):
        return f"PrimeField({self.prime})"

    @property
    def name(self) -> str:
        return f"GF({self.prime})"

    @property
    def characteristic(self) -> int:
        return self.prime


_GF_PATTERN = re.compile(r"^(?:GF|FF|F)\s*[\[(]\s*(\d+)\s*[\])]$", re.IGNORECASE)


def field_from_spec(spec: Union[str, int, Field, None]) -> Field:
    """
    Build a field from a short description.

    ``None``, ``"Q"`` and ``"QQ"`` give the rationals; ``"GF(7)"``,
    ``"GF[7]"`` or a bare prime ``7`` give integers mod 7.
    """
    if spec is None:
        return RationalField()
    if isinstance(spec, Field):
        return spec
    if isinstance(spec, int):
        return PrimeField(spec)
    text = str(spec).strip()
    if text.upper() in ("Q", "QQ"):
        return RationalField()
    match = _GF_PATTERN.match(text)
    if match:
        return PrimeField(int(match.group(1)))
    raise ValueError(f"Unknown coefficient field: {spec!r}")
