"""
Polynomial rings and polynomials over exact fields.

A PolynomialRing fixes the variables, the monomial order and the
coefficient field. A Polynomial is an immutable, order-sorted tuple of
(Monomial, coefficient) terms with distinct monomials and nonzero
coefficients, so its first term is always the leading term.

Example:
    >>> R = PolynomialRing(["x", "y"], order="grevlex")
    >>> x, y = R.gens
    >>> f = x**2 * y - 1
    >>> f.leading_monomial()
    Monomial((2, 1))
    >>> print(f * (x + y))
    x^3*y + x^2*y^2 - x - y
"""

from fractions import Fraction
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from sympy import Basic, Poly, S, Symbol, sympify
from sympy.polys.polyerrors import PolynomialError

from .exceptions import DegreeMismatch, EmptyRing
from .fields import Field, field_from_spec
from .monomials import Monomial, MonomialOrder, order_from_spec

Term = Tuple[Monomial, Any]


class PolynomialRing:
    """
    The ring K[x_0, ..., x_{n-1}] under a fixed monomial order.

    Args:
        variables: number of variables (named x0, x1, ...) or their names,
            most significant first
        order: "lex", "grlex", "grevlex" or a MonomialOrder
        field: a Field, "QQ", "GF(p)" or a prime p; rationals by default
    """

    def __init__(self, variables: Union[int, Sequence[str]],
                 order: Union[str, MonomialOrder, None] = None,
                 field: Union[str, int, Field, None] = None):
        if isinstance(variables, int):
            if variables < 0:
                raise ValueError("Number of variables must be non-negative")
            names = tuple(f"x{i}" for i in range(variables))
        else:
            names = tuple(str(v) for v in variables)
        if len(set(names)) != len(names):
            raise ValueError(f"Variable names must be distinct: {names}")

        self.variables: Tuple[str, ...] = names
        self.nvars = len(names)
        self.order = order_from_spec(order)
        self.order.validate(self.nvars)
        self.field = field_from_spec(field)
        self._index = {name: i for i, name in enumerate(names)}

    def __repr__(self):
        return f"PolynomialRing({list(self.variables)}, order={str(self.order)!r}, field={self.field!r})"

    def __str__(self):
        return f"{self.field}[{', '.join(self.variables)}]"

    def __eq__(self, other):
        if not isinstance(other, PolynomialRing):
            return NotImplemented
        return (self.variables == other.variables
                and self.order == other.order
                and self.field == other.field)

    def __hash__(self):
        return hash((self.variables, self.order, self.field))

    # -------------------------------------------------------------------------
    # Element construction
    # -------------------------------------------------------------------------

    def _monomial(self, exps) -> Monomial:
        """Validate an exponent vector against the ring arity."""
        if isinstance(exps, Monomial):
            m = exps
        else:
            m = Monomial(exps)
        if len(m) != self.nvars:
            if self.nvars == 0 and not m.is_constant():
                raise EmptyRing(f"Ring without variables cannot hold the monomial {m.exps}")
            raise DegreeMismatch(
                f"Exponent vector {m.exps} has {len(m)} entries, ring {self} has {self.nvars} variables"
            )
        return m

    @property
    def zero(self) -> "Polynomial":
        return Polynomial._from_sorted(self, ())

    @property
    def one(self) -> "Polynomial":
        return self.constant(1)

    @property
    def gens(self) -> Tuple["Polynomial", ...]:
        """The variables as polynomials, in ring order."""
        one = self.field.one
        return tuple(
            Polynomial._from_sorted(self, ((Monomial.variable(i, self.nvars), one),))
            for i in range(self.nvars)
        )

    def gen(self, name: Union[str, int]) -> "Polynomial":
        index = name if isinstance(name, int) else self.index(name)
        return self.gens[index]

    def index(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise ValueError(f"Unknown variable {name!r} in {self}") from None

    def constant(self, c) -> "Polynomial":
        c = self.field.convert(c)
        if not c:
            return self.zero
        return Polynomial._from_sorted(self, ((Monomial.one(self.nvars), c),))

    def monomial(self, exps, coeff=1) -> "Polynomial":
        """The single term ``coeff * x^exps``."""
        return Polynomial(self, {self._monomial(exps): coeff})

    def polynomial(self, terms: Union[Mapping, Iterable[Tuple[Any, Any]], None] = None) -> "Polynomial":
        """Build a polynomial from a mapping exponent-vector -> coefficient."""
        return Polynomial(self, terms)

    __call__ = polynomial

    def from_terms(self, terms: Iterable[Tuple[Any, Any]]) -> "Polynomial":
        """Build from (exponents, coefficient) pairs; repeated monomials are summed."""
        return Polynomial(self, list(terms))

    def from_sympy(self, expr) -> "Polynomial":
        """
        Convert a sympy expression in this ring's variable names.

        Symbols that are not ring variables, non-rational coefficients
        and non-polynomial expressions are rejected with ValueError.
        """
        expr = sympify(expr)
        if self.nvars == 0:
            if expr.free_symbols:
                raise EmptyRing(f"Ring without variables cannot hold {expr}")
            return self.constant(expr)
        gens = [Symbol(name) for name in self.variables]
        try:
            poly = Poly(expr, *gens)
        except PolynomialError as exc:
            raise ValueError(f"{expr} is not a polynomial in {', '.join(self.variables)}") from exc
        terms = {}
        for exps, coeff in poly.terms():
            if not coeff.is_Rational:
                raise ValueError(
                    f"Coefficient {coeff} of {expr} is not a rational number; "
                    f"unknown symbols or floats are not supported in {self}"
                )
            terms[exps] = coeff
        return Polynomial(self, terms)

    def convert(self, poly: "Polynomial") -> "Polynomial":
        """
        Move ``poly`` into this ring, matching variables by name.

        Variables missing from this ring must not occur in ``poly``.
        """
        if poly.ring == self:
            return poly
        positions = []
        for i, name in enumerate(poly.ring.variables):
            positions.append(self._index.get(name))
        terms = {}
        for m, c in poly.terms:
            exps = [0] * self.nvars
            for i, e in enumerate(m.exps):
                if not e:
                    continue
                if positions[i] is None:
                    raise ValueError(
                        f"Variable {poly.ring.variables[i]!r} of {poly} does not exist in {self}"
                    )
                exps[positions[i]] = e
            terms[tuple(exps)] = self.field.convert(poly.ring.field.to_sympy(c))
        return Polynomial(self, terms)

    # -------------------------------------------------------------------------
    # Derived rings
    # -------------------------------------------------------------------------

    def with_order(self, order) -> "PolynomialRing":
        return PolynomialRing(self.variables, order, self.field)

    def with_field(self, field) -> "PolynomialRing":
        return PolynomialRing(self.variables, self.order, field)

    def contract(self, k: int, order=None) -> "PolynomialRing":
        """Ring over the first ``k`` variables only."""
        if not 0 <= k <= self.nvars:
            raise ValueError(f"Invalid number of variables to keep: {k}")
        if order is None:
            order = self.order if self.order.arity is None else "grevlex"
        return PolynomialRing(self.variables[:k], order, self.field)

    def extend(self, names: Sequence[str], order=None) -> "PolynomialRing":
        """Ring with ``names`` appended as the least significant variables."""
        if order is None:
            order = self.order if self.order.arity is None else "grevlex"
        return PolynomialRing(self.variables + tuple(names), order, self.field)

    def ideal(self, generators: Iterable, **options):
        """The ideal of this ring generated by ``generators``."""
        from .ideal import Ideal
        return Ideal(self, generators, **options)


def _format_power(name: str, e: int) -> str:
    return name if e == 1 else f"{name}^{e}"


class Polynomial:
    """
    An element of a PolynomialRing.

    Polynomials are immutable: arithmetic always returns a new instance.
    Scalars (ints, Fractions, sympy rationals, field elements) mix freely
    with polynomials in ``+ - *``.
    """

    __slots__ = ("ring", "terms")

    def __init__(self, ring: PolynomialRing, terms: Union[Mapping, Iterable[Tuple[Any, Any]], None] = None):
        acc: Dict[Monomial, Any] = {}
        convert = ring.field.convert
        if terms:
            items = terms.items() if isinstance(terms, Mapping) else terms
            for exps, c in items:
                m = ring._monomial(exps)
                c = convert(c)
                acc[m] = acc[m] + c if m in acc else c
        key = ring.order.key
        self.ring = ring
        self.terms: Tuple[Term, ...] = tuple(sorted(
            ((m, c) for m, c in acc.items() if c),
            key=lambda t: key(t[0]),
            reverse=True,
        ))

    @classmethod
    def _from_sorted(cls, ring: PolynomialRing, terms) -> "Polynomial":
        # Trusted path: terms already sorted, distinct and nonzero.
        p = object.__new__(cls)
        p.ring = ring
        p.terms = tuple(terms)
        return p

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def __repr__(self):
        return str(self)

    def __str__(self):
        if not self.terms:
            return "0"
        to_sympy = self.ring.field.to_sympy
        names = self.ring.variables
        parts = []
        for m, c in self.terms:
            c = to_sympy(c)
            negative = c < 0
            if negative:
                c = -c
            powers = [_format_power(names[i], e) for i, e in enumerate(m.exps) if e]
            if not powers:
                body = str(c)
            elif c == 1:
                body = "*".join(powers)
            else:
                body = "*".join([str(c)] + powers)
            if not parts:
                parts.append(f"-{body}" if negative else body)
            else:
                parts.append(f"- {body}" if negative else f"+ {body}")
        return " ".join(parts)

    def __len__(self):
        return len(self.terms)

    def __iter__(self):
        return iter(self.terms)

    def __bool__(self):
        return bool(self.terms)

    def is_zero(self) -> bool:
        return not self.terms

    def is_constant(self) -> bool:
        return not self.terms or (len(self.terms) == 1 and self.terms[0][0].is_constant())

    def is_monomial(self) -> bool:
        return len(self.terms) == 1

    def leading_term(self) -> Optional[Term]:
        """(leading monomial, leading coefficient), or None for zero."""
        return self.terms[0] if self.terms else None

    def leading_monomial(self) -> Optional[Monomial]:
        return self.terms[0][0] if self.terms else None

    def leading_coefficient(self):
        return self.terms[0][1] if self.terms else self.ring.field.zero

    lm = property(leading_monomial)
    lc = property(leading_coefficient)

    def total_degree(self) -> int:
        """Largest total degree of a term; -1 for the zero polynomial."""
        return max((m.degree for m, _ in self.terms), default=-1)

    def coefficient(self, exps):
        m = self.ring._monomial(exps)
        for tm, c in self.terms:
            if tm == m:
                return c
        return self.ring.field.zero

    def monomials(self) -> List[Monomial]:
        return [m for m, _ in self.terms]

    def as_dict(self) -> Dict[Tuple[int, ...], Any]:
        return {m.exps: c for m, c in self.terms}

    def as_expr(self):
        """The polynomial as a sympy expression in the ring's variable names."""
        gens = [Symbol(name) for name in self.ring.variables]
        to_sympy = self.ring.field.to_sympy
        expr = S.Zero
        for m, c in self.terms:
            term = to_sympy(c)
            for g, e in zip(gens, m.exps):
                if e:
                    term *= g ** e
            expr += term
        return expr

    def evaluate(self, point: Sequence):
        """Evaluate at a point given as one value per variable."""
        if len(point) != self.ring.nvars:
            raise DegreeMismatch(f"Expected {self.ring.nvars} values, got {len(point)}")
        convert = self.ring.field.convert
        values = [convert(v) for v in point]
        total = self.ring.field.zero
        for m, c in self.terms:
            term = c
            for v, e in zip(values, m.exps):
                if e:
                    term = term * v ** e
            total = total + term
        return total

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        # Scalars never compare equal; use is_constant() and the coefficient.
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.ring == other.ring and self.terms == other.terms

    def __hash__(self):
        return hash((self.ring.variables, self.terms))

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _scalar(self, value):
        """Convert a number-like value into the field, or None."""
        if self.ring.field.domain.of_type(value):
            return value
        if isinstance(value, (int, Fraction)) or (isinstance(value, Basic) and value.is_Rational):
            return self.ring.field.convert(value)
        return None

    def _coerce(self, other) -> Optional["Polynomial"]:
        if isinstance(other, Polynomial):
            if other.ring != self.ring:
                raise ValueError("Both polynomials should be defined in the same ring")
            return other
        scalar = self._scalar(other)
        if scalar is None:
            return None
        return self.ring.constant(scalar)

    def _merge(self, other_terms, subtract: bool) -> "Polynomial":
        key = self.ring.order.key
        a, b = self.terms, other_terms
        la, lb = len(a), len(b)
        i = j = 0
        out = []
        while i < la and j < lb:
            ma, ca = a[i]
            mb, cb = b[j]
            ka, kb = key(ma), key(mb)
            if ka > kb:
                out.append(a[i])
                i += 1
            elif ka < kb:
                out.append((mb, -cb) if subtract else b[j])
                j += 1
            else:
                c = ca - cb if subtract else ca + cb
                if c:
                    out.append((ma, c))
                i += 1
                j += 1
        if i < la:
            out.extend(a[i:])
        if j < lb:
            if subtract:
                out.extend((m, -c) for m, c in b[j:])
            else:
                out.extend(b[j:])
        return Polynomial._from_sorted(self.ring, out)

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._merge(other.terms, subtract=False)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._merge(other.terms, subtract=True)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other._merge(self.terms, subtract=True)

    def __neg__(self):
        return Polynomial._from_sorted(self.ring, ((m, -c) for m, c in self.terms))

    def __pos__(self):
        return self

    def scale(self, c) -> "Polynomial":
        """Multiply every coefficient by the field element ``c``."""
        c = self.ring.field.convert(c)
        if not c:
            return self.ring.zero
        return Polynomial._from_sorted(self.ring, ((m, tc * c) for m, tc in self.terms))

    def mul_term(self, monomial: Monomial, c) -> "Polynomial":
        """
        Multiply by the single term ``c * monomial``.

        Multiplying by a monomial preserves the term order and a field has
        no zero divisors, so no re-sorting or cancellation can happen.
        """
        if not c:
            return self.ring.zero
        return Polynomial._from_sorted(self.ring, ((m * monomial, tc * c) for m, tc in self.terms))

    def __mul__(self, other):
        if not isinstance(other, Polynomial):
            scalar = self._scalar(other)
            if scalar is None:
                return NotImplemented
            return self.scale(scalar)
        other = self._coerce(other)
        small, large = (self, other) if len(self.terms) <= len(other.terms) else (other, self)
        result = self.ring.zero
        for m, c in small.terms:
            result = result + large.mul_term(m, c)
        return result

    __rmul__ = __mul__

    def __pow__(self, n: int) -> "Polynomial":
        if not isinstance(n, int):
            return NotImplemented
        if n < 0:
            raise ValueError("Polynomials cannot be raised to negative powers")
        result = self.ring.one
        base = self
        while n:
            if n & 1:
                result = result * base
            n >>= 1
            if n:
                base = base * base
        return result

    def __truediv__(self, other):
        """Division by a nonzero scalar only; use reduce() for polynomials."""
        if isinstance(other, Polynomial):
            return NotImplemented
        scalar = self._scalar(other)
        if scalar is None:
            return NotImplemented
        return self.scale(self.ring.field.inv(scalar))

    def monic(self) -> "Polynomial":
        """Divide by the leading coefficient; zero stays zero."""
        if not self.terms:
            return self
        lc = self.terms[0][1]
        if lc == self.ring.field.one:
            return self
        return self.scale(self.ring.field.inv(lc))

    def tail(self) -> "Polynomial":
        """Everything but the leading term."""
        return Polynomial._from_sorted(self.ring, self.terms[1:])
