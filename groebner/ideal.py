"""
Ideals of a polynomial ring, backed by their reduced Gröbner basis.

Example:
    >>> I = Ideal.from_generators(["x", "y"], "grevlex",
    ...                           [{(2, 1): 1, (0, 0): -1}, {(1, 2): 1, (1, 0): -1}])
    >>> I.basis()
    (x^2 - y, y^2 - 1)
    >>> x, y = I.ring.gens
    >>> y**3 - y in I
    True
"""

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from sympy import Basic

from .buchberger import BuchbergerEngine, EngineStats
from .exceptions import DegreeMismatch, EmptyRing
from .monomials import Monomial, MonomialOrder
from .polynomials import Polynomial, PolynomialRing
from .reduction import normal_form


class Ideal:
    """
    The ideal of ``ring`` generated by ``generators``.

    The basis is computed on first use and cached. Keyword arguments are
    passed to the engine as EngineOptions fields.
    """

    def __init__(self, ring: PolynomialRing, generators: Iterable, **options):
        self.ring = ring
        self._generators = tuple(self._coerce(g) for g in generators)
        self._options = options
        self._engine: Optional[BuchbergerEngine] = None
        self._basis: Optional[Tuple[Polynomial, ...]] = None

    @classmethod
    def from_generators(cls, variables: Union[int, Sequence[str]], order, generators: Iterable,
                        field=None, **options) -> "Ideal":
        """
        Build the ring, check the generators and compute the basis now.

        Raises:
            EmptyRing: no variables but a non-constant generator
            DegreeMismatch: a generator does not fit the ring arity
        """
        ring = PolynomialRing(variables, order, field)
        ideal = cls(ring, generators, **options)
        ideal.basis()
        return ideal

    def _coerce(self, value: Any) -> Polynomial:
        ring = self.ring
        if isinstance(value, Polynomial):
            if value.ring == ring:
                return value
            if ring.nvars == 0 and not value.is_constant():
                raise EmptyRing(f"Ring without variables cannot hold {value}")
            if value.ring.nvars != ring.nvars:
                raise DegreeMismatch(
                    f"{value} has {value.ring.nvars} variables, {ring} has {ring.nvars}"
                )
            return ring.convert(value)
        if isinstance(value, Mapping):
            return ring.polynomial(value)
        if isinstance(value, Basic):
            return ring.from_sympy(value)
        return ring.constant(value)

    def __repr__(self):
        gens = ", ".join(str(g) for g in self._generators)
        return f"Ideal({gens}) of {self.ring}"

    def __eq__(self, other):
        if not isinstance(other, Ideal):
            return NotImplemented
        return self.ring == other.ring and self.basis() == other.basis()

    __hash__ = None

    def __contains__(self, poly) -> bool:
        return self.contains(poly)

    # -------------------------------------------------------------------------
    # Basis
    # -------------------------------------------------------------------------

    @property
    def generators(self) -> Tuple[Polynomial, ...]:
        return self._generators

    def basis(self) -> Tuple[Polynomial, ...]:
        """The reduced Gröbner basis, largest leading monomial first."""
        if self._basis is None:
            engine = BuchbergerEngine(self._generators, ring=self.ring, **self._options)
            self._engine = engine
            self._basis = engine.run()
        return self._basis

    @property
    def stats(self) -> EngineStats:
        """Counters of the computation that produced the basis."""
        self.basis()
        return self._engine.stats

    def leading_monomials(self) -> List[Monomial]:
        return [g.lm for g in self.basis()]

    def is_zero(self) -> bool:
        return not self.basis()

    def is_trivial(self) -> bool:
        """True if the ideal is the whole ring."""
        basis = self.basis()
        return len(basis) == 1 and basis[0] == self.ring.one

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    def reduce(self, poly) -> Polynomial:
        """Normal form of ``poly`` modulo the ideal."""
        return normal_form(self._coerce(poly), self.basis())

    def contains(self, poly) -> bool:
        return not self.reduce(poly)

    def contains_ideal(self, other: "Ideal") -> bool:
        return all(self.contains(g) for g in other.generators)

    # -------------------------------------------------------------------------
    # Elimination
    # -------------------------------------------------------------------------

    def eliminate(self, variables: Sequence[str]) -> "Ideal":
        """
        The elimination ideal I ∩ K[remaining variables].

        The basis is recomputed under a block order with the eliminated
        variables in the first block; the elements free of them generate
        the intersection.
        """
        ring = self.ring
        if isinstance(variables, str):
            variables = [variables]
        drop = [ring.variables[ring.index(v)] for v in variables]
        keep = [v for v in ring.variables if v not in drop]
        if not drop:
            return Ideal(ring, self._generators, **self._options)
        if not keep:
            raise ValueError("Cannot eliminate every variable of the ring")

        order = MonomialOrder.elimination(len(drop), ring.nvars)
        work = PolynomialRing(drop + keep, order, ring.field)
        basis = BuchbergerEngine([work.convert(g) for g in self._generators],
                                 ring=work, **self._options).run()

        suborder = ring.order if ring.order.arity is None else "grevlex"
        target = PolynomialRing(keep, suborder, ring.field)
        k = len(drop)
        kept = [target.convert(g) for g in basis
                if all(not any(m.exps[:k]) for m, _ in g.terms)]
        return Ideal(target, kept, **self._options)
