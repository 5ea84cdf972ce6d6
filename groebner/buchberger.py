"""
Buchberger's algorithm.

The engine moves through the states

    INITIALIZED -> RUNNING -> SATURATED -> MINIMIZING -> REDUCING -> DONE

and ends in CANCELLED instead when a step budget, deadline or cancel
callback fires. Only a DONE engine hands out a basis.

Example:
    >>> from groebner import PolynomialRing
    >>> R = PolynomialRing(["x", "y"], order="grevlex")
    >>> x, y = R.gens
    >>> groebner_basis([x**2*y - 1, x*y**2 - x])
    (x^2 - y, y^2 - 1)
"""

import dataclasses
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .exceptions import (
    BudgetExceeded, Cancelled, DeadlineExceeded, DegreeMismatch,
    FieldInversionOfZero, InvariantViolation, NotDivisible,
)
from .monomials import Monomial
from .pairs import (
    CriticalPair, PairSet, SelectionStrategy, chain_criterion,
    coprime_criterion, make_pair, s_polynomial,
)
from .polynomials import Polynomial, PolynomialRing
from .reduction import normal_form

_logger = logging.getLogger(__name__)


class EngineState(Enum):
    INITIALIZED = "initialized"
    RUNNING = "running"
    SATURATED = "saturated"
    MINIMIZING = "minimizing"
    REDUCING = "reducing"
    DONE = "done"
    CANCELLED = "cancelled"


@dataclass
class EngineOptions:
    """
    Tuning and cancellation settings for one basis computation.

    Attributes:
        strategy: critical pair selection (normal, first, degree, sugar)
        use_coprime_criterion: drop pairs with coprime leading monomials
        use_chain_criterion: drop pairs made redundant by a third element
        max_steps: maximum number of pairs to consider, None for no limit
        deadline: wall-clock limit in seconds, None for no limit
        should_cancel: polled before every pair; returning True cancels
    """
    strategy: Union[str, SelectionStrategy] = SelectionStrategy.NORMAL
    use_coprime_criterion: bool = True
    use_chain_criterion: bool = True
    max_steps: Optional[int] = None
    deadline: Optional[float] = None
    should_cancel: Optional[Callable[[], bool]] = None

    def __post_init__(self):
        self.strategy = SelectionStrategy.coerce(self.strategy)
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {self.max_steps}")
        if self.deadline is not None and self.deadline <= 0:
            raise ValueError(f"deadline must be positive, got {self.deadline}")


@dataclass
class EngineStats:
    pairs_created: int = 0
    pairs_considered: int = 0
    coprime_pruned: int = 0
    chain_pruned: int = 0
    s_polynomials: int = 0
    zero_reductions: int = 0
    basis_additions: int = 0
    steps: int = 0
    elapsed: float = 0.0

    def as_dict(self) -> Dict[str, Union[int, float]]:
        return dataclasses.asdict(self)


# =============================================================================
# Basis arena
# =============================================================================

class Basis:
    """
    Basis elements addressed by stable integer ids.

    Ids are handed out in insertion order and never reused. Removing an
    element leaves a tombstone so ids held by critical pairs stay valid.
    """

    def __init__(self):
        self._slots: List[Optional[Polynomial]] = []
        self._sugar: List[int] = []
        # Live polynomials and leading monomials, rebuilt after a change.
        self._live: Optional[List[Polynomial]] = None
        self._leads: Optional[Dict[int, Monomial]] = None

    def _changed(self):
        self._live = None
        self._leads = None

    def add(self, poly: Polynomial, sugar: Optional[int] = None) -> int:
        self._slots.append(poly)
        self._sugar.append(poly.total_degree() if sugar is None else sugar)
        self._changed()
        return len(self._slots) - 1

    def __getitem__(self, basis_id: int) -> Polynomial:
        poly = self._slots[basis_id]
        if poly is None:
            raise KeyError(f"Basis element {basis_id} has been removed")
        return poly

    def __contains__(self, basis_id: int) -> bool:
        return 0 <= basis_id < len(self._slots) and self._slots[basis_id] is not None

    def __len__(self):
        return len(self.polynomials())

    def sugar(self, basis_id: int) -> int:
        return self._sugar[basis_id]

    def replace(self, basis_id: int, poly: Polynomial):
        if basis_id not in self:
            raise KeyError(f"Basis element {basis_id} has been removed")
        self._slots[basis_id] = poly
        self._changed()

    def remove(self, basis_id: int):
        if basis_id not in self:
            raise KeyError(f"Basis element {basis_id} has been removed")
        self._slots[basis_id] = None
        self._changed()

    def ids(self) -> List[int]:
        return [i for i, p in enumerate(self._slots) if p is not None]

    def polynomials(self) -> List[Polynomial]:
        """Live elements in id order. The list is shared; do not mutate it."""
        if self._live is None:
            self._live = [p for p in self._slots if p is not None]
        return self._live

    def leads(self) -> Dict[int, Monomial]:
        """Leading monomial per live id. The dict is shared; do not mutate it."""
        if self._leads is None:
            self._leads = {i: p.terms[0][0] for i, p in enumerate(self._slots) if p is not None}
        return self._leads


# =============================================================================
# Engine
# =============================================================================

class BuchbergerEngine:
    """
    One Gröbner basis computation.

    Generators must share a ring. Zero generators are dropped; the
    remaining ones are made monic and loaded into the basis, and every
    pair among them is queued.

    Example:
        >>> engine = BuchbergerEngine([x**2*y - 1, x*y**2 - x], max_steps=100)
        >>> engine.run()
        (x^2 - y, y^2 - 1)
        >>> engine.state
        <EngineState.DONE: 'done'>
    """

    def __init__(self, generators: Iterable[Polynomial], ring: Optional[PolynomialRing] = None,
                 options: Optional[EngineOptions] = None, **kwargs):
        generators = list(generators)
        if ring is None:
            if not generators:
                raise ValueError("A ring is required when there are no generators")
            ring = generators[0].ring
        for g in generators:
            if not isinstance(g, Polynomial):
                raise TypeError(f"Expected a Polynomial, got {type(g).__name__}")
            if g.ring != ring:
                raise DegreeMismatch(f"Generator {g} does not belong to {ring}")

        if options is None:
            options = EngineOptions(**kwargs)
        elif kwargs:
            options = dataclasses.replace(options, **kwargs)

        self.ring = ring
        self.options = options
        self.stats = EngineStats()
        self.generators: Tuple[Polynomial, ...] = tuple(generators)
        self._basis = Basis()
        self._pairs = PairSet(ring.order, options.strategy)
        self._result: Optional[Tuple[Polynomial, ...]] = None
        self._started: Optional[float] = None

        for g in generators:
            if g:
                self._add(g.monic())
        self.state = EngineState.INITIALIZED

    def __repr__(self):
        return f"BuchbergerEngine({self.ring}, state={self.state.value}, basis={len(self._basis)})"

    def _add(self, poly: Polynomial) -> int:
        """Append ``poly`` and queue its pairs with every live element."""
        new_id = self._basis.add(poly)
        for k in self._basis.ids():
            if k == new_id:
                continue
            pair = make_pair(k, new_id, self._basis[k], poly,
                             self._basis.sugar(k), self._basis.sugar(new_id))
            self._pairs.push(pair)
            self.stats.pairs_created += 1
        return new_id

    # -------------------------------------------------------------------------
    # Cancellation
    # -------------------------------------------------------------------------

    def _check_cancel(self):
        opts = self.options
        if opts.should_cancel is not None and opts.should_cancel():
            self._cancel(Cancelled("Computation cancelled by caller", self.stats))
        if opts.deadline is not None and time.perf_counter() - self._started > opts.deadline:
            self._cancel(DeadlineExceeded(
                f"Deadline of {opts.deadline}s exceeded after {self.stats.steps} steps", self.stats))
        if opts.max_steps is not None and self.stats.steps >= opts.max_steps:
            self._cancel(BudgetExceeded(
                f"Step budget of {opts.max_steps} exhausted with {len(self._pairs)} pairs left",
                self.stats))

    def _cancel(self, exc: Cancelled):
        self.state = EngineState.CANCELLED
        self.stats.elapsed = time.perf_counter() - self._started
        self._result = None
        _logger.warning("%s (%s)", exc, self.stats)
        raise exc

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def _consider(self, pair: CriticalPair):
        opts = self.options
        basis = self._basis
        f, g = basis[pair.i], basis[pair.j]

        if opts.use_coprime_criterion and coprime_criterion(f.lm, g.lm):
            self.stats.coprime_pruned += 1
            _logger.debug("pair (%d, %d): coprime leading monomials, skipped", pair.i, pair.j)
            return
        if opts.use_chain_criterion:
            k = chain_criterion(pair, basis.leads(), self._pairs)
            if k is not None:
                self.stats.chain_pruned += 1
                _logger.debug("pair (%d, %d): chain criterion via %d, skipped", pair.i, pair.j, k)
                return

        try:
            s = s_polynomial(f, g)
            self.stats.s_polynomials += 1
            remainder = normal_form(s, basis.polynomials())
        except (NotDivisible, FieldInversionOfZero) as exc:
            raise InvariantViolation(
                f"Arithmetic failed while reducing the S-polynomial of pair "
                f"({pair.i}, {pair.j}) with lcm {pair.lcm.exps}: {exc}"
            ) from exc

        if not remainder:
            self.stats.zero_reductions += 1
            _logger.debug("pair (%d, %d): S-polynomial reduces to zero", pair.i, pair.j)
            return

        remainder = remainder.monic()
        new_id = self._add(remainder)
        self.stats.basis_additions += 1
        _logger.debug("pair (%d, %d): new basis element %d with leading monomial %s",
                      pair.i, pair.j, new_id, remainder.lm.exps)

    def _saturate(self):
        self.state = EngineState.RUNNING
        while self._pairs:
            self._check_cancel()
            pair = self._pairs.pop()
            self.stats.steps += 1
            self.stats.pairs_considered += 1
            _logger.debug("pair (%d, %d) selected, lcm %s", pair.i, pair.j, pair.lcm.exps)
            self._consider(pair)
        self.state = EngineState.SATURATED

    def _minimize(self):
        self.state = EngineState.MINIMIZING
        basis = self._basis
        leads = basis.leads()
        for g, lm_g in leads.items():
            for h, lm_h in leads.items():
                if h == g or not lm_h.divides(lm_g):
                    continue
                # Among equal leading monomials the earliest element stays.
                if lm_h != lm_g or h < g:
                    basis.remove(g)
                    break

    def _interreduce(self):
        self.state = EngineState.REDUCING
        basis = self._basis
        ids = basis.ids()
        for g in ids:
            others = [basis[h] for h in ids if h != g]
            try:
                reduced = normal_form(basis[g], others)
            except (NotDivisible, FieldInversionOfZero) as exc:
                raise InvariantViolation(
                    f"Arithmetic failed while reducing basis element {g}: {exc}"
                ) from exc
            if not reduced or reduced.lm != basis[g].lm:
                raise InvariantViolation(
                    f"Leading monomial of basis element {g} changed during interreduction"
                )
            basis.replace(g, reduced.monic())

    def run(self) -> Tuple[Polynomial, ...]:
        """
        Run the computation to completion and return the reduced basis.

        Raises:
            Cancelled: (or BudgetExceeded / DeadlineExceeded) when stopped early
            InvariantViolation: the arithmetic layer misbehaved
        """
        if self.state is EngineState.DONE:
            return self._result
        if self.state is not EngineState.INITIALIZED:
            raise RuntimeError(f"Cannot run an engine in state {self.state.value}")

        self._started = time.perf_counter()
        _logger.debug("starting with %d generators over %s, strategy=%s",
                      len(self._basis), self.ring, self.options.strategy.value)
        self._saturate()
        self._minimize()
        self._interreduce()

        key = self.ring.order.key
        self._result = tuple(sorted(self._basis.polynomials(), key=lambda p: key(p.lm), reverse=True))
        self.stats.elapsed = time.perf_counter() - self._started
        self.state = EngineState.DONE
        _logger.info("reduced basis with %d elements (%s)", len(self._result), self.stats)
        return self._result

    def basis(self) -> Tuple[Polynomial, ...]:
        if self.state is not EngineState.DONE:
            raise RuntimeError(f"No basis available in state {self.state.value}")
        return self._result


# =============================================================================
# Module functions
# =============================================================================

def _common_ring(polys: Sequence[Polynomial]) -> Optional[PolynomialRing]:
    if not polys:
        return None
    ring = polys[0].ring
    for p in polys:
        if p.ring != ring:
            raise DegreeMismatch("All polynomials must belong to the same ring")
    return ring


def groebner_basis(generators: Iterable[Polynomial], ring: Optional[PolynomialRing] = None,
                   **options) -> Tuple[Polynomial, ...]:
    """
    Reduced Gröbner basis of the ideal generated by ``generators``.

    Keyword arguments are EngineOptions fields.
    """
    return BuchbergerEngine(generators, ring=ring, **options).run()


def minimize_basis(polys: Sequence[Polynomial]) -> List[Polynomial]:
    """
    Drop every element whose leading monomial is divisible by another's.

    Zero polynomials are dropped too; among equal leading monomials the
    first occurrence stays. Order of the survivors is preserved.
    """
    polys = [p for p in polys if p]
    _common_ring(polys)
    kept = []
    for index, p in enumerate(polys):
        lm = p.lm
        redundant = False
        for other_index, q in enumerate(polys):
            if other_index == index or not q.lm.divides(lm):
                continue
            if q.lm != lm or other_index < index:
                redundant = True
                break
        if not redundant:
            kept.append(p)
    return kept


def reduce_basis(polys: Sequence[Polynomial]) -> Tuple[Polynomial, ...]:
    """
    Minimize, interreduce and normalize a Gröbner basis.

    The input must already be a Gröbner basis; the result is the unique
    reduced basis of its ideal, sorted by leading monomial, largest first.
    """
    minimal = minimize_basis(polys)
    if not minimal:
        return ()
    for index, p in enumerate(minimal):
        others = minimal[:index] + minimal[index + 1:]
        minimal[index] = normal_form(p, others).monic()
    key = minimal[0].ring.order.key
    return tuple(sorted(minimal, key=lambda p: key(p.lm), reverse=True))


def is_groebner_basis(polys: Sequence[Polynomial]) -> bool:
    """True if every S-polynomial of ``polys`` reduces to zero against them."""
    polys = [p for p in polys if p]
    _common_ring(polys)
    for i in range(len(polys)):
        for j in range(i + 1, len(polys)):
            if normal_form(s_polynomial(polys[i], polys[j]), polys):
                return False
    return True


def is_reduced_groebner_basis(polys: Sequence[Polynomial]) -> bool:
    """Gröbner basis, monic, and no term divisible by another element's leading monomial."""
    polys = list(polys)
    if any(not p for p in polys) or not is_groebner_basis(polys):
        return False
    one = polys[0].ring.field.one if polys else None
    for index, p in enumerate(polys):
        if p.lc != one:
            return False
        others = [q.lm for k, q in enumerate(polys) if k != index]
        if any(lead.divides(m) for m, _ in p.terms for lead in others):
            return False
    return True
