"""
Critical pairs, S-polynomials and Buchberger's pruning criteria.

The pair set hands pairs to the engine one at a time in the order given
by a selection strategy. The normal strategy (smallest lcm first, ties
by (i, j)) is the default.
"""

import heapq
import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .monomials import Monomial, MonomialOrder
from .polynomials import Polynomial


class SelectionStrategy(Enum):
    """How the next critical pair is chosen."""
    NORMAL = "normal"    # smallest lcm under the ring order
    FIRST = "first"      # first in, first out
    DEGREE = "degree"    # smallest total degree of the lcm
    SUGAR = "sugar"      # smallest sugar degree

    @classmethod
    def coerce(cls, value: Union[str, "SelectionStrategy"]) -> "SelectionStrategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown selection strategy {value!r}; expected one of "
                f"{[s.value for s in cls]}"
            ) from None


@dataclass(frozen=True)
class CriticalPair:
    """Basis ids ``i < j`` with the lcm of their leading monomials."""
    i: int
    j: int
    lcm: Monomial
    sugar: int = 0

    @property
    def ids(self) -> Tuple[int, int]:
        return (self.i, self.j)


def make_pair(i: int, j: int, f: Polynomial, g: Polynomial,
              sugar_f: int = 0, sugar_g: int = 0) -> CriticalPair:
    """Critical pair for basis elements ``f`` (id i) and ``g`` (id j)."""
    if i > j:
        i, j, f, g, sugar_f, sugar_g = j, i, g, f, sugar_g, sugar_f
    lm_f, lm_g = f.lm, g.lm
    lcm = lm_f.lcm(lm_g)
    d = lcm.degree
    sugar = max(sugar_f + d - lm_f.degree, sugar_g + d - lm_g.degree)
    return CriticalPair(i, j, lcm, sugar)


def s_polynomial(f: Polynomial, g: Polynomial) -> Polynomial:
    """
    S(f, g) = (L/LM(f)) * f - (LC(f)/LC(g)) * (L/LM(g)) * g

    with L = lcm(LM(f), LM(g)). Both products have leading term
    LC(f)*L, which cancels exactly.
    """
    if f.ring != g.ring:
        raise ValueError("Both polynomials should be defined in the same ring")
    if not f or not g:
        raise ValueError("S-polynomials need two nonzero polynomials")
    field = f.ring.field
    (lm_f, lc_f), (lm_g, lc_g) = f.terms[0], g.terms[0]
    lcm = lm_f.lcm(lm_g)
    return f.mul_term(lcm / lm_f, field.one) - g.mul_term(lcm / lm_g, field.div(lc_f, lc_g))


# =============================================================================
# Criteria
# =============================================================================

def coprime_criterion(lm_i: Monomial, lm_j: Monomial) -> bool:
    """
    Buchberger's first criterion.

    If the leading monomials share no variable, S(f_i, f_j) reduces to
    zero modulo {f_i, f_j} and the pair can be dropped.
    """
    return lm_i.is_coprime(lm_j)


def chain_criterion(pair: CriticalPair, leads: Mapping[int, Monomial],
                    pending: "PairSet") -> Optional[int]:
    """
    Buchberger's second criterion.

    Returns the id of a basis element k (k not in the pair) whose leading
    monomial divides lcm(LM(f_i), LM(f_j)) while neither (i, k) nor (j, k)
    is still waiting in ``pending``; the pair is then redundant. Returns
    None when no such k exists.
    """
    i, j = pair.i, pair.j
    for k, lm_k in leads.items():
        if k == i or k == j:
            continue
        if not lm_k.divides(pair.lcm):
            continue
        if (min(i, k), max(i, k)) in pending or (min(j, k), max(j, k)) in pending:
            continue
        return k
    return None


# =============================================================================
# Pair set
# =============================================================================

class PairSet:
    """
    The unprocessed critical pairs, ordered by a selection strategy.

    A heap gives the next pair; a set of id tuples answers membership
    queries for the chain criterion.
    """

    def __init__(self, order: MonomialOrder,
                 strategy: Union[str, SelectionStrategy] = SelectionStrategy.NORMAL):
        self.order = order
        self.strategy = SelectionStrategy.coerce(strategy)
        self._heap: List[tuple] = []
        self._pending: Dict[Tuple[int, int], CriticalPair] = {}
        self._counter = itertools.count()

    def __len__(self):
        return len(self._pending)

    def __bool__(self):
        return bool(self._pending)

    def __contains__(self, ids: Tuple[int, int]) -> bool:
        return ids in self._pending

    def __iter__(self) -> Iterator[CriticalPair]:
        return iter(list(self._pending.values()))

    def _priority(self, pair: CriticalPair, ticket: int) -> tuple:
        s = self.strategy
        if s is SelectionStrategy.NORMAL:
            return (self.order.key(pair.lcm), pair.i, pair.j)
        if s is SelectionStrategy.FIRST:
            return (ticket,)
        if s is SelectionStrategy.DEGREE:
            return (pair.lcm.degree, pair.i, pair.j)
        return (pair.sugar, self.order.key(pair.lcm), pair.i, pair.j)

    def push(self, pair: CriticalPair):
        if pair.ids in self._pending:
            return
        ticket = next(self._counter)
        heapq.heappush(self._heap, (self._priority(pair, ticket), ticket, pair))
        self._pending[pair.ids] = pair

    def pop(self) -> CriticalPair:
        """Remove and return the next pair to process."""
        while self._heap:
            _, _, pair = heapq.heappop(self._heap)
            if self._pending.pop(pair.ids, None) is not None:
                return pair
        raise IndexError("pop from an empty pair set")

    def discard(self, ids: Tuple[int, int]):
        # The heap entry is skipped lazily by pop().
        self._pending.pop(ids, None)
