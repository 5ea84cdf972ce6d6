"""
Multivariate division with remainder.

Given f and an ordered list of nonzero divisors d_1..d_n, ``divide``
produces quotients q_i and a remainder r with

    f = q_1*d_1 + ... + q_n*d_n + r

where no term of r is divisible by any leading monomial LM(d_i).
"""

import heapq
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .exceptions import DegreeMismatch
from .polynomials import Polynomial


@dataclass(frozen=True)
class DivisionResult:
    """Quotients (one per divisor, in divisor order) and remainder."""
    quotients: Tuple[Polynomial, ...]
    remainder: Polynomial
    steps: int = 0

    def reconstruct(self, divisors: Sequence[Polynomial]) -> Polynomial:
        """Return sum(q_i * d_i) + r, which equals the dividend."""
        total = self.remainder
        for q, d in zip(self.quotients, divisors):
            total = total + q * d
        return total


def _check_divisors(f: Polynomial, divisors: Sequence[Polynomial]):
    for d in divisors:
        if d.ring != f.ring:
            raise DegreeMismatch("Dividend and divisors must belong to the same ring")
        if not d:
            raise ValueError("Cannot divide by the zero polynomial")


class _Pending:
    """Heap entry for a residual monomial; the largest key pops first."""

    __slots__ = ("key", "monomial")

    def __init__(self, key, monomial):
        self.key = key
        self.monomial = monomial

    def __lt__(self, other):
        return self.key > other.key


def divide(f: Polynomial, divisors: Sequence[Polynomial], quotients: bool = True) -> DivisionResult:
    """
    Divide ``f`` by ``divisors``.

    At every step the leading term of the residual is cancelled by the
    first divisor whose leading monomial divides it; if none does, the
    term moves to the remainder. The residual's leading monomial strictly
    decreases each step, so the loop terminates.

    The residual is kept as a monomial -> coefficient dict with a heap of
    its monomials, so a step costs the length of the divisor rather than
    the length of the residual.

    Args:
        f: the dividend
        divisors: nonzero polynomials of the same ring, tried in order
        quotients: set to False to skip quotient bookkeeping

    Returns:
        DivisionResult. When ``quotients`` is False its quotients are
        empty.
    """
    _check_divisors(f, divisors)
    ring = f.ring
    field = ring.field
    key = ring.order.key
    leads = [(d.terms[0][0], d.terms[0][1]) for d in divisors]
    quotient_terms: List[list] = [[] for _ in divisors]
    remainder = []
    residual = dict(f.terms)
    # Stale entries (cancelled or already handled monomials) are skipped on pop.
    heap = [_Pending(key(m), m) for m, _ in f.terms]
    heapq.heapify(heap)
    steps = 0

    while heap:
        lm = heapq.heappop(heap).monomial
        lc = residual.pop(lm, None)
        if lc is None:
            continue
        for index, (dlm, dlc) in enumerate(leads):
            if dlm.divides(lm):
                qm = lm / dlm
                qc = field.div(lc, dlc)
                for m, c in divisors[index].terms[1:]:
                    m = m * qm
                    old = residual.get(m)
                    c = -qc * c if old is None else old - qc * c
                    if not c:
                        del residual[m]
                        continue
                    residual[m] = c
                    if old is None:
                        heapq.heappush(heap, _Pending(key(m), m))
                if quotients:
                    quotient_terms[index].append((qm, qc))
                steps += 1
                break
        else:
            # Residual leading terms only decrease, so the remainder is
            # produced already sorted.
            remainder.append((lm, lc))

    if quotients:
        # Quotient monomials for one divisor are produced in strictly
        # decreasing order for the same reason.
        qs = tuple(Polynomial._from_sorted(ring, terms) for terms in quotient_terms)
    else:
        qs = ()
    return DivisionResult(qs, Polynomial._from_sorted(ring, remainder), steps)


def normal_form(f: Polynomial, divisors: Sequence[Polynomial]) -> Polynomial:
    """Remainder of ``f`` on division by ``divisors``."""
    return divide(f, divisors, quotients=False).remainder


def is_reducible(f: Polynomial, divisors: Sequence[Polynomial]) -> bool:
    """True if some term of ``f`` is divisible by a leading monomial of ``divisors``."""
    leads = [d.leading_monomial() for d in divisors if d]
    return any(lead.divides(m) for m, _ in f.terms for lead in leads)
