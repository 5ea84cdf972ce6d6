"""
Standard benchmark systems.

    katsura(n)  n+1 variables u0..un, n+1 equations
    reimer(n)   n variables x1..xn, n equations of degrees 2..n+1
    cyclic(n)   n variables x0..x{n-1}, the cyclic n-roots problem

Each function returns a list of polynomials in ``ring`` (grevlex over
QQ with the conventional variable names when omitted).
"""

from typing import List, Optional

from .exceptions import DegreeMismatch
from .polynomials import Polynomial, PolynomialRing


def _ring_for(names: List[str], ring: Optional[PolynomialRing]) -> PolynomialRing:
    if ring is None:
        return PolynomialRing(names, "grevlex")
    if ring.nvars != len(names):
        raise DegreeMismatch(f"System needs {len(names)} variables, {ring} has {ring.nvars}")
    return ring


def katsura(n: int, ring: Optional[PolynomialRing] = None) -> List[Polynomial]:
    """
    Katsura-n:

        u0 + 2*(u1 + ... + un) - 1
        sum_{l=-n..n} u_|l| * u_|m-l| - u_m      for m = 0..n-1

    with u_k = 0 for k > n.
    """
    if n < 1:
        raise ValueError(f"Katsura systems need n >= 1, got {n}")
    R = _ring_for([f"u{i}" for i in range(n + 1)], ring)
    u = R.gens

    def var(k):
        k = abs(k)
        return u[k] if k <= n else R.zero

    system = [u[0] + 2 * sum(u[1:], R.zero) - 1]
    for m in range(n):
        total = R.zero
        for l in range(-n, n + 1):
            total = total + var(l) * var(m - l)
        system.append(total - u[m])
    return system


def reimer(n: int, ring: Optional[PolynomialRing] = None) -> List[Polynomial]:
    """
    Reimer-n:  2*x1^k - 2*x2^k + 2*x3^k - ... - 1   for k = 2..n+1
    """
    if n < 3:
        raise ValueError(f"Reimer systems need n >= 3, got {n}")
    R = _ring_for([f"x{i}" for i in range(1, n + 1)], ring)
    x = R.gens
    system = []
    for k in range(2, n + 2):
        total = R.constant(-1)
        for i, xi in enumerate(x):
            total = total + (2 if i % 2 == 0 else -2) * xi ** k
        system.append(total)
    return system


def cyclic(n: int, ring: Optional[PolynomialRing] = None) -> List[Polynomial]:
    """
    Cyclic-n: the elementary cyclic sums of degree 1..n-1, plus
    x0*x1*...*x{n-1} - 1.
    """
    if n < 2:
        raise ValueError(f"Cyclic systems need n >= 2, got {n}")
    R = _ring_for([f"x{i}" for i in range(n)], ring)
    x = R.gens
    system = []
    for k in range(1, n):
        total = R.zero
        for i in range(n):
            term = R.one
            for j in range(k):
                term = term * x[(i + j) % n]
            total = total + term
        system.append(total)
    product = R.one
    for xi in x:
        product = product * xi
    system.append(product - 1)
    return system
