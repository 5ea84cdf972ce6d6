"""
Monomials and monomial orders.

A Monomial is an exponent vector over the ordered variables of a ring.
A MonomialOrder is a closed set of variants (lex, grlex, grevlex, block,
weighted) sharing one capability: a sort key such that plain tuple
comparison of keys realises the order. Every variant is a well-order
compatible with multiplication.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .exceptions import DegreeMismatch, NotDivisible

# Upper bound on the memoised sort keys kept per order.
KEY_CACHE_SIZE = 1 << 16


class Monomial:
    """
    An exponent vector x_0^e_0 * ... * x_{n-1}^e_{n-1}.

    Monomials are immutable value objects. The zero-variable monomial is
    the constant 1 and divides every other zero-variable monomial.
    """

    __slots__ = ("exps", "_hash")

    def __init__(self, exps: Iterable[int]):
        exps = tuple(int(e) for e in exps)
        if any(e < 0 for e in exps):
            raise ValueError(f"Exponents must be non-negative: {exps}")
        self.exps = exps
        self._hash = hash(exps)

    @classmethod
    def _raw(cls, exps: Tuple[int, ...]) -> "Monomial":
        # Skips validation for exponent tuples produced by other monomials.
        m = object.__new__(cls)
        m.exps = exps
        m._hash = hash(exps)
        return m

    @classmethod
    def one(cls, nvars: int) -> "Monomial":
        return cls._raw((0,) * nvars)

    @classmethod
    def variable(cls, index: int, nvars: int) -> "Monomial":
        if not 0 <= index < nvars:
            raise IndexError(f"Variable index {index} out of range for {nvars} variables")
        exps = [0] * nvars
        exps[index] = 1
        return cls._raw(tuple(exps))

    def __repr__(self):
        return f"Monomial({self.exps})"

    def __hash__(self):
        return self._hash

    def __eq__(self, other):
        if not isinstance(other, Monomial):
            return NotImplemented
        return self.exps == other.exps

    def __len__(self):
        return len(self.exps)

    def __iter__(self):
        return iter(self.exps)

    def __getitem__(self, index):
        return self.exps[index]

    @property
    def nvars(self) -> int:
        return len(self.exps)

    @property
    def degree(self) -> int:
        """Total degree (sum of exponents)."""
        return sum(self.exps)

    def is_constant(self) -> bool:
        return not any(self.exps)

    def support(self) -> Tuple[int, ...]:
        """Indices of the variables with a positive exponent."""
        return tuple(i for i, e in enumerate(self.exps) if e)

    def _check(self, other: "Monomial"):
        if len(self.exps) != len(other.exps):
            raise DegreeMismatch(
                f"Monomials over {len(self.exps)} and {len(other.exps)} variables cannot be combined"
            )

    def __mul__(self, other: "Monomial") -> "Monomial":
        self._check(other)
        return Monomial._raw(tuple(a + b for a, b in zip(self.exps, other.exps)))

    def __truediv__(self, other: "Monomial") -> "Monomial":
        self._check(other)
        exps = tuple(a - b for a, b in zip(self.exps, other.exps))
        if any(e < 0 for e in exps):
            raise NotDivisible(self, other)
        return Monomial._raw(exps)

    def __pow__(self, n: int) -> "Monomial":
        if n < 0:
            raise ValueError("Monomials cannot be raised to negative powers")
        return Monomial._raw(tuple(e * n for e in self.exps))

    def divides(self, other: "Monomial") -> bool:
        """True if self | other."""
        self._check(other)
        return all(a <= b for a, b in zip(self.exps, other.exps))

    def lcm(self, other: "Monomial") -> "Monomial":
        self._check(other)
        return Monomial._raw(tuple(max(a, b) for a, b in zip(self.exps, other.exps)))

    def gcd(self, other: "Monomial") -> "Monomial":
        self._check(other)
        return Monomial._raw(tuple(min(a, b) for a, b in zip(self.exps, other.exps)))

    def is_coprime(self, other: "Monomial") -> bool:
        """True if the two monomials share no variable."""
        self._check(other)
        return not any(a and b for a, b in zip(self.exps, other.exps))


# =============================================================================
# Monomial orders
# =============================================================================

class OrderType(Enum):
    """The supported monomial orders."""
    LEX = "lex"
    GRLEX = "grlex"
    GREVLEX = "grevlex"
    BLOCK = "block"
    WEIGHTED = "weighted"


@dataclass(frozen=True)
class MonomialOrder:
    """
    A total, multiplication-compatible well-order on exponent vectors.

    Build instances with the class methods rather than the constructor:

        >>> MonomialOrder.grevlex()
        >>> MonomialOrder.block([(2, "lex"), (1, "grevlex")])
        >>> MonomialOrder.elimination(1, 3)
        >>> MonomialOrder.weighted([2, 1])

    Block orders compare the first block under its sub-order and only
    consult later blocks on ties, which makes them elimination orders
    for the variables of the earlier blocks.
    """
    type: OrderType
    blocks: Tuple[Tuple[int, "MonomialOrder"], ...] = ()
    weights: Tuple[int, ...] = ()
    tiebreak: Optional["MonomialOrder"] = None
    _cache: Dict[Monomial, tuple] = field(default_factory=dict, init=False,
                                          repr=False, compare=False, hash=False)

    @classmethod
    def lex(cls) -> "MonomialOrder":
        return cls(OrderType.LEX)

    @classmethod
    def grlex(cls) -> "MonomialOrder":
        return cls(OrderType.GRLEX)

    @classmethod
    def grevlex(cls) -> "MonomialOrder":
        return cls(OrderType.GREVLEX)

    @classmethod
    def block(cls, blocks: Sequence[Tuple[int, Union[str, "MonomialOrder"]]]) -> "MonomialOrder":
        parsed = []
        for size, sub in blocks:
            if int(size) < 1:
                raise ValueError(f"Block sizes must be positive, got {size}")
            parsed.append((int(size), order_from_spec(sub)))
        if not parsed:
            raise ValueError("A block order needs at least one block")
        return cls(OrderType.BLOCK, blocks=tuple(parsed))

    @classmethod
    def elimination(cls, k: int, nvars: int,
                    suborder: Union[str, "MonomialOrder"] = "grevlex") -> "MonomialOrder":
        """Order eliminating the first ``k`` of ``nvars`` variables."""
        if not 0 < k < nvars:
            raise ValueError(f"Can only eliminate between 1 and {nvars - 1} variables, got {k}")
        return cls.block([(k, suborder), (nvars - k, suborder)])

    @classmethod
    def weighted(cls, weights: Sequence[int],
                 tiebreak: Union[str, "MonomialOrder"] = "lex") -> "MonomialOrder":
        weights = tuple(int(w) for w in weights)
        if any(w < 0 for w in weights):
            raise ValueError(f"Weights must be non-negative: {weights}")
        return cls(OrderType.WEIGHTED, weights=weights, tiebreak=order_from_spec(tiebreak))

    def __str__(self):
        if self.type is OrderType.BLOCK:
            inner = ", ".join(f"{size}:{sub}" for size, sub in self.blocks)
            return f"block({inner})"
        if self.type is OrderType.WEIGHTED:
            return f"weighted({list(self.weights)}, {self.tiebreak})"
        return self.type.value

    @property
    def arity(self) -> Optional[int]:
        """Number of variables the order is tied to, or None if any."""
        if self.type is OrderType.BLOCK:
            return sum(size for size, _ in self.blocks)
        if self.type is OrderType.WEIGHTED:
            return len(self.weights)
        return None

    def validate(self, nvars: int):
        """Raise DegreeMismatch if the order cannot be used with ``nvars`` variables."""
        arity = self.arity
        if arity is not None and arity != nvars:
            raise DegreeMismatch(f"Order {self} covers {arity} variables, ring has {nvars}")
        if self.type is OrderType.BLOCK:
            for size, sub in self.blocks:
                sub.validate(size)
        elif self.type is OrderType.WEIGHTED:
            self.tiebreak.validate(nvars)

    def _key(self, exps: Tuple[int, ...]) -> tuple:
        t = self.type
        if t is OrderType.LEX:
            return exps
        if t is OrderType.GRLEX:
            return (sum(exps), exps)
        if t is OrderType.GREVLEX:
            # Last differing exponent decides, the smaller one wins.
            return (sum(exps), tuple(-e for e in reversed(exps)))
        if t is OrderType.BLOCK:
            parts = []
            start = 0
            for size, sub in self.blocks:
                parts.append(sub._key(exps[start:start + size]))
                start += size
            return tuple(parts)
        if t is OrderType.WEIGHTED:
            return (sum(w * e for w, e in zip(self.weights, exps)), self.tiebreak._key(exps))
        raise ValueError(f"Unknown order type {t}")

    def key(self, m: Monomial) -> tuple:
        """Sort key for ``m``; larger monomials have larger keys."""
        k = self._cache.get(m)
        if k is None:
            if len(self._cache) >= KEY_CACHE_SIZE:
                self._cache.clear()
            k = self._cache[m] = self._key(m.exps)
        return k

    def clear_cache(self):
        """Forget memoised sort keys."""
        self._cache.clear()

    def compare(self, a: Monomial, b: Monomial) -> int:
        """Return -1, 0 or 1 as ``a`` is smaller than, equal to or larger than ``b``."""
        if len(a) != len(b):
            raise DegreeMismatch("Both monomials should be defined in the same ring")
        ka, kb = self.key(a), self.key(b)
        return (ka > kb) - (ka < kb)

    def max(self, monomials: Iterable[Monomial]) -> Monomial:
        return max(monomials, key=self.key)

    def sorted(self, monomials: Iterable[Monomial], reverse: bool = True) -> List[Monomial]:
        """Sort monomials, largest first by default."""
        return sorted(monomials, key=self.key, reverse=reverse)


_NAMED_ORDERS = {
    "lex": MonomialOrder.lex,
    "grlex": MonomialOrder.grlex,
    "deglex": MonomialOrder.grlex,
    "grevlex": MonomialOrder.grevlex,
    "degrevlex": MonomialOrder.grevlex,
}


def order_from_spec(spec: Union[str, MonomialOrder, OrderType, None]) -> MonomialOrder:
    """
    Resolve ``"lex"``, ``"grlex"``, ``"grevlex"`` or an existing order.

    ``None`` means grevlex.
    """
    if spec is None:
        return MonomialOrder.grevlex()
    if isinstance(spec, MonomialOrder):
        return spec
    if isinstance(spec, OrderType):
        spec = spec.value
    name = str(spec).strip().lower()
    if name not in _NAMED_ORDERS:
        raise ValueError(
            f"Unknown monomial order {spec!r}; expected one of {sorted(_NAMED_ORDERS)} "
            "or a MonomialOrder instance"
        )
    return _NAMED_ORDERS[name]()
