"""
groebner.easy - String interface for Gröbner basis computations

No knowledge of rings or monomial orders required. Just use strings.

Examples:
    >>> from groebner.easy import groebner_basis, is_member
    >>> groebner_basis(["x^2*y - 1", "x*y^2 - x"])
    ['x^2 - y', 'y^2 - 1']
    >>> is_member("y^3 - y", ["x^2*y - 1", "x*y^2 - x"])
    True

A whole system can be written as text with optional directives:

    @variables(x, y, z)
    @field(GF[32003])
    @ordering(lex)
    x + y + z - 1
    x*y + y*z + z*x     # comments are ignored
    x*y*z
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from sympy import Symbol
from sympy.parsing.sympy_parser import (
    parse_expr, standard_transformations,
    implicit_multiplication_application, convert_xor
)

from .ideal import Ideal
from .polynomials import Polynomial, PolynomialRing

_logger = logging.getLogger(__name__)


# =============================================================================
# String Parsing Engine
# =============================================================================

@dataclass
class ParsedSystem:
    """A ring and the polynomials read from one piece of text."""
    ring: PolynomialRing
    polynomials: List[Polynomial]

    def ideal(self, **options) -> Ideal:
        return Ideal(self.ring, self.polynomials, **options)


class SystemParser:
    """
    Parse human-readable polynomial systems.

    Supports:
        - Directives: @variables(x, y), @field(Q) or @field(GF[p]),
          @ordering(lex|grlex|grevlex)
        - One polynomial per line, or "lhs = rhs" for lhs - rhs
        - Standard math: +, -, *, /, ^, **, implicit multiplication (2x, x y)
        - Comments after '#', blank lines
    """

    TRANSFORMATIONS = standard_transformations + (
        implicit_multiplication_application,
        convert_xor,
    )

    DIRECTIVE = re.compile(r"^@\s*(\w+)\s*\((.*)\)\s*$")
    IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

    def parse(self, text: str, variables: Optional[Sequence[str]] = None,
              order=None, field=None) -> ParsedSystem:
        """
        Parse a system.

        A directive in the text wins over the matching argument, which in
        turn wins over the defaults
        (auto-detected variables, grevlex, rationals).

        Returns:
            ParsedSystem with the ring and one polynomial per equation line
        """
        settings: Dict[str, Any] = {"variables": variables, "ordering": order, "field": field}
        lines = []
        for number, raw in enumerate(text.splitlines(), 1):
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            match = self.DIRECTIVE.match(line)
            if match:
                name, value = match.group(1).lower(), match.group(2).strip()
                if name == "order":
                    name = "ordering"
                if name not in settings:
                    raise ValueError(f"Unknown directive @{match.group(1)} on line {number}")
                if name == "variables":
                    value = [v.strip() for v in value.split(",") if v.strip()]
                settings[name] = value
                continue
            if line.startswith("@"):
                raise ValueError(f"Malformed directive on line {number}: {line!r}")
            lines.append(line)

        names = settings["variables"]
        if names is None:
            names = self.detect_variables("\n".join(lines))
        ring = PolynomialRing(list(names), settings["ordering"], settings["field"])
        _logger.debug("parsed %d equations over %s (order %s)", len(lines), ring, ring.order)
        return ParsedSystem(ring, [self.parse_polynomial(line, ring) for line in lines])

    def parse_polynomial(self, text: str, ring: PolynomialRing) -> Polynomial:
        """Parse one polynomial (or "lhs = rhs") into ``ring``."""
        if "=" in text:
            lhs, rhs = text.split("=", 1)
            return self._parse_expr(lhs, ring) - self._parse_expr(rhs, ring)
        return self._parse_expr(text, ring)

    def _parse_expr(self, text: str, ring: PolynomialRing) -> Polynomial:
        local_dict = {name: Symbol(name) for name in ring.variables}
        # Unknown names stay whole symbols and are rejected by from_sympy.
        for name in self.IDENTIFIER.findall(text):
            local_dict.setdefault(name, Symbol(name))
        try:
            expr = parse_expr(text, local_dict=local_dict, transformations=self.TRANSFORMATIONS)
        except Exception as e:
            raise ValueError(f"Could not parse '{text.strip()}': {e}") from e
        return ring.from_sympy(expr)

    def detect_variables(self, text: str) -> List[str]:
        """Identifiers occurring in ``text``, in natural sort order."""
        found = set(self.IDENTIFIER.findall(text))
        return sorted(found, key=_natural_key)


def _natural_key(name: str):
    return [int(part) if part.isdigit() else part for part in re.split(r"(\d+)", name)]

_parser = SystemParser()


def parse_system(text: str, variables: Optional[Sequence[str]] = None,
                 order=None, field=None) -> ParsedSystem:
    return _parser.parse(text, variables, order, field)


def parse_polynomial(text: str, ring: PolynomialRing) -> Polynomial:
    return _parser.parse_polynomial(text, ring)


def _as_text(system: Union[str, Sequence[str]]) -> str:
    if isinstance(system, str):
        return system
    return "\n".join(system)


# =============================================================================
# One-liner functions
# =============================================================================

def groebner_basis(system: Union[str, Sequence[str]], variables: Optional[Sequence[str]] = None,
                   order=None, field=None, **options) -> List[str]:
    """
    Compute the reduced Gröbner basis of a polynomial system.

    Args:
        system: text (one polynomial per line, directives allowed) or a
            list of polynomial strings
        variables: variable names, most significant first (default: auto-detect)
        order: "lex", "grlex" or "grevlex" (default: grevlex)
        field: "Q" or "GF(p)" (default: Q)
        **options: engine options such as strategy="sugar" or max_steps=1000

    Returns:
        The basis elements as strings, largest leading monomial first.

    Examples:
        >>> groebner_basis(["x^2*y - 1", "x*y^2 - x"])
        ['x^2 - y', 'y^2 - 1']
        >>> groebner_basis("x + y - 1\\nx - y", order="lex")
        ['x - 1/2', 'y - 1/2']
    """
    parsed = _parser.parse(_as_text(system), variables, order, field)
    return [str(g) for g in parsed.ideal(**options).basis()]


def is_member(polynomial: str, system: Union[str, Sequence[str]],
              variables: Optional[Sequence[str]] = None, order=None, field=None,
              **options) -> bool:
    """
    Decide whether ``polynomial`` lies in the ideal generated by ``system``.

    Examples:
        >>> is_member("x^3 - 1", ["x - 1"])
        True
        >>> is_member("x", ["x^2"])
        False
    """
    text = _as_text(system)
    if variables is None and "@variables" not in text:
        variables = _parser.detect_variables(
            "\n".join(l.split("#", 1)[0] for l in text.splitlines() if not l.lstrip().startswith("@"))
            + "\n" + polynomial
        )
    parsed = _parser.parse(text, variables, order, field)
    return parsed.ideal(**options).contains(_parser.parse_polynomial(polynomial, parsed.ring))


def eliminate(system: Union[str, Sequence[str]], drop: Sequence[str],
              variables: Optional[Sequence[str]] = None, field=None, **options) -> List[str]:
    """
    Eliminate variables from a system.

    Examples:
        >>> eliminate(["x - t^2", "y - t^3"], ["t"])
        ['x^3 - y^2']
    """
    parsed = _parser.parse(_as_text(system), variables, None, field)
    if isinstance(drop, str):
        drop = [drop]
    return [str(g) for g in parsed.ideal(**options).eliminate(drop).basis()]


# =============================================================================
# GroebnerProblem Class (Object-Oriented Interface)
# =============================================================================

class GroebnerProblem:
    """
    A polynomial system and its Gröbner basis.

    Examples:
        >>> p = GroebnerProblem('''
        ...     @ordering(grevlex)
        ...     x^2*y - 1
        ...     x*y^2 - x
        ... ''')
        >>> p.basis()
        ['x^2 - y', 'y^2 - 1']
        >>> p.contains("y^3 - y")
        True
    """

    def __init__(self, system: Union[str, Sequence[str]], variables: Optional[Sequence[str]] = None,
                 order=None, field=None, **options):
        self.system = _as_text(system)
        self._parsed = _parser.parse(self.system, variables, order, field)
        self._ideal = self._parsed.ideal(**options)

    @property
    def ring(self) -> PolynomialRing:
        return self._parsed.ring

    @property
    def ideal(self) -> Ideal:
        return self._ideal

    def generators(self) -> List[str]:
        return [str(g) for g in self._parsed.polynomials]

    def basis(self) -> List[str]:
        """Return the reduced Gröbner basis as strings."""
        return [str(g) for g in self._ideal.basis()]

    def contains(self, polynomial: str) -> bool:
        """Return True if ``polynomial`` lies in the ideal."""
        return self._ideal.contains(_parser.parse_polynomial(polynomial, self.ring))

    def reduce(self, polynomial: str) -> str:
        """Return the normal form of ``polynomial`` as a string."""
        return str(self._ideal.reduce(_parser.parse_polynomial(polynomial, self.ring)))

    def is_trivial(self) -> bool:
        """True if the system has no common solution (the ideal is everything)."""
        return self._ideal.is_trivial()

    def stats(self) -> Dict[str, Any]:
        """Return the engine counters as a dict."""
        return self._ideal.stats.as_dict()

    def explain(self) -> str:
        """Return human-readable explanation."""
        basis = self.basis()
        st = self._ideal.stats
        ring = self.ring
        header = f"Reduced Gröbner basis ({len(basis)} elements):"

        lines = [
            "╔══════════════════════════════════════════════════════════╗",
            f"║  Ring: {str(ring):<49} ║",
            f"║  Order: {str(ring.order):<48} ║",
            "╠══════════════════════════════════════════════════════════╣",
            "║  Generators:                                             ║",
        ]
        for g in self.generators():
            lines.append(f"║    • {g:<51} ║")

        lines.extend([
            "╠══════════════════════════════════════════════════════════╣",
            f"║  {header:<55} ║",
        ])
        for g in basis:
            lines.append(f"║    • {g:<51} ║")

        pairs = f"{st.pairs_considered} considered, {st.coprime_pruned + st.chain_pruned} pruned"
        reductions = f"{st.s_polynomials} S-polynomials, {st.zero_reductions} to zero"
        lines.extend([
            "╠══════════════════════════════════════════════════════════╣",
            f"║  Pairs: {pairs:<48} ║",
            f"║  Reductions: {reductions:<43} ║",
            f"║  Inconsistent: {'✓ Yes' if self.is_trivial() else '✗ No':<41} ║",
            "╚══════════════════════════════════════════════════════════╝",
        ])

        return '\n'.join(lines)

    def __repr__(self):
        return f"GroebnerProblem({self.generators()!r})"


# =============================================================================
# Help
# =============================================================================

def help_syntax():
    """Print syntax help for polynomial systems."""
    help_text = """
╔══════════════════════════════════════════════════════════════════════╗
║                   groebner.easy - Syntax Reference                   ║
╠══════════════════════════════════════════════════════════════════════╣
║                                                                      ║
║  Polynomials (one per line, or a list of strings):                   ║
║    "x^2*y - 1"             →  x²y - 1                                ║
║    "2x y + 3/4 z"          →  2xy + ¾z (implicit multiplication)     ║
║    "x^2 = y"               →  x² - y                                 ║
║                                                                      ║
║  Directives (optional, before or between polynomials):               ║
║    @variables(x, y, z)     →  variable order, most significant first ║
║    @field(Q)               →  rational coefficients (default)        ║
║    @field(GF[7])           →  integers modulo a prime                ║
║    @ordering(lex)          →  lex, grlex or grevlex (default)        ║
║                                                                      ║
║  Operators:                                                          ║
║    +, -, *                 →  standard arithmetic                    ║
║    /                       →  division by numbers only               ║
║    ^  or  **               →  exponentiation                         ║
║    #                       →  comment until end of line              ║
║                                                                      ║
╚══════════════════════════════════════════════════════════════════════╝
"""
    print(help_text)


# =============================================================================
# Module exports
# =============================================================================

__all__ = [
    # One-liner functions
    'groebner_basis',
    'is_member',
    'eliminate',
    'parse_system',
    'parse_polynomial',

    # Classes
    'GroebnerProblem',
    'SystemParser',
    'ParsedSystem',

    # Help
    'help_syntax',
]


if __name__ == "__main__":
    from .systems import katsura

    logging.basicConfig(level=logging.INFO, format="%(name)s %(levelname)s %(message)s")

    print("=" * 60)
    print("groebner.easy - User-Friendly Interface Demo")
    print("=" * 60)

    help_syntax()

    print("\n1. Textbook example: x^2*y - 1, x*y^2 - x")
    p = GroebnerProblem(["x^2*y - 1", "x*y^2 - x"])
    print(p.explain())

    print("\n2. Membership: x^3 - 1 in <x - 1>")
    print(f"   {is_member('x^3 - 1', ['x - 1'])}")

    print("\n3. Twisted cubic: eliminate t from x = t^2, y = t^3")
    print(f"   {eliminate(['x - t^2', 'y - t^3'], ['t'])}")

    print("\n4. Inconsistent system over GF(7)")
    q = GroebnerProblem("@field(GF[7])\nx*y - 1\nx\n")
    print(f"   Basis: {q.basis()}, inconsistent: {q.is_trivial()}")

    print("\n5. Katsura-3")
    system = katsura(3)
    ideal = Ideal(system[0].ring, system)
    for g in ideal.basis():
        print(f"   {g}")
    print(f"   {ideal.stats}")
