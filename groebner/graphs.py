"""
Graph colouring through Gröbner bases.

A graph on n vertices is k-colourable exactly when the ideal generated by

    x_i^k - 1                                   for every vertex i
    (x_u^k - x_v^k) / (x_u - x_v)               for every edge {u, v}

is not the whole ring: a colouring assigns each vertex a k-th root of
unity, and the edge polynomial vanishes only when the two roots differ.

Graphs can be read from the DIMACS format:

    c a comment
    p edge 4 3
    e 1 2
    e 2 3
    e 4 1

Vertices are 1-based in DIMACS files and 0-based in Graph.
"""

import logging
from typing import FrozenSet, Iterable, List, Optional, Tuple

from .ideal import Ideal
from .polynomials import Polynomial, PolynomialRing

_logger = logging.getLogger(__name__)


class Graph:
    """
    Undirected simple graph on the vertices 0..vertex_count-1.

    Example:
        >>> triangle = Graph(3, [(0, 1), (1, 2), (2, 0)])
        >>> triangle.is_k_colorable(2)
        False
    """

    def __init__(self, vertex_count: int, edges: Iterable[Tuple[int, int]] = ()):
        if vertex_count < 0:
            raise ValueError(f"Vertex count must be non-negative, got {vertex_count}")
        self.vertex_count = vertex_count
        normalized = set()
        for u, v in edges:
            for w in (u, v):
                if not 0 <= w < vertex_count:
                    raise ValueError(f"Vertex {w} out of range for a graph on {vertex_count} vertices")
            if u == v:
                raise ValueError(f"Self-loop at vertex {u}")
            normalized.add((min(u, v), max(u, v)))
        self.edges: Tuple[Tuple[int, int], ...] = tuple(sorted(normalized))

    def __repr__(self):
        return f"Graph({self.vertex_count}, {list(self.edges)})"

    def __eq__(self, other):
        if not isinstance(other, Graph):
            return NotImplemented
        return self.vertex_count == other.vertex_count and self.edges == other.edges

    def __hash__(self):
        return hash((self.vertex_count, self.edges))

    def neighbors(self, vertex: int) -> FrozenSet[int]:
        return frozenset(v if u == vertex else u for u, v in self.edges if vertex in (u, v))

    def degree(self, vertex: int) -> int:
        return len(self.neighbors(vertex))

    # -------------------------------------------------------------------------
    # Colouring
    # -------------------------------------------------------------------------

    def coloring_ring(self) -> PolynomialRing:
        return PolynomialRing([f"x{i}" for i in range(self.vertex_count)], "grevlex")

    def coloring_ideal_generators(self, k: int,
                                  ring: Optional[PolynomialRing] = None) -> List[Polynomial]:
        """Vertex polynomials first, then one polynomial per edge in sorted edge order."""
        if k <= 0:
            raise ValueError(f"Number of colors must be positive, got {k}")
        R = ring if ring is not None else self.coloring_ring()
        if R.nvars != self.vertex_count:
            raise ValueError(f"Colouring needs {self.vertex_count} variables, {R} has {R.nvars}")

        def exponents(*powers):
            exps = [0] * self.vertex_count
            for vertex, power in powers:
                exps[vertex] += power
            return tuple(exps)

        generators = []
        for i in range(self.vertex_count):
            generators.append(R.from_terms([(exponents((i, k)), 1), (exponents(), -1)]))
        for u, v in self.edges:
            generators.append(R.from_terms(
                (exponents((u, k - 1 - i), (v, i)), 1) for i in range(k)
            ))
        return generators

    def coloring_ideal(self, k: int, **options) -> Ideal:
        R = self.coloring_ring()
        return Ideal(R, self.coloring_ideal_generators(k, R), **options)

    def is_k_colorable(self, k: int, **options) -> bool:
        """
        True if the vertices can be coloured with at most k colours so that
        no edge joins two vertices of the same colour.

        Keyword arguments are passed to the engine (max_steps, deadline, ...).
        """
        if k <= 0:
            raise ValueError(f"Number of colors must be positive, got {k}")
        if k >= self.vertex_count:
            return True
        colorable = not self.coloring_ideal(k, **options).is_trivial()
        _logger.debug("graph on %d vertices with %d edges is %s%d-colorable",
                      self.vertex_count, len(self.edges), "" if colorable else "not ", k)
        return colorable

    def chromatic_number(self, **options) -> int:
        """Smallest k for which the graph is k-colourable."""
        if self.vertex_count == 0:
            return 0
        k = 1
        while not self.is_k_colorable(k, **options):
            k += 1
        return k


# =============================================================================
# DIMACS
# =============================================================================

def parse_dimacs(text: str) -> Graph:
    """
    Build a graph from DIMACS text.

    The last ``p edge`` (or ``p col``) line sets the vertex count; edges
    may not come before it. Edge endpoints are 1-based. Other line types
    are skipped.
    """
    vertex_count = 0
    seen_problem = False
    edges = []
    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line or line.startswith("c"):
            continue
        fields = line.split()
        if fields[0] == "p":
            if len(fields) < 3 or fields[1] not in ("edge", "col"):
                raise ValueError(f"Line {lineno}: expected 'p edge <vertices> <edges>', got {raw!r}")
            vertex_count = _int_field(fields[2], lineno)
            seen_problem = True
        elif fields[0] == "e":
            if not seen_problem:
                raise ValueError(f"Line {lineno}: edge before the problem line")
            if len(fields) < 3:
                raise ValueError(f"Line {lineno}: expected 'e <u> <v>', got {raw!r}")
            u, v = _int_field(fields[1], lineno), _int_field(fields[2], lineno)
            for w in (u, v):
                if not 1 <= w <= vertex_count:
                    raise ValueError(f"Line {lineno}: vertex {w} outside 1..{vertex_count}")
            edges.append((u - 1, v - 1))
    return Graph(vertex_count, edges)


def read_dimacs(path) -> Graph:
    """Read a DIMACS graph file."""
    with open(path) as handle:
        return parse_dimacs(handle.read())


def _int_field(text: str, lineno: int) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"Line {lineno}: expected an integer, got {text!r}") from None
