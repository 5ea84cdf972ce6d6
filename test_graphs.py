"""Tests for graph colouring and the DIMACS reader."""

import pytest
from groebner import Graph, parse_dimacs, read_dimacs


@pytest.fixture
def triangle():
    return Graph(3, [(0, 1), (1, 2), (2, 0)])


@pytest.fixture
def path():
    return Graph(3, [(0, 1), (1, 2)])


class TestGraph:
    def test_construction(self):
        g = Graph(4, [(1, 0), (1, 2), (0, 1)])
        assert g.vertex_count == 4
        assert g.edges == ((0, 1), (1, 2))
        assert g.neighbors(1) == {0, 2}
        assert g.degree(3) == 0

    def test_equality(self, triangle):
        assert triangle == Graph(3, [(2, 1), (0, 2), (1, 0)])
        assert triangle != Graph(3, [(0, 1)])

    def test_invalid_edges(self):
        with pytest.raises(ValueError):
            Graph(2, [(0, 2)])
        with pytest.raises(ValueError):
            Graph(2, [(1, 1)])
        with pytest.raises(ValueError):
            Graph(-1)


class TestColoringIdeal:
    def test_triangle_generators(self, triangle):
        polys = triangle.coloring_ideal_generators(3)
        assert len(polys) == 3 + 3
        assert str(polys[0]) == "x0^3 - 1"
        assert str(polys[3]) == "x0^2 + x0*x1 + x1^2"

    def test_edgeless_generators(self):
        polys = Graph(3).coloring_ideal_generators(2)
        assert [str(p) for p in polys] == ["x0^2 - 1", "x1^2 - 1", "x2^2 - 1"]

    def test_path_generators(self, path):
        polys = path.coloring_ideal_generators(2)
        assert len(polys) == 3 + 2
        assert str(polys[4]) == "x1 + x2"

    def test_one_color_edge_is_unit(self, path):
        polys = path.coloring_ideal_generators(1)
        assert polys[3] == polys[3].ring.one

    def test_invalid_k(self, triangle):
        with pytest.raises(ValueError):
            triangle.coloring_ideal_generators(0)


class TestColorability:
    def test_triangle(self, triangle):
        assert not triangle.is_k_colorable(2)
        assert triangle.is_k_colorable(3)

    def test_path(self, path):
        assert path.is_k_colorable(2)
        assert not path.is_k_colorable(1)

    def test_even_cycle(self):
        square = Graph(4, [(0, 1), (1, 2), (2, 3), (3, 0)])
        assert square.is_k_colorable(2)

    def test_complete_graph_k4(self):
        k4 = Graph(4, [(u, v) for u in range(4) for v in range(u + 1, 4)])
        assert not k4.is_k_colorable(3)
        assert k4.is_k_colorable(4)

    def test_edgeless_needs_one_color(self):
        assert Graph(3).is_k_colorable(1)

    def test_non_positive_k(self, triangle):
        with pytest.raises(ValueError):
            triangle.is_k_colorable(0)
        with pytest.raises(ValueError):
            Graph(0).is_k_colorable(-1)

    def test_chromatic_number(self, triangle, path):
        assert triangle.chromatic_number() == 3
        assert path.chromatic_number() == 2
        assert Graph(3).chromatic_number() == 1
        assert Graph(0).chromatic_number() == 0


class TestDimacs:
    def test_valid_graph(self):
        g = parse_dimacs("c This is a comment\np edge 4 3\ne 1 2\ne 2 3\ne 4 1\n")
        assert g.vertex_count == 4
        assert g.edges == ((0, 1), (0, 3), (1, 2))

    def test_comments_and_blanks_only(self):
        g = parse_dimacs("c Only comments and blanks\n\n \nc Another comment\n")
        assert g.vertex_count == 0
        assert g.edges == ()

    def test_no_edges(self):
        g = parse_dimacs("p edge 5 0\n")
        assert g.vertex_count == 5
        assert g.edges == ()

    def test_repeated_edges(self):
        g = parse_dimacs("p edge 3 3\ne 1 2\ne 1 3\ne 1 2\n")
        assert g.edges == ((0, 1), (0, 2))

    def test_last_problem_line_wins(self):
        g = parse_dimacs("p edge 2 1\np edge 4 2\ne 1 2\ne 3 4\n")
        assert g.vertex_count == 4
        assert g.edges == ((0, 1), (2, 3))

    def test_empty_text(self):
        assert parse_dimacs("") == Graph(0)

    @pytest.mark.parametrize("text", [
        "e 1 2\ne 2 3\n",             # no problem line
        "p edge 3 2\ne 1\ne 2 3\n",   # missing endpoint
        "p edge 2 1\ne 3 1\n",        # vertex out of range
        "p edge x 1\n",
        "p 3 1\n",
    ])
    def test_malformed(self, text):
        with pytest.raises(ValueError):
            parse_dimacs(text)

    def test_read_file(self, tmp_path):
        source = tmp_path / "triangle.col"
        source.write_text("c triangle\np edge 3 3\ne 1 2\ne 2 3\ne 3 1\n")
        g = read_dimacs(source)
        assert g == Graph(3, [(0, 1), (1, 2), (0, 2)])
        assert g.chromatic_number() == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_dimacs(tmp_path / "nonexistent.col")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
