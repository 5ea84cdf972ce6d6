"""Tests for the Ideal facade."""

import pytest
from sympy import symbols
from groebner import (
    Ideal, PolynomialRing, Monomial, EmptyRing, DegreeMismatch, BudgetExceeded, cyclic
)


@pytest.fixture
def R():
    return PolynomialRing(["x", "y"], order="grevlex")


class TestFromGenerators:
    def test_textbook_system(self):
        I = Ideal.from_generators(["x", "y"], "grevlex",
                                  [{(2, 1): 1, (0, 0): -1}, {(1, 2): 1, (1, 0): -1}])
        assert [str(g) for g in I.basis()] == ["x^2 - y", "y^2 - 1"]

    def test_empty_ring_with_variables_in_generators(self):
        with pytest.raises(EmptyRing):
            Ideal.from_generators([], "grevlex", [{(1,): 1}])

    def test_empty_ring_constants(self):
        I = Ideal.from_generators([], None, [{(): 3}])
        assert I.is_trivial()

    def test_arity_mismatch(self):
        with pytest.raises(DegreeMismatch):
            Ideal.from_generators(["x", "y"], "lex", [{(1,): 1}])

    def test_polynomial_from_other_arity(self, R):
        other = PolynomialRing(["x", "y", "z"])
        with pytest.raises(DegreeMismatch):
            Ideal(R, [other.gen("z")])

    def test_eager(self):
        I = Ideal.from_generators(2, "lex", [{(1, 0): 1}])
        assert I._basis is not None

    def test_field(self):
        I = Ideal.from_generators(["x"], "lex", [{(2,): 1, (0,): 1}], field="GF(2)")
        x, = I.ring.gens
        # x^2 + 1 = (x + 1)^2 over GF(2)
        assert (x + 1)**2 in I
        assert x + 1 not in I

    def test_engine_options(self):
        with pytest.raises(BudgetExceeded):
            Ideal.from_generators(["x0", "x1", "x2", "x3"], "grevlex",
                                  cyclic(4), max_steps=1)


class TestMembership:
    def test_contains(self, R):
        x, y = R.gens
        I = R.ideal([x**2 * y - 1, x * y**2 - x])
        assert I.contains(y**3 - y)
        assert y**2 - 1 in I
        assert x not in I

    def test_lazy(self, R):
        x, y = R.gens
        I = Ideal(R, [x**2 * y - 1, x * y**2 - x])
        assert I._basis is None
        I.contains(x)
        assert I._basis is not None

    def test_reduce(self, R):
        x, y = R.gens
        I = R.ideal([x**2 - y, y**2 - 1])
        assert I.reduce(x**4 + x**2) == y + 1

    def test_sympy_and_scalar_input(self, R):
        sx, sy = symbols("x y")
        I = R.ideal([sx**2 - sy, sy**2 - 1])
        assert sx**4 - 1 in I
        assert 0 in I
        assert 1 not in I

    def test_polynomial_from_reordered_ring(self, R):
        S = PolynomialRing(["y", "x"], "lex")
        y, x = S.gens
        I = R.ideal([R.gen("x") - R.gen("y")])
        assert x - y in I

    def test_contains_ideal(self, R):
        x, y = R.gens
        big = R.ideal([x, y])
        small = R.ideal([x * y, x**2])
        assert big.contains_ideal(small)
        assert not small.contains_ideal(big)


class TestStructure:
    def test_zero_and_trivial(self, R):
        x, _ = R.gens
        assert R.ideal([0]).is_zero()
        assert R.ideal([]).is_zero()
        assert R.ideal([x, x + 1]).is_trivial()
        assert not R.ideal([x]).is_trivial()

    def test_leading_monomials(self, R):
        x, y = R.gens
        I = R.ideal([x**2 * y - 1, x * y**2 - x])
        assert I.leading_monomials() == [Monomial((2, 0)), Monomial((0, 2))]

    def test_equality(self, R):
        x, y = R.gens
        assert R.ideal([x**2 * y - 1, x * y**2 - x]) == R.ideal([x**2 - y, y**2 - 1])
        assert R.ideal([x]) != R.ideal([y])

    def test_stats(self, R):
        x, y = R.gens
        I = R.ideal([x, y])
        assert I.stats.coprime_pruned == 1
        assert I.stats.s_polynomials == 0

    def test_generators_kept(self, R):
        x, y = R.gens
        I = R.ideal([2 * x, y])
        assert I.generators == (2 * x, y)
        assert I.basis() == (x, y)


class TestElimination:
    def test_twisted_cubic(self):
        R = PolynomialRing(["t", "x", "y"], "grevlex")
        t, x, y = R.gens
        J = R.ideal([x - t**2, y - t**3]).eliminate(["t"])
        assert J.ring.variables == ("x", "y")
        assert [str(g) for g in J.basis()] == ["x^3 - y^2"]

    def test_eliminate_middle_variable(self):
        R = PolynomialRing(["x", "y", "z"], "lex")
        x, y, z = R.gens
        J = R.ideal([x - y, y - z]).eliminate("y")
        assert J.ring.variables == ("x", "z")
        xx, zz = J.ring.gens
        assert J.basis() == (xx - zz,)

    def test_nothing_left(self, R):
        with pytest.raises(ValueError):
            R.ideal([R.gen("x")]).eliminate(["x", "y"])

    def test_unknown_variable(self, R):
        with pytest.raises(ValueError):
            R.ideal([R.gen("x")]).eliminate(["w"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
