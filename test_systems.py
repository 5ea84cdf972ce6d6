"""Tests for the benchmark systems."""

import pytest
from groebner import (
    katsura, reimer, cyclic, groebner_basis, is_groebner_basis, normal_form,
    PolynomialRing, DegreeMismatch
)


class TestKatsura:
    def test_katsura_1(self):
        system = katsura(1)
        assert [str(p) for p in system] == ["u0 + 2*u1 - 1", "u0^2 + 2*u1^2 - u0"]

    @pytest.mark.parametrize("n", [1, 2, 3, 4])
    def test_shape(self, n):
        system = katsura(n)
        assert len(system) == n + 1
        assert system[0].ring.variables == tuple(f"u{i}" for i in range(n + 1))
        assert all(p.total_degree() == 2 for p in system[1:])

    def test_invalid(self):
        with pytest.raises(ValueError):
            katsura(0)

    def test_custom_ring(self):
        R = PolynomialRing(["a", "b", "c"], "lex")
        system = katsura(2, ring=R)
        assert all(p.ring == R for p in system)
        with pytest.raises(DegreeMismatch):
            katsura(3, ring=R)

    def test_basis(self):
        system = katsura(3)
        basis = groebner_basis(system)
        assert is_groebner_basis(basis)
        assert all(normal_form(p, basis).is_zero() for p in system)


class TestReimer:
    def test_reimer_3(self):
        system = reimer(3)
        assert len(system) == 3
        assert str(system[0]) == "2*x1^2 - 2*x2^2 + 2*x3^2 - 1"
        assert [p.total_degree() for p in system] == [2, 3, 4]

    def test_invalid(self):
        with pytest.raises(ValueError):
            reimer(2)

    def test_basis(self):
        basis = groebner_basis(reimer(3, ring=PolynomialRing(["x1", "x2", "x3"], "grevlex", "GF(32003)")))
        assert is_groebner_basis(basis)


class TestCyclic:
    def test_cyclic_3_basis(self):
        basis = groebner_basis(cyclic(3))
        assert {str(g) for g in basis} == {"x0 + x1 + x2", "x1^2 + x1*x2 + x2^2", "x2^3 - 1"}

    def test_cyclic_2(self):
        system = cyclic(2)
        assert [str(p) for p in system] == ["x0 + x1", "x0*x1 - 1"]

    def test_invalid(self):
        with pytest.raises(ValueError):
            cyclic(1)

    def test_cyclic_4_mod_p(self):
        R = PolynomialRing(4, "grevlex", "GF(32003)")
        system = cyclic(4, ring=R)
        basis = groebner_basis(system)
        assert is_groebner_basis(basis)
        assert not any(g.is_constant() for g in basis)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
