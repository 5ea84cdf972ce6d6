"""Tests for coefficient fields."""

from fractions import Fraction

import pytest
from sympy import Rational, Integer
from groebner import (
    RationalField, PrimeField, field_from_spec, FieldInversionOfZero
)


class TestRationalField:
    def test_convert(self):
        F = RationalField()
        assert F.to_sympy(F.convert(Fraction(1, 3))) == Rational(1, 3)
        assert F.to_sympy(F.convert(Rational(-2, 4))) == Rational(-1, 2)
        assert F.to_sympy(F.convert("3/4")) == Rational(3, 4)
        assert F.to_sympy(F.convert(5)) == Integer(5)

    def test_floats_rejected(self):
        with pytest.raises(ValueError):
            RationalField().convert(0.5)

    def test_inverse(self):
        F = RationalField()
        assert F.mul(F.inv(F.convert(3)), F.convert(3)) == F.one

    def test_invert_zero(self):
        F = RationalField()
        with pytest.raises(FieldInversionOfZero):
            F.inv(F.zero)
        with pytest.raises(ZeroDivisionError):
            F.div(F.one, F.zero)

    def test_characteristic(self):
        assert RationalField().characteristic == 0
        assert str(RationalField()) == "QQ"


class TestPrimeField:
    def test_inverse(self):
        F = PrimeField(7)
        assert F.inv(F.convert(3)) == F.convert(5)

    def test_canonical_representatives(self):
        F = PrimeField(5)
        assert F.to_sympy(F.convert(-1)) == 4
        # 1/2 = 3 mod 5
        assert F.to_sympy(F.convert(Fraction(1, 2))) == 3
        assert F.to_sympy(F.convert(Rational(1, 2))) == 3

    def test_vanishing_denominator(self):
        F = PrimeField(7)
        with pytest.raises(ValueError, match="denominator vanishes"):
            F.convert(Fraction(1, 7))
        with pytest.raises(ValueError):
            F.convert(Rational(3, 14))
        assert F.convert(Fraction(14, 7)) == F.convert(2)

    def test_wraparound(self):
        F = PrimeField(7)
        assert F.add(F.convert(4), F.convert(5)) == F.convert(2)
        assert F.is_zero(F.mul(F.convert(7), F.one))

    def test_non_prime(self):
        with pytest.raises(ValueError):
            PrimeField(8)
        with pytest.raises(ValueError):
            PrimeField(1)

    def test_name(self):
        F = PrimeField(32003)
        assert str(F) == "GF(32003)"
        assert F.characteristic == 32003

    def test_equality(self):
        assert PrimeField(7) == PrimeField(7)
        assert PrimeField(7) != PrimeField(11)
        assert PrimeField(7) != RationalField()


class TestFieldSpec:
    @pytest.mark.parametrize("spec", [None, "Q", "QQ", "q"])
    def test_rationals(self, spec):
        assert field_from_spec(spec) == RationalField()

    @pytest.mark.parametrize("spec", ["GF(7)", "GF[7]", "gf(7)", "F[7]", 7])
    def test_prime_fields(self, spec):
        assert field_from_spec(spec) == PrimeField(7)

    def test_instance_passthrough(self):
        F = PrimeField(3)
        assert field_from_spec(F) is F

    @pytest.mark.parametrize("spec", ["R", "GF(9)", "ZZ"])
    def test_unknown(self, spec):
        with pytest.raises(ValueError):
            field_from_spec(spec)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
