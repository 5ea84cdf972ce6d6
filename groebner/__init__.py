"""
groebner - Gröbner bases of polynomial ideals over exact fields
MIT License
"""

import logging

from .exceptions import (
    GroebnerError, NotDivisible, DegreeMismatch, EmptyRing,
    FieldInversionOfZero, InvariantViolation,
    Cancelled, BudgetExceeded, DeadlineExceeded,
)
from .fields import Field, RationalField, PrimeField, field_from_spec
from .monomials import Monomial, MonomialOrder, OrderType, order_from_spec
from .polynomials import PolynomialRing, Polynomial
from .reduction import DivisionResult, divide, normal_form, is_reducible
from .pairs import CriticalPair, PairSet, SelectionStrategy, s_polynomial
from .buchberger import (
    BuchbergerEngine, EngineOptions, EngineState, EngineStats,
    groebner_basis, minimize_basis, reduce_basis,
    is_groebner_basis, is_reduced_groebner_basis,
)
from .ideal import Ideal
from .systems import katsura, reimer, cyclic
from .graphs import Graph, parse_dimacs, read_dimacs

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Errors
    'GroebnerError', 'NotDivisible', 'DegreeMismatch', 'EmptyRing',
    'FieldInversionOfZero', 'InvariantViolation',
    'Cancelled', 'BudgetExceeded', 'DeadlineExceeded',

    # Coefficients, monomials, polynomials
    'Field', 'RationalField', 'PrimeField', 'field_from_spec',
    'Monomial', 'MonomialOrder', 'OrderType', 'order_from_spec',
    'PolynomialRing', 'Polynomial',

    # Division
    'DivisionResult', 'divide', 'normal_form', 'is_reducible',

    # Buchberger
    'CriticalPair', 'PairSet', 'SelectionStrategy', 's_polynomial',
    'BuchbergerEngine', 'EngineOptions', 'EngineState', 'EngineStats',
    'groebner_basis', 'minimize_basis', 'reduce_basis',
    'is_groebner_basis', 'is_reduced_groebner_basis',

    # Ideals, benchmark systems and applications
    'Ideal', 'katsura', 'reimer', 'cyclic',
    'Graph', 'parse_dimacs', 'read_dimacs',
]
