import math

from orbitfield.core.complex import Complex


def test_add():
    assert Complex(1, 2).add(Complex(3, -1)) == Complex(4, 1)


def test_multiply():
    assert Complex(1, 2).multiply(Complex(3, -1)) == Complex(5, 5)


def test_operators_alias_methods():
    a, b = Complex(1.5, -2.0), Complex(0.25, 4.0)
    assert a + b == a.add(b)
    assert a * b == a.multiply(b)


def test_values_are_not_mutated():
    a = Complex(1, 2)
    b = Complex(3, -1)
    a.add(b)
    a.multiply(b)
    assert a == Complex(1, 2)
    assert b == Complex(3, -1)


def test_overflow_goes_to_infinity_without_raising():
    big = Complex(1e200, 0.0)
    sq = big.multiply(big)
    assert math.isinf(sq.re)

