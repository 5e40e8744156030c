# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Copyright:   (c) 2021 ff. Michael Amrhein (michael@adrhinum.de)
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$

"""Test driver for package 'ratdec' (comparisons and hashing)."""

from decimal import Decimal as StdDecimal, getcontext
from fractions import Fraction
import operator
import sys

import pytest
from hypothesis import given, strategies

from ratdec import Decimal, Rational


EQUALITY_OPS = (operator.eq, operator.ne)
ORDERING_OPS = (operator.le, operator.lt, operator.ge, operator.gt)
CMP_OPS = EQUALITY_OPS + ORDERING_OPS

getcontext().prec = 3350

LARGE = ".".join(("1" * 2259, "4" * 33 + "0" * 19))


def check_equal(x, y):
    for a, b in ((x, y), (y, x)):
        assert a == b
        assert not a != b
        assert a <= b and a >= b
        assert not a < b and not a > b
    assert hash(x) == hash(y)


def check_less(smaller, larger):
    assert smaller != larger and larger != smaller
    assert not smaller == larger and not larger == smaller
    assert smaller < larger and larger > smaller
    assert smaller <= larger and larger >= smaller
    assert not smaller > larger and not larger < smaller
    assert not smaller >= larger and not larger <= smaller
    assert hash(smaller) != hash(larger)


@pytest.mark.parametrize("y", ("17.800", LARGE, "-14/33333", "-0"),
                         ids=("compact", "large", "fraction", "zero"))
@pytest.mark.parametrize("x", ("17.800", LARGE, "-14/33333", "0"),
                         ids=("compact", "large", "fraction", "zero"))
@pytest.mark.parametrize("op", CMP_OPS, ids=lambda op: op.__name__)
def test_cmp_like_fraction(op, x, y):
    fx, fy = Fraction(x), Fraction(y)
    rx, ry = Rational(x), Rational(y)
    for sx, sy in ((1, 1), (-1, 1), (1, -1)):
        assert op(sx * rx, sy * ry) == op(sx * fx, sy * fy)
        assert op(sy * ry, sx * rx) == op(sy * fy, sx * fx)


@given(x=strategies.fractions(), y=strategies.fractions())
def test_cmp_hypo(x, y):
    rx, ry = Rational(x), Rational(y)
    for op in CMP_OPS:
        assert op(rx, ry) == op(x, y)
        if rx.has_finite_precision:
            assert op(Decimal(rx), ry) == op(x, y)
            assert op(ry, Decimal(rx)) == op(y, x)


@pytest.mark.parametrize("trail", (".000", ".", ""),
                         ids=("trail='000'", "trail='.'", "trail=''"))
@pytest.mark.parametrize("value",
                         ("-17", "".join(("1" * 3097, "4" * 33, "0" * 19)),
                          "-0"),
                         ids=("compact", "large", "zero"))
@pytest.mark.parametrize("number", (Rational, Decimal),
                         ids=("Rational", "Decimal"))
def test_equal_to_int(number, value, trail):
    check_equal(number(value + trail), int(value))


@pytest.mark.parametrize("other",
                         (Rational, Decimal, StdDecimal, Fraction),
                         ids=("Rational", "Decimal", "StdDecimal", "Fraction"))
@pytest.mark.parametrize("value",
                         ("17.800", LARGE, "-0.00014"),
                         ids=("compact", "large", "fraction"))
@pytest.mark.parametrize("number", (Rational, Decimal),
                         ids=("Rational", "Decimal"))
def test_equal_to_rational(number, value, other):
    check_equal(number(value + "000"), other(value))


@pytest.mark.parametrize("value",
                         ("17.500", sys.float_info.max * 0.9,
                          "%1.63f" % (1 / sys.maxsize)),
                         ids=("compact", "large", "fraction"))
def test_equal_to_float(value):
    check_equal(Rational(value), float(value))


@pytest.mark.parametrize("value",
                         ("-17", "".join(("1" * 759, "4" * 33, "0" * 19)),
                          "0"),
                         ids=("compact", "large", "zero"))
@pytest.mark.parametrize("number", (Rational, Decimal),
                         ids=("Rational", "Decimal"))
def test_differ_from_int(number, value):
    delta = Fraction(1, 10 ** len(value))
    check_less(int(value), number(int(value) + delta))
    check_less(number(int(value) - delta), int(value))


@pytest.mark.parametrize("other", (StdDecimal, Fraction),
                         ids=("StdDecimal", "Fraction"))
@pytest.mark.parametrize("value", ("17.800", LARGE, "-0.00014"),
                         ids=("compact", "large", "fraction"))
def test_differ_from_rational(other, value):
    rn = Rational(value)
    delta = other(1) / 10 ** 180
    check_less(rn, other(value) + delta)
    check_less(other(value) - delta, rn)


@pytest.mark.parametrize("value",
                         ("17.500", sys.float_info.max * 0.9,
                          "%1.63f" % (1 / sys.maxsize)),
                         ids=("compact", "large", "fraction"))
def test_differ_from_float(value):
    rn = Rational(value)
    check_less(rn, float(value) * (1. + 1. / 10 ** 14))
    check_less(float(value) * (1. - 1. / 10 ** 14), rn)


@pytest.mark.parametrize("other", ("1/5", operator.ne, 1.75 + 3j),
                         ids=("str", "function", "complex"))
@pytest.mark.parametrize("number", (Rational, Decimal),
                         ids=("Rational", "Decimal"))
def test_incomparable(number, other):
    num = number('3.12')
    assert not num == other and not other == num
    assert num != other and other != num
    for op in ORDERING_OPS:
        with pytest.raises(TypeError):
            op(num, other)
        with pytest.raises(TypeError):
            op(other, num)


@pytest.mark.parametrize("inf", (float('Inf'), StdDecimal('Inf')),
                         ids=("float", "StdDecimal"))
def test_infinity(inf):
    check_less(Rational(), inf)
    check_less(-inf, Rational())


@pytest.mark.parametrize("nan", (float('Nan'), StdDecimal('Nan')),
                         ids=("float", "StdDecimal"))
def test_nan(nan):
    rn = Rational()
    assert not rn == nan and not nan == rn
    assert rn != nan and nan != rn
    for op in ORDERING_OPS:
        assert not op(rn, nan)


def test_precision_is_ignored():
    assert Decimal("0.5", 3) == Decimal("0.5", 60)
    assert hash(Decimal("0.5", 3)) == hash(Decimal("0.5", 60))
    assert Decimal(1, 5) / 3 != Decimal(1, 6) / 3


def test_decimal_ordering_across_precisions():
    values = [Decimal(1, 5) / 3, Rational(1, 2), Decimal('-0.1'), 0,
              Fraction(1, 3), 0.25]
    assert sorted(values) == [Decimal('-0.1'), 0, 0.25, Decimal(1, 5) / 3,
                              Fraction(1, 3), Rational(1, 2)]
