# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Author:      Michael Amrhein (michael@adrhinum.de)
#
# Copyright:   (c) 2021 ff. Michael Amrhein
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$


"""Test driver for package 'ratdec' (conversions)."""
import math
from fractions import Fraction

import pytest
from hypothesis import given, strategies

from ratdec import Decimal, Rational, Rounding


# all values have a terminating decimal representation, so they are held
# exactly by Rational and by Decimal
TERMINATING = ("0.00000",
               17,
               "-33000.17",
               Fraction(9 ** 394, 10 ** 247),
               Fraction(-19, 400000))
TERMINATING_IDS = ("zero", "int", "compact", "large", "fraction")


@pytest.mark.parametrize(("value", "truth"),
                         (("17.8", True),
                          (".".join(("1" * 3297, "4" * 33)), True),
                          ("-14/900", True),
                          ("0.0000", False),
                          ("-0", False)),
                         ids=("compact", "large", "fraction", "zero",
                              "neg-zero"))
@pytest.mark.parametrize("number", (Rational, Decimal),
                         ids=("Rational", "Decimal"))
def test_bool(number, value, truth):
    assert bool(number(value)) is truth


def test_bool_zero_ratio():
    assert not Rational(0, -999999999)
    assert not Rational()


@pytest.mark.parametrize("value", TERMINATING, ids=TERMINATING_IDS)
@pytest.mark.parametrize("func",
                         (int, math.trunc, math.floor, math.ceil, round),
                         ids=("int", "trunc", "floor", "ceil", "round"))
@pytest.mark.parametrize("number", (Rational, Decimal),
                         ids=("Rational", "Decimal"))
def test_integral_conversion(number, func, value):
    f = Fraction(value)
    res = func(number(value))
    assert isinstance(res, int)
    if func is round:
        # ties are rounded half up by default, Fraction rounds half even
        assert abs(res - f) <= Fraction(1, 2)
    else:
        assert res == func(f)


@pytest.mark.parametrize("value", TERMINATING, ids=TERMINATING_IDS)
def test_decimal_to_int(value):
    assert Decimal(value).to_int() == math.trunc(Fraction(value))


@pytest.mark.parametrize(("num", "den"),
                         ((17, 1),
                          (9 ** 394, 10 ** 247),
                          (-190, 400000),
                          (1, 3)),
                         ids=("compact", "large", "fraction", "periodic"))
def test_to_float(num, den):
    f = Fraction(num, den)
    assert float(Rational(num, den)) == float(f)
    if den != 3:
        assert Decimal(Rational(num, den)).to_float() == float(f)


@pytest.mark.parametrize("value", TERMINATING, ids=TERMINATING_IDS)
def test_ratio(value):
    f = Fraction(value)
    rn = Rational(value)
    assert rn.as_integer_ratio() == (f.numerator, f.denominator)
    assert Decimal(value).as_integer_ratio() == (f.numerator, f.denominator)
    assert rn.as_fraction() == f
    assert type(rn.as_fraction()) is Fraction


@pytest.mark.parametrize(("value", "str_"),
                         ((None, "0"),
                          (15, "15"),
                          ("17.50", "17.5"),
                          ("-20.7e-3", "-0.0207"),
                          ("0.0000000000207", "0.0000000000207"),
                          ("-319e-27", "-0." + "0" * 24 + "319"),
                          (887 * 10 ** 14, "887" + "0" * 14),
                          ("27e23", "27" + "0" * 23),
                          ("-287/8290", "-287/8290"),
                          ("2 1/3", "7/3")),
                         ids=lambda p: str(p))
def test_str_and_json(value, str_):
    rn = Rational(value)
    assert str(rn) == str_
    assert bytes(rn) == str_.encode('ascii')
    assert rn.to_json() == str_
    assert Rational.from_json(rn.to_json()) == rn


@pytest.mark.parametrize(("value", "str_"),
                         (("17.50", "17.5"),
                          ("-20.7e-3", "-0.0207"),
                          ("27e23", "27" + "0" * 23),
                          ("1/4", "0.25"),
                          ("1/3", "0." + "3" * 50)),
                         ids=lambda p: str(p))
def test_decimal_str_and_json(value, str_):
    dec = Decimal(value)
    assert str(dec) == str_
    assert dec.to_json() == str_
    assert Decimal.from_json(dec.to_json()) == dec


@pytest.mark.parametrize(("value", "repr_"),
                         ((None, "Rational(0)"),
                          ("15.000", "Rational(15)"),
                          ("15.400", "Rational('15.4')"),
                          ("-20.7e-3", "Rational('-0.0207')"),
                          (887 * 10 ** 14, "Rational(887" + "0" * 14 + ")"),
                          ("27/63", "Rational(3, 7)"),
                          ("-287/8290", "Rational(-287, 8290)"),
                          ("12345678901234567890123456/1234567",
                           "Rational(12345678901234567890123456, 1234567)"),),
                         ids=lambda p: str(p))
def test_repr(value, repr_):
    rn = Rational(value)
    assert repr(rn) == repr_
    assert eval(repr_) == rn


@pytest.mark.parametrize(("value", "repr_"),
                         ((0, "Decimal('0')"),
                          ("15.400", "Decimal('15.4')"),
                          ("-1/8", "Decimal('-0.125')")),
                         ids=lambda p: str(p))
def test_decimal_repr(value, repr_):
    assert repr(Decimal(value)) == repr_


@pytest.mark.parametrize(("value", "prec", "result"),
                         (("1/3", 5, "0.33333"),
                          ("2/3", 3, "0.667"),
                          ("-2/3", 3, "-0.667"),
                          ("1/8", 2, "0.125"),
                          ("17.5", None, "17.5")),
                         ids=("1/3", "2/3", "-2/3", "exact", "dflt-prec"))
def test_to_decimal(value, prec, result):
    dec = Rational(value).to_decimal(prec)
    assert isinstance(dec, Decimal)
    assert str(dec) == result
    assert dec.precision == (50 if prec is None else prec)


@pytest.mark.parametrize(("rounding", "result"),
                         ((Rounding.ROUND_DOWN, "0.666"),
                          (Rounding.ROUND_UP, "0.667"),
                          (None, "0.667")),
                         ids=("down", "up", "dflt"))
def test_to_decimal_rounding(rounding, result):
    assert str(Rational(2, 3).to_decimal(3, rounding)) == result


@pytest.mark.parametrize(("value", "prec", "result", "dec_prec"),
                         (("200/3", 3, "66.667", 5),
                          ("-200/3", 3, "-66.667", 5),
                          ("1/3", 3, "0.333", 3),
                          ("1/3000", 2, "0", 2),
                          ("1000001/3", 1, "333333.7", 7)),
                         ids=("200/3", "-200/3", "1/3", "rounded-to-zero",
                              "large"))
def test_to_decimal_precision_covers_integral_part(value, prec, result,
                                                   dec_prec):
    dec = Rational(value).to_decimal(prec)
    assert str(dec) == result
    assert dec.precision == dec_prec


@given(num=strategies.integers(min_value=-10 ** 40, max_value=10 ** 40),
       exp2=strategies.integers(min_value=0, max_value=60),
       exp5=strategies.integers(min_value=0, max_value=60))
def test_to_decimal_round_trip_hypo(num, exp2, exp5):
    rn = Rational(num, 2 ** exp2 * 5 ** exp5)
    assert rn.has_finite_precision
    assert rn.to_decimal().to_rational() == rn
    assert rn.to_decimal(1).to_rational() == rn
    assert Decimal(rn).to_rational() == rn
