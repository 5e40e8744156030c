# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Copyright:   (c) 2021 ff. Michael Amrhein (michael@adrhinum.de)
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$

"""String rendering of rational numbers in decimal notation.

All functions operating on values expect a :class:`ratdec.Rational` (or an
object providing `numerator`, `denominator` and `magnitude` the same way).
"""

from __future__ import annotations

from typing import Any, Optional

from .rounding import Rounding, round_quotient


__all__ = ['decimal_str', 'format_fixed', 'format_exponential',
           'format_precision']


def decimal_str(coeff: int, exp: int) -> str:
    """Return decimal notation of `coeff` * 10 ** -`exp`, without trailing
    zeros in the fractional part."""
    sign = '-' if coeff < 0 else ''
    digits = str(abs(coeff))
    if exp <= 0:
        return sign + digits + '0' * -exp
    if len(digits) <= exp:
        digits = digits.rjust(exp + 1, '0')
    int_part, frac_part = digits[:-exp], digits[-exp:].rstrip('0')
    if frac_part:
        return f"{sign}{int_part}.{frac_part}"
    return sign + int_part


def _fixed_str(coeff: int, n_digits: int) -> str:
    # decimal notation of coeff * 10 ** -n_digits with exactly n_digits
    # fractional digits
    sign = '-' if coeff < 0 else ''
    digits = str(abs(coeff)).rjust(n_digits + 1, '0')
    if n_digits == 0:
        return sign + digits
    return f"{sign}{digits[:-n_digits]}.{digits[-n_digits:]}"


def _scaled(value: Any, n_digits: int,
            rounding: Optional[Rounding]) -> int:
    # value * 10 ** n_digits, rounded to an int
    num, den = value.numerator, value.denominator
    if n_digits >= 0:
        return round_quotient(num * 10 ** n_digits, den, rounding)
    return round_quotient(num, den * 10 ** -n_digits, rounding)


def _check_digits(n_digits: int, minimum: int = 0) -> None:
    if not isinstance(n_digits, int):
        raise TypeError("Number of digits must be of type 'int'.")
    if n_digits < minimum:
        raise ValueError(f"Number of digits must be >= {minimum}.")


def format_fixed(value: Any, fraction_digits: int,
                 rounding: Optional[Rounding] = None) -> str:
    """Return `value` in fixed-point notation with `fraction_digits`
    fractional digits.

    >>> format_fixed(Rational('3.14159'), 2)
    '3.14'
    >>> format_fixed(Rational(-1, 3), 0)
    '0'
    """
    _check_digits(fraction_digits)
    return _fixed_str(_scaled(value, fraction_digits, rounding),
                      fraction_digits)


def format_exponential(value: Any, fraction_digits: int = 0,
                       rounding: Optional[Rounding] = None) -> str:
    """Return `value` in exponential notation, with a mantissa having
    `fraction_digits` fractional digits.

    >>> format_exponential(Rational('12.34'), 2)
    '1.23e+1'
    >>> format_exponential(Rational('-0.004'))
    '-4e-3'
    """
    _check_digits(fraction_digits)
    if value.numerator == 0:
        return _fixed_str(0, fraction_digits) + 'e+0'
    exp = value.magnitude
    coeff = _scaled(value, fraction_digits - exp, rounding)
    if abs(coeff) >= 10 ** (fraction_digits + 1):
        # rounding carried into a new digit
        coeff //= 10
        exp += 1
    return (f"{_fixed_str(coeff, fraction_digits)}"
            f"e{'+' if exp >= 0 else '-'}{abs(exp)}")


def format_precision(value: Any, precision: int,
                     rounding: Optional[Rounding] = None) -> str:
    """Return `value` rounded to `precision` significant digits.

    >>> format_precision(Rational('12.34'), 3)
    '12.3'
    >>> format_precision(Rational('0.00012'), 2)
    '0.00012'
    >>> format_precision(Rational(0), 4)
    '0.000'
    """
    _check_digits(precision, 1)
    if value.numerator == 0:
        return _fixed_str(0, precision - 1)
    places = precision - 1 - value.magnitude
    coeff = _scaled(value, places, rounding)
    if abs(coeff) >= 10 ** precision:
        # rounding carried into a new digit
        coeff //= 10
        places -= 1
    if places > 0:
        return _fixed_str(coeff, places)
    return str(coeff * 10 ** -places)
