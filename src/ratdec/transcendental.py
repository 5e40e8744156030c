# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Copyright:   (c) 2021 ff. Michael Amrhein (michael@adrhinum.de)
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$

"""Square root, exponential, logarithm and trigonometric functions.

All public functions take a :class:`ratdec.Rational` and a precision
(number of significant decimal digits) and return a :class:`Rational`
rounded to that precision. Internally they work with
`precision` + :data:`ratdec.precision.GUARD_DIGITS` significant digits and
re-quantize every intermediate result, which keeps numerators and
denominators from growing with the number of iterations.
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import List, Optional, Tuple

from .exceptions import DivisionByZero, InvalidDomain
from .precision import GUARD_DIGITS, resolve_precision
from .rational import Rational
from .rounding import Rounding


__all__ = ['limit_precision', 'sqrt', 'exp', 'ln', 'log10', 'sin', 'cos',
           'tan', 'asin', 'acos', 'atan', 'pi', 'e', 'power']


logger = logging.getLogger(__name__)

# literals with 64 significant digits, used for precisions up to 63 digits
_PI_LITERAL = \
    "3.141592653589793238462643383279502884197169399375105820974944592"
_LN2_LITERAL = \
    "0.6931471805599453094172321214581765680755001343602552541206800094"
_LITERAL_DIGITS = 63

_ZERO = Rational(0)
_ONE = Rational(1)
_TWO = Rational(2)
_HALF = Rational(1, 2)
# lower bound of pi/4
_QUARTER_PI_BOUND = Rational(785, 1000)


def _max_iterations(digits: int) -> int:
    return digits * 100


def limit_precision(value: Rational, digits: int,
                    rounding: Optional[Rounding] = None) -> Rational:
    """Return `value` rounded to `digits` significant decimal digits."""
    if not value:
        return value
    return value.adjusted(digits - 1 - value.magnitude, rounding)


def _pow10(exp: int) -> Rational:
    if exp >= 0:
        return Rational(10 ** exp)
    return Rational(1, 10 ** -exp)


def _ulp(value: Rational, digits: int) -> Rational:
    # one unit in the last place of `value` rounded to `digits` significant
    # digits; 0 is treated like 1
    return _pow10((value.magnitude if value else 0) + 1 - digits)


def _working_precision(precision: Optional[int]) -> Tuple[int, int]:
    precision = resolve_precision(precision)
    return precision, precision + GUARD_DIGITS


# square root

def _sqrt(x: Rational, digits: int) -> Rational:
    if x < 0:
        raise InvalidDomain("Square root of a negative number is not "
                            "defined.")
    if x == 0 or x == 1:
        return x
    # seed: power of 2 within a factor of 2 of the result
    guess = _TWO ** ((x.numerator.bit_length() -
                      x.denominator.bit_length()) // 2)
    max_iter = _max_iterations(digits)
    n_iter = 0
    while True:
        n_iter += 1
        prev = guess
        # the guess must be re-quantized, otherwise its denominator grows
        # with every iteration
        guess = limit_precision((prev + x / prev) / 2, digits)
        if abs(guess - prev) <= _ulp(guess, digits - 1):
            break
        if n_iter > max_iter:
            logger.warning("sqrt(%s): no convergence after %d iterations.",
                           x, n_iter)
            break
    logger.debug("sqrt(%s): %d iterations.", x, n_iter)
    return guess


def sqrt(x: Rational, precision: Optional[int] = None) -> Rational:
    """Return square root of `x`, computed by Newton-Raphson iteration.

    Raises:
        InvalidDomain: `x` is negative
    """
    precision, digits = _working_precision(precision)
    return limit_precision(_sqrt(x, digits), precision)


# exponential function

def _exp_n_terms(r: Rational, digits: int) -> int:
    # number of Taylor terms needed so that |r| ** n / n! < 10 ** -digits
    log_r = min(r.magnitude + 1, -math.log10(2))
    acc = 0.0
    n = 0
    while acc > -digits:
        n += 1
        acc += log_r - math.log10(n)
    return n + 1


def _exp_series(r: Rational, n_terms: int) -> Rational:
    """Return sum(r ** n / n! for n in range(n_terms)).

    The sum is computed by binary splitting: for a range [a, b) of terms the
    integers P, Q and T hold the product of the term ratios (P / Q) and the
    partial sum (T / Q). Adjacent ranges are merged pairwise, level by
    level, until a single range remains.
    """
    p, q = r.numerator, r.denominator
    level: List[Tuple[int, int, int]] = [(1, 1, 1)]
    level.extend((p, q * n, p) for n in range(1, n_terms))
    while len(level) > 1:
        merged = []
        for idx in range(0, len(level) - 1, 2):
            p1, q1, t1 = level[idx]
            p2, q2, t2 = level[idx + 1]
            merged.append((p1 * p2, q1 * q2, t1 * q2 + p1 * t2))
        if len(level) % 2:
            merged.append(level[-1])
        level = merged
    _, q_ab, t_ab = level[0]
    return Rational(t_ab, q_ab)


def _exp(x: Rational, digits: int) -> Rational:
    if x == 0:
        return _ONE
    # range reduction: x = r * 2 ** k with |r| < 1/2
    k = max(0, abs(x.numerator).bit_length() -
            x.denominator.bit_length() + 2)
    # squaring k times amplifies the relative error by 2 ** k
    wp = digits + int(k * math.log10(2)) + 1
    r = Rational(x.numerator, x.denominator << k)
    n_terms = _exp_n_terms(r, wp)
    logger.debug("exp(%s): reduced by 2 ** %d, %d terms.", x, k, n_terms)
    result = limit_precision(_exp_series(r, n_terms), wp)
    for _ in range(k):
        result = limit_precision(result.square(), wp)
    return result


def exp(x: Rational, precision: Optional[int] = None) -> Rational:
    """Return e ** `x`."""
    precision, digits = _working_precision(precision)
    return limit_precision(_exp(x, digits), precision)


def e(precision: Optional[int] = None) -> Rational:
    """Return Euler's number."""
    return exp(_ONE, precision)


# logarithm

def _odd_power_series(x: Rational, digits: int,
                      alternating: bool) -> Rational:
    # sum(s ** n * x ** (2n + 1) / (2n + 1) for n >= 0), with s = -1 if
    # `alternating` else 1, for |x| < 1
    if x == 0:
        return _ZERO
    x2 = limit_precision(x * x, digits)
    if alternating:
        x2 = -x2
    tolerance = _ulp(x, digits)
    power = x
    total = x
    n = 1
    max_iter = _max_iterations(digits)
    while True:
        n += 2
        power = limit_precision(power * x2, digits)
        term = limit_precision(power / n, digits)
        total = limit_precision(total + term, digits)
        if abs(term) < tolerance:
            break
        if n > max_iter:
            logger.warning("Series for %s: no convergence after %d terms.",
                           x, n // 2)
            break
    logger.debug("Series for %s: %d terms.", x, n // 2 + 1)
    return total


def _atanh2(y: Rational, digits: int) -> Rational:
    # 2 * atanh(y) = ln((1 + y) / (1 - y))
    return 2 * _odd_power_series(y, digits, alternating=False)


@lru_cache(maxsize=32)
def _ln2(digits: int) -> Rational:
    if digits <= _LITERAL_DIGITS:
        return limit_precision(Rational(_LN2_LITERAL), digits)
    # ln 2 = 2 * atanh(1/3)
    return limit_precision(_atanh2(Rational(1, 3), digits + 2), digits)


def _ln(x: Rational, digits: int) -> Rational:
    if x <= 0:
        raise InvalidDomain("ln(x) is undefined for x <= 0.")
    if x == 1:
        return _ZERO
    # range reduction: x = m * 2 ** k with 1 <= m < 2
    num, den = x.numerator, x.denominator
    k = num.bit_length() - den.bit_length()
    if k >= 0:
        m = Rational(num, den << k)
    else:
        m = Rational(num << -k, den)
    if m < 1:
        m *= 2
        k -= 1
    # centre m around 1, so that y stays small and x just below 1 does not
    # suffer from cancellation
    if m > Rational(4, 3):
        m /= 2
        k += 1
    logger.debug("ln(%s): reduced to ln(%s) + %d * ln(2).", x, m, k)
    y = limit_precision((m - 1) / (m + 1), digits)
    result = _atanh2(y, digits)
    if k:
        result += k * _ln2(digits + len(str(abs(k))))
    return limit_precision(result, digits)


def ln(x: Rational, precision: Optional[int] = None) -> Rational:
    """Return natural logarithm of `x`.

    Raises:
        InvalidDomain: `x` <= 0
    """
    precision, digits = _working_precision(precision)
    return limit_precision(_ln(x, digits), precision)


def log10(x: Rational, precision: Optional[int] = None) -> Rational:
    """Return logarithm of `x` to base 10.

    Raises:
        InvalidDomain: `x` <= 0
    """
    precision, digits = _working_precision(precision)
    if x > 0:
        # exact for powers of 10
        mag = x.magnitude
        if x == _pow10(mag):
            return Rational(mag)
    return limit_precision(_ln(x, digits) / _ln(Rational(10), digits),
                           precision)


# trigonometric functions

@lru_cache(maxsize=32)
def _pi(digits: int) -> Rational:
    if digits <= _LITERAL_DIGITS:
        return limit_precision(Rational(_PI_LITERAL), digits)
    # Machin's formula: pi = 16 * atan(1/5) - 4 * atan(1/239)
    wp = digits + 2
    return limit_precision(
        16 * _odd_power_series(Rational(1, 5), wp, alternating=True) -
        4 * _odd_power_series(Rational(1, 239), wp, alternating=True),
        digits)


def pi(precision: Optional[int] = None) -> Rational:
    """Return pi."""
    precision = resolve_precision(precision)
    return limit_precision(_pi(precision + GUARD_DIGITS), precision)


def _reduce_angle(x: Rational, digits: int) -> Tuple[Rational, int]:
    # return (r, q) with x = r + q * pi/2 (mod 2 * pi), |r| <= pi/4 and
    # q in 0..3
    if abs(x) <= _QUARTER_PI_BOUND:
        return x, 0
    # pi must carry as many additional digits as the integral part of x
    # has, plus the digits cancelled in x - n * pi/2
    base = max(0, x.magnitude) + 2
    extra = base
    while True:
        half_pi = _pi(digits + extra) / 2
        n = round(x / half_pi)
        r = x - n * half_pi
        lost = -r.magnitude if r else digits
        if lost <= 0 or extra >= base + lost:
            break
        extra = base + lost
    logger.debug("Reducing angle %s by %d * pi/2.", x, n)
    return limit_precision(r, digits), n % 4


def _sin_cos_series(x: Rational, digits: int, start: int) -> Rational:
    # start = 1: sin, start = 0: cos
    x2 = limit_precision(x * x, digits)
    term = x if start else _ONE
    total = term
    idx = start
    max_iter = _max_iterations(digits)
    while True:
        last = total
        term = limit_precision(-term * x2 / ((idx + 1) * (idx + 2)), digits)
        idx += 2
        total = last + term
        if abs(total - last) < _ulp(total, digits):
            break
        if idx > max_iter:
            logger.warning("Series for sin/cos(%s): no convergence after "
                           "%d terms.", x, idx // 2)
            break
        total = limit_precision(total, digits)
    return limit_precision(total, digits)


def _sin(x: Rational, digits: int) -> Rational:
    if x == 0:
        return _ZERO
    r, quadrant = _reduce_angle(x, digits)
    # sin(r + q * pi/2) is sin(r), cos(r), -sin(r), -cos(r) for q = 0..3
    res = _sin_cos_series(r, digits, (quadrant + 1) % 2)
    return -res if quadrant >= 2 else res


def _cos(x: Rational, digits: int) -> Rational:
    if x == 0:
        return _ONE
    r, quadrant = _reduce_angle(x, digits)
    # cos(r + q * pi/2) is cos(r), -sin(r), -cos(r), sin(r) for q = 0..3
    res = _sin_cos_series(r, digits, quadrant % 2)
    return -res if quadrant in (1, 2) else res


def sin(x: Rational, precision: Optional[int] = None) -> Rational:
    """Return sine of `x` (in radians)."""
    precision, digits = _working_precision(precision)
    return limit_precision(_sin(x, digits), precision)


def cos(x: Rational, precision: Optional[int] = None) -> Rational:
    """Return cosine of `x` (in radians)."""
    precision, digits = _working_precision(precision)
    return limit_precision(_cos(x, digits), precision)


def tan(x: Rational, precision: Optional[int] = None) -> Rational:
    """Return tangent of `x` (in radians).

    Raises:
        DivisionByZero: cosine of `x` is 0 at the working precision
    """
    precision, digits = _working_precision(precision)
    cos_x = _cos(x, digits)
    if cos_x == 0:
        raise DivisionByZero(f"tan({x}) is undefined.")
    return limit_precision(_sin(x, digits) / cos_x, precision)


# inverse trigonometric functions

def _asin(x: Rational, digits: int) -> Rational:
    if x == 0:
        return _ZERO
    abs_x = abs(x)
    if abs_x == 1:
        return x.sign * _pi(digits) / 2
    if abs_x < _HALF:
        # asin(x) = sum((2n)! / (4 ** n * n! ** 2) * x ** (2n + 1) / (2n + 1))
        x2 = limit_precision(x * x, digits)
        tolerance = _ulp(x, digits)
        power = x
        total = x
        n = 0
        max_iter = _max_iterations(digits)
        while True:
            n += 1
            power = limit_precision(power * x2 * (2 * n - 1) / (2 * n),
                                    digits)
            term = limit_precision(power / (2 * n + 1), digits)
            total = limit_precision(total + term, digits)
            if abs(term) < tolerance:
                break
            if n > max_iter:
                logger.warning("Series for asin(%s): no convergence after "
                               "%d terms.", x, n)
                break
        return total
    cos_x = _sqrt(1 - x * x, digits)
    if x * x > _HALF:
        # reflection: asin(x) = pi/2 - asin(sqrt(1 - x²)) for x > 0
        return x.sign * (_pi(digits) / 2 - _asin(cos_x, digits))
    # half angle: asin(x) = 2 * asin(x / sqrt(2 * (1 + sqrt(1 - x²))))
    half = limit_precision(x / _sqrt(2 * (1 + cos_x), digits), digits)
    return 2 * _asin(half, digits)


def _check_unit_interval(x: Rational, func_name: str) -> None:
    if x < -1 or x > 1:
        raise InvalidDomain(f"{func_name}(x) is only defined for x in the "
                            f"range [-1, 1].")


def asin(x: Rational, precision: Optional[int] = None) -> Rational:
    """Return arc sine of `x` (in radians), in the range [-pi/2, pi/2].

    Raises:
        InvalidDomain: `x` is not in the range [-1, 1]
    """
    _check_unit_interval(x, 'asin')
    precision, digits = _working_precision(precision)
    return limit_precision(_asin(x, digits), precision)


def acos(x: Rational, precision: Optional[int] = None) -> Rational:
    """Return arc cosine of `x` (in radians), in the range [0, pi].

    Raises:
        InvalidDomain: `x` is not in the range [-1, 1]
    """
    _check_unit_interval(x, 'acos')
    precision, digits = _working_precision(precision)
    if abs(x) < _HALF:
        result = _pi(digits) / 2 - _asin(x, digits)
    else:
        # acos(x) = asin(sqrt(1 - x²)) for x > 0, acos(-x) = pi - acos(x)
        result = _asin(_sqrt(1 - x * x, digits), digits)
        if x < 0:
            result = _pi(digits) - result
    return limit_precision(result, precision)


def _atan(x: Rational, digits: int) -> Rational:
    if x == 0:
        return _ZERO
    abs_x = abs(x)
    if abs_x > 1:
        # atan(x) = +/-pi/2 - atan(1/x)
        inv = limit_precision(x.inverse(), digits)
        return x.sign * _pi(digits) / 2 - _atan(inv, digits)
    if abs_x >= _HALF:
        # half angle: atan(x) = 2 * atan(x / (1 + sqrt(1 + x²)))
        half = limit_precision(x / (1 + _sqrt(1 + x * x, digits)), digits)
        return 2 * _atan(half, digits)
    return _odd_power_series(x, digits, alternating=True)


def atan(x: Rational, precision: Optional[int] = None) -> Rational:
    """Return arc tangent of `x` (in radians), in the range [-pi/2, pi/2].
    """
    precision, digits = _working_precision(precision)
    return limit_precision(_atan(x, digits), precision)


# general power

def power(x: Rational, y: Rational,
          precision: Optional[int] = None) -> Rational:
    """Return `x` ** `y`.

    Integral exponents give an exact result (not rounded). Other exponents
    are computed as exp(y * ln(x)).

    Raises:
        InvalidDomain: `x` and `y` are both 0, or `x` is negative and `y`
            is not integral
        DivisionByZero: `x` is 0 and `y` is negative
    """
    if y.is_integer():
        return x ** y.numerator
    if x == 0:
        if y < 0:
            raise DivisionByZero("0 raised to a negative power.")
        return _ZERO
    if x < 0:
        raise InvalidDomain("Negative number raised to a non-integral "
                            "power.")
    precision, digits = _working_precision(precision)
    ln_x = _ln(x, digits)
    # the absolute error of y * ln(x) becomes the relative error of the
    # result, so ln(x) needs additional digits for large products
    prod = y * ln_x
    extra = max(0, prod.magnitude + 1) if prod else 0
    if extra:
        prod = y * _ln(x, digits + extra)
    return limit_precision(_exp(prod, digits), precision)
