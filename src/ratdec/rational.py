# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Copyright:   (c) 2021 ff. Michael Amrhein (michael@adrhinum.de)
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$

"""Exact rational number arithmetic."""

from __future__ import annotations

import math
import numbers
import sys
from decimal import Decimal as StdDecimal
from fractions import Fraction
from typing import Any, Optional, Tuple, Union

from .exceptions import DivisionByZero, InvalidDomain, ParseError
from .formatting import decimal_str
from .parsing import parse
from .rounding import Rounding, round_quotient


__all__ = ['Rational']


_HASH_MODULUS = sys.hash_info.modulus
_HASH_INF = sys.hash_info.inf

# log10(2), used to estimate the decimal magnitude from bit lengths
_LOG10_2 = 0.30102999566398120


def _ratio_of(value: Any, strict: bool = False) -> Optional[Tuple[int, int]]:
    """Return (numerator, denominator) of `value` or None if `value` is not
    a number convertable to a Rational.

    If `strict` is True, only ints, rationals, floats and standard decimals
    are converted; other real numbers are left to their own operators.
    """
    if isinstance(value, Rational):
        return value._numerator, value._denominator
    if isinstance(value, int):
        return int(value), 1
    if isinstance(value, numbers.Rational):
        return int(value.numerator), int(value.denominator)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Can't convert {value!r} to Rational.")
        return value.as_integer_ratio()
    if isinstance(value, StdDecimal):
        if not value.is_finite():
            raise ValueError(f"Can't convert {value!r} to Rational.")
        return value.as_integer_ratio()
    if not strict and isinstance(value, numbers.Real) \
            and hasattr(value, 'as_integer_ratio'):
        return value.as_integer_ratio()
    return None


def _magnitude(num: int, den: int) -> int:
    """Return floor(log10(num / den)) for num > 0, den > 0."""
    est = int((num.bit_length() - den.bit_length()) * _LOG10_2)
    while True:
        # assert 10 ** est <= num / den
        if est >= 0:
            above = num >= den * 10 ** est
        else:
            above = num * 10 ** -est >= den
        if not above:
            est -= 1
            continue
        # assert num / den < 10 ** (est + 1)
        nxt = est + 1
        if nxt >= 0:
            below = num < den * 10 ** nxt
        else:
            below = num * 10 ** -nxt < den
        if not below:
            est = nxt
            continue
        return est


def _terminating_exp(den: int) -> Optional[int]:
    """Return n so that `den` divides 10 ** n, or None if there is no
    such n."""
    twos = (den & -den).bit_length() - 1
    den >>= twos
    fives = 0
    while den % 5 == 0:
        den //= 5
        fives += 1
    if den != 1:
        return None
    return max(twos, fives)


class Rational:

    """Rational number with arbitrary-size numerator and denominator.

    Args:
        numerator (numbers.Rational, numbers.Real, str): numerator or value
            of the resulting Rational (default: 0)
        denominator (numbers.Rational, numbers.Real): denominator of the
            resulting Rational (default: 1)

    If only `numerator` is given, it can be an `int`, a `Rational`, a
    `fractions.Fraction`, a finite `float` or `decimal.Decimal` or a string
    representation of a number (see :func:`ratdec.parsing.parse` for the
    accepted formats).

    If both arguments are given, the result is `numerator` / `denominator`.

    The resulting Rational is always kept in canonical form: numerator and
    denominator have no common factor and the denominator is positive.

    Raises:
        TypeError: an argument is not a number or a string
        ValueError: an argument is an infinite or NaN float or decimal
        ParseError: `numerator` is a string which is not a valid literal
        DivisionByZero: `denominator` is 0
    """

    __slots__ = ('_numerator', '_denominator')

    def __new__(cls, numerator: Any = None,
                denominator: Any = None) -> Rational:
        """Create and return new Rational instance."""
        if denominator is None:
            if numerator is None:
                return cls._new(0, 1)
            if isinstance(numerator, Rational) and type(numerator) is cls:
                return numerator
            if isinstance(numerator, str):
                num, den = parse(numerator)
            else:
                ratio = _ratio_of(numerator)
                if ratio is None:
                    raise TypeError(f"Can't convert {numerator!r} to "
                                    f"Rational.")
                num, den = ratio
        else:
            if numerator is None:
                numerator = 0
            n_ratio = _ratio_of(numerator)
            d_ratio = _ratio_of(denominator)
            if n_ratio is None or d_ratio is None:
                raise TypeError(f"Can't create Rational from "
                                f"{numerator!r} and {denominator!r}.")
            num = n_ratio[0] * d_ratio[1]
            den = n_ratio[1] * d_ratio[0]
        if den == 0:
            raise DivisionByZero(f"Zero denominator: {numerator!r} / "
                                 f"{denominator!r}")
        return cls._normalized(num, den)

    @classmethod
    def _new(cls, num: int, den: int) -> Rational:
        # num and den are expected to be in canonical form
        self = object.__new__(cls)
        self._numerator = num
        self._denominator = den
        return self

    @classmethod
    def _normalized(cls, num: int, den: int) -> Rational:
        if den < 0:
            num, den = -num, -den
        gcd = math.gcd(num, den)
        if gcd != 1:
            num //= gcd
            den //= gcd
        return cls._new(num, den)

    @classmethod
    def from_int(cls, numerator: int, denominator: int = 1) -> Rational:
        """Convert `numerator` / `denominator` to a Rational."""
        if not isinstance(numerator, int) or \
                not isinstance(denominator, int):
            raise TypeError("Arguments must be of type 'int'.")
        if denominator == 0:
            raise DivisionByZero("Zero denominator.")
        return cls._normalized(int(numerator), int(denominator))

    @classmethod
    def from_float(cls, f: float) -> Rational:
        """Convert a finite float (or int) to a Rational.

        Args:
            f (float or int): number to be converted to a Rational

        Returns:
            :class:`Rational` instance exactly equal to `f`

        Raises:
            TypeError: `f` is neither a float nor an int
            ValueError: `f` is infinite or NaN
        """
        if isinstance(f, float):
            if not math.isfinite(f):
                raise ValueError(f"Can't convert {f!r} to Rational.")
            return cls._new(*f.as_integer_ratio())
        if isinstance(f, int):
            return cls._new(int(f), 1)
        raise TypeError(f"{f!r} is not a float.")

    @classmethod
    def parse(cls, source: str) -> Rational:
        """Convert the numeric literal `source` to a Rational.

        Raises:
            ParseError: `source` is not a valid literal
        """
        if not isinstance(source, str):
            raise TypeError(f"Can't parse {source!r}: not a string.")
        return cls._normalized(*parse(source))

    @classmethod
    def try_parse(cls, source: str) -> Optional[Rational]:
        """Like :meth:`parse`, but return None if `source` is not a valid
        literal."""
        try:
            return cls.parse(source)
        except (ParseError, DivisionByZero, TypeError):
            return None

    from_json = parse

    @classmethod
    def rounded(cls, numerator: Any, denominator: Any,
                n_digits: Optional[int] = None) -> Rational:
        """Create a Rational from `numerator` / `denominator`, rounded to
        `n_digits` fractional digits using the default rounding mode."""
        return cls(numerator, denominator).adjusted(n_digits or 0)

    @property
    def numerator(self) -> int:
        """Numerator of `self`."""
        return self._numerator

    @property
    def denominator(self) -> int:
        """Denominator of `self` (always > 0)."""
        return self._denominator

    @property
    def real(self) -> Rational:
        """Real part of `self`."""
        return self

    @property
    def imag(self) -> int:
        """Imaginary part of `self`."""
        return 0

    @property
    def sign(self) -> int:
        """-1, 0 or 1, depending on the sign of `self`."""
        return (self._numerator > 0) - (self._numerator < 0)

    @property
    def magnitude(self) -> int:
        """Return magnitude of `self` in terms of power to 10.

        I.e. the largest integer exp so that 10 ** exp <= abs(self).

        Raises:
            OverflowError: `self` is 0
        """
        if self._numerator == 0:
            raise OverflowError("Result would be '-Infinity'.")
        return _magnitude(abs(self._numerator), self._denominator)

    @property
    def has_finite_precision(self) -> bool:
        """True if `self` has a terminating decimal representation, i.e.
        its denominator has no prime factors other than 2 and 5."""
        return _terminating_exp(self._denominator) is not None

    def is_integer(self) -> bool:
        """True if `self` is integral."""
        return self._denominator == 1

    def is_proper(self) -> bool:
        """True if abs(`self`) < 1, i.e. `self` is a proper fraction."""
        return abs(self._numerator) < self._denominator

    def is_improper(self) -> bool:
        """True if abs(`self`) >= 1."""
        return not self.is_proper()

    def conjugate(self) -> Rational:
        """Return self."""
        return self

    def as_fraction(self) -> Fraction:
        """Return `self` as :class:`fractions.Fraction`."""
        return Fraction(self._numerator, self._denominator)

    def as_integer_ratio(self) -> Tuple[int, int]:
        """Return the pair of numerator and denominator of `self`."""
        return self._numerator, self._denominator

    def inverse(self) -> Rational:
        """Return 1 / self.

        Raises:
            DivisionByZero: `self` is 0
        """
        if self._numerator == 0:
            raise DivisionByZero("Zero has no inverse.")
        if self._numerator < 0:
            return self._new(-self._denominator, -self._numerator)
        return self._new(self._denominator, self._numerator)

    def square(self) -> Rational:
        """Return self * self."""
        return self._new(self._numerator ** 2, self._denominator ** 2)

    def cube(self) -> Rational:
        """Return self * self * self."""
        return self._new(self._numerator ** 3, self._denominator ** 3)

    def clamp(self, lower: Any, upper: Any) -> Any:
        """Return `self` limited to the interval [`lower`, `upper`]."""
        if self < lower:
            return lower
        if self > upper:
            return upper
        return self

    def adjusted(self, precision: int = 0,
                 rounding: Optional[Rounding] = None) -> Rational:
        """Return copy of `self`, rounded to `precision` fractional digits.

        Args:
            precision (int): number of fractional digits (negative values
                round to tens, hundreds, ...)
            rounding (Rounding): rounding mode (default: default rounding
                mode)

        Returns:
            :class:`Rational` instance equal to an integral multiple of
            10 ** -`precision`

        Raises:
            TypeError: `precision` is not an int
        """
        if not isinstance(precision, int):
            raise TypeError("Precision must be of type 'int'.")
        num, den = self._numerator, self._denominator
        if precision >= 0:
            mult = 10 ** precision
            return self._normalized(round_quotient(num * mult, den,
                                                   rounding), mult)
        mult = 10 ** -precision
        return self._new(round_quotient(num, den * mult, rounding) * mult, 1)

    def quantize(self, quant: Any,
                 rounding: Optional[Rounding] = None) -> Rational:
        """Return integral multiple of `quant` closest to `self`.

        Args:
            quant (numbers.Rational, numbers.Real): quantum to get a
                multiple from
            rounding (Rounding): rounding mode (default: default rounding
                mode)

        Raises:
            TypeError: `quant` is not a number
            ValueError: `quant` is not finite or equal to 0
        """
        if isinstance(quant, (str, complex)):
            raise TypeError(f"Can't quantize to {quant!r}.")
        try:
            ratio = _ratio_of(quant)
        except (ValueError, OverflowError):
            raise ValueError(f"Can't quantize to {quant!r}.") from None
        if ratio is None:
            raise TypeError(f"Can't quantize to {quant!r}.")
        q_num, q_den = ratio
        if q_num == 0:
            raise ValueError("Quantum must not be 0.")
        # self / quant
        num = self._numerator * q_den
        den = self._denominator * q_num
        if den < 0:
            num, den = -num, -den
        mult = round_quotient(num, den, rounding)
        return self._normalized(mult * q_num, q_den)

    def to_decimal(self, precision: Optional[int] = None,
                   rounding: Optional[Rounding] = None) -> Any:
        """Convert `self` to a :class:`ratdec.decimal.Decimal`.

        If `self` has a terminating decimal representation, the conversion
        is exact. Otherwise `self` is rounded to `precision` fractional
        digits.

        Args:
            precision (int): number of fractional digits (default: default
                precision)
            rounding (Rounding): rounding mode (default: ROUND_HALF_UP)

        Returns:
            :class:`ratdec.decimal.Decimal` with a precision of `precision`
            or, if the rounded value has more significant digits, of the
            number of its significant digits

        >>> Rational(200, 3).to_decimal(3)
        Decimal('66.667')
        """
        from .decimal import Decimal
        from .precision import resolve_precision
        prec = resolve_precision(precision)
        if self.has_finite_precision:
            return Decimal(self, prec)
        if rounding is None:
            rounding = Rounding.ROUND_HALF_UP
        value = self.adjusted(prec, rounding)
        if value:
            # digits of the integral part plus `prec` fractional digits
            prec = max(prec, value.magnitude + 1 + prec)
        return Decimal(value, prec)

    def to_json(self) -> str:
        """Return canonical string representation of `self`."""
        return str(self)

    def trunc_div(self, other: Any) -> int:
        """Return self / other, truncated towards zero."""
        return math.trunc(self / other)

    def remainder(self, other: Any) -> Rational:
        """Return self - trunc(self / other) * other."""
        return self - self.trunc_div(other) * other

    # string conversion

    def __str__(self) -> str:
        """str(self)"""
        if self._denominator == 1:
            return str(self._numerator)
        exp = _terminating_exp(self._denominator)
        if exp is None:
            return f"{self._numerator}/{self._denominator}"
        return decimal_str(self._numerator * 10 ** exp // self._denominator,
                           exp)

    def __repr__(self) -> str:
        """repr(self)"""
        cls_name = type(self).__name__
        if self._denominator == 1:
            return f"{cls_name}({self._numerator})"
        if self.has_finite_precision:
            return f"{cls_name}('{self}')"
        return f"{cls_name}({self._numerator}, {self._denominator})"

    def __bytes__(self) -> bytes:
        """bytes(self)"""
        return str(self).encode()

    # copy, pickle, hash

    def __copy__(self) -> Rational:
        """Return self (Rational instances are immutable)."""
        return self

    def __deepcopy__(self, memo: Any) -> Rational:
        """Return self (Rational instances are immutable)."""
        return self

    def __reduce__(self) -> Tuple[Any, Tuple[int, int]]:
        return type(self), (self._numerator, self._denominator)

    def __hash__(self) -> int:
        """hash(self)"""
        # same algorithm as for fractions.Fraction
        try:
            dinv = pow(self._denominator, -1, _HASH_MODULUS)
        except ValueError:
            hash_ = _HASH_INF
        else:
            hash_ = hash(hash(abs(self._numerator)) * dinv)
        result = hash_ if self._numerator >= 0 else -hash_
        return -2 if result == -1 else result

    # comparison

    def _cmp(self, other: Any) -> Union[int, Any]:
        # returns sign of self - other, None for NaN, NotImplemented for
        # unsupported types
        if isinstance(other, float):
            if math.isnan(other):
                return None
            if math.isinf(other):
                return -1 if other > 0 else 1
        elif isinstance(other, StdDecimal):
            if other.is_nan():
                return None
            if other.is_infinite():
                return -1 if other > 0 else 1
        ratio = _ratio_of(other, True)
        if ratio is None:
            return NotImplemented
        o_num, o_den = ratio
        diff = self._numerator * o_den - o_num * self._denominator
        return (diff > 0) - (diff < 0)

    def __eq__(self, other: Any) -> bool:
        """self == other"""
        if isinstance(other, Rational):
            return (self._numerator == other._numerator
                    and self._denominator == other._denominator)
        cmp = self._cmp(other)
        if cmp is NotImplemented:
            return NotImplemented
        return cmp == 0

    def __lt__(self, other: Any) -> bool:
        """self < other"""
        cmp = self._cmp(other)
        if cmp is NotImplemented:
            return NotImplemented
        return cmp is not None and cmp < 0

    def __le__(self, other: Any) -> bool:
        """self <= other"""
        cmp = self._cmp(other)
        if cmp is NotImplemented:
            return NotImplemented
        return cmp is not None and cmp <= 0

    def __gt__(self, other: Any) -> bool:
        """self > other"""
        cmp = self._cmp(other)
        if cmp is NotImplemented:
            return NotImplemented
        return cmp is not None and cmp > 0

    def __ge__(self, other: Any) -> bool:
        """self >= other"""
        cmp = self._cmp(other)
        if cmp is NotImplemented:
            return NotImplemented
        return cmp is not None and cmp >= 0

    # conversion

    def __bool__(self) -> bool:
        """bool(self)"""
        return self._numerator != 0

    def __int__(self) -> int:
        """int(self)"""
        return self.__trunc__()

    def __float__(self) -> float:
        """float(self)"""
        return self._numerator / self._denominator

    def __trunc__(self) -> int:
        """math.trunc(self)"""
        if self._numerator < 0:
            return -(-self._numerator // self._denominator)
        return self._numerator // self._denominator

    def __floor__(self) -> int:
        """math.floor(self)"""
        return self._numerator // self._denominator

    def __ceil__(self) -> int:
        """math.ceil(self)"""
        return -(-self._numerator // self._denominator)

    def __round__(self, precision: Optional[int] = None) -> Any:
        """round(self [, precision])

        Round `self` to a given precision in fractional digits, using the
        default rounding mode.

        Returns:
            int: `self` rounded to an int, if `precision` is None
            Rational: `self` rounded to `precision` digits otherwise
        """
        if precision is None:
            return round_quotient(self._numerator, self._denominator)
        return self.adjusted(precision)

    # unary operators

    def __pos__(self) -> Rational:
        """+self"""
        return self

    def __neg__(self) -> Rational:
        """-self"""
        return self._new(-self._numerator, self._denominator)

    def __abs__(self) -> Rational:
        """abs(self)"""
        if self._numerator >= 0:
            return self
        return self._new(-self._numerator, self._denominator)

    # binary operators

    def __add__(self, other: Any) -> Rational:
        """self + other"""
        ratio = _ratio_of(other, True)
        if ratio is None:
            return NotImplemented
        o_num, o_den = ratio
        den = self._denominator
        if den == o_den:
            return self._normalized(self._numerator + o_num, den)
        return self._normalized(self._numerator * o_den + o_num * den,
                                den * o_den)

    __radd__ = __add__

    def __sub__(self, other: Any) -> Rational:
        """self - other"""
        ratio = _ratio_of(other, True)
        if ratio is None:
            return NotImplemented
        o_num, o_den = ratio
        den = self._denominator
        if den == o_den:
            return self._normalized(self._numerator - o_num, den)
        return self._normalized(self._numerator * o_den - o_num * den,
                                den * o_den)

    def __rsub__(self, other: Any) -> Rational:
        """other - self"""
        ratio = _ratio_of(other, True)
        if ratio is None:
            return NotImplemented
        o_num, o_den = ratio
        return self._normalized(o_num * self._denominator -
                                self._numerator * o_den,
                                o_den * self._denominator)

    def __mul__(self, other: Any) -> Rational:
        """self * other"""
        ratio = _ratio_of(other, True)
        if ratio is None:
            return NotImplemented
        o_num, o_den = ratio
        return self._normalized(self._numerator * o_num,
                                self._denominator * o_den)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Rational:
        """self / other"""
        ratio = _ratio_of(other, True)
        if ratio is None:
            return NotImplemented
        o_num, o_den = ratio
        if o_num == 0:
            raise DivisionByZero(f"{self!r} / 0")
        return self._normalized(self._numerator * o_den,
                                self._denominator * o_num)

    def __rtruediv__(self, other: Any) -> Rational:
        """other / self"""
        ratio = _ratio_of(other, True)
        if ratio is None:
            return NotImplemented
        if self._numerator == 0:
            raise DivisionByZero(f"{other!r} / 0")
        o_num, o_den = ratio
        return self._normalized(o_num * self._denominator,
                                o_den * self._numerator)

    def __floordiv__(self, other: Any) -> int:
        """self // other"""
        quot = self.__truediv__(other)
        if quot is NotImplemented:
            return NotImplemented
        return quot.__floor__()

    def __rfloordiv__(self, other: Any) -> int:
        """other // self"""
        quot = self.__rtruediv__(other)
        if quot is NotImplemented:
            return NotImplemented
        return quot.__floor__()

    def __mod__(self, other: Any) -> Rational:
        """self % other

        Euclidean modulo: the result r satisfies 0 <= r < abs(other).
        """
        ratio = _ratio_of(other, True)
        if ratio is None:
            return NotImplemented
        divisor = self._new(*ratio)
        if divisor._numerator == 0:
            raise DivisionByZero(f"{self!r} % 0")
        return self - (self / abs(divisor)).__floor__() * abs(divisor)

    def __rmod__(self, other: Any) -> Rational:
        """other % self"""
        ratio = _ratio_of(other, True)
        if ratio is None:
            return NotImplemented
        return self._new(*ratio) % self

    def __pow__(self, exp: Any, mod: Any = None) -> Rational:
        """self ** exp

        Only integral exponents are supported; the result is exact.

        Raises:
            InvalidDomain: `self` and `exp` are both 0
            DivisionByZero: `self` is 0 and `exp` is negative
        """
        if mod is not None:
            return NotImplemented
        if isinstance(exp, Rational):
            if exp._denominator != 1:
                return NotImplemented
            exp = exp._numerator
        elif isinstance(exp, (Fraction, numbers.Rational)) \
                and not isinstance(exp, int):
            if exp.denominator != 1:
                return NotImplemented
            exp = int(exp.numerator)
        elif not isinstance(exp, int):
            return NotImplemented
        num, den = self._numerator, self._denominator
        if exp == 0:
            if num == 0:
                raise InvalidDomain("0 ** 0 is undefined.")
            return self._new(1, 1)
        if exp < 0:
            if num == 0:
                raise DivisionByZero("0 raised to a negative power.")
            num, den, exp = den, num, -exp
            if den < 0:
                num, den = -num, -den
        return self._new(*_int_ratio_pow(num, den, exp))

    def __rpow__(self, base: Any, mod: Any = None) -> Any:
        """base ** self"""
        if mod is not None:
            return NotImplemented
        ratio = _ratio_of(base, True)
        if ratio is None:
            return NotImplemented
        return self._new(*ratio) ** self


def _int_ratio_pow(num: int, den: int, exp: int) -> Tuple[int, int]:
    # square-and-multiply on numerator and denominator separately; num / den
    # is in canonical form, so is the result
    r_num, r_den = 1, 1
    while exp:
        if exp & 1:
            r_num *= num
            r_den *= den
        exp >>= 1
        if exp:
            num *= num
            den *= den
    return r_num, r_den


# register Rational as virtual subclass of numbers.Rational
numbers.Rational.register(Rational)
