# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Copyright:   (c) 2021 ff. Michael Amrhein (michael@adrhinum.de)
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$

"""Decimal numbers with a significant-digit budget, backed by Rationals."""

from __future__ import annotations

import math
import numbers
from decimal import Decimal as StdDecimal
from typing import Any, Optional, Tuple

from . import transcendental
from .exceptions import InvalidDomain, ParseError
from .formatting import format_exponential, format_fixed, format_precision
from .precision import (
    get_dflt_precision, resolve_precision, set_dflt_precision)
from .rational import Rational, _terminating_exp
from .rounding import Rounding
from .transcendental import limit_precision


__all__ = ['Decimal']


def _to_rational(value: Any) -> Rational:
    if isinstance(value, Decimal):
        return value._value
    if isinstance(value, Rational):
        return value
    if isinstance(value, int):
        return Rational(value)
    if isinstance(value, str):
        if not value.strip():
            raise ParseError("Can't convert an empty string to Decimal.")
        return Rational.parse(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidDomain("Decimal value must be a finite number, "
                                f"not {value!r}.")
        # shortest representation, i.e. Decimal(0.1) == Decimal('0.1')
        return Rational.parse(repr(value))
    if isinstance(value, StdDecimal):
        if not value.is_finite():
            raise InvalidDomain("Decimal value must be a finite number, "
                                f"not {value!r}.")
        return Rational(value)
    if isinstance(value, numbers.Rational):
        return Rational(value)
    raise TypeError(f"Can't convert {value!r} to Decimal.")


class Decimal:

    """Decimal number with a budget of significant digits.

    Args:
        value (Decimal, Rational, int, str, float, fractions.Fraction,
            decimal.Decimal): numerical value (default: 0)
        precision (int): number of significant digits kept by operations
            which have to approximate their result (default: precision of
            `value` if it is a Decimal, else the default precision)

    The value of a Decimal always has a terminating decimal representation.
    Values without one (like 1/3) are rounded to `precision` significant
    digits; all other values are held exactly.

    Raises:
        TypeError: `value` or `precision` has an unsupported type
        ParseError: `value` is a string which is not a valid literal
        InvalidDomain: `value` is an infinite or NaN float or decimal
        InvalidPrecision: `precision` is less than 1
    """

    __slots__ = ('_value', '_precision')

    def __new__(cls, value: Any = 0,
                precision: Optional[int] = None) -> Decimal:
        """Create and return new Decimal instance."""
        if precision is None and isinstance(value, Decimal):
            precision = value._precision
        else:
            precision = resolve_precision(precision)
        return cls._from_rational(_to_rational(value), precision)

    @classmethod
    def _from_rational(cls, value: Rational, precision: int) -> Decimal:
        if not value.has_finite_precision:
            value = limit_precision(value, precision)
        self = object.__new__(cls)
        self._value = value
        self._precision = precision
        return self

    @classmethod
    def from_int(cls, value: int, precision: Optional[int] = None) -> Decimal:
        """Convert int `value` to a Decimal."""
        if not isinstance(value, int):
            raise TypeError(f"{value!r} is not an int.")
        return cls(value, precision)

    @classmethod
    def parse(cls, source: str, precision: Optional[int] = None) -> Decimal:
        """Convert the numeric literal `source` to a Decimal.

        Raises:
            ParseError: `source` is not a valid literal
        """
        if not isinstance(source, str):
            raise TypeError(f"Can't parse {source!r}: not a string.")
        return cls(source, precision)

    @classmethod
    def from_json(cls, value: str) -> Decimal:
        """Inverse of :meth:`to_json`."""
        return cls.parse(value)

    @staticmethod
    def set_precision(precision: int) -> None:
        """Set the default precision for the current context.

        Raises:
            TypeError: `precision` is not an int
            InvalidPrecision: `precision` is less than 1
        """
        set_dflt_precision(precision)

    @staticmethod
    def get_precision() -> int:
        """Return the default precision for the current context."""
        return get_dflt_precision()

    @classmethod
    def pi(cls, precision: Optional[int] = None) -> Decimal:
        """Return pi, rounded to `precision` significant digits."""
        precision = resolve_precision(precision)
        return cls._from_rational(transcendental.pi(precision), precision)

    @classmethod
    def e(cls, precision: Optional[int] = None) -> Decimal:
        """Return Euler's number, rounded to `precision` significant
        digits."""
        precision = resolve_precision(precision)
        return cls._from_rational(transcendental.e(precision), precision)

    # properties

    @property
    def value(self) -> Rational:
        """Exact value of `self`."""
        return self._value

    @property
    def precision(self) -> int:
        """Number of significant digits kept by approximating operations."""
        return self._precision

    @property
    def scale(self) -> int:
        """Number of fractional digits of `self`."""
        return _terminating_exp(self._value.denominator)

    @property
    def sign(self) -> int:
        """-1, 0 or 1, depending on the sign of `self`."""
        return self._value.sign

    @property
    def real(self) -> Decimal:
        """Real part of `self`."""
        return self

    @property
    def imag(self) -> int:
        """Imaginary part of `self`."""
        return 0

    def conjugate(self) -> Decimal:
        """Return self."""
        return self

    def is_integer(self) -> bool:
        """True if `self` is integral."""
        return self._value.is_integer()

    def is_power_of_ten(self) -> bool:
        """True if `self` is 10 ** n for some int n >= 0."""
        value = self._value
        return (value.is_integer() and value > 0
                and value == 10 ** value.magnitude)

    def is_exact_float(self) -> bool:
        """True if `self` can be converted to a float without loss."""
        try:
            flt = float(self._value)
        except OverflowError:
            return False
        return Rational(flt) == self._value

    # conversion

    def to_rational(self) -> Rational:
        """Return exact value of `self` as Rational."""
        return self._value

    def to_int(self) -> int:
        """Return `self` truncated to an int."""
        return math.trunc(self._value)

    def to_float(self) -> float:
        """Return nearest float to `self`."""
        return float(self._value)

    def as_integer_ratio(self) -> Tuple[int, int]:
        """Return the pair of numerator and denominator of `self`."""
        return self._value.as_integer_ratio()

    def to_json(self) -> str:
        """Return canonical string representation of `self`."""
        return str(self)

    def __str__(self) -> str:
        """str(self)"""
        return str(self._value)

    def __repr__(self) -> str:
        """repr(self)"""
        return f"{type(self).__name__}('{self}')"

    def __bool__(self) -> bool:
        """bool(self)"""
        return bool(self._value)

    def __int__(self) -> int:
        """int(self)"""
        return math.trunc(self._value)

    def __float__(self) -> float:
        """float(self)"""
        return float(self._value)

    def __trunc__(self) -> int:
        """math.trunc(self)"""
        return math.trunc(self._value)

    def __floor__(self) -> int:
        """math.floor(self)"""
        return math.floor(self._value)

    def __ceil__(self) -> int:
        """math.ceil(self)"""
        return math.ceil(self._value)

    def __round__(self, scale: Optional[int] = None) -> Any:
        """round(self [, scale])"""
        if scale is None:
            return round(self._value)
        return self.round(scale)

    def __copy__(self) -> Decimal:
        return self

    def __deepcopy__(self, memo: Any) -> Decimal:
        return self

    def __reduce__(self) -> Tuple[Any, Tuple[str, int]]:
        return type(self), (str(self), self._precision)

    def __hash__(self) -> int:
        """hash(self)"""
        return hash(self._value)

    # formatting

    def to_string_as_fixed(self, fraction_digits: int,
                           rounding: Optional[Rounding] = None) -> str:
        """Return `self` rounded to `fraction_digits` fractional digits.

        >>> Decimal("3.14159").to_string_as_fixed(2)
        '3.14'
        """
        return format_fixed(self._value, fraction_digits, rounding)

    def to_string_as_exponential(self, fraction_digits: int = 0,
                                 rounding: Optional[Rounding] = None) -> str:
        """Return `self` in exponential notation.

        >>> Decimal("12.34").to_string_as_exponential(1)
        '1.2e+1'
        """
        return format_exponential(self._value, fraction_digits, rounding)

    def to_string_as_precision(self, precision: int,
                               rounding: Optional[Rounding] = None) -> str:
        """Return `self` rounded to `precision` significant digits.

        >>> Decimal("12.34").to_string_as_precision(3)
        '12.3'
        """
        return format_precision(self._value, precision, rounding)

    # rounding

    def _adjusted(self, scale: int, rounding: Rounding) -> Decimal:
        return self._from_rational(self._value.adjusted(scale, rounding),
                                   self._precision)

    def floor(self, scale: int = 0) -> Decimal:
        """Return `self` rounded towards -Infinity to `scale` fractional
        digits."""
        return self._adjusted(scale, Rounding.ROUND_FLOOR)

    def ceil(self, scale: int = 0) -> Decimal:
        """Return `self` rounded towards Infinity to `scale` fractional
        digits."""
        return self._adjusted(scale, Rounding.ROUND_CEILING)

    def round(self, scale: int = 0,
              rounding: Optional[Rounding] = None) -> Decimal:
        """Return `self` rounded to `scale` fractional digits, using
        `rounding` (default: default rounding mode)."""
        return self._adjusted(scale, rounding)

    def truncate(self, scale: int = 0) -> Decimal:
        """Return `self` rounded towards zero to `scale` fractional
        digits."""
        return self._adjusted(scale, Rounding.ROUND_DOWN)

    def shift(self, n_digits: int) -> Decimal:
        """Return self * 10 ** `n_digits`."""
        return self._from_rational(self._value * Rational(10) ** n_digits,
                                   self._precision)

    def clamp(self, lower: Any, upper: Any) -> Decimal:
        """Return `self` limited to the interval [`lower`, `upper`]."""
        return Decimal(self._value.clamp(_to_rational(lower),
                                         _to_rational(upper)),
                       self._precision)

    # arithmetic

    def _operand(self, other: Any) -> Optional[Tuple[Rational, int]]:
        if isinstance(other, Decimal):
            return other._value, max(self._precision, other._precision)
        if isinstance(other, (int, float, Rational, StdDecimal,
                              numbers.Rational)):
            return _to_rational(other), self._precision
        return None

    def __pos__(self) -> Decimal:
        """+self"""
        return self

    def __neg__(self) -> Decimal:
        """-self"""
        return self._from_rational(-self._value, self._precision)

    def __abs__(self) -> Decimal:
        """abs(self)"""
        return self._from_rational(abs(self._value), self._precision)

    def __add__(self, other: Any) -> Decimal:
        """self + other"""
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        value, prec = operand
        return self._from_rational(self._value + value, prec)

    __radd__ = __add__

    def __sub__(self, other: Any) -> Decimal:
        """self - other"""
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        value, prec = operand
        return self._from_rational(self._value - value, prec)

    def __rsub__(self, other: Any) -> Decimal:
        """other - self"""
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        value, prec = operand
        return self._from_rational(value - self._value, prec)

    def __mul__(self, other: Any) -> Decimal:
        """self * other"""
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        value, prec = operand
        return self._from_rational(self._value * value, prec)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Decimal:
        """self / other

        Raises:
            DivisionByZero: `other` is 0
        """
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        value, prec = operand
        return self._from_rational(self._value / value, prec)

    def __rtruediv__(self, other: Any) -> Decimal:
        """other / self"""
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        value, prec = operand
        return self._from_rational(value / self._value, prec)

    def __floordiv__(self, other: Any) -> int:
        """self // other"""
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self._value // operand[0]

    def __rfloordiv__(self, other: Any) -> int:
        """other // self"""
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return operand[0] // self._value

    def __mod__(self, other: Any) -> Decimal:
        """self % other (Euclidean modulo)"""
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        value, prec = operand
        return self._from_rational(self._value % value, prec)

    def __rmod__(self, other: Any) -> Decimal:
        """other % self (Euclidean modulo)"""
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        value, prec = operand
        return self._from_rational(value % self._value, prec)

    def __pow__(self, exponent: Any, mod: Any = None) -> Decimal:
        """self ** exponent"""
        if mod is not None or self._operand(exponent) is None:
            return NotImplemented
        return self.pow(exponent)

    def __rpow__(self, base: Any, mod: Any = None) -> Decimal:
        """base ** self"""
        operand = self._operand(base)
        if mod is not None or operand is None:
            return NotImplemented
        value, prec = operand
        return self._from_rational(value, prec).pow(self)

    def _checked_operand(self, other: Any) -> Tuple[Rational, int]:
        operand = self._operand(other)
        if operand is None:
            raise TypeError(f"Unsupported operand: {other!r}")
        return operand

    def remainder(self, other: Any) -> Decimal:
        """Return self - trunc(self / other) * other."""
        value, prec = self._checked_operand(other)
        return self._from_rational(self._value.remainder(value), prec)

    def trunc_div(self, other: Any) -> int:
        """Return self / other, truncated towards zero."""
        value, _ = self._checked_operand(other)
        return self._value.trunc_div(value)

    def inverse(self) -> Decimal:
        """Return 1 / self.

        Raises:
            DivisionByZero: `self` is 0
        """
        return self._from_rational(self._value.inverse(), self._precision)

    # comparison

    def __eq__(self, other: Any) -> bool:
        """self == other"""
        if isinstance(other, Decimal):
            other = other._value
        return self._value.__eq__(other)

    def __lt__(self, other: Any) -> bool:
        """self < other"""
        if isinstance(other, Decimal):
            other = other._value
        return self._value.__lt__(other)

    def __le__(self, other: Any) -> bool:
        """self <= other"""
        if isinstance(other, Decimal):
            other = other._value
        return self._value.__le__(other)

    def __gt__(self, other: Any) -> bool:
        """self > other"""
        if isinstance(other, Decimal):
            other = other._value
        return self._value.__gt__(other)

    def __ge__(self, other: Any) -> bool:
        """self >= other"""
        if isinstance(other, Decimal):
            other = other._value
        return self._value.__ge__(other)

    # transcendental functions

    def _approx(self, value: Rational) -> Decimal:
        return self._from_rational(value, self._precision)

    def sqrt(self) -> Decimal:
        """Return square root of `self`.

        Raises:
            InvalidDomain: `self` is negative
        """
        return self._approx(transcendental.sqrt(self._value,
                                                self._precision))

    def exp(self) -> Decimal:
        """Return e ** `self`."""
        return self._approx(transcendental.exp(self._value, self._precision))

    def ln(self) -> Decimal:
        """Return natural logarithm of `self`.

        Raises:
            InvalidDomain: `self` <= 0
        """
        return self._approx(transcendental.ln(self._value, self._precision))

    def log10(self) -> Decimal:
        """Return logarithm of `self` to base 10.

        Raises:
            InvalidDomain: `self` <= 0
        """
        return self._approx(transcendental.log10(self._value,
                                                 self._precision))

    def sin(self) -> Decimal:
        """Return sine of `self` (in radians)."""
        return self._approx(transcendental.sin(self._value, self._precision))

    def cos(self) -> Decimal:
        """Return cosine of `self` (in radians)."""
        return self._approx(transcendental.cos(self._value, self._precision))

    def tan(self) -> Decimal:
        """Return tangent of `self` (in radians)."""
        return self._approx(transcendental.tan(self._value, self._precision))

    def asin(self) -> Decimal:
        """Return arc sine of `self` (in radians).

        Raises:
            InvalidDomain: `self` is not in the range [-1, 1]
        """
        return self._approx(transcendental.asin(self._value,
                                                self._precision))

    def acos(self) -> Decimal:
        """Return arc cosine of `self` (in radians).

        Raises:
            InvalidDomain: `self` is not in the range [-1, 1]
        """
        return self._approx(transcendental.acos(self._value,
                                                self._precision))

    def atan(self) -> Decimal:
        """Return arc tangent of `self` (in radians)."""
        return self._approx(transcendental.atan(self._value,
                                                self._precision))

    def pow(self, exponent: Any) -> Decimal:
        """Return `self` raised to the power `exponent`.

        Integral exponents are computed exactly by repeated squaring, other
        exponents as exp(exponent * ln(self)).

        Raises:
            InvalidDomain: `self` and `exponent` are both 0, or `self` is
                negative and `exponent` is not integral
            DivisionByZero: `self` is 0 and `exponent` is negative
        """
        value, prec = self._checked_operand(exponent)
        return self._from_rational(
            transcendental.power(self._value, value, prec), prec)


# register Decimal as virtual subclass of numbers.Real
numbers.Real.register(Decimal)
