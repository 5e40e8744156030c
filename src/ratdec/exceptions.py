# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Copyright:   (c) 2021 ff. Michael Amrhein (michael@adrhinum.de)
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$

"""Exceptions raised by rational and decimal arithmetic."""


__all__ = [
    'RatdecError',
    'DivisionByZero',
    'InvalidDomain',
    'ParseError',
    'InvalidPrecision',
]


class RatdecError(ArithmeticError):
    """Base class of all errors raised by package 'ratdec'."""


class DivisionByZero(RatdecError, ZeroDivisionError):
    """Zero denominator or zero divisor."""


class InvalidDomain(RatdecError, ValueError):
    """Argument outside the domain of the operation."""


class ParseError(RatdecError, ValueError):
    """Malformed numeric literal."""


class InvalidPrecision(RatdecError, ValueError):
    """Precision less than 1."""
