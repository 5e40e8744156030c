# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Copyright:   (c) 2021 ff. Michael Amrhein (michael@adrhinum.de)
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$

"""Parsing of numeric literals."""

from __future__ import annotations

import re
from typing import Tuple

from .exceptions import DivisionByZero, ParseError


__all__ = ['parse']


_PATTERN = re.compile(r"""
    \s*
    (?P<sign>[+-])?
    (?:
        (?P<whole>\d+)\s+(?P<mnum>\d+)/(?P<mden>\d+)    # mixed number
    |
        (?P<num>\d+)/(?P<den>\d+)                       # fraction
    |
        (?P<int>\d+)?(?:\.(?P<frac>\d*))?               # decimal ...
        (?:[eE](?P<exp>[+-]?\d+))?                      # ... with exponent
    )
    \s*
    \Z
    """, re.VERBOSE)


def parse(source: str) -> Tuple[int, int]:
    """Parse `source` and return (numerator, denominator) of its value.

    Accepted formats (leading and trailing whitespace is ignored, all
    formats may be preceded by a sign):

    * mixed numbers, e.g. "2 3/4"
    * fractions, e.g. "1/2"
    * integers, e.g. "17"
    * decimals, e.g. "3.14", ".5", "5."
    * scientific notation, e.g. "3.14e2", ".174e2", "5e-2"

    The returned pair is not reduced; only the denominator is guaranteed
    to be positive.

    Raises:
        ParseError: `source` is not a valid numeric literal
        DivisionByZero: `source` is a fraction with zero denominator
    """
    match = _PATTERN.match(source)
    if match is None:
        raise ParseError(f"Invalid literal for Rational: {source!r}")
    sign = -1 if match.group('sign') == '-' else 1
    whole = match.group('whole')
    if whole is not None:
        den = int(match.group('mden'))
        if den == 0:
            raise DivisionByZero(f"Zero denominator in {source!r}")
        num = int(whole) * den + int(match.group('mnum'))
        return sign * num, den
    num = match.group('num')
    if num is not None:
        den = int(match.group('den'))
        if den == 0:
            raise DivisionByZero(f"Zero denominator in {source!r}")
        return sign * int(num), den
    int_part = match.group('int') or ''
    frac_part = match.group('frac') or ''
    if not (int_part or frac_part):
        raise ParseError(f"Invalid literal for Rational: {source!r}")
    num = sign * int(int_part + frac_part)
    exp = int(match.group('exp') or 0) - len(frac_part)
    if exp >= 0:
        return num * 10 ** exp, 1
    return num, 10 ** -exp
