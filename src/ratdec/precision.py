# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Copyright:   (c) 2021 ff. Michael Amrhein (michael@adrhinum.de)
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$

"""Default precision for decimal arithmetic."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator, Optional

from .exceptions import InvalidPrecision


__all__ = ['DFLT_PRECISION', 'GUARD_DIGITS', 'check_precision',
           'get_dflt_precision', 'set_dflt_precision', 'localprecision']


# number of significant digits used when no precision is given
DFLT_PRECISION = 50

# extra digits carried by intermediate results of iterative algorithms
GUARD_DIGITS = 5


_dflt_precision: ContextVar[int] = \
    ContextVar("dflt_precision", default=DFLT_PRECISION)


def check_precision(precision: int) -> int:
    """Return `precision` if it is a valid precision.

    Raises:
        TypeError: given 'precision' is not an int
        InvalidPrecision: given 'precision' is less than 1
    """
    if not isinstance(precision, int) or isinstance(precision, bool):
        raise TypeError(f"Precision must be of type 'int', not "
                        f"{type(precision).__name__!r}.")
    if precision < 1:
        raise InvalidPrecision(f"Precision must be >= 1, got {precision}.")
    return precision


def get_dflt_precision() -> int:
    """Return default precision."""
    return _dflt_precision.get()


def set_dflt_precision(precision: int) -> Token:
    """Set default precision.

    The default is held per context, i. e. setting it does not affect other
    threads or asyncio tasks.

    Args:
        precision (int): number of significant digits to be set as default

    Returns:
        Token which can be used to restore the previous default

    Raises:
        TypeError: given 'precision' is not an int
        InvalidPrecision: given 'precision' is less than 1
    """
    return _dflt_precision.set(check_precision(precision))


def resolve_precision(precision: Optional[int]) -> int:
    """Return `precision`, or the default precision if it is None."""
    if precision is None:
        return _dflt_precision.get()
    return check_precision(precision)


@contextmanager
def localprecision(precision: int) -> Iterator[int]:
    """Context manager temporarily setting the default precision."""
    token = set_dflt_precision(precision)
    try:
        yield precision
    finally:
        _dflt_precision.reset(token)
