# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Copyright:   (c) 2021 ff. Michael Amrhein (michael@adrhinum.de)
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$


"""Exact rational numbers and arbitrary-precision decimal arithmetic."""

import logging

from .decimal import Decimal
from .exceptions import (
    DivisionByZero, InvalidDomain, InvalidPrecision, ParseError, RatdecError)
from .precision import (
    DFLT_PRECISION, get_dflt_precision, localprecision, set_dflt_precision)
from .rational import Rational
from .rounding import Rounding, get_dflt_rounding_mode, set_dflt_rounding_mode
from .version import version_str as __version__  # noqa: F401

# library code doesn't configure logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

# define public namespace
__all__ = [
    'Rational',
    'Decimal',
    'Rounding',
    'get_dflt_rounding_mode',
    'set_dflt_rounding_mode',
    'DFLT_PRECISION',
    'get_dflt_precision',
    'set_dflt_precision',
    'localprecision',
    'RatdecError',
    'DivisionByZero',
    'InvalidDomain',
    'ParseError',
    'InvalidPrecision',
]
