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


"""Shared pytest fixtures."""

from decimal import Decimal as StdDecimal, ROUND_HALF_UP, localcontext

import pytest
from hypothesis import HealthCheck, settings

from ratdec import (
    Rounding, get_dflt_precision, get_dflt_rounding_mode, set_dflt_precision,
    set_dflt_rounding_mode)


# the defaults are reset after each test (not after each example), and some
# transcendental functions are slow at high precision
settings.register_profile(
    "ratdec",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    deadline=None)
settings.load_profile("ratdec")


@pytest.fixture(autouse=True)
def restore_defaults():
    rnd = get_dflt_rounding_mode()
    prec = get_dflt_precision()
    yield
    set_dflt_rounding_mode(rnd)
    set_dflt_precision(prec)


@pytest.fixture(scope="session",
                params=[rnd.name for rnd in Rounding],
                ids=[rnd.name for rnd in Rounding])
def rnd(request) -> Rounding:
    return Rounding[request.param]


def dflt_round(rnd):
    @pytest.fixture()
    def closure():
        prev_rnd = get_dflt_rounding_mode()
        set_dflt_rounding_mode(rnd)
        yield
        set_dflt_rounding_mode(prev_rnd)
    return closure


with_round_half_up = dflt_round(Rounding.ROUND_HALF_UP)
with_round_half_even = dflt_round(Rounding.ROUND_HALF_EVEN)


def rounded_literal(literal: str, digits: int) -> StdDecimal:
    """Return `literal` rounded half up to `digits` significant digits."""
    with localcontext() as ctx:
        ctx.prec = digits
        ctx.rounding = ROUND_HALF_UP
        return +StdDecimal(literal)
