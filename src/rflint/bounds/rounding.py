"""
Directed Rounding

Every bound produced by a floating-point computation is pushed outward by
whole representable steps: lower bounds toward -inf, upper bounds toward +inf.

Rounding policy (fixed, for reproducible bounds):
- EXACT_STEPS (1) after IEEE-754 correctly rounded operations
  (+, -, *, / and sqrt). The computed value is within half an ulp of the
  true result, so one step always covers it.
- LIBM_STEPS (2) after library transcendental functions (exp, log, sin,
  pow, hypot, ...), whose error is only bounded by about one ulp.
- SPECIAL_REL_ERR / SPECIAL_ABS_ERR for scipy.special erf and erfc. erfc
  loses up to about 500 ulps in its tail and erf about 2 ulps, so their
  bounds move out by max(SPECIAL_REL_ERR * |y|, SPECIAL_ABS_ERR) before a
  final step. The relative margin is about 4096 ulps; the absolute margin
  covers results that are subnormal or flushed to zero.
"""

from typing import NamedTuple
import numpy as np


EXACT_STEPS = 1
LIBM_STEPS = 2

SPECIAL_REL_ERR = 2.0**-40
SPECIAL_ABS_ERR = 2 * float(np.finfo(np.float64).tiny)

# Largest magnitude for which every integer is exactly a binary64 value
MAX_EXACT_INT = 2**53 - 1

_NEG_INF = float('-inf')
_POS_INF = float('inf')


def step_down(x: float, steps: int = EXACT_STEPS) -> float:
    """Move x toward -inf by `steps` adjacent binary64 values."""
    for _ in range(steps):
        x = np.nextafter(x, _NEG_INF)
    return float(x)


def step_up(x: float, steps: int = EXACT_STEPS) -> float:
    """Move x toward +inf by `steps` adjacent binary64 values."""
    for _ in range(steps):
        x = np.nextafter(x, _POS_INF)
    return float(x)


def round_down(x: float) -> float:
    return step_down(x, EXACT_STEPS)


def round_up(x: float) -> float:
    return step_up(x, EXACT_STEPS)


def libm_down(x: float) -> float:
    return step_down(x, LIBM_STEPS)


def libm_up(x: float) -> float:
    return step_up(x, LIBM_STEPS)


def _special_margin(y: float) -> float:
    return max(SPECIAL_REL_ERR * abs(y), SPECIAL_ABS_ERR)


def special_down(y: float) -> float:
    """Lower bound for a scipy.special erf/erfc result."""
    if np.isnan(y) or np.isinf(y):
        return step_down(y, LIBM_STEPS)
    return round_down(y - _special_margin(y))


def special_up(y: float) -> float:
    """Upper bound for a scipy.special erf/erfc result."""
    if np.isnan(y) or np.isinf(y):
        return step_up(y, LIBM_STEPS)
    return round_up(y + _special_margin(y))


def float32_neighbours(x: float):
    """
    Binary32 predecessor, value and successor of x, widened to binary64.

    x is first rounded to the nearest binary32 value.
    """
    f = np.float32(x)
    below = np.nextafter(f, np.float32(_NEG_INF))
    above = np.nextafter(f, np.float32(_POS_INF))
    return float(below), float(f), float(above)


class RoundedConstant(NamedTuple):
    """A constant stored as binary64 bounds around its true value."""
    lo: float
    hi: float
    v: float


# lo < true value < hi for each of these
PI = RoundedConstant(3.141592653589793, 3.1415926535897936, 3.141592653589793)
PI_2 = RoundedConstant(1.5707963267948966, 1.5707963267948968, 1.5707963267948966)
TWO_PI = RoundedConstant(6.283185307179586, 6.283185307179587, 6.283185307179586)
