"""
Elementary Functions over Enclosures

Each function classifies the input interval into a domain region, computes
the bounds for that region and evaluates the scalar function at the nominal
value. Functions are built from a few shared strategies:
- monotonic: evaluate at the two bounds (swapped when decreasing)
- domain floor: log family, sqrt and acosh, with a partial-domain branch
- clipped inverse: asin, acos and atanh on [-1, 1]
- periodic: sin, cos and tan, with extremum/pole detection

Scalar evaluation goes through numpy (and scipy.special for erf/erfc) with
floating point warnings suppressed: domain errors come back as the NaN
triple, never as an exception.
"""

from typing import Callable, List, Optional
import numpy as np
from scipy import special

from .enclosure import (
    Enclosure,
    propagate_nan,
    multiply,
    subtract,
)
from .rounding import (
    PI,
    PI_2,
    TWO_PI,
    round_down,
    round_up,
    libm_down,
    libm_up,
    special_down,
    special_up,
)


_INF = float('inf')

ScalarFn = Callable[..., float]


def _eval(fn: ScalarFn, *args: float) -> float:
    with np.errstate(all='ignore'):
        return float(fn(*args))


def _unary(name: str, doc: str, compute: Callable[[Enclosure], Enclosure]):
    compute.__name__ = name
    compute.__qualname__ = name
    compute.__doc__ = doc
    return propagate_nan(compute)


# Strategies

def _monotonic(
    name: str,
    fn: ScalarFn,
    lower: float = -_INF,
    upper: float = _INF,
    decreasing: bool = False,
    down: Callable[[float], float] = libm_down,
    up: Callable[[float], float] = libm_up,
):
    """
    Monotonic function over its whole domain, clipped into its known range
    [lower, upper].
    """
    def compute(f: Enclosure) -> Enclosure:
        a = _eval(fn, f.lo)
        b = _eval(fn, f.hi)
        if decreasing:
            a, b = b, a
        return Enclosure(
            max(down(a), lower),
            min(up(b), upper),
            _eval(fn, f.v)
        )
    direction = "decreasing" if decreasing else "increasing"
    return _unary(name, f"Elementwise {name}, monotonic {direction}.", compute)


def _domain_floor(
    name: str,
    fn: ScalarFn,
    floor: float,
    range_floor: float = -_INF,
    down: Callable[[float], float] = libm_down,
    up: Callable[[float], float] = libm_up,
):
    """
    Increasing function defined for x >= floor.

    Entirely below the floor gives the NaN triple. A lower bound below the
    floor is replaced by range_floor, the smallest value the function takes.
    """
    def compute(f: Enclosure) -> Enclosure:
        if f.hi < floor:
            return Enclosure.nan()
        hi = up(_eval(fn, f.hi))
        if f.lo < floor:
            v = _eval(fn, f.v) if f.v > floor else range_floor
            return Enclosure(range_floor, hi, v)
        lo = max(down(_eval(fn, f.lo)), range_floor)
        return Enclosure(lo, hi, _eval(fn, f.v))
    return _unary(name, f"Elementwise {name}, defined for x >= {floor}.", compute)


def _clipped_inverse(
    name: str,
    fn: ScalarFn,
    low_out: float,
    high_out: float,
    decreasing: bool = False,
):
    """
    Inverse function on [-1, 1] with outputs in [low_out, high_out].

    Bounds beyond +/-1 clamp to the extreme outputs; an input entirely
    outside [-1, 1] gives the NaN triple.
    """
    def compute(f: Enclosure) -> Enclosure:
        if f.hi < -1.0 or f.lo > 1.0:
            return Enclosure.nan()
        if decreasing:
            lo = low_out if f.hi > 1.0 else max(libm_down(_eval(fn, f.hi)), low_out)
            hi = high_out if f.lo < -1.0 else min(libm_up(_eval(fn, f.lo)), high_out)
        else:
            lo = low_out if f.lo < -1.0 else max(libm_down(_eval(fn, f.lo)), low_out)
            hi = high_out if f.hi > 1.0 else min(libm_up(_eval(fn, f.hi)), high_out)
        v = _eval(fn, min(max(f.v, -1.0), 1.0))
        return Enclosure(lo, hi, v)
    return _unary(name, f"Elementwise {name}, defined on [-1, 1].", compute)


_TWO_PI = Enclosure(*TWO_PI)
_PI_2 = Enclosure(*PI_2)


def _half_period_marks(f: Enclosure, odd: bool) -> Optional[List[int]]:
    """
    Integers m, odd or even, for which m*pi/2 may lie in [f.lo, f.hi].

    The bounds are shifted by a multiple of 2*pi using enclosure arithmetic,
    so a mark is reported whenever it cannot be excluded. Returns None when
    the shifted interval spans a whole period. f must have finite bounds.
    """
    k = float(np.floor(f.lo / TWO_PI.v))
    if k == 0.0:
        r_lo, r_hi = f.lo, f.hi
    else:
        shift = multiply(Enclosure.point(k), _TWO_PI)
        r_lo = subtract(Enclosure.point(f.lo), shift).lo
        r_hi = subtract(Enclosure.point(f.hi), shift).hi
    if r_hi - r_lo >= TWO_PI.lo:
        return None

    marks = []
    first = int(np.floor(r_lo / PI_2.v)) - 1
    last = int(np.ceil(r_hi / PI_2.v)) + 1
    for m in range(first, last + 1):
        if (m % 2 == 1) != odd:
            continue
        mark = multiply(Enclosure.point(float(m)), _PI_2)
        if r_lo <= mark.hi and mark.lo <= r_hi:
            marks.append(m)
    return marks


def _periodic(name: str, fn: ScalarFn, odd: bool, peak: int):
    """
    sin or cos: extrema sit at m*pi/2 with m odd (sin) or even (cos); the
    maximum +1 where m % 4 == peak, the minimum -1 otherwise.
    """
    def compute(f: Enclosure) -> Enclosure:
        v = _eval(fn, f.v)
        if not f.is_finite() or f.hi - f.lo >= TWO_PI.lo:
            return Enclosure(-1.0, 1.0, v)
        marks = _half_period_marks(f, odd)
        if marks is None:
            return Enclosure(-1.0, 1.0, v)
        a = _eval(fn, f.lo)
        b = _eval(fn, f.hi)
        lo = max(libm_down(min(a, b)), -1.0)
        hi = min(libm_up(max(a, b)), 1.0)
        for m in marks:
            if m % 4 == peak:
                hi = 1.0
            else:
                lo = -1.0
        return Enclosure(lo, hi, v)
    return _unary(name, f"Elementwise {name} with extremum capture.", compute)


# Monotonic, full domain

exp = _monotonic('exp', np.exp, lower=0.0)
exp2 = _monotonic('exp2', np.exp2, lower=0.0)
expm1 = _monotonic('expm1', np.expm1, lower=-1.0)
cbrt = _monotonic('cbrt', np.cbrt)
erf = _monotonic('erf', special.erf, lower=-1.0, upper=1.0,
                down=special_down, up=special_up)
erfc = _monotonic('erfc', special.erfc, lower=0.0, upper=2.0, decreasing=True,
                 down=special_down, up=special_up)
sinh = _monotonic('sinh', np.sinh)
tanh = _monotonic('tanh', np.tanh, lower=-1.0, upper=1.0)
asinh = _monotonic('asinh', np.arcsinh)
atan = _monotonic('atan', np.arctan, lower=-PI_2.hi, upper=PI_2.hi)

# Lower-bounded domain

log = _domain_floor('log', np.log, 0.0)
log2 = _domain_floor('log2', np.log2, 0.0)
log10 = _domain_floor('log10', np.log10, 0.0)
log1p = _domain_floor('log1p', np.log1p, -1.0)
# sqrt is correctly rounded, one step is enough
sqrt = _domain_floor('sqrt', np.sqrt, 0.0, range_floor=0.0, down=round_down, up=round_up)
acosh = _domain_floor('acosh', np.arccosh, 1.0, range_floor=0.0)

# Inverse trig on [-1, 1]

asin = _clipped_inverse('asin', np.arcsin, -PI_2.hi, PI_2.hi)
acos = _clipped_inverse('acos', np.arccos, 0.0, PI.hi, decreasing=True)
atanh = _clipped_inverse('atanh', np.arctanh, -_INF, _INF)

# Periodic

sin = _periodic('sin', np.sin, odd=True, peak=1)
cos = _periodic('cos', np.cos, odd=False, peak=0)


@propagate_nan
def tan(f: Enclosure) -> Enclosure:
    """
    Elementwise tan.

    Unbounded when the interval may contain a pole: width of a half period
    or more, a decrease from tan(lo) to tan(hi), or a pole that cannot be
    excluded.
    """
    v = _eval(np.tan, f.v)
    if not f.is_finite() or f.hi - f.lo >= PI.lo:
        return Enclosure.entire(v)
    a = _eval(np.tan, f.lo)
    b = _eval(np.tan, f.hi)
    if a > b:
        return Enclosure.entire(v)
    marks = _half_period_marks(f, odd=True)
    if marks is None or marks:
        return Enclosure.entire(v)
    return Enclosure(libm_down(a), libm_up(b), v)


@propagate_nan
def cosh(f: Enclosure) -> Enclosure:
    """Elementwise cosh, minimum 1 at zero."""
    a = _eval(np.cosh, f.lo)
    b = _eval(np.cosh, f.hi)
    if f.lo > 0.0 or f.hi < 0.0:
        lo = max(libm_down(min(a, b)), 1.0)
    else:
        lo = 1.0
    return Enclosure(lo, libm_up(max(a, b)), _eval(np.cosh, f.v))


@propagate_nan
def absolute(f: Enclosure) -> Enclosure:
    """Fold the interval about zero. Exact, no rounding."""
    if f.hi < 0.0:
        return Enclosure(-f.hi, -f.lo, -f.v)
    if f.lo < 0.0:
        return Enclosure(0.0, max(-f.lo, f.hi), abs(f.v))
    return f.copy()


@propagate_nan
def power(base: Enclosure, exponent: Enclosure) -> Enclosure:
    """
    base ** exponent over the four corners.

    A NaN at any corner or at the nominal value means part of the box is
    outside the real domain, and the result is the NaN triple. When the base
    interval contains zero the values at zero are added as extra corners.
    """
    exps = (exponent.lo, exponent.hi)
    corners = [_eval(np.power, x, p) for x in (base.lo, base.hi) for p in exps]
    v = _eval(np.power, base.v, exponent.v)
    if np.isnan(v) or any(np.isnan(c) for c in corners):
        return Enclosure.nan()

    if base.lo <= 0.0 <= base.hi:
        zeros = (0.0, -0.0) if base.lo < 0.0 else (0.0,)
        corners.extend(_eval(np.power, z, p) for z in zeros for p in exps)
    return Enclosure(libm_down(min(corners)), libm_up(max(corners)), v)


def _magnitude_range(f: Enclosure):
    """Arguments giving the smallest and largest |x| over the interval."""
    if f.lo < 0.0:
        if f.hi < 0.0:
            return f.hi, f.lo
        return 0.0, max(-f.lo, f.hi)
    return f.lo, f.hi


@propagate_nan
def hypot(f1: Enclosure, f2: Enclosure) -> Enclosure:
    """sqrt(f1**2 + f2**2), increasing in the magnitude of each argument."""
    a1, b1 = _magnitude_range(f1)
    a2, b2 = _magnitude_range(f2)
    lo = _eval(np.hypot, a1, a2)
    if lo != 0.0:
        lo = max(libm_down(lo), 0.0)
    return Enclosure(
        lo,
        libm_up(_eval(np.hypot, b1, b2)),
        _eval(np.hypot, f1.v, f2.v)
    )


def _upper_atan2(y_lo: float, y_hi: float, x_lo: float, x_hi: float):
    """atan2 range for y >= 0 (any x), angles in [0, pi]."""
    # signed zeros would select the wrong side of the axes
    y_lo += 0.0
    x_lo += 0.0
    x_hi += 0.0
    if y_lo == 0.0 and x_lo <= 0.0 <= x_hi:
        # touches the origin
        return 0.0, float(np.pi)
    lo = np.arctan2(y_lo, x_hi) if x_hi > 0.0 else np.arctan2(y_hi, x_hi)
    hi = np.arctan2(y_lo, x_lo) if x_lo < 0.0 else np.arctan2(y_hi, x_lo)
    return float(lo), float(hi)


@propagate_nan
def atan2(y: Enclosure, x: Enclosure) -> Enclosure:
    """
    Angle of the point (x, y), split by the region the box covers:
    - y on or above the x axis, or strictly below it: monotonic in both
      arguments
    - y across the axis, x > 0: increasing in y
    - y across the axis, x across zero: contains the branch point
    - y across the axis, x < 0: crosses the branch cut; the sign of the
      nominal y picks which side to unwrap onto
    """
    v = _eval(np.arctan2, y.v, x.v)
    with np.errstate(all='ignore'):
        if y.lo >= 0.0:
            lo, hi = _upper_atan2(y.lo, y.hi, x.lo, x.hi)
        elif y.hi < 0.0:
            upper_lo, upper_hi = _upper_atan2(-y.hi, -y.lo, x.lo, x.hi)
            lo, hi = -upper_hi, -upper_lo
        elif x.lo > 0.0:
            lo = float(np.arctan2(y.lo, x.lo))
            hi = float(np.arctan2(y.hi, x.lo))
        elif x.hi >= 0.0:
            return Enclosure(-PI.hi, PI.hi, v)
        else:
            # upper side in (pi/2, pi], lower side in (-pi, -pi/2)
            upper = float(np.arctan2(y.hi + 0.0, x.hi))
            lower = float(np.arctan2(y.lo, x.hi))
            if not np.signbit(y.v):
                return Enclosure(libm_down(upper), round_up(libm_up(lower) + TWO_PI.hi), v)
            return Enclosure(round_down(libm_down(upper) - TWO_PI.hi), libm_up(lower), v)
    return Enclosure(max(libm_down(lo), -PI.hi), min(libm_up(hi), PI.hi), v)
