"""
Enclosure Arithmetic

A rounded floating point interval with a tracked value. Each enclosure holds
a lower bound, an upper bound and a nominal value:
- The true mathematical result always lies in [lo, hi]
- The nominal value is the plain floating point result, kept for reporting

Every computed bound is rounded outward (see rounding.py), so soundness holds
per operation. Compound expressions are sound but not tight.

Domain errors never raise: they produce the NaN triple (lo = hi = v = NaN).
"""

from dataclasses import dataclass, replace
import functools
import numbers
from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

from .rounding import (
    MAX_EXACT_INT,
    round_down,
    round_up,
    float32_neighbours,
)


Real = Union[int, float]

_NAN = float('nan')
_INF = float('inf')


@dataclass(eq=False)
class Enclosure:
    """
    Rounded interval [lo, hi] with a tracked nominal value v.

    Comparisons use overlap semantics, so == is not transitive and the type
    is unhashable. Use rflint.core.record.record_hash for a
    raw-byte hash.
    """
    lo: float
    hi: float
    v: float

    __hash__ = None

    def __post_init__(self):
        self.lo = float(self.lo)
        self.hi = float(self.hi)
        self.v = float(self.v)

    # Conversions

    @classmethod
    def point(cls, x: float) -> 'Enclosure':
        """Create a degenerate enclosure [x, x] for an exact value."""
        x = float(x)
        return cls(x, x, x)

    @classmethod
    def nan(cls) -> 'Enclosure':
        return cls(_NAN, _NAN, _NAN)

    @classmethod
    def entire(cls, v: float = _NAN) -> 'Enclosure':
        """The whole real line, with an optional nominal value."""
        return cls(-_INF, _INF, v)

    @classmethod
    def from_integer(cls, n: int) -> 'Enclosure':
        """
        Exact when |n| <= 2**53 - 1, otherwise one step either side of the
        rounded value.
        """
        n = int(n)
        if -MAX_EXACT_INT <= n <= MAX_EXACT_INT:
            return cls.point(float(n))
        try:
            d = float(n)
        except OverflowError:
            d = _INF if n > 0 else -_INF
        return cls(round_down(d), round_up(d), d)

    @classmethod
    def from_double(cls, x: float) -> 'Enclosure':
        """Smallest enclosure built from the neighbours of x."""
        x = float(x)
        return cls(round_down(x), round_up(x), x)

    @classmethod
    def from_float32(cls, x: float) -> 'Enclosure':
        """Enclosure of a single precision value, widened to double."""
        lo, v, hi = float32_neighbours(x)
        return cls(lo, hi, v)

    @classmethod
    def coerce(cls, obj: Any) -> 'Enclosure':
        """
        Convert a number to an enclosure.

        Enclosures pass through unchanged, integers are converted exactly
        where possible, numpy float32 keeps its single precision width and
        every other real number goes through from_double.
        """
        if isinstance(obj, Enclosure):
            return obj
        if isinstance(obj, numbers.Integral):
            return cls.from_integer(int(obj))
        if isinstance(obj, np.float32):
            return cls.from_float32(float(obj))
        if isinstance(obj, numbers.Real):
            return cls.from_double(float(obj))
        raise TypeError(
            f"Enclosure conversion must be with numeric type, got {type(obj).__name__}"
        )

    def copy(self) -> 'Enclosure':
        return replace(self)

    # Special value queries

    def is_nonzero(self) -> bool:
        """True if the interval does not intersect zero."""
        return self.lo > 0.0 or self.hi < 0.0

    def is_nan(self) -> bool:
        return bool(np.isnan(self.lo) or np.isnan(self.hi) or np.isnan(self.v))

    def is_infinite(self) -> bool:
        """True if either bound or the nominal value is infinite."""
        return bool(np.isinf(self.lo) or np.isinf(self.hi) or np.isinf(self.v))

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.lo) and np.isfinite(self.hi))

    @property
    def interval(self) -> Tuple[float, float]:
        return (self.lo, self.hi)

    @property
    def width(self) -> float:
        return self.hi - self.lo

    @property
    def midpoint(self) -> float:
        return (self.lo + self.hi) / 2.0

    def contains(self, x: float) -> bool:
        return self.lo <= x <= self.hi

    def to_canonical(self) -> Dict[str, Any]:
        return {"lo": self.lo, "hi": self.hi, "v": self.v}

    def __float__(self) -> float:
        return self.v

    def __int__(self) -> int:
        return int(self.v)

    def __bool__(self) -> bool:
        return self.is_nonzero()

    def __str__(self) -> str:
        return f"{self.v!r} [{self.lo!r}, {self.hi!r}]"

    # Comparisons (overlap semantics)

    def __eq__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return equal(self, other)

    def __ne__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return not_equal(self, other)

    def __le__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return less_equal(self, other)

    def __lt__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return less(self, other)

    def __ge__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return greater_equal(self, other)

    def __gt__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return greater(self, other)

    # Arithmetic

    def __neg__(self) -> 'Enclosure':
        return negate(self)

    def __pos__(self) -> 'Enclosure':
        return positive(self)

    def __abs__(self) -> 'Enclosure':
        from .elementary import absolute
        return absolute(self)

    def __add__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return add(self, other)

    def __radd__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return add(other, self)

    def __sub__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return subtract(self, other)

    def __rsub__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return subtract(other, self)

    def __mul__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return multiply(self, other)

    def __rmul__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return multiply(other, self)

    def __truediv__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return divide(self, other)

    def __rtruediv__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return divide(other, self)

    def __pow__(self, other):
        from .elementary import power
        other = _power_operand(other)
        if other is None:
            return NotImplemented
        return power(self, other)

    def __rpow__(self, other):
        from .elementary import power
        other = _power_operand(other)
        if other is None:
            return NotImplemented
        return power(other, self)

    # In-place forms assign the value-returning result into the receiver

    def _assign(self, result: 'Enclosure') -> 'Enclosure':
        self.lo, self.hi, self.v = result.lo, result.hi, result.v
        return self

    def iadd(self, other: Union['Enclosure', Real]) -> 'Enclosure':
        return self._assign(add(self, other))

    def isub(self, other: Union['Enclosure', Real]) -> 'Enclosure':
        return self._assign(subtract(self, other))

    def imul(self, other: Union['Enclosure', Real]) -> 'Enclosure':
        return self._assign(multiply(self, other))

    def itruediv(self, other: Union['Enclosure', Real]) -> 'Enclosure':
        return self._assign(divide(self, other))

    def ipow(self, other: Union['Enclosure', Real]) -> 'Enclosure':
        from .elementary import power
        return self._assign(power(self, _power_operand(other)))

    def __iadd__(self, other):
        if _operand(other) is None:
            return NotImplemented
        return self.iadd(other)

    def __isub__(self, other):
        if _operand(other) is None:
            return NotImplemented
        return self.isub(other)

    def __imul__(self, other):
        if _operand(other) is None:
            return NotImplemented
        return self.imul(other)

    def __itruediv__(self, other):
        if _operand(other) is None:
            return NotImplemented
        return self.itruediv(other)

    def __ipow__(self, other):
        if _power_operand(other) is None:
            return NotImplemented
        return self.ipow(other)

    # Elementary function methods

    def sqrt(self) -> 'Enclosure':
        from .elementary import sqrt
        return sqrt(self)

    def log(self) -> 'Enclosure':
        from .elementary import log
        return log(self)

    def exp(self) -> 'Enclosure':
        from .elementary import exp
        return exp(self)


def _operand(obj: Any) -> Optional[Enclosure]:
    """Promote a scalar operand with from_double; None for non-numbers."""
    if isinstance(obj, Enclosure):
        return obj
    if isinstance(obj, numbers.Real):
        return Enclosure.from_double(float(obj))
    return None


def _power_operand(obj: Any) -> Optional[Enclosure]:
    """Integer exponents stay exact so that x ** 2 is defined for x < 0."""
    if isinstance(obj, numbers.Integral):
        return Enclosure.from_integer(int(obj))
    return _operand(obj)


def _promote(obj: Any) -> Enclosure:
    result = _operand(obj)
    if result is None:
        raise TypeError(
            f"Enclosure operations must be with numeric type, got {type(obj).__name__}"
        )
    return result


def propagate_nan(func):
    """Promote scalar arguments and return the NaN triple for any NaN operand."""
    @functools.wraps(func)
    def wrapper(*args):
        operands = [_promote(a) for a in args]
        if any(f.is_nan() for f in operands):
            return Enclosure.nan()
        return func(*operands)
    return wrapper


# Relational layer

def _either_nan(f1: Enclosure, f2: Enclosure) -> bool:
    return f1.is_nan() or f2.is_nan()


def equal(f1: Enclosure, f2: Enclosure) -> bool:
    """Any overlap counts as equal."""
    return not _either_nan(f1, f2) and f1.lo <= f2.hi and f1.hi >= f2.lo


def not_equal(f1: Enclosure, f2: Enclosure) -> bool:
    """No overlap, or a NaN operand."""
    return _either_nan(f1, f2) or f1.lo > f2.hi or f1.hi < f2.lo


def less_equal(f1: Enclosure, f2: Enclosure) -> bool:
    return not _either_nan(f1, f2) and f1.lo <= f2.hi


def less(f1: Enclosure, f2: Enclosure) -> bool:
    """Strictly below, no overlap allowed."""
    return not _either_nan(f1, f2) and f1.hi < f2.lo


def greater_equal(f1: Enclosure, f2: Enclosure) -> bool:
    return not _either_nan(f1, f2) and f1.hi >= f2.lo


def greater(f1: Enclosure, f2: Enclosure) -> bool:
    return not _either_nan(f1, f2) and f1.lo > f2.hi


# Arithmetic layer

def negate(f: Enclosure) -> Enclosure:
    # Exact, bounds swap
    return Enclosure(-f.hi, -f.lo, -f.v)


def positive(f: Enclosure) -> Enclosure:
    return f.copy()


@propagate_nan
def add(f1: Enclosure, f2: Enclosure) -> Enclosure:
    return Enclosure(
        round_down(f1.lo + f2.lo),
        round_up(f1.hi + f2.hi),
        f1.v + f2.v
    )


@propagate_nan
def subtract(f1: Enclosure, f2: Enclosure) -> Enclosure:
    return Enclosure(
        round_down(f1.lo - f2.hi),
        round_up(f1.hi - f2.lo),
        f1.v - f2.v
    )


def _product(a: float, b: float) -> float:
    # 0 * inf contributes 0 to the hull
    if a == 0.0 or b == 0.0:
        return 0.0
    return a * b


def _quotient(a: float, b: float) -> float:
    with np.errstate(all='ignore'):
        return float(np.float64(a) / np.float64(b))


@propagate_nan
def multiply(f1: Enclosure, f2: Enclosure) -> Enclosure:
    """Hull of the four corner products."""
    products = [
        _product(f1.lo, f2.lo),
        _product(f1.lo, f2.hi),
        _product(f1.hi, f2.lo),
        _product(f1.hi, f2.hi),
    ]
    return Enclosure(
        round_down(min(products)),
        round_up(max(products)),
        f1.v * f2.v
    )


@propagate_nan
def divide(f1: Enclosure, f2: Enclosure) -> Enclosure:
    """
    Hull of the four corner quotients.

    A divisor straddling zero gives the whole real line. A divisor bound of
    exactly zero is signed toward the interior so the quotient runs off to
    the correctly signed infinity.
    """
    v = _quotient(f1.v, f2.v)
    lo2, hi2 = f2.lo, f2.hi
    if lo2 < 0.0 < hi2:
        return Enclosure.entire(v)
    if lo2 == 0.0:
        lo2 = 0.0
    if hi2 == 0.0:
        hi2 = -0.0

    quotients = [
        _quotient(f1.lo, lo2),
        _quotient(f1.lo, hi2),
        _quotient(f1.hi, lo2),
        _quotient(f1.hi, hi2),
    ]
    if any(np.isnan(q) for q in quotients):
        # 0/0 or inf/inf
        return Enclosure.entire(v)
    return Enclosure(
        round_down(min(quotients)),
        round_up(max(quotients)),
        v
    )
