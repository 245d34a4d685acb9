"""
rflint - Rounded Floating Point Intervals with Tracked Values

Every value is an enclosure: a lower bound, an upper bound and a nominal
value. Operations round their bounds outward, so the true mathematical result
is always inside [lo, hi] while the nominal value stays available for
reporting.

Key Features:
- Exact and widened conversions from int, float and float32
- Overlap comparisons (==, !=, <, <=, >, >=)
- Arithmetic with value-returning and in-place forms
- Elementary functions with domain and extremum handling
- Fixed-layout records and raw-byte hashing for host frameworks
"""

from .bounds.rounding import (
    EXACT_STEPS,
    LIBM_STEPS,
    PI,
    PI_2,
    TWO_PI,
)
from .bounds.enclosure import (
    Enclosure,
    equal,
    not_equal,
    less_equal,
    less,
    greater_equal,
    greater,
    negate,
    positive,
    add,
    subtract,
    multiply,
    divide,
)
from .bounds.elementary import (
    absolute,
    sqrt,
    cbrt,
    hypot,
    power,
    exp,
    exp2,
    expm1,
    log,
    log2,
    log10,
    log1p,
    erf,
    erfc,
    sin,
    cos,
    tan,
    asin,
    acos,
    atan,
    atan2,
    sinh,
    cosh,
    tanh,
    asinh,
    acosh,
    atanh,
)
from .core.record import (
    RECORD_DTYPE,
    RECORD_SIZE,
    RECORD_ALIGNMENT,
    to_bytes,
    from_bytes,
    byteswap_record,
    record_hash,
)

__version__ = "0.1.0"

__all__ = [
    # Rounding
    "EXACT_STEPS",
    "LIBM_STEPS",
    "PI",
    "PI_2",
    "TWO_PI",
    # Enclosure
    "Enclosure",
    "equal",
    "not_equal",
    "less_equal",
    "less",
    "greater_equal",
    "greater",
    "negate",
    "positive",
    "add",
    "subtract",
    "multiply",
    "divide",
    # Elementary functions
    "absolute",
    "sqrt",
    "cbrt",
    "hypot",
    "power",
    "exp",
    "exp2",
    "expm1",
    "log",
    "log2",
    "log10",
    "log1p",
    "erf",
    "erfc",
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "atan2",
    "sinh",
    "cosh",
    "tanh",
    "asinh",
    "acosh",
    "atanh",
    # Host interface
    "RECORD_DTYPE",
    "RECORD_SIZE",
    "RECORD_ALIGNMENT",
    "to_bytes",
    "from_bytes",
    "byteswap_record",
    "record_hash",
]
