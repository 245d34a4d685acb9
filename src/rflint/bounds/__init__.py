"""
Bounds Module - Rounded Interval Enclosures

Layers, leaves first:
- Rounding: directed stepping and rounded constants
- Enclosure: conversion, comparison and arithmetic
- Elementary functions: monotonic, domain-limited and periodic functions

Every result encloses the true value of the operation on its inputs.
"""

from .rounding import (
    EXACT_STEPS,
    LIBM_STEPS,
    MAX_EXACT_INT,
    PI,
    PI_2,
    TWO_PI,
    RoundedConstant,
    step_down,
    step_up,
)
from .enclosure import (
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
from .elementary import (
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

__all__ = [
    # Rounding
    'EXACT_STEPS',
    'LIBM_STEPS',
    'MAX_EXACT_INT',
    'PI',
    'PI_2',
    'TWO_PI',
    'RoundedConstant',
    'step_down',
    'step_up',
    # Enclosure
    'Enclosure',
    'equal',
    'not_equal',
    'less_equal',
    'less',
    'greater_equal',
    'greater',
    'negate',
    'positive',
    'add',
    'subtract',
    'multiply',
    'divide',
    # Elementary functions
    'absolute',
    'sqrt',
    'cbrt',
    'hypot',
    'power',
    'exp',
    'exp2',
    'expm1',
    'log',
    'log2',
    'log10',
    'log1p',
    'erf',
    'erfc',
    'sin',
    'cos',
    'tan',
    'asin',
    'acos',
    'atan',
    'atan2',
    'sinh',
    'cosh',
    'tanh',
    'asinh',
    'acosh',
    'atanh',
]
