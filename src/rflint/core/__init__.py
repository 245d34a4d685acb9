"""
Core Module - Host Interface

Provides:
- Fixed-layout record dtype (lo, hi, v)
- Raw byte conversion and per-field byte swapping
- Deterministic raw-byte hash
"""

from .record import (
    RECORD_DTYPE,
    RECORD_SIZE,
    RECORD_ALIGNMENT,
    to_record,
    from_record,
    to_bytes,
    from_bytes,
    byteswap_record,
    one_at_a_time,
    record_hash,
)

__all__ = [
    'RECORD_DTYPE',
    'RECORD_SIZE',
    'RECORD_ALIGNMENT',
    'to_record',
    'from_record',
    'to_bytes',
    'from_bytes',
    'byteswap_record',
    'one_at_a_time',
    'record_hash',
]
