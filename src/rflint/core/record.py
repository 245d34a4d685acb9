"""
Fixed-Layout Enclosure Records

The raw memory image a host array framework works with: three binary64
fields in the fixed order lower bound, upper bound, nominal value.

Provides:
- The numpy structured dtype with its size and alignment
- Conversion to and from record scalars and raw bytes
- Per-field byte swapping
- A deterministic one-at-a-time hash of the raw bytes

Note: record_hash is consistent with bitwise identity, not with the overlap
equality of Enclosure.__eq__. Two overlapping enclosures compare equal but
usually hash differently.
"""

from typing import Union
import numpy as np

from ..bounds.enclosure import Enclosure


RECORD_DTYPE = np.dtype(
    [('lo', np.float64), ('hi', np.float64), ('v', np.float64)],
    align=True
)
RECORD_SIZE = RECORD_DTYPE.itemsize
RECORD_ALIGNMENT = RECORD_DTYPE.alignment

_BYTE_ORDERS = ('<', '>', '=')

_MASK32 = 0xFFFFFFFF

Buffer = Union[bytes, bytearray, memoryview]


def _dtype_for(byteorder: str) -> np.dtype:
    if byteorder not in _BYTE_ORDERS:
        raise ValueError(f"Unknown byte order {byteorder!r}, expected one of {_BYTE_ORDERS}")
    return RECORD_DTYPE.newbyteorder(byteorder)


def to_record(f: Enclosure) -> np.void:
    """Pack an enclosure into a numpy record scalar."""
    return np.array((f.lo, f.hi, f.v), dtype=RECORD_DTYPE)[()]


def from_record(rec: np.void) -> Enclosure:
    return Enclosure(float(rec['lo']), float(rec['hi']), float(rec['v']))


def to_bytes(f: Enclosure, byteorder: str = '=') -> bytes:
    """
    Raw record image.

    Args:
        f: Enclosure to pack
        byteorder: '<' little endian, '>' big endian, '=' native

    Returns:
        RECORD_SIZE bytes
    """
    return np.array((f.lo, f.hi, f.v), dtype=_dtype_for(byteorder)).tobytes()


def from_bytes(buf: Buffer, byteorder: str = '=') -> Enclosure:
    """Unpack a raw record image written by to_bytes."""
    dtype = _dtype_for(byteorder)
    if len(buf) != RECORD_SIZE:
        raise ValueError(f"Record must be {RECORD_SIZE} bytes, got {len(buf)}")
    rec = np.frombuffer(bytes(buf), dtype=dtype, count=1)[0]
    return from_record(rec)


def byteswap_record(buf: Buffer) -> bytes:
    """Reverse the byte order of each field, keeping the field order."""
    if len(buf) != RECORD_SIZE:
        raise ValueError(f"Record must be {RECORD_SIZE} bytes, got {len(buf)}")
    return np.frombuffer(bytes(buf), dtype=RECORD_DTYPE, count=1).byteswap().tobytes()


def one_at_a_time(data: bytes) -> int:
    """Jenkins one-at-a-time hash, 32-bit unsigned."""
    h = 0
    for byte in data:
        h = (h + byte) & _MASK32
        h = (h + (h << 10)) & _MASK32
        h ^= h >> 6
    h = (h + (h << 3)) & _MASK32
    h ^= h >> 11
    h = (h + (h << 15)) & _MASK32
    return h


def record_hash(f: Enclosure) -> int:
    """Hash of the native raw record image of f."""
    return one_at_a_time(to_bytes(f))
