"""
Octet Buffer

A fixed-length, freezable sequence of octets with big-endian integer
conversion, counter increment, XOR, concatenation and slicing.
"""

from .buffer import Buffer, DEFAULT_WIDTH, DEFAULT_SLICE_SIZE, OCTET_MIN, OCTET_MAX
from .runtime.errors import *

__version__ = "1.0.0"
__all__ = [
    "Buffer",
    "DEFAULT_WIDTH",
    "DEFAULT_SLICE_SIZE",
    "OCTET_MIN",
    "OCTET_MAX",

    # Errors
    "ErrorCode",
    "OctetBufferError",
    "ArgumentInvalidError",
    "ByteOutOfRangeError",
    "ValueOutOfRangeError",
    "IndexOutOfBoundsError",
    "ImmutableViolationError",
    "UnsupportedOperandError",
    "error_from_dict",
]
