"""
Octet Codec Module

Low-level helpers shared by the Buffer type.

Key components:
- bigendian.py: Unsigned big-endian integer encoding and decoding
- hashes.py: FNV-1a hashing of octet sequences
"""

from .bigendian import decode_uint, encode_uint, fits_width
from .hashes import FNV_OFFSET_BASIS, FNV_PRIME, HASH_MASK, fnv1a

__all__ = [
    "decode_uint",
    "encode_uint",
    "fits_width",
    "fnv1a",
    "FNV_OFFSET_BASIS",
    "FNV_PRIME",
    "HASH_MASK",
]
