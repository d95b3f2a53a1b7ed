"""
Hash Functions

FNV-1a over a sequence of octets. The algorithm is the 32-bit variant
(offset basis 0x811C9DC5, prime 0x01000193) but the running value is not
truncated to 32 bits; the result is masked to 64 bits instead.
"""

from typing import Iterable

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
HASH_MASK = 0xFFFFFFFFFFFFFFFF


def fnv1a(octets: Iterable[int]) -> int:
    """
    Compute the 64-bit masked FNV-1a hash of a sequence of octets.

    Masking after every step gives the same low 64 bits as masking once
    at the end, since XOR and multiplication only carry upward.

    Args:
        octets: Byte values in order

    Returns:
        Hash value in [0, 2**64)
    """
    h = FNV_OFFSET_BASIS
    for b in octets:
        h = ((h ^ b) * FNV_PRIME) & HASH_MASK
    return h
