"""
Big-Endian Integer Codec

Unsigned big-endian encoding of arbitrary-precision integers into a fixed
number of octets, and the reverse. Widths are validated by the caller.
"""

from typing import List, Sequence


def encode_uint(k: int, n: int) -> List[int]:
    """
    Encode an unsigned integer as exactly ``n`` big-endian octets.

    Args:
        k: Value in [0, 256**n)
        n: Width in bytes

    Returns:
        Octets, most significant first, zero-padded on the left
    """
    return list(k.to_bytes(n, "big"))


def decode_uint(octets: Sequence[int]) -> int:
    """
    Decode big-endian octets as an unsigned integer.

    An empty sequence decodes to 0.

    Args:
        octets: Byte values, most significant first

    Returns:
        Unsigned integer value
    """
    return int.from_bytes(octets, "big")


def fits_width(k: int, n: int) -> bool:
    """Check that ``k`` is representable unsigned in ``n`` bytes."""
    return 0 <= k < (1 << (8 * n))
