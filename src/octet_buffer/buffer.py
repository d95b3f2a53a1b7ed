"""
Octet Buffer

Fixed-length sequence of octets with construction, comparison, bitwise,
slicing and big-endian integer conversion operations.

Every element is kept in [0, 255]; values are validated before they are
stored, so a failed operation never leaves a buffer partially modified.
A buffer may be frozen, after which any mutation raises
ImmutableViolationError.
"""

from __future__ import annotations
import builtins
import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .codec.bigendian import decode_uint, encode_uint, fits_width
from .codec.hashes import fnv1a
from .runtime.errors import (
    ArgumentInvalidError,
    ByteOutOfRangeError,
    ImmutableViolationError,
    IndexOutOfBoundsError,
    UnsupportedOperandError,
    ValueOutOfRangeError,
)

logger = logging.getLogger(__name__)

OCTET_MIN = 0x00
OCTET_MAX = 0xFF

# Width used by from_int and chunk size used by slice/slices/each_slice
DEFAULT_WIDTH = 16
DEFAULT_SLICE_SIZE = 16

_FILL_UNSET = object()


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _is_octet(b: Any) -> bool:
    return _is_int(b) and OCTET_MIN <= b <= OCTET_MAX


def _assert_octet(b: Any) -> None:
    if not _is_octet(b):
        raise ByteOutOfRangeError(f"invalid byte value: {b!r}", {"value": b})


def _assert_nonnegative(n: Any) -> None:
    if not _is_int(n) or n < 0:
        raise ArgumentInvalidError(f"n must be a nonnegative integer: {n!r}", {"width": n})


def _assert_positive(n: Any) -> None:
    if not _is_int(n) or not n > 0:
        raise ArgumentInvalidError(f"n must be a positive integer: {n!r}", {"width": n})


class Buffer:
    """
    Ordered, fixed-length, mutable-unless-frozen sequence of octets.

    Buffers compare and hash by value. Constructors are classmethods;
    ``Buffer(iterable)`` validates every element like ``Buffer.of``.
    """

    __slots__ = ("_octets", "_frozen")

    def __init__(self, octets: Iterable[int] = ()):
        """
        Initialize buffer from an iterable of byte values.

        Args:
            octets: Byte values in order, each in [0, 255]

        Raises:
            ByteOutOfRangeError: If any value is not a valid octet
        """
        values = list(octets)
        for b in values:
            _assert_octet(b)
        self._octets = bytearray(values)
        self._frozen = False

    @classmethod
    def _wrap(cls, octets: bytearray) -> Buffer:
        """Take ownership of an already validated bytearray."""
        buffer = cls.__new__(cls)
        buffer._octets = octets
        buffer._frozen = False
        return buffer

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def new(cls, n: int, fill: int = _FILL_UNSET,
            generator: Optional[Callable[[int], int]] = None) -> Buffer:
        """
        Create a buffer of ``n`` bytes.

        Without ``fill`` or ``generator`` every byte is 0x00. With ``fill``
        every byte is that value. With ``generator`` byte ``i`` is
        ``generator(i)``, called once per index in ascending order.

        Args:
            n: Buffer size, nonnegative
            fill: Byte value for every element
            generator: Callable producing the byte at each index

        Returns:
            New buffer

        Raises:
            ArgumentInvalidError: If n is negative or both fill and generator are given
            ByteOutOfRangeError: If the fill value or a generated value is not an octet
        """
        _assert_nonnegative(n)
        if generator is not None:
            if fill is not _FILL_UNSET:
                raise ArgumentInvalidError("fill and generator are mutually exclusive")
            octets = bytearray(n)
            for i in range(n):
                b = generator(i)
                _assert_octet(b)
                octets[i] = b
        elif fill is _FILL_UNSET:
            octets = bytearray(n)
        else:
            _assert_octet(fill)
            octets = bytearray([fill]) * n
        return cls._wrap(octets)

    @classmethod
    def of(cls, *octets: int) -> Buffer:
        """Create a buffer holding exactly the given byte values."""
        return cls(octets)

    @classmethod
    def join(cls, *buffers: Buffer) -> Buffer:
        """
        Concatenate buffers in argument order.

        Zero arguments yields an empty buffer.
        """
        octets = bytearray()
        for buffer in buffers:
            if not isinstance(buffer, Buffer):
                raise UnsupportedOperandError(
                    f"cannot join {type(buffer).__name__}",
                    {"operand_type": type(buffer).__name__},
                )
            octets.extend(buffer._octets)
        return cls._wrap(octets)

    @classmethod
    def unpack(cls, s: Union[builtins.bytes, bytearray, memoryview, str]) -> Buffer:
        """
        Create a buffer from the raw byte values of a byte string.

        A ``str`` is read as 8-bit code units, so every character must
        have a code point below 256.

        Args:
            s: Byte string

        Returns:
            New buffer whose elements are the raw bytes of ``s``
        """
        if isinstance(s, str):
            return cls(ord(c) for c in s)
        if isinstance(s, (builtins.bytes, bytearray, memoryview)):
            return cls._wrap(bytearray(s))
        raise UnsupportedOperandError(
            f"cannot unpack {type(s).__name__}",
            {"operand_type": type(s).__name__},
        )

    @classmethod
    def from_int(cls, k: int, n: int = DEFAULT_WIDTH) -> Buffer:
        """
        Create the ``n``-byte unsigned big-endian representation of ``k``.

        Args:
            k: Value in [0, 256**n)
            n: Width in bytes, nonnegative

        Returns:
            New buffer, most significant byte first, zero-padded on the left

        Raises:
            ArgumentInvalidError: If n is not a nonnegative integer
            ValueOutOfRangeError: If k is not an integer or does not fit in n bytes
        """
        _assert_nonnegative(n)
        if not _is_int(k) or not fits_width(k, n):
            raise ValueOutOfRangeError(
                f"value {k} does not fit in {n} bytes",
                {"value": k, "width": n},
            )
        return cls._wrap(bytearray(encode_uint(k, n)))

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def copy(self) -> Buffer:
        """Return an unfrozen buffer with an independent copy of the bytes."""
        return type(self)._wrap(bytearray(self._octets))

    def __copy__(self) -> Buffer:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> Buffer:
        return self.copy()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Buffer):
            return NotImplemented
        if len(self._octets) != len(other._octets):
            return False
        for a, b in zip(self._octets, other._octets):
            if a != b:
                return False
        return True

    def fnv_hash(self) -> int:
        """64-bit masked FNV-1a hash of the bytes."""
        return fnv1a(self._octets)

    def __hash__(self) -> int:
        return self.fnv_hash()

    def __repr__(self) -> str:
        return "Buffer[" + ", ".join("0x%02X" % b for b in self._octets) + "]"

    def __str__(self) -> str:
        return "-".join("%02X" % b for b in self._octets)

    def freeze(self) -> Buffer:
        """
        Mark this buffer immutable in place.

        Returns:
            This same buffer
        """
        if not self._frozen:
            self._frozen = True
            logger.debug("Froze buffer of size %d", len(self._octets))
        return self

    @property
    def frozen(self) -> bool:
        """Whether the buffer rejects mutation."""
        return self._frozen

    @property
    def size(self) -> int:
        return len(self._octets)

    @property
    def empty(self) -> bool:
        return not self._octets

    def __len__(self) -> int:
        return len(self._octets)

    def _assert_mutable(self) -> None:
        if self._frozen:
            raise ImmutableViolationError("can't modify frozen Buffer", {"size": len(self._octets)})

    def _assert_index(self, i: Any) -> None:
        if not isinstance(i, int) or isinstance(i, bool):
            raise UnsupportedOperandError(
                f"buffer indices must be integers, not {type(i).__name__}",
                {"operand_type": type(i).__name__},
            )
        size = len(self._octets)
        if i < 0 or i >= size:
            raise IndexOutOfBoundsError(
                f"index {i} out of bounds for size {size}",
                {"index": i, "size": size},
            )

    # ------------------------------------------------------------------
    # Integer conversion and successor
    # ------------------------------------------------------------------

    def to_int(self) -> int:
        """
        Interpret the bytes as an unsigned big-endian integer.

        An empty buffer converts to 0.
        """
        return decode_uint(self._octets)

    def succ(self) -> Buffer:
        """Return a copy incremented by one as a big-endian counter."""
        buffer = self.copy()
        buffer.succ_()
        return buffer

    def succ_(self) -> Buffer:
        """
        Increment in place as an unsigned big-endian counter.

        The carry runs from the last byte toward the first. When every
        byte is 0xFF the buffer wraps to all zeros without error; the
        length never changes.

        Returns:
            This same buffer

        Raises:
            ImmutableViolationError: If the buffer is frozen
        """
        self._assert_mutable()
        carry = 1
        for i in range(len(self._octets) - 1, -1, -1):
            b = self._octets[i] + carry
            if b == 0x100:
                self._octets[i] = 0x00
            else:
                self._octets[i] = b
                carry = 0
                break
        if carry:
            logger.debug("Buffer counter of size %d wrapped to zero", len(self._octets))
        return self

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def concat(self, other: Buffer) -> Buffer:
        """Return a new buffer with this buffer's bytes followed by ``other``'s."""
        if not isinstance(other, Buffer):
            raise UnsupportedOperandError(
                f"cannot concatenate {type(other).__name__}",
                {"operand_type": type(other).__name__},
            )
        return type(self)._wrap(self._octets + other._octets)

    def __add__(self, other: Any) -> Buffer:
        if not isinstance(other, Buffer):
            return NotImplemented
        return self.concat(other)

    def xor(self, key: Union[int, Buffer]) -> Buffer:
        """
        XOR every byte against a key.

        An ``int`` key is a single octet applied to every byte. A Buffer
        key is repeated over the length of this buffer, so byte ``i`` is
        XORed with ``key[i % len(key)]``.

        Args:
            key: Single octet or key buffer

        Returns:
            New buffer of the same length as this one

        Raises:
            ByteOutOfRangeError: If an int key is not an octet
            ArgumentInvalidError: If a Buffer key is empty
            UnsupportedOperandError: For any other kind of key
        """
        if isinstance(key, int) and not isinstance(key, bool):
            _assert_octet(key)
            return self._xor_byte(key)
        if isinstance(key, Buffer):
            return self._xor_buffer(key)
        raise UnsupportedOperandError(
            f"unsupported operand type for ^: {type(key).__name__}",
            {"operand_type": type(key).__name__},
        )

    __xor__ = xor

    def _xor_byte(self, key: int) -> Buffer:
        return type(self)._wrap(bytearray(b ^ key for b in self._octets))

    def _xor_buffer(self, key: Buffer) -> Buffer:
        m = len(key._octets)
        if m == 0:
            raise ArgumentInvalidError("xor key must not be empty", {"width": 0})
        k = key._octets
        return type(self)._wrap(bytearray(b ^ k[i % m] for i, b in enumerate(self._octets)))

    # ------------------------------------------------------------------
    # Indexing and iteration
    # ------------------------------------------------------------------

    def __getitem__(self, i: int) -> int:
        self._assert_index(i)
        return self._octets[i]

    def __setitem__(self, i: int, b: int) -> None:
        self._assert_index(i)
        _assert_octet(b)
        self._assert_mutable()
        self._octets[i] = b

    def byte(self, i: int) -> int:
        """Read the byte at index ``i``; same bounds rules as indexing."""
        return self[i]

    def bytes(self) -> List[int]:
        """Return the byte values as a new list."""
        return list(self._octets)

    def each_byte(self, visitor: Callable[[int], Any]) -> None:
        """Call ``visitor`` with each byte in ascending index order."""
        for b in self._octets:
            visitor(b)

    def __iter__(self) -> Iterator[int]:
        return iter(self._octets)

    def pack(self) -> builtins.bytes:
        """Encode as a platform byte string; inverse of ``unpack``."""
        return builtins.bytes(self._octets)

    def __bytes__(self) -> builtins.bytes:
        return self.pack()

    # ------------------------------------------------------------------
    # Slicing
    # ------------------------------------------------------------------

    def _copy(self, i: int, j: int) -> Buffer:
        return type(self)._wrap(self._octets[i:j])

    def slice(self, i: int, n: int = DEFAULT_SLICE_SIZE) -> Buffer:
        """
        Return up to ``n`` bytes starting at index ``i``.

        The result is clipped at the end of the buffer, but ``i`` itself
        must be a valid index.

        Args:
            i: Start index in [0, size)
            n: Maximum slice length, positive

        Returns:
            New buffer

        Raises:
            ArgumentInvalidError: If n is not positive
            IndexOutOfBoundsError: If i is not a valid index
        """
        _assert_positive(n)
        self._assert_index(i)
        return self._copy(i, min(i + n, len(self._octets)))

    def slices(self, n: int = DEFAULT_SLICE_SIZE) -> List[Buffer]:
        """
        Partition into consecutive chunks of ``n`` bytes.

        The last chunk may be shorter. An empty buffer yields no chunks.
        """
        _assert_positive(n)
        size = len(self._octets)
        return [self._copy(i, min(i + n, size)) for i in range(0, size, n)]

    def each_slice(self, visitor: Callable[[Buffer], Any], n: int = DEFAULT_SLICE_SIZE) -> None:
        """Call ``visitor`` with each chunk that ``slices(n)`` would return."""
        _assert_positive(n)
        size = len(self._octets)
        for i in range(0, size, n):
            visitor(self._copy(i, min(i + n, size)))

    # ------------------------------------------------------------------
    # Pydantic integration
    # ------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Return a Pydantic CoreSchema that validates and serializes a Buffer."""
        octet_list = core_schema.list_schema(core_schema.int_schema(ge=OCTET_MIN, le=OCTET_MAX))
        return core_schema.json_or_python_schema(
            json_schema=core_schema.no_info_after_validator_function(cls._validate, octet_list),
            python_schema=core_schema.no_info_before_validator_function(
                cls._validate,
                core_schema.is_instance_schema(cls),
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda buffer: buffer.bytes(),
                return_schema=octet_list,
            ),
        )

    @classmethod
    def _validate(cls, value: Any) -> Buffer:
        """Validate and convert the input to a Buffer."""
        if isinstance(value, cls):
            return value
        if isinstance(value, (builtins.bytes, bytearray)):
            return cls.unpack(value)
        if isinstance(value, (list, tuple)):
            return cls.of(*value)
        raise ValueError(f"Invalid Buffer: {value!r}")


__all__ = [
    "Buffer",
    "DEFAULT_WIDTH",
    "DEFAULT_SLICE_SIZE",
    "OCTET_MIN",
    "OCTET_MAX",
]
