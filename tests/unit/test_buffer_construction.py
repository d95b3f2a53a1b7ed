"""
Buffer construction tests.

Covers new/of/join/unpack/from_int and the octet range check applied
at every construction site.
"""

import pytest

from octet_buffer import (
    Buffer,
    ArgumentInvalidError,
    ByteOutOfRangeError,
    UnsupportedOperandError,
    ValueOutOfRangeError,
)


@pytest.mark.unit
class TestOf:
    """Test Buffer.of and the Buffer(iterable) constructor."""

    @pytest.mark.parametrize("value", [-1, 256, 1000])
    def test_rejects_invalid_byte(self, value):
        """Values outside [0, 255] are rejected."""
        with pytest.raises(ByteOutOfRangeError):
            Buffer.of(value)

    def test_rejects_non_integer(self):
        with pytest.raises(ByteOutOfRangeError):
            Buffer.of(1.5)
        with pytest.raises(ByteOutOfRangeError):
            Buffer.of(True)

    def test_returns_buffer(self):
        buffer = Buffer.of(0x00, 0xFF)
        assert isinstance(buffer, Buffer)
        assert buffer.bytes() == [0x00, 0xFF]

    def test_constructor_accepts_iterable(self):
        assert Buffer(range(3)) == Buffer.of(0x00, 0x01, 0x02)
        assert Buffer() == Buffer.of()

    def test_range_error_is_value_error(self):
        """Range errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            Buffer.of(256)

    def test_error_keeps_raw_value(self):
        with pytest.raises(ByteOutOfRangeError) as exc_info:
            Buffer.of(0x100)
        assert exc_info.value.details == {"value": 0x100}


@pytest.mark.unit
class TestNew:
    """Test Buffer.new with size, fill and generator."""

    def test_rejects_negative_size(self):
        with pytest.raises(ArgumentInvalidError):
            Buffer.new(-1)

    @pytest.mark.parametrize("n", [2.0, "3", None, True])
    def test_rejects_non_integer_size(self, n):
        """Sizes must be real integers, not floats, strings or bools."""
        with pytest.raises(ArgumentInvalidError):
            Buffer.new(n)

    def test_empty(self):
        assert Buffer.new(0) == Buffer.of()

    def test_zero_filled(self):
        assert Buffer.new(3) == Buffer.of(0x00, 0x00, 0x00)

    @pytest.mark.parametrize("fill", [-1, 256])
    def test_rejects_invalid_fill(self, fill):
        with pytest.raises(ByteOutOfRangeError):
            Buffer.new(3, fill)

    def test_fill(self):
        assert Buffer.new(3, 0x20) == Buffer.of(0x20, 0x20, 0x20)

    @pytest.mark.parametrize("value", [-1, 256])
    def test_rejects_invalid_generated_byte(self, value):
        with pytest.raises(ByteOutOfRangeError):
            Buffer.new(3, generator=lambda i: value)

    def test_generator(self):
        buffer = Buffer.new(3, generator=lambda i: 0x30 + i)
        assert buffer == Buffer.of(0x30, 0x31, 0x32)

    def test_generator_called_once_per_index_in_order(self):
        calls = []

        def generator(i):
            calls.append(i)
            return i

        Buffer.new(5, generator=generator)
        assert calls == [0, 1, 2, 3, 4]

    def test_generator_stops_at_first_invalid_value(self):
        """Validation happens before each store, so later indices are never produced."""
        calls = []

        def generator(i):
            calls.append(i)
            return 0x100 if i == 1 else i

        with pytest.raises(ByteOutOfRangeError):
            Buffer.new(4, generator=generator)
        assert calls == [0, 1]

    def test_fill_and_generator_are_exclusive(self):
        with pytest.raises(ArgumentInvalidError):
            Buffer.new(3, 0x20, generator=lambda i: i)


@pytest.mark.unit
class TestJoin:
    """Test Buffer.join."""

    def test_joins_in_order(self):
        buffer = Buffer.join(Buffer.of(0x61), Buffer.of(0x62, 0x63))
        assert buffer == Buffer.of(0x61, 0x62, 0x63)

    def test_no_arguments(self):
        assert Buffer.join() == Buffer.of()

    def test_inputs_are_not_shared(self):
        first = Buffer.of(0x61)
        joined = Buffer.join(first, Buffer.of(0x62))
        joined[0] = 0x7A
        assert first == Buffer.of(0x61)

    def test_rejects_non_buffer(self):
        with pytest.raises(UnsupportedOperandError):
            Buffer.join(Buffer.of(0x61), b"b")


@pytest.mark.unit
class TestUnpack:
    """Test Buffer.unpack from byte strings."""

    def test_bytes(self):
        assert Buffer.unpack(b"abc") == Buffer.of(0x61, 0x62, 0x63)

    def test_bytearray_and_memoryview(self):
        assert Buffer.unpack(bytearray(b"\x00\xff")) == Buffer.of(0x00, 0xFF)
        assert Buffer.unpack(memoryview(b"\x01")) == Buffer.of(0x01)

    def test_str_as_code_units(self):
        assert Buffer.unpack("abc") == Buffer.of(0x61, 0x62, 0x63)
        assert Buffer.unpack("\xff") == Buffer.of(0xFF)

    def test_str_with_wide_character(self):
        with pytest.raises(ByteOutOfRangeError):
            Buffer.unpack("Ā")

    def test_source_is_not_shared(self):
        source = bytearray(b"ab")
        buffer = Buffer.unpack(source)
        source[0] = 0x7A
        assert buffer == Buffer.of(0x61, 0x62)

    def test_rejects_other_types(self):
        with pytest.raises(UnsupportedOperandError):
            Buffer.unpack([0x61])

    @pytest.mark.parametrize("s", [b"", b"abc", bytes(range(256))])
    def test_pack_inverts_unpack(self, s):
        assert Buffer.unpack(s).pack() == s


@pytest.mark.unit
class TestFromInt:
    """Test Buffer.from_int big-endian encoding."""

    def test_rejects_negative(self):
        with pytest.raises(ValueOutOfRangeError):
            Buffer.from_int(-1)

    @pytest.mark.parametrize("k, expected", [
        (0, [0x00, 0x00, 0x00]),
        (1, [0x00, 0x00, 0x01]),
        (0x010203, [0x01, 0x02, 0x03]),
        (16777215, [0xFF, 0xFF, 0xFF]),
    ])
    def test_three_byte_width(self, k, expected):
        assert Buffer.from_int(k, 3).bytes() == expected

    def test_rejects_value_too_wide(self):
        with pytest.raises(ValueOutOfRangeError):
            Buffer.from_int(16777216, 3)

    def test_default_width_is_sixteen(self):
        buffer = Buffer.from_int(1)
        assert buffer.size == 16
        assert buffer.bytes() == [0x00] * 15 + [0x01]
        assert Buffer.from_int(256 ** 16 - 1) == Buffer.new(16, 0xFF)
        with pytest.raises(ValueOutOfRangeError):
            Buffer.from_int(256 ** 16)

    def test_rejects_negative_width(self):
        with pytest.raises(ArgumentInvalidError):
            Buffer.from_int(0, -1)

    def test_negative_width_checked_before_value(self):
        with pytest.raises(ArgumentInvalidError):
            Buffer.from_int(-5, -1)

    def test_zero_width(self):
        """Zero bytes can only represent zero."""
        assert Buffer.from_int(0, 0) == Buffer.of()
        with pytest.raises(ValueOutOfRangeError):
            Buffer.from_int(1, 0)

    def test_error_details(self):
        with pytest.raises(ValueOutOfRangeError) as exc_info:
            Buffer.from_int(256, 1)
        assert exc_info.value.details == {"value": 256, "width": 1}

    @pytest.mark.parametrize("k", [1.5, 1.0, "1", None, True, False])
    def test_rejects_non_integer_value(self, k):
        with pytest.raises(ValueOutOfRangeError):
            Buffer.from_int(k, 3)

    def test_bool_value_rejected_at_width_one(self):
        with pytest.raises(ValueOutOfRangeError):
            Buffer.from_int(True, 1)

    @pytest.mark.parametrize("n", [3.0, "3", True])
    def test_rejects_non_integer_width(self, n):
        with pytest.raises(ArgumentInvalidError):
            Buffer.from_int(1, n)


class SubBuffer(Buffer):
    """Subclass used to check derived buffers keep their type."""

    __slots__ = ()


@pytest.mark.unit
class TestSubclassing:
    """Test that derived buffers have the receiver's type."""

    def test_constructors(self):
        assert type(SubBuffer.of(0x01)) is SubBuffer
        assert type(SubBuffer.new(2)) is SubBuffer
        assert type(SubBuffer.from_int(1, 2)) is SubBuffer

    def test_derived_operations(self):
        buffer = SubBuffer.of(0x61, 0x62, 0x63)
        assert type(buffer.copy()) is SubBuffer
        assert type(buffer.succ()) is SubBuffer
        assert type(buffer + Buffer.of(0x64)) is SubBuffer
        assert type(buffer ^ 0x20) is SubBuffer
        assert type(buffer ^ Buffer.of(0x20)) is SubBuffer
        assert type(buffer.slice(0, 2)) is SubBuffer
        assert all(type(chunk) is SubBuffer for chunk in buffer.slices(2))
