"""
Shared fixtures for octet buffer tests.
"""

import pytest

from octet_buffer import Buffer


@pytest.fixture
def abc_buffer():
    """Three-byte buffer holding ASCII 'abc'."""
    return Buffer.of(0x61, 0x62, 0x63)


@pytest.fixture
def empty_buffer():
    """Buffer with no bytes."""
    return Buffer.of()


@pytest.fixture
def counting_buffer():
    """Forty-byte buffer whose byte i is i, spanning several default chunks."""
    return Buffer.new(40, generator=lambda i: i)
