"""
Buffer Error Model

This module provides the error handling framework for octet buffers.
Every failure is a local, deterministic validation error raised before
any state is touched; nothing here is retryable.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, Type
from enum import IntEnum


class ErrorCode(IntEnum):
    """Buffer error codes."""

    # Success
    OK = 0

    # General errors
    UNKNOWN = 1

    # Argument errors (100-199)
    ARGUMENT_INVALID = 100

    # Range errors (200-299)
    BYTE_OUT_OF_RANGE = 200
    VALUE_OUT_OF_RANGE = 201

    # Index errors (300-399)
    INDEX_OUT_OF_BOUNDS = 300

    # State errors (400-499)
    IMMUTABLE_VIOLATION = 400

    # Type errors (500-599)
    UNSUPPORTED_OPERAND = 500


class OctetBufferError(Exception):
    """
    Base class for all buffer errors.

    Provides structured error information: a code, a message and the
    offending values in ``details``.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a buffer error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ArgumentInvalidError(OctetBufferError, ValueError):
    """A size, count or width parameter violates its precondition."""

    def __init__(self, message: str = "Invalid argument",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.ARGUMENT_INVALID, details, cause)


class ByteOutOfRangeError(OctetBufferError, ValueError):
    """A proposed element value is outside [0, 255]."""

    def __init__(self, message: str = "Invalid byte value",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.BYTE_OUT_OF_RANGE, details, cause)


class ValueOutOfRangeError(OctetBufferError, ValueError):
    """An integer does not fit in the requested byte width."""

    def __init__(self, message: str = "Value out of range",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.VALUE_OUT_OF_RANGE, details, cause)


class IndexOutOfBoundsError(OctetBufferError, IndexError):
    """An index is negative or not less than the buffer size."""

    def __init__(self, message: str = "Index out of bounds",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INDEX_OUT_OF_BOUNDS, details, cause)


class ImmutableViolationError(OctetBufferError, TypeError):
    """A mutation was attempted on a frozen buffer."""

    def __init__(self, message: str = "Buffer is frozen",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.IMMUTABLE_VIOLATION, details, cause)


class UnsupportedOperandError(OctetBufferError, TypeError):
    """An operand is of a kind the operation does not accept."""

    def __init__(self, message: str = "Unsupported operand",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_OPERAND, details, cause)


_ERRORS_BY_CODE: Dict[ErrorCode, Type[OctetBufferError]] = {
    ErrorCode.ARGUMENT_INVALID: ArgumentInvalidError,
    ErrorCode.BYTE_OUT_OF_RANGE: ByteOutOfRangeError,
    ErrorCode.VALUE_OUT_OF_RANGE: ValueOutOfRangeError,
    ErrorCode.INDEX_OUT_OF_BOUNDS: IndexOutOfBoundsError,
    ErrorCode.IMMUTABLE_VIOLATION: ImmutableViolationError,
    ErrorCode.UNSUPPORTED_OPERAND: UnsupportedOperandError,
}


def error_from_dict(data: Dict[str, Any]) -> Optional[OctetBufferError]:
    """
    Create the appropriate error from its dictionary representation.

    Args:
        data: Dictionary produced by ``OctetBufferError.to_dict``

    Returns:
        Specific error instance, or None for ``ErrorCode.OK``
    """
    message = data.get("message", "Unknown error")
    details = data.get("details")

    try:
        code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
    except ValueError:
        code = ErrorCode.UNKNOWN

    if code == ErrorCode.OK:
        return None

    error_cls = _ERRORS_BY_CODE.get(code)
    if error_cls is None:
        return OctetBufferError(message, code, details)
    return error_cls(message, details)


__all__ = [
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
