"""Exception hierarchy for bertcodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from BertError for easy catching of any bertcodec-specific error.
"""

from __future__ import annotations


class BertError(Exception):
    """Base exception for all bertcodec errors."""

    pass


class EncodeError(BertError):
    """Raised when encoding a term fails.

    Examples:
        - Text longer than the 16-bit length field allows
        - Float outside the float32 range
        - Length or count that does not fit its wire field
    """

    pass


class DecodeError(BertError):
    """Raised when decoding binary data fails.

    Examples:
        - Version byte mismatch
        - Unknown or unsupported tag byte
        - Truncated data (insufficient bytes)
        - Text that does not decode with the configured encoding
    """

    pass


class UnsupportedTypeError(EncodeError, DecodeError):
    """Raised when a value or tag has no codec mapping.

    On encode this covers Python values the codec cannot classify (sets,
    dicts, booleans, tuples with 256 or more elements). On decode it covers
    tags that are recognised but deliberately not supported (large tuples).
    """

    pass


class BadMagicError(DecodeError):
    """Raised when the leading version byte is not 131."""

    pass


class UnknownTagError(DecodeError):
    """Raised when a tag byte is outside the supported set."""

    pass


class UnexpectedEndError(DecodeError):
    """Raised when the stream ends inside a fixed or declared-length payload."""

    pass


class MalformedFloatError(DecodeError):
    """Raised when the 31-byte float text cannot be parsed."""

    pass


class BindError(DecodeError):
    """Raised when a decoded term does not fit a record.

    Examples:
        - Term is not a tuple or list
        - Element count differs from the record's field count
        - Element type rejected by the record's field validation
    """

    pass


class FramingError(BertError):
    """Raised when BURP framing operations fail.

    Examples:
        - Length prefix inconsistent with the buffer
        - Declared frame size above the configured maximum
        - Trailing bytes inside a frame after the term
        - Truncated length prefix
    """

    pass
