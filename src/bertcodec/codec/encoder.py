"""BERT encoder for Python values.

This module provides encode() and encode_to(), which classify a Python value
by its runtime type and emit the tag-prefixed BERT representation.
"""

from __future__ import annotations

import numbers
import struct
from typing import Any, BinaryIO, Iterator, Optional

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import EncodeError, UnsupportedTypeError
from ..models.terms import Atom, Bitstring, Encodable, List
from .byteio import ByteWriter
from .tags import (
    FLOAT_TEXT_SIZE,
    INT_MAX,
    INT_MIN,
    SMALL_INT_MAX,
    SMALL_TUPLE_MAX_ARITY,
    TEXT_MAX_LENGTH,
    Tag,
)

_F32 = struct.Struct(">f")


def encode(value: Any, *, config: Optional[CodecConfig] = None) -> bytes:
    """Encode a Python value to BERT.

    The result always starts with the version byte (131) followed by exactly
    one tag-encoded term.

    Args:
        value: Value to encode (see the type mapping below)
        config: Codec configuration (default: DEFAULT_CONFIG)

    Returns:
        BERT-encoded bytes

    Raises:
        UnsupportedTypeError: If the value (or a nested element) has no mapping
        EncodeError: If a value does not fit its wire representation

    Type mapping, checked in this order:
        - Encodable: replaced by ``value.to_term()``
        - None: nil (106)
        - bool: rejected; send ``Atom("true")`` / ``Atom("false")`` instead
        - int and other Integral: small int (97), int (98) or bignum (110/111)
        - float and other Real: float (99)
        - Atom: atom (100); other str: string (107)
        - bytes, bytearray, memoryview: binary (109)
        - tuple: small tuple (104)
        - list: list (108)
        - Bitstring: bitstring (77), or binary (109) when byte-aligned
        - List: list (108)

    Examples:
        ```python
        from bertcodec import Atom, encode

        encode(1)             # b"\\x83a\\x01"
        encode(Atom("foo"))   # b"\\x83d\\x00\\x03foo"
        encode((Atom("reply"), 42))
        ```
    """
    config = config or DEFAULT_CONFIG
    writer = ByteWriter()
    writer.write_u8(Tag.VERSION)
    _write_term(writer, value, config)
    return writer.to_bytes()


def encode_to(stream: BinaryIO, value: Any, *, config: Optional[CodecConfig] = None) -> None:
    """Encode a value and write it to a binary stream.

    The whole encoding is built in memory first; the stream is written only
    if encoding succeeds, so a failure never leaves partial output behind.

    Args:
        stream: Writable binary stream
        value: Value to encode
        config: Codec configuration (default: DEFAULT_CONFIG)

    Raises:
        UnsupportedTypeError: If the value has no mapping
        EncodeError: If a value does not fit its wire representation
    """
    data = encode(value, config=config)
    stream.write(data)


_END = object()


def _write_term(writer: ByteWriter, value: Any, config: CodecConfig) -> None:
    """Write one tag-prefixed term, nested containers included.

    Open tuples and lists are kept on an explicit stack of element iterators
    rather than the call stack, so nesting is bounded only by config.max_depth.

    Args:
        writer: ByteWriter to write to
        value: Value to encode
        config: Codec configuration

    Raises:
        UnsupportedTypeError: If the value has no mapping
        EncodeError: If nesting exceeds config.max_depth
    """
    # (remaining elements, byte written after the last one)
    stack: list[tuple[Iterator[Any], Optional[int]]] = []

    while True:
        if len(stack) > config.max_depth:
            raise EncodeError(f"Term nesting exceeds max_depth={config.max_depth}")

        value = _unwrap(value, config)

        if isinstance(value, tuple):
            _write_small_tuple_header(writer, value)
            stack.append((iter(value), None))
        elif isinstance(value, (list, List)):
            items = value.items if isinstance(value, List) else value
            writer.write_u8(Tag.LIST)
            writer.write_u32(len(items))
            stack.append((iter(items), Tag.NIL))
        else:
            _write_scalar(writer, value, config)

        # Move to the next element, closing every container that runs out
        while stack:
            elements, tail = stack[-1]
            value = next(elements, _END)
            if value is not _END:
                break
            stack.pop()
            if tail is not None:
                writer.write_u8(tail)
        else:
            return


def _unwrap(value: Any, config: CodecConfig) -> Any:
    """Replace Encodable values by their terms.

    An Encodable may return another Encodable; chains longer than
    config.max_depth (including one that returns itself) are rejected.
    """
    for _ in range(config.max_depth):
        if not isinstance(value, Encodable):
            return value
        value = value.to_term()

    if isinstance(value, Encodable):
        raise EncodeError(
            f"{type(value).__name__}.to_term() did not produce a term "
            f"within max_depth={config.max_depth} steps"
        )
    return value


def _write_scalar(writer: ByteWriter, value: Any, config: CodecConfig) -> None:
    """Write any non-container value.

    Raises:
        UnsupportedTypeError: If the value has no mapping
    """
    if value is None:
        writer.write_u8(Tag.NIL)
        return

    # bool is an Integral subclass, so it must be rejected first
    if isinstance(value, bool):
        raise UnsupportedTypeError(
            f"Cannot encode bool {value!r}; use Atom('true') or Atom('false')"
        )

    if isinstance(value, numbers.Integral):
        _write_integer(writer, int(value))
        return

    if isinstance(value, numbers.Real):
        _write_float(writer, float(value))
        return

    if isinstance(value, str):
        if isinstance(value, Atom):
            _write_text(writer, Tag.ATOM, value, config)
        else:
            _write_text(writer, Tag.STRING, value, config)
        return

    if isinstance(value, (bytes, bytearray, memoryview)):
        _write_binary(writer, bytes(value))
        return

    if isinstance(value, Bitstring):
        _write_bitstring(writer, value)
        return

    raise UnsupportedTypeError(f"Cannot encode value of type {type(value).__name__}")


def _write_integer(writer: ByteWriter, value: int) -> None:
    """Write an integer using the narrowest tag that holds it."""
    if 0 <= value <= SMALL_INT_MAX:
        writer.write_u8(Tag.SMALL_INT)
        writer.write_u8(value)
        return

    if INT_MIN <= value <= INT_MAX:
        writer.write_u8(Tag.INT)
        writer.write_i32(value)
        return

    _write_bignum(writer, value)


def _write_bignum(writer: ByteWriter, value: int) -> None:
    """Write an integer outside the int32 range as a bignum.

    The magnitude is written least significant byte first, as Erlang's
    SMALL_BIG_EXT / LARGE_BIG_EXT require.
    """
    magnitude = abs(value)
    size = (magnitude.bit_length() + 7) // 8
    digits = magnitude.to_bytes(size, "big")[::-1]

    if size <= 0xFF:
        writer.write_u8(Tag.SMALL_BIGNUM)
        writer.write_u8(size)
    else:
        writer.write_u8(Tag.LARGE_BIGNUM)
        writer.write_u32(size)
    writer.write_u8(1 if value < 0 else 0)
    writer.write_bytes(digits)


def _write_float(writer: ByteWriter, value: float) -> None:
    """Write a float as 31 bytes of null-padded scientific notation.

    The value is rounded to float32 first; ``%.20e`` then prints the exact
    decimal expansion of that float32.
    """
    try:
        (single,) = _F32.unpack(_F32.pack(value))
    except (OverflowError, struct.error) as err:
        raise EncodeError(f"Float {value!r} is outside the float32 range") from err

    text = ("%.20e" % single).encode("ascii")
    writer.write_u8(Tag.FLOAT)
    writer.write_bytes(text.ljust(FLOAT_TEXT_SIZE, b"\x00"))


def _write_text(writer: ByteWriter, tag: Tag, value: str, config: CodecConfig) -> None:
    """Write an atom or string: 2-byte length followed by the text bytes."""
    try:
        data = value.encode(config.text_encoding)
    except UnicodeEncodeError as err:
        raise EncodeError(
            f"Cannot encode {value!r} with text encoding {config.text_encoding}: {err}"
        ) from err

    if len(data) > TEXT_MAX_LENGTH:
        kind = "Atom" if tag == Tag.ATOM else "String"
        raise EncodeError(
            f"{kind} is {len(data)} bytes long; the maximum is {TEXT_MAX_LENGTH}"
        )

    writer.write_u8(tag)
    writer.write_u16(len(data))
    writer.write_bytes(data)


def _write_binary(writer: ByteWriter, data: bytes) -> None:
    """Write raw bytes with a 4-byte length."""
    writer.write_u8(Tag.BINARY)
    writer.write_u32(len(data))
    writer.write_bytes(data)


def _write_bitstring(writer: ByteWriter, value: Bitstring) -> None:
    """Write a bitstring, or a binary when the bit length is byte-aligned.

    The data is left-padded with zero bytes up to the wire byte count and cut
    to it when longer.
    """
    size = value.byte_count
    data = value.data.rjust(size, b"\x00")[:size]

    if value.is_byte_aligned():
        _write_binary(writer, data)
        return

    writer.write_u8(Tag.BITSTRING)
    writer.write_u32(size)
    writer.write_u8(value.trailing_bits)
    writer.write_bytes(data)


def _write_small_tuple_header(writer: ByteWriter, items: tuple[Any, ...]) -> None:
    """Write the tag and arity of a tuple of at most 255 elements."""
    arity = len(items)
    if arity > SMALL_TUPLE_MAX_ARITY:
        raise UnsupportedTypeError(
            f"Tuple of {arity} elements exceeds the small tuple limit "
            f"of {SMALL_TUPLE_MAX_ARITY}; large tuples are not supported"
        )

    writer.write_u8(Tag.SMALL_TUPLE)
    writer.write_u8(arity)
