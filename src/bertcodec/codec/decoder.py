"""BERT decoder.

This module provides decode() and decode_from(), a recursive-descent parser
keyed only by the one-byte tag in front of every value.
"""

from __future__ import annotations

import logging
import struct
from typing import Any, BinaryIO, Optional, Union

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import (
    BadMagicError,
    DecodeError,
    MalformedFloatError,
    UnknownTagError,
    UnsupportedTypeError,
)
from ..models.terms import BERT_ATOM, FALSE_ATOM, NIL_ATOM, TRUE_ATOM, Atom, Bitstring, Term
from .byteio import ByteReader
from .tags import FLOAT_TEXT_SIZE, Tag

logger = logging.getLogger(__name__)

_F32 = struct.Struct(">f")

_COMPLEX_VALUES = {NIL_ATOM: None, TRUE_ATOM: True, FALSE_ATOM: False}


def decode(
    data: Union[bytes, bytearray, memoryview], *, config: Optional[CodecConfig] = None
) -> Term:
    """Decode one BERT term from a byte buffer.

    Args:
        data: BERT-encoded bytes, starting with the version byte
        config: Codec configuration (default: DEFAULT_CONFIG)

    Returns:
        Decoded term (see the table in the package documentation)

    Raises:
        BadMagicError: If the first byte is not 131
        UnknownTagError: If a tag byte is not part of the supported set
        UnsupportedTypeError: If a large tuple (105) is encountered
        UnexpectedEndError: If the data is truncated
        MalformedFloatError: If a float payload does not parse
        DecodeError: For any other malformed input

    Examples:
        ```python
        from bertcodec import decode

        decode(b"\\x83a\\x01")                     # 1
        decode(b"\\x83d\\x00\\x03foo")             # Atom('foo')
        decode(b"\\x83h\\x02d\\x00\\x04bertd\\x00\\x04true")  # True
        ```
    """
    reader = ByteReader(data)
    term = decode_reader(reader, config or DEFAULT_CONFIG)

    trailing = reader.remaining()
    if trailing:
        logger.debug("Ignoring %d trailing bytes after decoded term", trailing)

    return term


def decode_from(stream: BinaryIO, *, config: Optional[CodecConfig] = None) -> Term:
    """Decode one BERT term from a binary stream.

    Exactly the bytes of one term are consumed; the stream is left positioned
    after it.

    Args:
        stream: Readable binary stream
        config: Codec configuration (default: DEFAULT_CONFIG)

    Returns:
        Decoded term

    Raises:
        DecodeError: Same conditions as decode()
    """
    return decode_reader(ByteReader(stream), config or DEFAULT_CONFIG)


def decode_reader(reader: ByteReader, config: CodecConfig) -> Term:
    """Check the version byte and decode the term that follows."""
    version = reader.read_u8()
    if version != Tag.VERSION:
        raise BadMagicError(f"Bad magic: expected version byte {int(Tag.VERSION)}, got {version}")

    return _read_term(reader, config)


class _Container:
    """A tuple or list whose elements are still being read."""

    __slots__ = ("tag", "size", "items")

    def __init__(self, tag: int, size: int) -> None:
        self.tag = tag
        self.size = size
        self.items: list[Any] = []


def _read_term(reader: ByteReader, config: CodecConfig) -> Term:
    """Read one complete term, nested containers included.

    Open tuples and lists are kept on an explicit stack rather than the call
    stack, so nesting is bounded only by config.max_depth.

    Args:
        reader: ByteReader positioned at a tag byte
        config: Codec configuration

    Returns:
        Decoded term
    """
    stack: list[_Container] = []

    while True:
        if len(stack) > config.max_depth:
            raise DecodeError(f"Term nesting exceeds max_depth={config.max_depth}")

        tag = reader.read_u8()
        if tag == Tag.SMALL_TUPLE or tag == Tag.LIST:
            size = reader.read_u8() if tag == Tag.SMALL_TUPLE else reader.read_u32()
            container = _Container(tag, size)
            if size:
                stack.append(container)
                continue
            value = _close_container(reader, container)
        else:
            value = _read_scalar(reader, config, tag)

        # Hand the value to its parent, closing every container it completes
        while stack:
            parent = stack[-1]
            parent.items.append(value)
            if len(parent.items) < parent.size:
                break
            stack.pop()
            value = _close_container(reader, parent)
        else:
            return value


def _read_scalar(reader: ByteReader, config: CodecConfig, tag: int) -> Term:
    """Decode the payload of a non-container tag."""
    if tag == Tag.SMALL_INT:
        return reader.read_u8()

    if tag == Tag.INT:
        return reader.read_i32()

    if tag == Tag.SMALL_BIGNUM:
        return _read_bignum(reader, reader.read_u8())

    if tag == Tag.LARGE_BIGNUM:
        return _read_bignum(reader, reader.read_u32())

    if tag == Tag.FLOAT:
        return _read_float(reader)

    if tag == Tag.ATOM:
        return Atom(_read_text(reader, config))

    if tag == Tag.LARGE_TUPLE:
        raise UnsupportedTypeError(
            f"Large tuples (tag {int(Tag.LARGE_TUPLE)}) are not supported "
            f"(at byte {reader.bytes_consumed() - 1})"
        )

    if tag == Tag.NIL:
        return []

    if tag == Tag.STRING:
        return _read_text(reader, config)

    if tag == Tag.BINARY:
        return reader.read_bytes(reader.read_u32())

    if tag == Tag.BITSTRING:
        return _read_bitstring(reader)

    raise UnknownTagError(f"Unknown tag {tag} at byte {reader.bytes_consumed() - 1}")


def _read_bignum(reader: ByteReader, size: int) -> int:
    """Read a sign byte and a little-endian magnitude of size bytes."""
    sign = reader.read_u8()
    if sign > 1:
        raise DecodeError(
            f"Bignum sign byte must be 0 or 1, got {sign} "
            f"(at byte {reader.bytes_consumed() - 1})"
        )
    magnitude = int.from_bytes(reader.read_bytes(size), "little")
    return -magnitude if sign else magnitude


def _read_float(reader: ByteReader) -> float:
    """Read 31 bytes of null-padded float text and round to float32."""
    raw = reader.read_bytes(FLOAT_TEXT_SIZE)
    text = raw.split(b"\x00", 1)[0]

    try:
        value = float(text.decode("ascii"))
    except (UnicodeDecodeError, ValueError) as err:
        raise MalformedFloatError(f"Malformed float text {text!r}") from err

    try:
        return _F32.unpack(_F32.pack(value))[0]
    except OverflowError as err:
        raise MalformedFloatError(f"Float text {text!r} is outside the float32 range") from err


def _read_text(reader: ByteReader, config: CodecConfig) -> str:
    """Read a 2-byte length and that many text bytes."""
    data = reader.read_bytes(reader.read_u16())
    try:
        return data.decode(config.text_encoding)
    except UnicodeDecodeError as err:
        raise DecodeError(
            f"Text {data!r} is not valid {config.text_encoding}: {err}"
        ) from err


def _close_container(reader: ByteReader, container: _Container) -> Any:
    """Finish a container once all of its elements have been read.

    Lists consume their tail byte, which is discarded. Tuples of two elements
    starting with the ``bert`` atom stand for their second element, with
    ``nil``/``true``/``false`` turned into None/True/False; other tuples
    starting with ``bert`` are returned as they are.
    """
    if container.tag == Tag.LIST:
        tail = reader.read_u8()
        if tail != Tag.NIL:
            logger.debug("Discarding non-nil list tail byte %d", tail)
        return container.items

    items = tuple(container.items)
    if items and _is_atom(items[0], BERT_ATOM):
        if len(items) == 2:
            value = items[1]
            if isinstance(value, Atom) and value in _COMPLEX_VALUES:
                return _COMPLEX_VALUES[value]
            return value
        logger.debug("Leaving bert complex term of arity %d uncollapsed", len(items))

    return items


def _read_bitstring(reader: ByteReader) -> Bitstring:
    """Read a bitstring: byte count, trailing-bit count, then the bytes."""
    size = reader.read_u32()
    trailing = reader.read_u8()
    data = reader.read_bytes(size)

    if size == 0:
        return Bitstring(data, 0)

    if trailing > 8:
        raise DecodeError(f"Bitstring trailing-bit count {trailing} is outside 1-8")
    # 0 and 8 both mean the whole last byte is used
    if trailing == 0:
        trailing = 8
    return Bitstring(data, (size - 1) * 8 + trailing)


def _is_atom(value: Any, atom: Atom) -> bool:
    return isinstance(value, Atom) and value == atom
