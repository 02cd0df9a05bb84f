"""BURP framing: length-prefixed BERT terms.

This module provides the BERT-RPC packet envelope. Every request and response
travels as:

- [Length (4 bytes, big-endian)] [BERT-encoded term]

where the length counts the encoded term only.
"""

from __future__ import annotations

import logging
import struct
from typing import Any, BinaryIO, Optional

from ..codec.binder import bind
from ..codec.byteio import ByteReader
from ..codec.decoder import decode_reader
from ..codec.encoder import encode
from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import FramingError
from ..models.record import Request
from ..models.terms import Term

logger = logging.getLogger(__name__)

_LENGTH = struct.Struct(">I")
LENGTH_PREFIX_SIZE = _LENGTH.size


def frame_term(value: Any, *, config: Optional[CodecConfig] = None) -> bytes:
    """Encode a value and prepend its 4-byte big-endian length.

    Args:
        value: Value to encode
        config: Codec configuration (default: DEFAULT_CONFIG)

    Returns:
        Framed packet

    Raises:
        EncodeError: If the value cannot be encoded

    Example:
        >>> frame_term((Atom("reply"), 42))
        b'\\x00\\x00\\x00\\r\\x83h\\x02d\\x00\\x05replya*'
    """
    payload = encode(value, config=config)
    return _LENGTH.pack(len(payload)) + payload


def unframe_term(framed: bytes, *, config: Optional[CodecConfig] = None) -> Term:
    """Validate a framed packet and decode its term.

    Args:
        framed: Complete packet (length prefix and body)
        config: Codec configuration (default: DEFAULT_CONFIG)

    Returns:
        Decoded term

    Raises:
        FramingError: If the prefix is truncated, disagrees with the buffer,
            or the term does not use the whole body
        DecodeError: If the body is not valid BERT

    Example:
        >>> unframe_term(frame_term(42))
        42
    """
    if len(framed) < LENGTH_PREFIX_SIZE:
        raise FramingError(f"Frame too short for length prefix: {len(framed)} bytes")

    (expected_length,) = _LENGTH.unpack(framed[:LENGTH_PREFIX_SIZE])
    body = framed[LENGTH_PREFIX_SIZE:]
    if len(body) != expected_length:
        raise FramingError(
            f"Length mismatch: prefix says {expected_length} bytes, "
            f"but got {len(body)} bytes"
        )

    return _decode_body(body, config or DEFAULT_CONFIG)


def read_frame(stream: BinaryIO, *, config: Optional[CodecConfig] = None) -> bytes:
    """Read one packet body from a stream.

    Args:
        stream: Readable binary stream positioned at a length prefix
        config: Codec configuration (default: DEFAULT_CONFIG)

    Returns:
        The body bytes (the BERT-encoded term, without the prefix)

    Raises:
        UnexpectedEndError: If the stream ends inside the prefix or body
        FramingError: If the declared length exceeds config.max_frame_size
    """
    config = config or DEFAULT_CONFIG
    reader = ByteReader(stream)

    length = reader.read_u32()
    if length > config.max_frame_size:
        raise FramingError(
            f"Frame of {length} bytes exceeds max_frame_size={config.max_frame_size}"
        )

    body = reader.read_bytes(length)
    logger.debug("Read frame of %d bytes", length)
    return body


def write_frame(stream: BinaryIO, value: Any, *, config: Optional[CodecConfig] = None) -> None:
    """Encode a value and write it to a stream as one packet.

    The packet is built completely before anything is written, so an encoding
    failure leaves the stream untouched.

    Raises:
        EncodeError: If the value cannot be encoded
    """
    framed = frame_term(value, config=config)
    stream.write(framed)
    logger.debug("Wrote frame of %d bytes", len(framed) - LENGTH_PREFIX_SIZE)


def read_term(stream: BinaryIO, *, config: Optional[CodecConfig] = None) -> Term:
    """Read one packet from a stream and decode its term.

    Raises:
        UnexpectedEndError: If the stream ends inside the packet
        FramingError: If the packet is oversized or has trailing bytes
        DecodeError: If the body is not valid BERT
    """
    config = config or DEFAULT_CONFIG
    return _decode_body(read_frame(stream, config=config), config)


def read_request(stream: BinaryIO, *, config: Optional[CodecConfig] = None) -> Request:
    """Read one BURP request from a stream.

    The packet body must decode to a 4-tuple ``{Kind, Module, Function,
    Arguments}`` with atoms in the first three positions.

    Raises:
        UnexpectedEndError: If the stream ends inside the packet
        FramingError: If the packet is oversized or has trailing bytes
        DecodeError: If the body is not valid BERT
        BindError: If the term is not a valid request

    Example:
        ```python
        request = read_request(sys.stdin.buffer)
        if request.kind == "call":
            result = dispatch(request.module, request.function, request.arguments)
            write_response(sys.stdout.buffer, (Atom("reply"), result))
        ```
    """
    return bind(read_term(stream, config=config), Request)


def write_request(
    stream: BinaryIO, request: Request, *, config: Optional[CodecConfig] = None
) -> None:
    """Write a BURP request as one packet."""
    write_frame(stream, request, config=config)


def write_response(stream: BinaryIO, value: Any, *, config: Optional[CodecConfig] = None) -> None:
    """Write a BURP response (e.g. ``{reply, Result}``) as one packet."""
    write_frame(stream, value, config=config)


def _decode_body(body: bytes, config: CodecConfig) -> Term:
    """Decode a packet body that must contain exactly one term."""
    reader = ByteReader(body)
    term = decode_reader(reader, config)

    trailing = reader.remaining()
    if trailing:
        raise FramingError(f"Frame has {trailing} trailing bytes after the term")
    return term

