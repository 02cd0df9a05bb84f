"""Byte-level reading and writing utilities.

This module provides the fixed-width primitives the tag codecs are built on.
All multi-byte integers are big-endian regardless of host byte order.
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO, Optional, Union

from ..exceptions import EncodeError, UnexpectedEndError

_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_I32 = struct.Struct(">i")

# Largest single read; declared lengths are untrusted
_READ_CHUNK = 64 * 1024


class ByteWriter:
    """Accumulates an encoding in memory.

    Nothing reaches a caller's sink until the whole term has been written
    here, which keeps encode_to() all-or-nothing.

    Example:
        >>> writer = ByteWriter()
        >>> writer.write_u8(131)
        >>> writer.write_u16(3)
        >>> writer.to_bytes()
        b'\\x83\\x00\\x03'
    """

    def __init__(self) -> None:
        """Initialize an empty writer."""
        self._buffer = bytearray()

    def write_u8(self, value: int) -> None:
        """Write an unsigned 8-bit integer.

        Raises:
            EncodeError: If value is outside 0-255
        """
        if not 0 <= value <= 0xFF:
            raise EncodeError(f"Value {value} does not fit in 1 unsigned byte")
        self._buffer.append(value)

    def write_u16(self, value: int) -> None:
        """Write an unsigned 16-bit big-endian integer.

        Raises:
            EncodeError: If value is outside 0-65535
        """
        if not 0 <= value <= 0xFFFF:
            raise EncodeError(f"Value {value} does not fit in 2 unsigned bytes")
        self._buffer.extend(_U16.pack(value))

    def write_u32(self, value: int) -> None:
        """Write an unsigned 32-bit big-endian integer.

        Raises:
            EncodeError: If value is outside 0-4294967295
        """
        if not 0 <= value <= 0xFFFFFFFF:
            raise EncodeError(f"Value {value} does not fit in 4 unsigned bytes")
        self._buffer.extend(_U32.pack(value))

    def write_i32(self, value: int) -> None:
        """Write a signed 32-bit big-endian two's-complement integer.

        Raises:
            EncodeError: If value is outside the int32 range
        """
        try:
            self._buffer.extend(_I32.pack(value))
        except struct.error as err:
            raise EncodeError(f"Value {value} does not fit in 4 signed bytes") from err

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes."""
        self._buffer.extend(data)

    def to_bytes(self) -> bytes:
        """Return everything written so far."""
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)


class ByteReader:
    """Reads fixed-width values from bytes or a binary stream.

    Reads never return partial values: if fewer bytes remain than requested,
    UnexpectedEndError is raised.

    Example:
        >>> reader = ByteReader(b"\\x83\\x00\\x03")
        >>> reader.read_u8()
        131
        >>> reader.read_u16()
        3
    """

    def __init__(self, source: Union[bytes, bytearray, memoryview, BinaryIO]) -> None:
        """Initialize a reader over bytes or a readable binary stream.

        Args:
            source: Byte buffer or object with a ``read(n)`` method
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
            self._stream: BinaryIO = io.BytesIO(data)
            self._size: Optional[int] = len(data)
        else:
            self._stream = source
            self._size = None
        self._consumed = 0

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read exactly num_bytes bytes.

        Raises:
            UnexpectedEndError: If the source ends first
        """
        if num_bytes == 0:
            return b""

        chunks = []
        remaining = num_bytes
        # Streams (pipes, sockets) may return short reads before EOF
        while remaining > 0:
            chunk = self._stream.read(min(remaining, _READ_CHUNK))
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)

        data = b"".join(chunks)
        self._consumed += len(data)
        if len(data) < num_bytes:
            raise UnexpectedEndError(
                f"Unexpected end of data at byte {self._consumed}: "
                f"need {num_bytes} bytes, got {len(data)}"
            )
        return data

    def read_u8(self) -> int:
        """Read an unsigned 8-bit integer."""
        return self.read_bytes(1)[0]

    def read_u16(self) -> int:
        """Read an unsigned 16-bit big-endian integer."""
        return _U16.unpack(self.read_bytes(2))[0]

    def read_u32(self) -> int:
        """Read an unsigned 32-bit big-endian integer."""
        return _U32.unpack(self.read_bytes(4))[0]

    def read_i32(self) -> int:
        """Read a signed 32-bit big-endian two's-complement integer."""
        return _I32.unpack(self.read_bytes(4))[0]

    def remaining(self) -> Optional[int]:
        """Return the number of unread bytes, or None for streams.

        Streams cannot be probed without consuming data, so only in-memory
        sources report a count.
        """
        if self._size is None:
            return None
        return self._size - self._consumed

    def bytes_consumed(self) -> int:
        """Return the number of bytes read so far."""
        return self._consumed
