"""Encoded size calculation utilities.

This module provides functions to measure how many bytes a value occupies on
the wire, with and without the BURP length prefix.
"""

from __future__ import annotations

from typing import Any, Optional

from ..codec.encoder import encode
from ..config import CodecConfig
from ..framing.burp import LENGTH_PREFIX_SIZE


def encoded_size(value: Any, *, config: Optional[CodecConfig] = None) -> int:
    """Calculate the encoded size of a value in bytes.

    The size includes the version byte, matching len(encode(value)).

    Args:
        value: Value to measure
        config: Codec configuration (default: DEFAULT_CONFIG)

    Returns:
        Size in bytes

    Raises:
        UnsupportedTypeError: If the value has no mapping
        EncodeError: If a value does not fit its wire representation

    Example:
        >>> encoded_size(1)
        3
        >>> encoded_size(Atom("foo"))
        7
    """
    return len(encode(value, config=config))


def framed_size(value: Any, *, config: Optional[CodecConfig] = None) -> int:
    """Calculate the size of a value framed as a BURP packet.

    Example:
        >>> framed_size((Atom("reply"), 42))
        17
    """
    return LENGTH_PREFIX_SIZE + encoded_size(value, config=config)
