"""BERT term codec for bertcodec.

This module provides encoding and decoding between Python values and the
BERT subset of the Erlang External Term Format, plus positional binding of
decoded tuples onto records.
"""

from __future__ import annotations

from .binder import bind, unmarshal, unmarshal_from
from .byteio import ByteReader, ByteWriter
from .decoder import decode, decode_from
from .encoder import encode, encode_to
from .tags import Tag

__all__ = [
    "encode",
    "encode_to",
    "decode",
    "decode_from",
    "bind",
    "unmarshal",
    "unmarshal_from",
    "ByteReader",
    "ByteWriter",
    "Tag",
]
