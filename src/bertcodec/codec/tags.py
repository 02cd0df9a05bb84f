"""Wire tag constants for the BERT subset."""

from __future__ import annotations

import enum


class Tag(enum.IntEnum):
    """One-byte discriminators used on the wire."""

    VERSION = 131
    SMALL_INT = 97
    INT = 98
    SMALL_BIGNUM = 110
    LARGE_BIGNUM = 111
    FLOAT = 99
    ATOM = 100
    SMALL_TUPLE = 104
    LARGE_TUPLE = 105
    NIL = 106
    STRING = 107
    LIST = 108
    BINARY = 109
    BITSTRING = 77


# Fixed payload size of the textual float (tag 99)
FLOAT_TEXT_SIZE = 31

SMALL_INT_MAX = 255
INT_MIN = -(1 << 31)
INT_MAX = (1 << 31) - 1
SMALL_TUPLE_MAX_ARITY = 255
TEXT_MAX_LENGTH = 0xFFFF
