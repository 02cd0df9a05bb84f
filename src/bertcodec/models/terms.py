"""Term types for bertcodec.

This module defines the Python types that stand for BERT wire variants which
have no exact built-in counterpart: atoms, bitstrings, explicit lists, and the
Encodable interface for user types.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Tuple, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema


class Atom(str):
    """A symbolic identifier, wire-distinguished from plain strings.

    Atoms compare and hash like the equivalent ``str``; only the encoder
    treats them differently (tag 100 instead of tag 107).

    Example:
        >>> Atom("ok") == "ok"
        True
        >>> encode(Atom("ok")) != encode("ok")
        True
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Atom({str.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        # Only real atoms validate; a plain string from the wire is a type mismatch
        return core_schema.is_instance_schema(cls)


BERT_ATOM = Atom("bert")
NIL_ATOM = Atom("nil")
TRUE_ATOM = Atom("true")
FALSE_ATOM = Atom("false")


@dataclass(frozen=True)
class Bitstring:
    """A byte sequence whose bit length need not be a multiple of 8.

    Attributes:
        data: Raw bytes, most significant bits first
        bits: Total number of meaningful bits (>= 0)

    A bitstring of ``bits`` bits occupies ``ceil(bits / 8)`` bytes on the wire;
    only the high ``bits % 8`` bits of the last byte are meaningful when the
    count is fractional. Bitstrings whose length is a whole number of bytes
    encode as plain binaries.

    Example:
        >>> Bitstring(b"\\x80", 1).byte_count
        1
    """

    data: bytes
    bits: int

    def __post_init__(self) -> None:
        """Validate the bit count and normalise the data to bytes."""
        if not isinstance(self.bits, int) or isinstance(self.bits, bool):
            raise TypeError(f"bits must be an int, got {type(self.bits).__name__}")
        if self.bits < 0:
            raise ValueError(f"bits must be >= 0, got {self.bits}")
        object.__setattr__(self, "data", bytes(self.data))

    @property
    def byte_count(self) -> int:
        """Number of bytes the bitstring occupies on the wire."""
        return (self.bits + 7) // 8

    @property
    def trailing_bits(self) -> int:
        """Meaningful bits in the last byte (0 when byte-aligned)."""
        return self.bits % 8

    def is_byte_aligned(self) -> bool:
        """Return True if the bit length is a whole number of bytes."""
        return self.bits % 8 == 0


@dataclass
class List:
    """Explicit list wrapper.

    Forces the list encoding (tag 108) for any iterable of terms. Plain Python
    lists already encode as lists; the wrapper is useful for generators and
    other sequences that would otherwise be rejected or encoded as tuples.
    """

    items: list[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.items = list(self.items)


class Encodable(ABC):
    """Interface for user types that know how to become a term.

    The encoder calls ``to_term()`` and encodes whatever it returns, so an
    implementation may return another Encodable, a tuple of fields, an Atom,
    and so on.

    Example:
        >>> class Point(Encodable):
        ...     def __init__(self, x, y):
        ...         self.x, self.y = x, y
        ...     def to_term(self):
        ...         return (Atom("point"), self.x, self.y)
    """

    @abstractmethod
    def to_term(self) -> Any:
        """Return the term this object encodes as."""


Term = Union[
    None,
    bool,
    int,
    float,
    Atom,
    str,
    bytes,
    Bitstring,
    Tuple[Any, ...],
    list[Any],
]
