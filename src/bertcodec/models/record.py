"""Record models bound positionally to decoded tuples.

This module provides BaseRecord, the Pydantic base class for fixed-shape
records that travel as tuples, and the BURP Request envelope built on it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from .terms import Atom, Encodable


class BaseRecord(BaseModel, Encodable):
    """Base class for records exchanged as BERT tuples.

    Fields are matched to tuple elements by declaration order: element 0 goes
    to the first field, element 1 to the second, and so on. Encoding a record
    produces the tuple of its field values in the same order, so records
    round-trip through encode() and bind().

    Example:
        >>> class Reply(BaseRecord):
        ...     status: Atom
        ...     value: int
        >>> encode(Reply(status=Atom("reply"), value=42)) == encode((Atom("reply"), 42))
        True
    """

    model_config = ConfigDict(
        # Allow Atom, Bitstring and other codec types as field annotations
        arbitrary_types_allowed=True,
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in the record
        extra="forbid",
    )

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Return the record's field names in positional order."""
        return tuple(cls.model_fields)

    def to_term(self) -> tuple[Any, ...]:
        """Return the field values as a tuple in declaration order."""
        return tuple(getattr(self, name) for name in self.field_names())


class Request(BaseRecord):
    """BURP request envelope: ``{Kind, Module, Function, Arguments}``.

    Attributes:
        kind: Request kind atom (``call``, ``cast``, ...)
        module: Target module atom
        function: Target function atom
        arguments: Argument terms
    """

    kind: Atom
    module: Atom
    function: Atom
    arguments: list[Any]
