"""Unit tests for positional record binding."""

from __future__ import annotations

import io
from typing import Any, Optional

import pytest

from bertcodec import (
    Atom,
    BaseRecord,
    BindError,
    DecodeError,
    Request,
    bind,
    encode,
    unmarshal,
    unmarshal_from,
)


class Coord(BaseRecord):
    """Test record: {coord, X, Y}."""

    tag: Atom
    x: int
    y: int


class Person(BaseRecord):
    """Test record with nested and optional values."""

    name: str
    tags: list[Atom]
    email: Optional[str] = None


class TestBind:
    """Test bind()."""

    def test_bind_tuple(self, coord_term: tuple[Any, ...]) -> None:
        """Test elements are assigned to fields by position."""
        coord = bind(coord_term, Coord)

        assert coord.tag == Atom("coord")
        assert coord.x == 23
        assert coord.y == 42

    def test_bind_list(self) -> None:
        """Test lists bind the same way as tuples."""
        person = bind(["Ada", [Atom("admin")], "ada@example.com"], Person)
        assert person.tags == [Atom("admin")]
        assert person.email == "ada@example.com"

    def test_complex_nil_binds_to_optional(self) -> None:
        """Test None from {bert, nil} fills an optional field."""
        person = bind(("Ada", [], None), Person)
        assert person.email is None

    @pytest.mark.parametrize("term", [(Atom("coord"), 1), (Atom("coord"), 1, 2, 3), ()])
    def test_arity_mismatch(self, term: tuple[Any, ...]) -> None:
        """Test element count must equal field count."""
        with pytest.raises(BindError, match=f"Cannot bind {len(term)} elements to Coord"):
            bind(term, Coord)

    def test_defaulted_fields_still_count(self) -> None:
        """Test fields with defaults are not optional positions."""
        with pytest.raises(BindError, match="expected 3"):
            bind(("Ada", []), Person)

    def test_wrong_element_type(self) -> None:
        """Test field validation failures become BindError."""
        with pytest.raises(BindError, match="Failed to bind Coord"):
            bind((Atom("coord"), "not-an-int", 2), Coord)

    def test_string_is_not_atom(self) -> None:
        """Test an Atom field rejects a plain string."""
        with pytest.raises(BindError):
            bind(("coord", 1, 2), Coord)

    @pytest.mark.parametrize("term", [42, "text", b"bytes", None])
    def test_non_sequence(self, term: Any) -> None:
        """Test scalars cannot be bound."""
        with pytest.raises(BindError, match="expected a tuple or list"):
            bind(term, Coord)

    def test_bind_error_is_decode_error(self) -> None:
        """Test BindError is catchable as DecodeError."""
        with pytest.raises(DecodeError):
            bind((), Coord)


class TestRecords:
    """Test BaseRecord behaviour."""

    def test_field_names(self) -> None:
        """Test fields are reported in declaration order."""
        assert Coord.field_names() == ("tag", "x", "y")
        assert Request.field_names() == ("kind", "module", "function", "arguments")

    def test_to_term(self) -> None:
        """Test records encode as tuples of their field values."""
        coord = Coord(tag=Atom("coord"), x=23, y=42)
        assert coord.to_term() == (Atom("coord"), 23, 42)
        assert encode(coord) == encode((Atom("coord"), 23, 42))

    def test_extra_fields_forbidden(self) -> None:
        """Test unknown keyword fields are rejected."""
        with pytest.raises(ValueError):
            Coord(tag=Atom("coord"), x=1, y=2, z=3)  # type: ignore[call-arg]

    def test_assignment_validated(self) -> None:
        """Test assignments go through field validation."""
        coord = Coord(tag=Atom("coord"), x=1, y=2)
        with pytest.raises(ValueError):
            coord.x = "many"  # type: ignore[assignment]


class TestUnmarshal:
    """Test decode-and-bind helpers."""

    def test_unmarshal(self, coord_bytes: bytes) -> None:
        """Test unmarshal() decodes then binds."""
        coord = unmarshal(coord_bytes, Coord)
        assert (coord.x, coord.y) == (23, 42)

    def test_unmarshal_from(self, coord_bytes: bytes) -> None:
        """Test unmarshal_from() reads exactly one term."""
        stream = io.BytesIO(coord_bytes + coord_bytes)

        first = unmarshal_from(stream, Coord)
        second = unmarshal_from(stream, Coord)
        assert first == second
        assert stream.read() == b""

    def test_unmarshal_request(self, sample_request: Request) -> None:
        """Test the request envelope round-trips through bytes."""
        assert unmarshal(encode(sample_request), Request) == sample_request

    def test_unmarshal_bad_data(self) -> None:
        """Test decode failures propagate unchanged."""
        with pytest.raises(DecodeError, match="Bad magic"):
            unmarshal(b"\x00", Coord)
