"""Property-based tests using hypothesis."""

from __future__ import annotations

import io
import struct
from typing import Any

from hypothesis import given
from hypothesis import strategies as st

from bertcodec import (
    Atom,
    BertError,
    Bitstring,
    decode,
    encode,
    encoded_size,
    frame_term,
    read_term,
    unframe_term,
)

_F32 = struct.Struct(">f")

atoms = st.text(max_size=40).map(Atom)
floats32 = st.floats(width=32, allow_nan=False, allow_infinity=False)
bitstrings = st.binary(min_size=1, max_size=16).flatmap(
    lambda data: st.builds(
        Bitstring,
        st.just(data),
        st.integers(min_value=(len(data) - 1) * 8 + 1, max_value=len(data) * 8 - 1),
    )
)

# Terms that decode back to themselves
scalars = st.one_of(
    st.integers(),
    floats32,
    atoms,
    st.text(max_size=40),
    st.binary(max_size=64),
    bitstrings,
)
terms = st.recursive(
    scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=5),
        st.lists(children, max_size=5).map(tuple),
    ),
    max_leaves=20,
).filter(lambda term: not _starts_with_bert(term))


def _starts_with_bert(term: Any) -> bool:
    """Return True if a {bert, ...} tuple appears anywhere in term."""
    if isinstance(term, tuple):
        if term and isinstance(term[0], Atom) and term[0] == "bert":
            return True
        return any(_starts_with_bert(item) for item in term)
    if isinstance(term, list):
        return any(_starts_with_bert(item) for item in term)
    return False


class TestCodecProperties:
    """Property-based tests for the codec."""

    @given(term=terms)
    def test_encode_decode_roundtrip(self, term: Any) -> None:
        """Test decode(encode(x)) == x for round-trippable terms."""
        assert decode(encode(term)) == term

    @given(term=terms)
    def test_atoms_stay_atoms(self, term: Any) -> None:
        """Test atoms and strings keep their distinct types."""
        decoded = decode(encode(term))
        if isinstance(term, str):
            assert isinstance(decoded, Atom) == isinstance(term, Atom)

    @given(value=st.integers())
    def test_integer_roundtrip(self, value: int) -> None:
        """Test integers of any size survive encoding."""
        assert decode(encode(value)) == value

    @given(value=st.floats(allow_nan=False, min_value=-3.0e38, max_value=3.0e38))
    def test_float_rounds_to_float32(self, value: float) -> None:
        """Test floats come back as the nearest float32."""
        assert decode(encode(value)) == _F32.unpack(_F32.pack(value))[0]

    @given(term=terms)
    def test_encode_deterministic(self, term: Any) -> None:
        """Test encoding is deterministic and sized as reported."""
        data = encode(term)
        assert encode(term) == data
        assert encoded_size(term) == len(data)

    @given(data=st.binary(max_size=64))
    def test_decode_never_crashes(self, data: bytes) -> None:
        """Test arbitrary input either decodes or raises a BertError."""
        try:
            decode(data)
        except BertError:
            pass


class TestFramingProperties:
    """Property-based tests for BURP framing."""

    @given(term=terms)
    def test_frame_unframe_roundtrip(self, term: Any) -> None:
        """Test framing round-trip."""
        framed = frame_term(term)

        assert int.from_bytes(framed[:4], "big") == len(framed) - 4
        assert unframe_term(framed) == term

    @given(sequence=st.lists(terms, max_size=5))
    def test_stream_roundtrip(self, sequence: list[Any]) -> None:
        """Test packets written back to back read back in order."""
        stream = io.BytesIO(b"".join(frame_term(term) for term in sequence))
        assert [read_term(stream) for _ in sequence] == sequence
        assert stream.read() == b""
