#!/usr/bin/env python3
"""Basic usage example for bertcodec.

This example demonstrates:
1. Encoding Python values as BERT
2. Decoding BERT back to Python values
3. Binding a decoded tuple onto a Pydantic record
4. Calculating encoded sizes
"""

from __future__ import annotations

from bertcodec import Atom, BaseRecord, Bitstring, bind, decode, encode, encoded_size


# Define a record class
class Coord(BaseRecord):
    """A point exchanged as {coord, X, Y}."""

    tag: Atom
    x: int
    y: int


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("bertcodec Basic Usage Example")
    print("=" * 60)
    print()

    # Encode a few values
    print("1. Encoding values...")
    values = [
        42,
        -5000,
        100000000000,
        3.14159,
        Atom("foo"),
        "foo",
        b"\x01\x02\x03\x04",
        Bitstring(b"\x80", 1),
        [1, 2, 3],
        None,
    ]
    for value in values:
        data = encode(value)
        print(f"   {value!r:<28} -> {data.hex(' ')}")
    print()

    # Decode them back
    print("2. Decoding values...")
    for value in values:
        decoded = decode(encode(value))
        print(f"   {value!r:<28} <- {decoded!r}")
    print("   (floats come back as float32, None comes back as [])")
    print()

    # Complex terms
    print("3. Decoding complex terms...")
    for name in ("true", "false", "nil"):
        data = encode((Atom("bert"), Atom(name)))
        print(f"   {{bert, {name}}} -> {decode(data)!r}")
    print()

    # Bind onto a record
    print("4. Binding a tuple onto a record...")
    coord = bind(decode(encode((Atom("coord"), 23, 42))), Coord)
    print(f"   {coord!r}")
    print(f"   Re-encoded: {encode(coord).hex(' ')}")
    print()

    # Sizes
    print("5. Encoded sizes...")
    print(f"   Coord record: {encoded_size(coord)} bytes")
    print(f"   1000-element list: {encoded_size(list(range(1000)))} bytes")
    print()


if __name__ == "__main__":
    main()
