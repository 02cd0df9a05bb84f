"""Term inspection CLI command."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

from ..codec.decoder import decode_from
from ..codec.tags import INT_MAX, INT_MIN, SMALL_INT_MAX
from ..framing.burp import LENGTH_PREFIX_SIZE, read_term
from ..models.terms import Atom, Bitstring


def inspect_file(file_path: Path, *, framed: bool = False) -> None:
    """Decode every term in a file and print a breakdown of each.

    Args:
        file_path: Path to a file holding BERT terms back to back, or BURP
            packets when framed is True
        framed: Treat the file as a sequence of length-prefixed packets
    """
    data = file_path.read_bytes()
    stream = io.BytesIO(data)

    # Print header
    print("|" * 7, "bertcodec: BERT term inspector", "|" * 7)
    print(f"{file_path}: {len(data)} bytes{' (BURP framed)' if framed else ''}")
    print()

    index = 0
    while stream.tell() < len(data):
        index += 1
        start = stream.tell()
        if framed:
            term = read_term(stream)
            body_size = stream.tell() - start - LENGTH_PREFIX_SIZE
            size = f"{body_size} bytes + {LENGTH_PREFIX_SIZE} byte prefix"
        else:
            term = decode_from(stream)
            size = f"{stream.tell() - start} bytes"

        print(f"{'=' * 19} term {index} ({size}) {'=' * 19}")
        for line in describe_term(term):
            print(line)
        print()

    print(f"{index} term{'s' if index != 1 else ''} decoded.")


def describe_term(term: Any, indent: int = 0) -> list[str]:
    """Return an indented, one-line-per-node description of a decoded term.

    Example:
        >>> describe_term((Atom("reply"), 42))
        ['small tuple, arity 2', "    atom 'reply'", '    small int 42']
    """
    pad = " " * (4 * indent)

    if isinstance(term, tuple):
        lines = [f"{pad}small tuple, arity {len(term)}"]
        for item in term:
            lines.extend(describe_term(item, indent + 1))
        return lines

    if isinstance(term, list):
        if not term:
            return [f"{pad}nil"]
        lines = [f"{pad}list, {len(term)} element{'s' if len(term) != 1 else ''}"]
        for item in term:
            lines.extend(describe_term(item, indent + 1))
        return lines

    return [f"{pad}{_describe_scalar(term)}"]


def _describe_scalar(term: Any) -> str:
    # Booleans and None only come from {bert, ...} complex terms
    if term is None or isinstance(term, bool):
        return f"complex {term!r}"

    if isinstance(term, int):
        if 0 <= term <= SMALL_INT_MAX:
            return f"small int {term}"
        if INT_MIN <= term <= INT_MAX:
            return f"int {term}"
        return f"bignum {term}"

    if isinstance(term, float):
        return f"float {term!r}"

    if isinstance(term, Atom):
        return f"atom {str(term)!r}"

    if isinstance(term, str):
        return f"string {term!r}"

    if isinstance(term, bytes):
        return f"binary, {len(term)} bytes: {term[:32].hex()}{'...' if len(term) > 32 else ''}"

    if isinstance(term, Bitstring):
        return f"bitstring, {term.bits} bits: {term.data.hex()}"

    return f"unknown {term!r}"
