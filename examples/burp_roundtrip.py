#!/usr/bin/env python3
"""BURP request/response example for bertcodec.

This example demonstrates:
1. Writing BURP requests to a stream
2. Serving them with read_request() and write_response()
3. Reading the responses back
4. Inspecting a packet stream with the bertcodec CLI
"""

from __future__ import annotations

import io
import tempfile
from pathlib import Path

from bertcodec import (
    Atom,
    FramingError,
    Request,
    UnexpectedEndError,
    read_request,
    read_term,
    unframe_term,
    write_request,
    write_response,
)
from bertcodec.cli.dump import inspect_file

HANDLERS = {
    Atom("add"): lambda a, b: a + b,
    Atom("upper"): lambda s: s.upper(),
}


def serve(requests: io.BytesIO, responses: io.BytesIO) -> int:
    """Answer every request in a stream; return how many were handled."""
    handled = 0
    while True:
        try:
            request = read_request(requests)
        except UnexpectedEndError:
            return handled

        handler = HANDLERS.get(request.function)
        if handler is None:
            write_response(responses, (Atom("error"), (Atom("server"), 2, request.function)))
        else:
            write_response(responses, (Atom("reply"), handler(*request.arguments)))
        handled += 1


def main() -> None:
    """Run the BURP example."""
    print("=" * 60)
    print("bertcodec BURP Example")
    print("=" * 60)
    print()

    # Client side
    print("1. Writing requests...")
    requests = io.BytesIO()
    calls = [
        ("add", [40, 2]),
        ("upper", ["burp"]),
        ("divide", [1, 0]),
    ]
    for function, arguments in calls:
        request = Request(
            kind=Atom("call"),
            module=Atom("demo"),
            function=Atom(function),
            arguments=arguments,
        )
        write_request(requests, request)
        print(f"   call demo:{function}{tuple(arguments)}")
    print(f"   {len(requests.getvalue())} bytes written")
    print()

    # Server side
    print("2. Serving requests...")
    requests.seek(0)
    responses = io.BytesIO()
    print(f"   Handled {serve(requests, responses)} requests")
    print()

    # Client side again
    print("3. Reading responses...")
    responses.seek(0)
    for _ in calls:
        print(f"   {read_term(responses)!r}")
    print()

    # Corrupted packet
    print("4. Detecting a damaged packet...")
    damaged = responses.getvalue()[:10]
    try:
        unframe_term(damaged)
        print("   ✗ Error: damage not detected!")
    except FramingError as e:
        print(f"   ✓ Damage detected: {e}")
    print()

    # CLI inspector
    print("5. Inspecting the response stream...")
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "responses.burp"
        path.write_bytes(responses.getvalue())
        inspect_file(path, framed=True)


if __name__ == "__main__":
    main()
