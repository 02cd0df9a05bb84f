"""Main CLI entry point for bertcodec."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..exceptions import BertError
from .dump import inspect_file


def main() -> int:
    """Main entry point for the bertcodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="bertcodec: BERT term codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bertcodec --inspect reply.bert            Show the terms in a file
  bertcodec --inspect session.burp --framed Show each BURP packet
  bertcodec --version                       Show version
        """,
    )

    parser.add_argument(
        "--inspect",
        metavar="FILE",
        type=str,
        help="Decode a file of BERT terms and show their structure",
    )

    parser.add_argument(
        "--framed",
        action="store_true",
        help="Treat FILE as 4-byte length-prefixed BURP packets",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"bertcodec {__version__}",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Handle --inspect
    if args.inspect:
        file_path = Path(args.inspect)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            inspect_file(file_path, framed=args.framed)
            return 0
        except (BertError, OSError) as e:
            print(f"Error inspecting file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
