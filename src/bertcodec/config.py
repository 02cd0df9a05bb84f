"""Codec configuration.

This module provides the configuration dataclass shared by the encoder,
decoder and BURP framing helpers.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for encoding, decoding and framing.

    Attributes:
        text_encoding: Codec used for atom and string text (default "utf-8").
            Erlang's classic ATOM_EXT and STRING_EXT carry Latin-1 bytes; use
            "latin-1" when talking to peers that send non-UTF-8 text.

        max_depth: Maximum nesting depth of tuples and lists (default 512).
            Deeper input raises DecodeError on decode and EncodeError on
            encode. Nesting is tracked on an explicit stack, so any depth up
            to the limit works regardless of the interpreter recursion limit.

        max_frame_size: Largest BURP body accepted by read_frame() in bytes
            (default 64 MiB). The length prefix is checked before any body
            byte is read.

    Examples:
        ```python
        from bertcodec import CodecConfig, decode

        config = CodecConfig(text_encoding="latin-1", max_depth=64)
        term = decode(data, config=config)
        ```
    """

    text_encoding: str = "utf-8"
    max_depth: int = 512
    max_frame_size: int = 64 * 1024 * 1024

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        try:
            codecs.lookup(self.text_encoding)
        except LookupError as err:
            raise ValueError(f"Unknown text_encoding: {self.text_encoding!r}") from err

        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")

        if not 0 <= self.max_frame_size <= 0xFFFFFFFF:
            raise ValueError(
                f"max_frame_size must be 0-4294967295, got {self.max_frame_size}"
            )


DEFAULT_CONFIG = CodecConfig()
