"""BURP framing utilities for bertcodec.

This module provides the 4-byte length-prefixed envelope used by BERT-RPC
requests and responses.
"""

from __future__ import annotations

from .burp import (
    LENGTH_PREFIX_SIZE,
    frame_term,
    read_frame,
    read_request,
    read_term,
    unframe_term,
    write_frame,
    write_request,
    write_response,
)

__all__ = [
    "LENGTH_PREFIX_SIZE",
    "frame_term",
    "unframe_term",
    "read_frame",
    "write_frame",
    "read_term",
    "read_request",
    "write_request",
    "write_response",
]
