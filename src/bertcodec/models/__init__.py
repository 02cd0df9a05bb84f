"""Term and record models for bertcodec.

This module provides the Python types for BERT-specific terms (atoms,
bitstrings, explicit lists) and the Pydantic record base used for BURP.
"""

from __future__ import annotations

from .record import BaseRecord, Request
from .terms import (
    BERT_ATOM,
    FALSE_ATOM,
    NIL_ATOM,
    TRUE_ATOM,
    Atom,
    Bitstring,
    Encodable,
    List,
    Term,
)

__all__ = [
    "Atom",
    "Bitstring",
    "List",
    "Encodable",
    "Term",
    "BaseRecord",
    "Request",
    "BERT_ATOM",
    "NIL_ATOM",
    "TRUE_ATOM",
    "FALSE_ATOM",
]
