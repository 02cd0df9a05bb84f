"""bertcodec: BERT term codec and BURP framing

A Python library for the BERT subset of the Erlang External Term Format and
the BURP length-prefixed envelope used by BERT-RPC. Designed for exchanging
structured values with Erlang/Elixir ports and BERT-RPC peers.

Protocol reference: http://bert-rpc.org/

Key Features:
- Encode/decode of integers (including bignums), floats, atoms, strings,
  binaries, bitstrings, tuples and lists
- Pydantic-based records bound positionally to decoded tuples
- BURP request/response framing over any binary stream
- All-or-nothing encoding: sinks never see partial output

Quick Start:
    >>> from bertcodec import Atom, Request, decode, encode, frame_term, unframe_term
    >>>
    >>> data = encode((Atom("reply"), 42))
    >>> decode(data)
    (Atom('reply'), 42)
    >>>
    >>> request = Request(kind=Atom("call"), module=Atom("calc"),
    ...                   function=Atom("add"), arguments=[1, 2])
    >>> packet = frame_term(request)

Python type mapping:
    int <-> small int / int / bignum    float <-> float (float32 precision)
    Atom <-> atom                        str <-> string
    bytes <-> binary                     Bitstring <-> bitstring
    tuple <-> small tuple                list <-> list ([] <-> nil)
    None -> nil; {bert, nil|true|false} -> None/True/False on decode
"""

from __future__ import annotations

__version__ = "0.1.0"

from .codec import Tag, bind, decode, decode_from, encode, encode_to, unmarshal, unmarshal_from
from .config import DEFAULT_CONFIG, CodecConfig
from .exceptions import (
    BadMagicError,
    BertError,
    BindError,
    DecodeError,
    EncodeError,
    FramingError,
    MalformedFloatError,
    UnexpectedEndError,
    UnknownTagError,
    UnsupportedTypeError,
)
from .framing import (
    frame_term,
    read_frame,
    read_request,
    read_term,
    unframe_term,
    write_frame,
    write_request,
    write_response,
)
from .models import (
    BERT_ATOM,
    FALSE_ATOM,
    NIL_ATOM,
    TRUE_ATOM,
    Atom,
    BaseRecord,
    Bitstring,
    Encodable,
    List,
    Request,
    Term,
)
from .utils import encoded_size, framed_size

__all__ = [
    # Core API
    "encode",
    "encode_to",
    "decode",
    "decode_from",
    # Records
    "bind",
    "unmarshal",
    "unmarshal_from",
    "BaseRecord",
    "Request",
    # Term types
    "Atom",
    "Bitstring",
    "List",
    "Encodable",
    "Term",
    "Tag",
    "BERT_ATOM",
    "NIL_ATOM",
    "TRUE_ATOM",
    "FALSE_ATOM",
    # Configuration
    "CodecConfig",
    "DEFAULT_CONFIG",
    # Exceptions
    "BertError",
    "EncodeError",
    "DecodeError",
    "UnsupportedTypeError",
    "BadMagicError",
    "UnknownTagError",
    "UnexpectedEndError",
    "MalformedFloatError",
    "BindError",
    "FramingError",
    # Framing
    "frame_term",
    "unframe_term",
    "read_frame",
    "write_frame",
    "read_term",
    "read_request",
    "write_request",
    "write_response",
    # Sizing
    "encoded_size",
    "framed_size",
    # Version
    "__version__",
]
