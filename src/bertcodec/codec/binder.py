"""Positional binding of decoded tuples onto records.

This module maps a decoded tuple (or list) onto a BaseRecord subclass by
position: element 0 to the first declared field, element 1 to the second,
and so on. Counts must match exactly and every element is validated by the
record's Pydantic field types.
"""

from __future__ import annotations

from typing import Any, BinaryIO, Optional, TypeVar, Union

from pydantic import ValidationError

from ..config import CodecConfig
from ..exceptions import BindError
from ..models.record import BaseRecord
from .decoder import decode, decode_from

R = TypeVar("R", bound=BaseRecord)


def bind(term: Any, record_class: type[R]) -> R:
    """Bind a decoded term onto a record by position.

    Args:
        term: Decoded tuple or list
        record_class: BaseRecord subclass to populate

    Returns:
        Validated record instance

    Raises:
        BindError: If the term is not a sequence, its length differs from the
            record's field count, or an element fails field validation

    Examples:
        ```python
        from bertcodec import Atom, Request, bind

        term = (Atom("call"), Atom("calc"), Atom("add"), [1, 2])
        request = bind(term, Request)
        request.function  # Atom('add')
        ```
    """
    if not isinstance(term, (tuple, list)):
        raise BindError(
            f"Cannot bind {type(term).__name__} to {record_class.__name__}: "
            f"expected a tuple or list"
        )

    names = record_class.field_names()
    if len(term) != len(names):
        raise BindError(
            f"Cannot bind {len(term)} elements to {record_class.__name__}: "
            f"expected {len(names)} ({', '.join(names)})"
        )

    try:
        return record_class.model_validate(dict(zip(names, term)))
    except ValidationError as err:
        raise BindError(f"Failed to bind {record_class.__name__}: {err}") from err


def unmarshal(
    data: Union[bytes, bytearray, memoryview],
    record_class: type[R],
    *,
    config: Optional[CodecConfig] = None,
) -> R:
    """Decode BERT bytes and bind the result onto a record.

    Raises:
        DecodeError: If the data is malformed
        BindError: If the decoded term does not fit the record
    """
    return bind(decode(data, config=config), record_class)


def unmarshal_from(
    stream: BinaryIO, record_class: type[R], *, config: Optional[CodecConfig] = None
) -> R:
    """Decode one term from a stream and bind it onto a record.

    Raises:
        DecodeError: If the data is malformed
        BindError: If the decoded term does not fit the record
    """
    return bind(decode_from(stream, config=config), record_class)
