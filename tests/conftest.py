"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from bertcodec import Atom, Request


@pytest.fixture
def coord_term() -> tuple[Any, ...]:
    """Sample tuple term."""
    return (Atom("coord"), 23, 42)


@pytest.fixture
def coord_bytes() -> bytes:
    """Encoding of coord_term."""
    return bytes([131, 104, 3, 100, 0, 5, 99, 111, 111, 114, 100, 97, 23, 97, 42])


@pytest.fixture
def sample_request() -> Request:
    """Sample BURP call request."""
    return Request(
        kind=Atom("call"),
        module=Atom("nut"),
        function=Atom("add"),
        arguments=[1, 2],
    )
