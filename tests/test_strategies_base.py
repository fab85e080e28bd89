"""Tests for the OpeningStrategy base class and ReadableStream protocol."""

import io

import pytest
from typing_extensions import override

from catstream.strategies.base import OpeningStrategy, ReadableStream


def test_opening_strategy_is_abstract() -> None:
    """Test that OpeningStrategy is abstract and cannot be instantiated."""
    with pytest.raises(TypeError):
        OpeningStrategy()  # type: ignore[abstract]


def test_opening_strategy_requires_open() -> None:
    """Test that subclasses must implement open."""

    class IncompleteStrategy(OpeningStrategy):
        @override
        def stdin(self) -> ReadableStream:
            return io.BytesIO()

    with pytest.raises(TypeError):
        IncompleteStrategy()  # type: ignore[abstract]


def test_opening_strategy_requires_stdin() -> None:
    """Test that subclasses must implement stdin."""

    class IncompleteStrategy(OpeningStrategy):
        @override
        def open(self, path: str) -> ReadableStream:
            return io.BytesIO()

    with pytest.raises(TypeError):
        IncompleteStrategy()  # type: ignore[abstract]


def test_readable_stream_protocol() -> None:
    """Test which objects satisfy the ReadableStream protocol."""
    assert isinstance(io.BytesIO(b""), ReadableStream)
    assert isinstance(io.BufferedReader(io.BytesIO(b"")), ReadableStream)
    assert not isinstance(b"bytes", ReadableStream)
    assert not isinstance(io.StringIO(""), ReadableStream)
