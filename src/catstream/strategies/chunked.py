"""Adapter from an iterator of byte chunks to a readable handle."""

from collections.abc import Callable, Iterator
import io

from typing_extensions import override


class ChunkedStream(io.RawIOBase):
    """
    Wraps an iterator of bytes as a raw stream with a ``readinto`` method.

    Each call copies at most one chunk's worth of bytes. Leftover bytes from a
    chunk larger than the caller's buffer are served first on the next call.
    Empty chunks are skipped, so 0 is only returned once the iterator is
    exhausted. An exception raised by the iterator propagates to the caller
    and is raised again on every later read; the stream never reports end of
    data after a failure.
    """

    def __init__(
        self,
        chunks: Iterator[bytes],
        on_close: Callable[[], None] | None = None,
    ) -> None:
        """
        Initialize ChunkedStream.

        Args:
            chunks: Iterator producing byte chunks.
            on_close: Optional callback releasing the resource behind ``chunks``.
        """
        self._chunks = chunks
        self._on_close = on_close
        self._pending = b""
        self._error: Exception | None = None

    @override
    def readable(self) -> bool:
        return True

    @override
    def readinto(self, buffer: bytearray | memoryview) -> int:  # type: ignore[override]
        if self.closed:
            raise ValueError("I/O operation on closed file.")

        size = len(buffer)
        if size == 0:
            return 0

        while not self._pending:
            if self._error is not None:
                raise self._error
            try:
                chunk = next(self._chunks, None)
            except Exception as e:
                self._error = e
                raise
            if chunk is None:
                return 0
            self._pending = chunk

        data, self._pending = self._pending[:size], self._pending[size:]
        buffer[: len(data)] = data
        return len(data)

    @override
    def close(self) -> None:
        if not self.closed:
            try:
                if self._on_close is not None:
                    self._on_close()
            finally:
                super().close()
