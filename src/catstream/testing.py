"""
Test doubles for code that reads from catstream sources.

``FailingStream`` is a handle that fails a fixed number of times before
reporting end of data, for exercising retry and error paths. It also works on
its own as a failing writer. ``MemoryStrategy`` serves sources from memory and
records which paths were opened.

Example:
    >>> import errno
    >>> from catstream.reader import MultiSourceReader
    >>> strategy = MemoryStrategy({
    ...     "a": b"1234",
    ...     "flaky": lambda: FailingStream(InterruptedError, "Interrupted", 2),
    ...     "b": b"5678",
    ... })
    >>> reader = MultiSourceReader(["a", "flaky", "b"], strategy)
    >>> reader.read(8)
    b'1234'
"""

from collections.abc import Callable, Mapping
import errno
import io
import os

from typing_extensions import override

from catstream.strategies.base import OpeningStrategy, ReadableStream

SourceContent = bytes | Callable[[], ReadableStream]


class FailingStream(io.RawIOBase):
    """
    A stream that fails on read or write.

    Each ``readinto`` or ``write`` raises ``kind(message)`` while the remaining
    failure count is non-zero. After that, reads report end of data and writes
    accept nothing.
    """

    def __init__(
        self,
        kind: type[OSError] = OSError,
        message: str = "",
        repeat_count: int = 1,
    ) -> None:
        """
        Initialize FailingStream.

        Args:
            kind: Exception type to raise.
            message: Message of the raised exception.
            repeat_count: How many calls fail. A negative count fails forever.
        """
        super().__init__()
        self.kind = kind
        self.message = message
        self.repeat_count = repeat_count

    def _fail(self) -> int:
        if self.repeat_count == 0:
            return 0
        if self.repeat_count > 0:
            self.repeat_count -= 1
        raise self.kind(self.message)

    @override
    def readable(self) -> bool:
        return True

    @override
    def writable(self) -> bool:
        return True

    @override
    def readinto(self, buffer: bytearray | memoryview) -> int:  # type: ignore[override]
        return self._fail()

    @override
    def write(self, data: bytes | bytearray | memoryview) -> int:  # type: ignore[override]
        return self._fail()

    @override
    def flush(self) -> None:
        pass


class MemoryStrategy(OpeningStrategy):
    """
    Serve sources from memory.

    Each path maps either to bytes, served through a fresh ``io.BytesIO`` on
    every open, or to a factory returning a handle. Unknown paths raise
    ``FileNotFoundError`` like the file system would.
    """

    def __init__(
        self,
        files: Mapping[str, SourceContent] | None = None,
        stdin: bytes = b"",
    ) -> None:
        self.files = dict(files or {})
        self.stdin_data = stdin
        self.opened: list[str] = []

    @override
    def open(self, path: str) -> ReadableStream:
        self.opened.append(path)

        if path not in self.files:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)

        content = self.files[path]
        if isinstance(content, bytes):
            return io.BytesIO(content)
        return content()

    @override
    def stdin(self) -> ReadableStream:
        self.opened.append("-")
        return io.BytesIO(self.stdin_data)
