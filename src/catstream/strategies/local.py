"""Local file system and standard input opening strategy."""

import io
import logging
import sys
from typing import BinaryIO

from typing_extensions import override

from catstream.strategies.base import OpeningStrategy, ReadableStream

logger = logging.getLogger(__name__)


class StdinStream(io.RawIOBase):
    """
    Non-owning handle over the process's standard input.

    Closing this handle does not close the underlying stream, so standard
    input can be listed more than once. Reads return as soon as any input is
    available instead of waiting to fill the whole buffer.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    @override
    def readable(self) -> bool:
        return True

    @override
    def readinto(self, buffer: bytearray | memoryview) -> int:  # type: ignore[override]
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        readinto1 = getattr(self._stream, "readinto1", None)
        if readinto1 is not None:
            return readinto1(buffer)
        return self._stream.readinto(buffer)  # type: ignore[attr-defined]


class LocalStrategy(OpeningStrategy):
    """
    Open sources from the local file system and the process's standard input.

    This is the default strategy used by the reader.
    """

    @override
    def open(self, path: str) -> ReadableStream:
        """
        Open a local file in unbuffered binary mode.

        Buffering is left to whoever wraps the reader. Errors from the
        operating system propagate unchanged.

        Args:
            path: Path to the local file.

        Returns:
            ReadableStream: An unbuffered ``FileIO`` handle.

        Raises:
            FileNotFoundError: If the file does not exist.
            PermissionError: If the file cannot be read.
            IsADirectoryError: If the path is a directory.
        """
        handle = open(path, "rb", buffering=0)  # noqa: SIM115
        logger.debug("Opened local file: %s", path)
        return handle

    @override
    def stdin(self) -> ReadableStream:
        """
        Return a non-owning handle over ``sys.stdin``.

        Returns:
            ReadableStream: A handle reading from standard input.
        """
        stream = getattr(sys.stdin, "buffer", sys.stdin)
        logger.debug("Reading from standard input")
        return StdinStream(stream)
