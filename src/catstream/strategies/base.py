"""Abstract opening strategy and the readable handle protocol."""

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

DEFAULT_CHUNK_SIZE = 65536


@runtime_checkable
class ReadableStream(Protocol):
    """
    Anything the reader can pull bytes from.

    Binary file objects, ``io.BytesIO`` and ``io.RawIOBase`` subclasses all
    qualify. A ``close()`` method is optional; when present, the reader calls
    it as soon as the handle is exhausted or abandoned.
    """

    def readinto(self, buffer: bytearray | memoryview, /) -> int | None:
        """Read up to ``len(buffer)`` bytes into ``buffer``; 0 means end of data."""
        ...


class OpeningStrategy(ABC):
    """
    Abstract base class for opening sources.

    A strategy turns a source into a readable handle. The reader only decides
    *when* to open and *what* comes next; the strategy decides *how*, which
    keeps the sequencing logic independent of filesystems, networks and test
    doubles.
    """

    @abstractmethod
    def open(self, path: str) -> ReadableStream:
        """
        Open a named source for reading.

        Args:
            path: Identifier of the source, as given on the command line.

        Returns:
            ReadableStream: A handle positioned at the start of the source.

        Raises:
            FileNotFoundError: If the source does not exist.
            PermissionError: If the source cannot be accessed.
            OSError: For any other failure to open the source.
        """
        ...

    @abstractmethod
    def stdin(self) -> ReadableStream:
        """
        Return a handle bound to standard input.

        Must not raise.

        Returns:
            ReadableStream: A handle reading from standard input.
        """
        ...
