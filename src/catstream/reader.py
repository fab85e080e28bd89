"""Read several sources as one continuous byte stream."""

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass
import io
import logging

from typing_extensions import override

from catstream.sources import File, Source, resolve_sources
from catstream.strategies.base import OpeningStrategy, ReadableStream
from catstream.strategies.local import LocalStrategy

logger = logging.getLogger(__name__)


@dataclass
class _Active:
    source: Source
    handle: ReadableStream


class MultiSourceReader(io.RawIOBase):
    """
    Raw byte stream over an ordered list of sources.

    Sources are opened lazily, one at a time, through the opening strategy.
    When the open source reports end of data its handle is closed and the
    next source is opened within the same call, so sources that are empty
    are skipped without the caller noticing. A call never returns bytes from
    more than one source.

    Errors are never wrapped, retried or suppressed. Note the asymmetry
    between the two kinds of failure:

    - If *opening* a source fails, the error propagates and that source is
      dropped for good. The next call moves on to the following source.
    - If *reading* an open source fails, the error propagates and the source
      stays active. The next call reads from the same handle again, so
      whether a retry can succeed is up to the handle.

    Wrap the reader in ``io.BufferedReader`` (see :func:`open_input`) for
    line-oriented or buffered access.
    """

    def __init__(
        self,
        paths: Iterable[str] = (),
        strategy: OpeningStrategy | None = None,
    ) -> None:
        """
        Initialize the reader.

        Args:
            paths: Identifiers to read, in order. An empty list or ``"-"``
                means standard input.
            strategy: How sources are opened (default: LocalStrategy).
        """
        self._strategy = strategy or LocalStrategy()
        self._pending: deque[Source] = deque(resolve_sources(paths))
        self._active: _Active | None = None
        super().__init__()

    @classmethod
    def from_sources(
        cls,
        sources: Iterable[Source],
        strategy: OpeningStrategy | None = None,
    ) -> "MultiSourceReader":
        """
        Create a reader over already resolved sources.

        Unlike the constructor, an empty list does not imply standard input:
        the reader starts out exhausted.
        """
        reader = cls((), strategy)
        reader._pending = deque(sources)
        return reader

    @property
    def current_source(self) -> Source | None:
        """
        The source currently being read.

        ``None`` before the first read, between sources, and once every
        source has been drained.
        """
        return self._active.source if self._active is not None else None

    @property
    def pending_sources(self) -> tuple[Source, ...]:
        """Sources that have not been opened yet, in order."""
        return tuple(self._pending)

    @property
    def strategy(self) -> OpeningStrategy:
        return self._strategy

    @override
    def readable(self) -> bool:
        return True

    @override
    def readinto(self, buffer: bytearray | memoryview) -> int | None:  # type: ignore[override]
        """
        Read bytes from the current source into ``buffer``.

        Returns:
            int | None: Number of bytes read. 0 means every source is
            exhausted; further calls keep returning 0.

        Raises:
            OSError: Whatever the strategy or the active handle raised.
            ValueError: If the reader has been closed.
        """
        if self.closed:
            raise ValueError("I/O operation on closed file.")

        if len(buffer) == 0:
            return 0

        while True:
            active = self._active
            if active is None:
                if not self._pending:
                    return 0
                active = self._open_next()

            count = active.handle.readinto(buffer)

            if count == 0:
                logger.debug("Exhausted source: %s", active.source)
                self._retire()
                continue

            return count

    def next_source(self) -> None:
        """
        Stop reading the current source.

        The active handle is closed and the next read opens the next pending
        source. Does nothing when no source is active.
        """
        if self._active is not None:
            logger.debug("Skipping rest of source: %s", self._active.source)
            self._retire()

    @override
    def close(self) -> None:
        """Close the active handle, forget pending sources and close the stream."""
        if not self.closed:
            try:
                if getattr(self, "_active", None) is not None:
                    self._retire()
                if getattr(self, "_pending", None) is not None:
                    self._pending.clear()
            finally:
                super().close()

    def _open_next(self) -> _Active:
        # The source is popped before opening so a failed open is never retried.
        source = self._pending.popleft()
        logger.debug("Opening source: %s", source)

        if isinstance(source, File):
            handle = self._strategy.open(source.path)
        else:
            handle = self._strategy.stdin()

        self._active = _Active(source, handle)
        return self._active

    def _retire(self) -> None:
        if self._active is None:
            return
        handle = self._active.handle
        self._active = None
        close = getattr(handle, "close", None)
        if close is not None:
            close()


def open_input(
    paths: Iterable[str] = (),
    strategy: OpeningStrategy | None = None,
    buffer_size: int = io.DEFAULT_BUFFER_SIZE,
) -> io.BufferedReader:
    """
    Open a buffered, line-iterable stream over several sources.

    The underlying :class:`MultiSourceReader` is available as ``.raw``, e.g.
    ``stream.raw.current_source``.

    Args:
        paths: Identifiers to read, in order. An empty list or ``"-"`` means
            standard input.
        strategy: How sources are opened (default: LocalStrategy).
        buffer_size: Size of the read buffer.

    Returns:
        io.BufferedReader: Buffered reader over the concatenated sources.

    Example:
        >>> with open_input(["notes.txt", "-"]) as stream:  # doctest: +SKIP
        ...     for line in stream:
        ...         print(stream.raw.current_source, line)
    """
    return io.BufferedReader(MultiSourceReader(paths, strategy), buffer_size=buffer_size)
