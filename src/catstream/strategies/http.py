"""HTTP/HTTPS opening strategy."""

from collections.abc import Iterator
import errno
import logging
import os
from typing import Any

from typing_extensions import override

from catstream.strategies.base import DEFAULT_CHUNK_SIZE, OpeningStrategy, ReadableStream
from catstream.strategies.chunked import ChunkedStream
from catstream.strategies.local import LocalStrategy

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def _status_error(url: str, status_code: int) -> OSError:
    """Translate an HTTP status into the matching ``OSError`` subclass."""
    if status_code in (404, 410):
        message = f"HTTP {status_code}: {os.strerror(errno.ENOENT)}"
        return FileNotFoundError(errno.ENOENT, message, url)
    if status_code in (401, 403):
        message = f"HTTP {status_code}: {os.strerror(errno.EACCES)}"
        return PermissionError(errno.EACCES, message, url)
    return OSError(f"Failed to open {url}: HTTP {status_code}")


class HTTPStrategy(OpeningStrategy):
    """
    Open HTTP/HTTPS URLs as streaming sources.

    Uses httpx to stream responses without loading entire bodies into memory.
    The request is sent when the source is opened, so connection failures and
    error statuses surface as open errors; the body is pulled chunk by chunk
    as the reader asks for it. Standard input is delegated to a local strategy.
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        timeout: int = DEFAULT_TIMEOUT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        client: Any = None,
    ) -> None:
        """
        Initialize HTTPStrategy.

        Args:
            headers: Optional custom HTTP headers.
            auth: Optional tuple of (username, password) for basic auth.
            timeout: Request timeout in seconds (default: 30).
            chunk_size: Size of chunks to read (default: 64KB).
            client: Optional ``httpx.Client``. When omitted, a client is
                created per opened source and closed with it.

        Raises:
            ImportError: If httpx is not installed.
            ValueError: If chunk_size is not positive.
        """
        try:
            import httpx  # noqa: F401
        except ImportError as e:
            raise ImportError(
                "httpx is required for HTTPStrategy. Install with: pip install catstream[http]"
            ) from e

        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")

        self.headers = headers or {}
        self.auth = auth
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.client = client
        self._local = LocalStrategy()

    @override
    def open(self, path: str) -> ReadableStream:
        """
        Send a GET request and return a handle over the streamed body.

        Args:
            path: HTTP/HTTPS URL.

        Returns:
            ReadableStream: A handle over the response body.

        Raises:
            ValueError: If the URL is not HTTP/HTTPS.
            FileNotFoundError: On 404 or 410.
            PermissionError: On 401 or 403.
            OSError: On any other error status or transport failure.
        """
        import httpx

        if not path.startswith(("http://", "https://")):
            raise ValueError("url must be a valid HTTP/HTTPS URL")

        client = self.client if self.client is not None else httpx.Client()
        owns_client = self.client is None
        send_options: dict[str, Any] = {"stream": True, "follow_redirects": True}
        if self.auth is not None:
            send_options["auth"] = self.auth

        try:
            request = client.build_request(
                "GET", path, headers=self.headers, timeout=self.timeout
            )
            response = client.send(request, **send_options)
        except httpx.HTTPError as e:
            if owns_client:
                client.close()
            logger.exception("Error opening %s: %s", path, e)
            raise OSError(f"Failed to open {path}: {e}") from e

        if response.is_error:
            response.close()
            if owns_client:
                client.close()
            logger.debug("Error opening %s: HTTP %d", path, response.status_code)
            raise _status_error(path, response.status_code)

        def release() -> None:
            response.close()
            if owns_client:
                client.close()

        logger.info("Streaming %s (HTTP %d)", path, response.status_code)
        return ChunkedStream(
            self._iter_body(path, response.iter_bytes(chunk_size=self.chunk_size)),
            on_close=release,
        )

    @override
    def stdin(self) -> ReadableStream:
        return self._local.stdin()

    @staticmethod
    def _iter_body(path: str, chunks: Iterator[bytes]) -> Iterator[bytes]:
        """Yield body chunks, translating transport failures into ``OSError``."""
        import httpx

        try:
            yield from chunks
        except httpx.HTTPError as e:
            logger.exception("Error reading from %s: %s", path, e)
            raise OSError(f"Failed to read from {path}: {e}") from e
