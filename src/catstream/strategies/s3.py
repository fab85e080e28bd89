"""AWS S3 opening strategy."""

from collections.abc import Iterator
import errno
import logging
import os
from typing import Any
from urllib.parse import urlparse

from typing_extensions import override

from catstream.strategies.base import DEFAULT_CHUNK_SIZE, OpeningStrategy, ReadableStream
from catstream.strategies.chunked import ChunkedStream
from catstream.strategies.local import LocalStrategy

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "404", "NotFound"})
_DENIED_CODES = frozenset({"AccessDenied", "403", "Forbidden"})


def parse_s3_uri(uri: str) -> tuple[str, str]:
    """
    Split an ``s3://bucket/key`` URI into bucket and key.

    Raises:
        ValueError: If the URI is not a complete S3 object URI.
    """
    parsed = urlparse(uri)
    bucket = parsed.netloc
    key = parsed.path.lstrip("/")

    if parsed.scheme != "s3" or not bucket or not key:
        raise ValueError(f"Invalid S3 URI: {uri}. Expected: s3://bucket/key")

    return bucket, key


class S3Strategy(OpeningStrategy):
    """
    Open ``s3://bucket/key`` objects as streaming sources.

    Uses the boto3 S3 client to stream objects without loading them into memory.
    Standard input is delegated to a local strategy.
    """

    def __init__(self, client: Any = None, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        """
        Initialize S3Strategy.

        Args:
            client: Boto3 S3 client instance. If None, will create default client.
            chunk_size: Size of chunks to read from S3 (default: 64KB).

        Raises:
            ImportError: If boto3 is not installed.
            ValueError: If chunk_size is not positive.
        """
        try:
            import boto3
        except ImportError as e:
            raise ImportError(
                "boto3 is required for S3Strategy. Install with: pip install catstream[s3]"
            ) from e

        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")

        self.chunk_size = chunk_size
        self.client = client or boto3.client("s3")
        self._local = LocalStrategy()

    @override
    def open(self, path: str) -> ReadableStream:
        """
        Fetch the object and return a handle over its body.

        Args:
            path: S3 URI of the form ``s3://bucket/key``.

        Returns:
            ReadableStream: A handle over the object body.

        Raises:
            ValueError: If the URI is invalid.
            FileNotFoundError: If the bucket or key does not exist.
            PermissionError: If access is denied.
            OSError: For any other failure.
        """
        bucket, key = parse_s3_uri(path)

        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
        except Exception as e:
            error_response = getattr(e, "response", None)
            code = ""
            if isinstance(error_response, dict):
                code = str(error_response.get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                logger.debug("S3 object not found: %s", path)
                raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path) from e
            if code in _DENIED_CODES:
                logger.debug("Access denied to S3 object: %s", path)
                raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), path) from e
            logger.exception("Error opening S3 object s3://%s/%s: %s", bucket, key, e)
            raise OSError(f"Failed to open S3 object {path}: {e}") from e

        body = response["Body"]
        logger.info("Streaming s3://%s/%s", bucket, key)
        return ChunkedStream(self._iter_body(path, body), on_close=body.close)

    @override
    def stdin(self) -> ReadableStream:
        return self._local.stdin()

    def _iter_body(self, path: str, body: Any) -> Iterator[bytes]:
        """Yield body chunks, translating read failures into ``OSError``."""
        try:
            while True:
                chunk = body.read(self.chunk_size)
                if not chunk:
                    break
                yield chunk
        except OSError:
            raise
        except Exception as e:
            logger.exception("Error reading S3 object %s: %s", path, e)
            raise OSError(f"Failed to read S3 object {path}: {e}") from e
