"""Opening strategy that dispatches on the identifier's URI scheme."""

import logging
from typing import Any
from urllib.parse import urlparse

from typing_extensions import override

from catstream.strategies.base import OpeningStrategy, ReadableStream
from catstream.strategies.local import LocalStrategy

logger = logging.getLogger(__name__)


class URIStrategy(OpeningStrategy):
    """
    Route each identifier to a strategy chosen by its URI scheme.

    - ``s3://bucket/key`` goes to an :class:`~catstream.strategies.s3.S3Strategy`
    - ``http://`` and ``https://`` go to an
      :class:`~catstream.strategies.http.HTTPStrategy`
    - anything else is treated as a local path

    Remote strategies are only created when an identifier needs them, so the
    optional httpx and boto3 dependencies are only required when used.
    """

    def __init__(
        self,
        local: OpeningStrategy | None = None,
        http: OpeningStrategy | None = None,
        s3: OpeningStrategy | None = None,
        **remote_options: Any,
    ) -> None:
        """
        Initialize URIStrategy.

        Args:
            local: Strategy for local paths and standard input (default: LocalStrategy).
            http: Strategy for HTTP/HTTPS URLs (default: created on first use).
            s3: Strategy for S3 URIs (default: created on first use).
            **remote_options: Options for lazily created remote strategies:
                - For S3: client, chunk_size
                - For HTTP: headers, auth, timeout, chunk_size
        """
        self.local = local or LocalStrategy()
        self.http = http
        self.s3 = s3
        self.remote_options = remote_options

    def _options(self, names: tuple[str, ...]) -> dict[str, Any]:
        return {k: v for k, v in self.remote_options.items() if k in names}

    def strategy_for(self, path: str) -> OpeningStrategy:
        """
        Return the strategy that handles ``path``.

        Raises:
            ImportError: If the matching remote strategy's library is not installed.
        """
        scheme = urlparse(path).scheme

        if scheme == "s3":
            if self.s3 is None:
                from catstream.strategies.s3 import S3Strategy

                logger.info("Creating S3Strategy")
                self.s3 = S3Strategy(**self._options(("client", "chunk_size")))
            return self.s3

        if scheme in ("http", "https"):
            if self.http is None:
                from catstream.strategies.http import HTTPStrategy

                logger.info("Creating HTTPStrategy")
                self.http = HTTPStrategy(
                    **self._options(("headers", "auth", "timeout", "chunk_size"))
                )
            return self.http

        return self.local

    @override
    def open(self, path: str) -> ReadableStream:
        return self.strategy_for(path).open(path)

    @override
    def stdin(self) -> ReadableStream:
        return self.local.stdin()
