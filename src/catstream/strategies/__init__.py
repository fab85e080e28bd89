"""Opening strategies: how a source becomes a readable handle."""

from catstream.strategies.base import OpeningStrategy, ReadableStream
from catstream.strategies.chunked import ChunkedStream
from catstream.strategies.http import HTTPStrategy
from catstream.strategies.local import LocalStrategy, StdinStream
from catstream.strategies.s3 import S3Strategy
from catstream.strategies.uri import URIStrategy

__all__ = [
    "ChunkedStream",
    "HTTPStrategy",
    "LocalStrategy",
    "OpeningStrategy",
    "ReadableStream",
    "S3Strategy",
    "StdinStream",
    "URIStrategy",
]
