"""catstream: read files, URLs and standard input as one continuous byte stream."""

from catstream.reader import MultiSourceReader, open_input
from catstream.sources import STDIN_TOKEN, File, Source, Stdin, resolve_sources

__all__ = [
    "STDIN_TOKEN",
    "File",
    "MultiSourceReader",
    "Source",
    "Stdin",
    "open_input",
    "resolve_sources",
]
