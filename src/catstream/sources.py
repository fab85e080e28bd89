"""Typed input sources and the identifier resolver."""

from collections.abc import Iterable
from dataclasses import dataclass

STDIN_TOKEN = "-"


@dataclass(frozen=True)
class Stdin:
    """Read from the process's standard input."""

    def __str__(self) -> str:
        return STDIN_TOKEN


@dataclass(frozen=True)
class File:
    """Read from the named file (or any identifier the opening strategy understands)."""

    path: str

    def __str__(self) -> str:
        return self.path


Source = Stdin | File


def resolve_sources(identifiers: Iterable[str]) -> list[Source]:
    """
    Turn command-line style identifiers into an ordered list of sources.

    An empty list means standard input. Otherwise each ``"-"`` becomes
    :class:`Stdin` and every other identifier becomes :class:`File`. Order and
    duplicates are preserved; nothing is checked for existence.

    Args:
        identifiers: Ordered identifiers, typically positional CLI arguments.

    Returns:
        list[Source]: The sources to read, in order.
    """
    sources: list[Source] = [
        Stdin() if identifier == STDIN_TOKEN else File(identifier) for identifier in identifiers
    ]
    if not sources:
        return [Stdin()]
    return sources
