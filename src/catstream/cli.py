"""Command-line interface: concatenate sources to standard output."""

import logging
from pathlib import Path
import sys
from typing import BinaryIO

import typer

from catstream.reader import MultiSourceReader
from catstream.sources import Source
from catstream.strategies.base import DEFAULT_CHUNK_SIZE
from catstream.strategies.http import DEFAULT_TIMEOUT
from catstream.strategies.uri import URIStrategy

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


def _describe(error: Exception) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error)


def _failed_source(
    reader: MultiSourceReader,
    before: tuple[Source, ...],
    previous: Source | None,
) -> Source | None:
    """Name the source behind an error raised by one read call."""
    if reader.current_source is not None:
        return reader.current_source
    # Nothing is active, so the error came from opening the last popped source
    # or from closing a handle that was retired.
    popped = len(before) - len(reader.pending_sources)
    if popped > 0:
        return before[popped - 1]
    return previous


def copy_stream(reader: MultiSourceReader, out: BinaryIO, chunk_size: int) -> bool:
    """
    Copy every source to ``out``, reporting failed sources on stderr.

    A source that cannot be opened is skipped. A source that fails while being
    read is abandoned and reading continues with the next one.

    Returns:
        bool: True if every source was copied without error.
    """
    ok = True
    total = 0
    view = memoryview(bytearray(chunk_size))

    while True:
        before = reader.pending_sources
        previous = reader.current_source
        try:
            count = reader.readinto(view)
        except (OSError, ValueError) as e:
            failed = _failed_source(reader, before, previous)
            if failed is None:
                raise
            ok = False
            typer.echo(f"catstream: {failed}: {_describe(e)}", err=True)
            try:
                reader.next_source()
            except OSError as close_error:
                typer.echo(f"catstream: {failed}: {_describe(close_error)}", err=True)
            continue

        if not count:
            break
        out.write(view[:count])
        total += count

    out.flush()
    logger.info("Copied %d bytes", total)
    return ok


@app.command()
def main(
    files: list[str] | None = typer.Argument(
        None,
        help="Sources to concatenate: paths, s3://bucket/key, https://url, or - for stdin",
    ),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (default: stdout)",
    ),
    chunk_size: int = typer.Option(
        DEFAULT_CHUNK_SIZE,
        "--chunk-size",
        min=1,
        envvar="CATSTREAM_CHUNK_SIZE",
        help="Bytes to read per call",
    ),
    timeout: int = typer.Option(
        DEFAULT_TIMEOUT,
        "--timeout",
        help="Request timeout in seconds for HTTP sources",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Concatenate files, URLs and standard input to standard output.

    With no sources, or when a source is -, read standard input.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    strategy = URIStrategy(timeout=timeout, chunk_size=chunk_size)

    try:
        with MultiSourceReader(files or [], strategy) as reader:
            if output:
                with Path(output).open("wb") as out:
                    ok = copy_stream(reader, out, chunk_size)
                typer.echo(f"Output written to: {output}", err=True)
            else:
                ok = copy_stream(reader, sys.stdout.buffer, chunk_size)

    except ImportError as e:
        typer.echo(
            f"Error: Missing dependency: {e}\nInstall with: pip install catstream[all]",
            err=True,
        )
        raise typer.Exit(code=1) from None
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        if verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        raise typer.Exit(code=1) from None

    if not ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
