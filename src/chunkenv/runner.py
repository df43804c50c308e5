import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

import typer

from chunkenv.analyze import analyze as analyze_stream
from chunkenv.extract import extract_documents
from chunkenv.kernel.errors import ChunkError
from chunkenv.kernel.helpers import format_offset
from chunkenv.kernel.preset import container
from chunkenv.kernel.settings import DEFAULT_MAX_META_SIZE

app = typer.Typer()

EXIT_ERROR = 1
EXIT_MISSING_INPUT = 2


@app.callback()
def main(
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Show debug messages'),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )


@contextmanager
def open_input(filename: Path) -> Iterator[IO[bytes]]:
    try:
        stream = open(filename, 'rb')
    except FileNotFoundError:
        typer.echo(f'Input file not found: {filename}', err=True)
        raise typer.Exit(code=EXIT_MISSING_INPUT) from None
    except OSError as exc:
        typer.echo(f'Error opening input file: {exc}', err=True)
        raise typer.Exit(code=EXIT_ERROR) from exc
    with stream:
        yield stream


def fail(message: str) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(code=EXIT_ERROR)


@app.command()
def extract(
    filename: Path = typer.Argument(Path('sample.env'), help='Container file to read from'),
    target_dir: Path = typer.Option(
        Path('output'), '--target', '-t', help='Target directory'
    ),
    max_meta_size: int = typer.Option(
        DEFAULT_MAX_META_SIZE,
        '--max-meta-size',
        min=0,
        help='Maximum allowed size for metadata in bytes',
    ),
) -> None:
    """Extract document chunks to files."""
    cfg = container(max_meta_size=max_meta_size)
    try:
        os.makedirs(target_dir, exist_ok=True)
    except OSError as exc:
        raise fail(f'Error creating output directory: {exc}') from exc

    with open_input(filename) as stream:
        try:
            extract_documents(stream, str(target_dir), cfg)
        except ChunkError as exc:
            raise fail(f'Error at offset {format_offset(exc.offset)}: {exc}') from exc
        except OSError as exc:
            raise fail(f'Error writing output: {exc}') from exc


@app.command()
def analyze(
    filename: Path = typer.Argument(Path('sample.env'), help='Container file to read from'),
    max_meta_size: int = typer.Option(
        DEFAULT_MAX_META_SIZE,
        '--max-meta-size',
        min=0,
        help='Maximum allowed size for metadata in bytes',
    ),
) -> None:
    """Print chunk headers without extracting content."""
    cfg = container(max_meta_size=max_meta_size)
    with open_input(filename) as stream:
        try:
            analyze_stream(stream, cfg)
        except ChunkError as exc:
            raise fail(
                f'Error parsing chunk at offset {format_offset(exc.offset)}: {exc}'
            ) from exc
        except OSError as exc:
            raise fail(f'Error reading input: {exc}') from exc


if __name__ == '__main__':
    app()
