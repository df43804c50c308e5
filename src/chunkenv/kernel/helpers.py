import sys
from typing import IO, Optional

from .chunk import ENCODING, ERRORS, Chunk


def format_offset(offset: Optional[int]) -> str:
    return 'unknown' if offset is None else f'0x{offset:x}'


def displayable(text: str) -> str:
    """Replace undecodable bytes kept in text so it can be printed."""
    return text.encode(ENCODING, ERRORS).decode(ENCODING, 'replace')


def print_chunk(offset: Optional[int], chunk: Chunk, stream: IO[str] = sys.stdout) -> None:
    print(
        f'Offset: {format_offset(offset)}, Tag: {displayable(chunk.tag)}, '
        f'MetaLen: {chunk.meta_len}',
        file=stream,
    )
    print(f'  Metadata: {dict(chunk.metadata)}', file=stream)
    print(f'  ContentLen: {chunk.content_len}', file=stream)
