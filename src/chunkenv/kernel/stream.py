import io
from typing import IO, Optional, Type

import deal

from chunkenv.utils.copyio import limited

from .errors import TruncatedContent, UnexpectedEndOfStream


def tell(stream: IO[bytes]) -> Optional[int]:
    """Return current stream offset, or None when the stream cannot report one."""
    try:
        if not stream.seekable():
            return None
        return stream.tell()
    except (AttributeError, OSError, ValueError):
        return None


@deal.chain(
    deal.pre(lambda _: _.size >= 0),
    deal.ensure(lambda _: len(_.result) <= _.size),
)
def read_exact(stream: IO[bytes], size: int) -> bytes:
    """Read size bytes from stream.
    A shorter result means the stream ended before size bytes were available.
    """
    # raw streams may return less than requested before end of stream
    return b''.join(limited(stream.read, size))


@deal.pre(lambda _: _.size >= 0)
def skip(
    stream: IO[bytes],
    size: int,
    error: Type[UnexpectedEndOfStream] = TruncatedContent,
) -> int:
    """Advance stream past size bytes without keeping them."""
    offset = tell(stream)
    if offset is not None:
        end = stream.seek(0, io.SEEK_END)
        if offset + size > end:
            raise error(size, end - offset, offset)
        return stream.seek(offset + size, io.SEEK_SET) - offset
    skipped = sum(len(block) for block in limited(stream.read, size))
    if skipped != size:
        raise error(size, skipped, offset)
    return skipped


@deal.pre(lambda _: _.size >= 0)
def copy(
    source: IO[bytes],
    target: IO[bytes],
    size: int,
    error: Type[UnexpectedEndOfStream] = TruncatedContent,
) -> int:
    """Copy exactly size bytes from source to target in buffered blocks."""
    offset = tell(source)
    copied = 0
    for block in limited(source.read, size):
        target.write(block)
        copied += len(block)
    if copied != size:
        raise error(size, copied, offset)
    return copied
