import io
from typing import Callable, Iterator


def limited(
    source: Callable[[int], bytes], size: int, buffer_size: int = io.DEFAULT_BUFFER_SIZE
) -> Iterator[bytes]:
    """Yield blocks read from source until size bytes were read or source is exhausted."""
    remaining = size
    while remaining > 0:
        block = source(min(buffer_size, remaining))
        if not block:
            return
        remaining -= len(block)
        yield block
