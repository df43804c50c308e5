import sys
from typing import IO, Optional

from chunkenv.kernel import stream as streamio
from chunkenv.kernel.errors import UnexpectedEndOfStream
from chunkenv.kernel.helpers import format_offset, print_chunk
from chunkenv.kernel.preset import _DecoderPreset, container


def analyze(
    stream: IO[bytes], cfg: _DecoderPreset = container, out: Optional[IO[str]] = None
) -> int:
    """Print header fields of every chunk in stream, skipping content.

    Returns number of complete chunks found.
    """
    out = out or sys.stdout
    decoder = cfg.decoder(stream)
    count = 0
    while True:
        offset = streamio.tell(stream)
        try:
            chunk = decoder.decode()
            if chunk is None:
                return count
            print_chunk(offset, chunk, stream=out)
            decoder.skip(chunk)
        except UnexpectedEndOfStream:
            print(f'Trailing bytes at offset {format_offset(offset)}', file=out)
            return count
        count += 1
