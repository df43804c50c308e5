import io
import logging
from typing import IO, Iterator, Optional

import deal

from . import stream as streamio
from .chunk import Chunk, parse_metadata, validate_tag
from .errors import (
    MetadataTooLarge,
    TruncatedContentLength,
    TruncatedHeader,
    TruncatedMetadata,
)
from .settings import DEFAULT_MAX_META_SIZE
from .structured import CHUNK_HEADER, CONTENT_LENGTH


@deal.chain(
    deal.pre(lambda _: _.limit >= 0),
    deal.raises(MetadataTooLarge),
    deal.reason(MetadataTooLarge, lambda _: _.size > _.limit),
    deal.has(),
)
def check_meta_len(size: int, limit: int, offset: Optional[int] = None) -> int:
    if size > limit:
        raise MetadataTooLarge(size, limit, offset)
    return size


class ChunkDecoder(object):
    """Forward-only decoder of chunk headers and metadata.

    Each call to `decode` leaves the stream positioned at the first content
    byte of the returned chunk. The caller must consume or skip exactly
    `content_len` bytes before decoding the next chunk.
    """

    def __init__(
        self,
        stream: IO[bytes],
        max_meta_size: int = DEFAULT_MAX_META_SIZE,
        logger: logging.Logger = logging.root,
    ) -> None:
        if max_meta_size < 0:
            raise ValueError(f'expected non-negative max_meta_size, got {max_meta_size}')
        self._stream = stream
        self.max_meta_size = max_meta_size
        self.logger = logger

    def decode(self) -> Optional[Chunk]:
        """Decode next chunk, return None on clean end of stream."""
        offset = streamio.tell(self._stream)

        data = streamio.read_exact(self._stream, CHUNK_HEADER.size)
        if not data:
            return None
        if len(data) != CHUNK_HEADER.size:
            raise TruncatedHeader(CHUNK_HEADER.size, len(data), offset)
        header = CHUNK_HEADER.unpack_from(data)

        # must happen before any read sized by the header
        check_meta_len(header.meta_len, self.max_meta_size, offset)
        tag = validate_tag(header.etag, offset)

        meta = streamio.read_exact(self._stream, header.meta_len)
        if len(meta) != header.meta_len:
            raise TruncatedMetadata(header.meta_len, len(meta), offset)

        data = streamio.read_exact(self._stream, CONTENT_LENGTH.size)
        if len(data) != CONTENT_LENGTH.size:
            raise TruncatedContentLength(CONTENT_LENGTH.size, len(data), offset)
        content_len = CONTENT_LENGTH.unpack_from(data).size

        chunk = Chunk(tag, header.meta_len, parse_metadata(meta), content_len)
        self.logger.debug('decoded %r at offset %s', chunk, offset)
        return chunk

    def __iter__(self) -> Iterator[Chunk]:
        """Yield chunks until clean end of stream.
        Content of each chunk must be handled before advancing the iterator.
        """
        while True:
            chunk = self.decode()
            if chunk is None:
                return
            yield chunk

    def skip(self, chunk: Chunk) -> int:
        """Skip content of given chunk."""
        return streamio.skip(self._stream, chunk.content_len)

    def copy(self, chunk: Chunk, target: IO[bytes]) -> int:
        """Copy content of given chunk to target stream."""
        return streamio.copy(self._stream, target, chunk.content_len)

    def read(self, chunk: Chunk) -> bytes:
        """Read content of given chunk to memory."""
        with io.BytesIO() as target:
            self.copy(chunk, target)
            return target.getvalue()
