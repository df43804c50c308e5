from typing import Optional


class ChunkError(Exception):
    """Base class for errors raised while reading chunk streams."""

    offset: Optional[int] = None


class UnexpectedEndOfStream(ChunkError, EOFError):
    field = 'stream'

    def __init__(self, expected: int, given: int, offset: Optional[int] = None) -> None:
        super().__init__(
            f'Unexpected end of stream reading {self.field}: '
            f'expected {expected} bytes but got {given}'
        )
        self.expected = expected
        self.given = given
        self.offset = offset


class TruncatedHeader(UnexpectedEndOfStream):
    field = 'chunk header'


class TruncatedMetadata(UnexpectedEndOfStream):
    field = 'metadata'


class TruncatedContentLength(UnexpectedEndOfStream):
    field = 'content length'


class TruncatedContent(UnexpectedEndOfStream):
    field = 'content'


class MetadataTooLarge(ChunkError, ValueError):
    def __init__(self, size: int, limit: int, offset: Optional[int] = None) -> None:
        super().__init__(
            f'metadata length {size} exceeds maximum allowed size {limit}'
        )
        self.size = size
        self.limit = limit
        self.offset = offset


class InvalidTag(ChunkError, ValueError):
    def __init__(self, etag: bytes, offset: Optional[int] = None) -> None:
        super().__init__(f'invalid tag found: {etag!r}')
        self.etag = etag
        self.offset = offset


class UnsafeFilename(ChunkError, ValueError):
    def __init__(self, filename: str, target_dir: str) -> None:
        super().__init__(f'refusing to write {filename!r} outside of {target_dir!r}')
        self.filename = filename
        self.target_dir = target_dir
