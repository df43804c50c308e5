from .chunk import Chunk, mkchunk, parse_metadata
from .decoder import ChunkDecoder
from .errors import (
    ChunkError,
    InvalidTag,
    MetadataTooLarge,
    TruncatedContent,
    TruncatedContentLength,
    TruncatedHeader,
    TruncatedMetadata,
    UnexpectedEndOfStream,
    UnsafeFilename,
)
from .preset import container
from .settings import DEFAULT_MAX_META_SIZE, DOCUMENT_TAG, FILENAME_KEY
