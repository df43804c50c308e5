from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

import deal

from .errors import InvalidTag
from .structured import (
    CHUNK_HEADER,
    CONTENT_LENGTH,
    TAG_SIZE,
    ChunkHeader,
    ContentLength,
)

MetadataLike = Union[Mapping[str, str], bytes]

# undecodable bytes are kept as lone surrogates so they encode back unchanged
ENCODING = 'utf-8'
ERRORS = 'surrogateescape'


def is_escaped(char: str) -> bool:
    return '\udc80' <= char <= '\udcff'


@dataclass(frozen=True)
class Chunk(object):
    """Decoded chunk header and metadata

    tag: 8 byte printable tag

    meta_len: metadata length as declared in header

    metadata: KEY/VALUE pairs from metadata block, read-only

    content_len: size of content following the chunk in the stream
    """

    tag: str
    meta_len: int
    metadata: Mapping[str, str] = field(default_factory=dict)
    content_len: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))

    def __hash__(self) -> int:
        return hash(
            (self.tag, self.meta_len, frozenset(self.metadata.items()), self.content_len)
        )

    @property
    def etag(self) -> bytes:
        return self.tag.encode(ENCODING, ERRORS)

    def __repr__(self) -> str:
        return 'Chunk<{tag}>[{meta_len}+{content_len}]'.format(
            tag=self.tag, meta_len=self.meta_len, content_len=self.content_len
        )


@deal.chain(
    deal.raises(InvalidTag),
    deal.has(),
)
def validate_tag(etag: bytes, offset: Optional[int] = None) -> str:
    """Decode tag bytes, all characters must be printable.
    Undecodable bytes count as printable replacement characters.
    """
    tag = etag.decode(ENCODING, ERRORS)
    if not all(is_escaped(char) or char.isprintable() for char in tag):
        raise InvalidTag(etag, offset)
    return tag


@deal.pure
def parse_metadata(data: bytes) -> Dict[str, str]:
    """Parse newline separated KEY/VALUE lines.
    Lines without '/' are dropped, later keys override earlier ones.
    """
    metadata = {}
    for line in data.decode(ENCODING, ERRORS).split('\n'):
        if line.endswith('\r'):
            line = line[:-1]
        key, sep, value = line.partition('/')
        if sep:
            metadata[key] = value
    return metadata


def format_metadata(metadata: Mapping[str, str]) -> bytes:
    lines = []
    for key, value in metadata.items():
        if '/' in key or '\n' in key or '\n' in value:
            raise ValueError(f'cannot encode metadata entry {key!r}: {value!r}')
        lines.append(f'{key}/{value}')
    return '\n'.join(lines).encode(ENCODING, ERRORS)


def mkchunk(tag: str, metadata: MetadataLike, content: bytes = b'') -> bytes:
    """Create chunk bytes from given tag, metadata and content."""
    etag = tag.encode(ENCODING, ERRORS)
    if len(etag) != TAG_SIZE:
        raise ValueError(f'expected tag of {TAG_SIZE} bytes but got {len(etag)}')
    validate_tag(etag)
    meta = metadata if isinstance(metadata, bytes) else format_metadata(metadata)
    return b''.join(
        (
            CHUNK_HEADER.pack(ChunkHeader(etag, len(meta))),
            meta,
            CONTENT_LENGTH.pack(ContentLength(len(content))),
            content,
        )
    )
