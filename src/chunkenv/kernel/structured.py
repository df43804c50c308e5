import struct
from dataclasses import dataclass
from typing import Callable, Generic, NamedTuple, Protocol, Sequence, TypeVar, cast

T_Struct = TypeVar('T_Struct')


class Structured(Protocol[T_Struct]):
    @property
    def size(self) -> int:
        ...

    def unpack_from(self, data: bytes, offset: int = 0) -> T_Struct:
        ...

    def pack(self, data: T_Struct) -> bytes:
        ...


@dataclass(frozen=True)
class StructuredTuple(Structured, Generic[T_Struct]):
    _fields: Sequence[str]
    _structure: struct.Struct
    _factory: Callable[..., T_Struct]

    @property
    def size(self) -> int:
        return self._structure.size

    def unpack_from(self, data: bytes, offset: int = 0) -> T_Struct:
        factory = cast(Callable[..., T_Struct], self._factory)
        values = self._structure.unpack_from(data, offset=offset)
        return factory(**dict(zip(self._fields, values)))

    def pack(self, data: T_Struct) -> bytes:
        return self._structure.pack(*[getattr(data, field) for field in self._fields])


class ChunkHeader(NamedTuple):
    etag: bytes
    meta_len: int


class ContentLength(NamedTuple):
    size: int


TAG_SIZE = 8

CHUNK_HEADER = StructuredTuple(('etag', 'meta_len'), struct.Struct('<8sI'), ChunkHeader)
CONTENT_LENGTH = StructuredTuple(('size',), struct.Struct('<I'), ContentLength)
