from dataclasses import dataclass, replace
from typing import IO, Any, TypeVar

from . import chunk, settings
from .decoder import ChunkDecoder

_SettingT = TypeVar('_SettingT', bound='_DefaultOverride')


@dataclass(frozen=True)
class _DefaultOverride(object):
    def __call__(self: _SettingT, **kwargs: Any) -> _SettingT:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class _DecoderPreset(settings._DecoderSetting, _DefaultOverride):

    # static pass through
    mkchunk = staticmethod(chunk.mkchunk)

    def decoder(self, stream: IO[bytes]) -> ChunkDecoder:
        return ChunkDecoder(stream, self.max_meta_size, logger=self.logger)


container = _DecoderPreset()
