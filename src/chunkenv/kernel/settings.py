import logging
from dataclasses import dataclass

DEFAULT_MAX_META_SIZE = 10 * 1024 * 1024

DOCUMENT_TAG = '**%%DOCU'
FILENAME_KEY = 'FILENAME'


@dataclass(frozen=True)
class _DecoderSetting(object):
    """Setting for chunk stream decoding

    max_meta_size: int (default 10 MiB) -
        largest metadata block accepted from a chunk header, in bytes.

    logger: logging.Logger (default root logger) -
        receives debug and warning messages while reading.
    """

    max_meta_size: int = DEFAULT_MAX_META_SIZE
    logger: logging.Logger = logging.root

    def __post_init__(self) -> None:
        if self.max_meta_size < 0:
            raise ValueError(
                f'expected non-negative max_meta_size, got {self.max_meta_size}'
            )
