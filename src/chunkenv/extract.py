import os
from typing import IO, List, Tuple

from chunkenv.kernel.errors import TruncatedContent, TruncatedHeader, UnsafeFilename
from chunkenv.kernel.helpers import displayable, format_offset
from chunkenv.kernel.preset import _DecoderPreset, container
from chunkenv.kernel.settings import DOCUMENT_TAG, FILENAME_KEY


def resolve_output_path(target_dir: str, filename: str) -> str:
    """Join filename to target_dir, refusing paths which escape it."""
    if '\x00' in filename:
        raise UnsafeFilename(filename, target_dir)
    root = os.path.abspath(target_dir)
    path = os.path.abspath(os.path.join(root, filename))
    if os.path.isabs(filename) or path == root or os.path.commonpath([root, path]) != root:
        raise UnsafeFilename(filename, target_dir)
    return path


def extract_documents(
    stream: IO[bytes], target_dir: str, cfg: _DecoderPreset = container
) -> List[Tuple[str, int]]:
    """Write content of every document chunk to a file in target_dir.

    Returns list of (filename, size) for extracted files.
    """
    logger = cfg.logger
    os.makedirs(target_dir, exist_ok=True)

    decoder = cfg.decoder(stream)
    extracted = []
    try:
        for chunk in decoder:
            if chunk.tag != DOCUMENT_TAG:
                decoder.skip(chunk)
                continue

            filename = chunk.metadata.get(FILENAME_KEY)
            if filename is None:
                logger.warning(
                    '%s chunk without %s, skipping %d bytes',
                    chunk.tag,
                    FILENAME_KEY,
                    chunk.content_len,
                )
                decoder.skip(chunk)
                continue

            try:
                path = resolve_output_path(target_dir, filename)
            except UnsafeFilename as exc:
                logger.warning('%s, skipping %d bytes', exc, chunk.content_len)
                decoder.skip(chunk)
                continue

            os.makedirs(os.path.dirname(path), exist_ok=True)
            try:
                with open(path, 'wb') as outfile:
                    size = decoder.copy(chunk, outfile)
            except TruncatedContent:
                os.remove(path)
                raise
            print(f'Extracted: {displayable(filename)} ({size} bytes)')
            extracted.append((filename, size))
    except TruncatedHeader as exc:
        logger.warning(
            'Reached end of file with trailing bytes at offset %s', format_offset(exc.offset)
        )
    print('Extraction complete.')
    return extracted
