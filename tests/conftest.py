import struct

import pytest

from chunkenv.kernel import mkchunk

DOCU_CHUNK = (
    b'**%%DOCU'
    + struct.pack('<I', 27)
    + b'FILENAME/test.txt\nSIZE/100\n'
    + struct.pack('<I', 10)
    + b'A' * 10
)


@pytest.fixture
def docu_chunk() -> bytes:
    return DOCU_CHUNK


@pytest.fixture
def two_chunks() -> bytes:
    return mkchunk(
        '**%%DOCU', {'FILENAME': 'first.txt'}, b'first content'
    ) + mkchunk('**%%INFO', {'AUTHOR': 'nobody', 'PATH': 'a/b/c'}, b'\x00\x01\x02')
