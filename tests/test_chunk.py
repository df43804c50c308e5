import pytest

from chunkenv.kernel import InvalidTag, container, mkchunk, parse_metadata
from chunkenv.kernel.chunk import Chunk, format_metadata, validate_tag


def test_parse_metadata_lines():
    assert parse_metadata(b'FILENAME/test.txt\nSIZE/100') == {
        'FILENAME': 'test.txt',
        'SIZE': '100',
    }


def test_parse_metadata_splits_at_first_slash():
    assert parse_metadata(b'A/B/C') == {'A': 'B/C'}


def test_parse_metadata_drops_lines_without_slash():
    assert parse_metadata(b'NOSLASH\nKEY/value\n\n') == {'KEY': 'value'}


def test_parse_metadata_last_key_wins():
    assert parse_metadata(b'KEY/first\nKEY/second') == {'KEY': 'second'}


def test_parse_metadata_empty_key_and_value():
    assert parse_metadata(b'/value\nKEY/') == {'': 'value', 'KEY': ''}


def test_parse_metadata_crlf():
    assert parse_metadata(b'FILENAME/a.txt\r\nSIZE/3\r\n') == {
        'FILENAME': 'a.txt',
        'SIZE': '3',
    }


def test_parse_metadata_empty():
    assert parse_metadata(b'') == {}


def test_parse_metadata_keeps_undecodable_bytes():
    metadata = parse_metadata(b'FILENAME/caf\xe9.txt')
    assert metadata == {'FILENAME': 'caf\udce9.txt'}
    assert metadata['FILENAME'].encode('utf-8', 'surrogateescape') == b'caf\xe9.txt'


def test_validate_tag():
    assert validate_tag(b'**%%DOCU') == '**%%DOCU'
    assert validate_tag(b'TAG WITH') == 'TAG WITH'


def test_validate_tag_accepts_undecodable_bytes():
    tag = validate_tag(b'**%%DOC\xff')
    assert Chunk(tag, 0).etag == b'**%%DOC\xff'


@pytest.mark.parametrize(
    'etag',
    [
        b'\x00\x01\x02\x03\x04\x05\x06\x07',
        b'**%%DOC\n',
        b'\x7f*%%DOCU',
    ],
)
def test_validate_tag_rejects_non_printable(etag):
    with pytest.raises(InvalidTag) as excinfo:
        validate_tag(etag, offset=16)
    assert excinfo.value.etag == etag
    assert excinfo.value.offset == 16


def test_mkchunk(docu_chunk):
    assert mkchunk('**%%DOCU', b'FILENAME/test.txt\nSIZE/100\n', b'A' * 10) == docu_chunk


def test_mkchunk_from_mapping():
    data = mkchunk('ABCDEFGH', {'FILENAME': 'a.txt', 'SIZE': '3'}, b'abc')
    assert data[:8] == b'ABCDEFGH'
    assert data[8:12] == (len(b'FILENAME/a.txt\nSIZE/3')).to_bytes(4, 'little')
    assert data.endswith(b'\x03\x00\x00\x00abc')


def test_mkchunk_rejects_bad_tags():
    with pytest.raises(ValueError):
        mkchunk('SHORT', {}, b'')
    with pytest.raises(InvalidTag):
        mkchunk('TAB\tTAGS', {}, b'')


def test_format_metadata_rejects_unparseable_entries():
    with pytest.raises(ValueError):
        format_metadata({'A/B': 'value'})
    with pytest.raises(ValueError):
        format_metadata({'KEY': 'two\nlines'})


def test_chunk_value():
    chunk = Chunk('**%%DOCU', 3, {'A': 'B'}, 10)
    assert chunk == Chunk('**%%DOCU', 3, {'A': 'B'}, 10)
    assert chunk.etag == b'**%%DOCU'
    assert repr(chunk) == 'Chunk<**%%DOCU>[3+10]'


def test_preset_mkchunk(docu_chunk):
    data = container.mkchunk('**%%DOCU', b'FILENAME/test.txt\nSIZE/100\n', b'A' * 10)
    assert data == docu_chunk


def test_chunk_is_hashable_and_read_only():
    chunk = Chunk('**%%DOCU', 3, {'A': 'B'}, 10)
    assert hash(chunk) == hash(Chunk('**%%DOCU', 3, {'A': 'B'}, 10))
    assert len({chunk, Chunk('**%%DOCU', 3, {'A': 'B'}, 10)}) == 1
    with pytest.raises(TypeError):
        chunk.metadata['A'] = 'C'


def test_mkchunk_keeps_undecodable_bytes():
    data = mkchunk('**%%DOC\udcff', {'FILENAME': 'caf\udce9'}, b'')
    assert data[:8] == b'**%%DOC\xff'
    assert b'FILENAME/caf\xe9' in data
