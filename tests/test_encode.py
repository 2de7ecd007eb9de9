import pytest

from keysetql import exc
from keysetql.cursor.encode import encode_cursor, decode_cursor, encode_opaque_cursor


@pytest.mark.parametrize('offset', [1, 12345, 'a7f3c2'])
def test_cursor(offset):
    cursor = encode_cursor(offset)
    assert cursor.startswith('offset:')
    assert decode_cursor(cursor) == offset


@pytest.mark.parametrize('cursor', [
    # Not a cursor at all
    '',
    'nonsense',
    'offset:',
    'offset:!!!not-base85',
    # Valid encoding, wrong content
    encode_opaque_cursor('skip', {'id': 1}),
    encode_opaque_cursor('offset', {'skip': 1}),
    'offset:' + encode_opaque_cursor('x', {})[2:],
])
def test_invalid_cursor(cursor: str):
    with pytest.raises(exc.CursorError):
        decode_cursor(cursor)
