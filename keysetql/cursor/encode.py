from __future__ import annotations

import base64
import binascii
import json

from keysetql import exc
from keysetql.typing import CursorOffset


# Prefix for cursors that point to a record
CURSOR_PREFIX = 'offset'


def encode_cursor(offset: CursorOffset) -> str:
    """ Encode a record identifier as an opaque cursor """
    return encode_opaque_cursor(CURSOR_PREFIX, {'id': offset})


def decode_cursor(cursor: str) -> CursorOffset:
    """ Decode an opaque cursor into a record identifier

    Raises:
        exc.CursorError: the cursor is invalid
    """
    prefix, data = decode_opaque_cursor(cursor)

    if prefix != CURSOR_PREFIX or not isinstance(data, dict) or 'id' not in data:
        raise exc.CursorError('The provided cursor is invalid')

    return data['id']


def encode_opaque_cursor(prefix: str, data: dict) -> str:
    """ Encode a dict of data as an opaque cursor. Give it a nice prefix so that the user sees what's up """
    return prefix + ':' + base64.b85encode(json.dumps(data).encode()).decode()


def decode_opaque_cursor(cursor: str) -> tuple[str, dict]:
    """ Decode an opaque cursor into a (prefix, data dict) tuple

    Raises:
        exc.CursorError: all sorts of errors related to bad cursor
    """
    try:
        prefix, data_encoded = cursor.split(':', 1)
        data = json.loads(base64.b85decode(data_encoded))
    except (ValueError, AttributeError, binascii.Error) as e:  # json.JSONDecodeError is a ValueError
        raise exc.CursorError('The provided cursor is invalid') from e

    return prefix, data
