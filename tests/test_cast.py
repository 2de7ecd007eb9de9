import pytest
import sqlalchemy as sa

from keysetql.cursor.cast import CastType, cast_for, cast_as, CHAR, SIGNED
from keysetql.cursor.predicate import compile_condition


@pytest.mark.parametrize(('type_token', 'expected'), [
    # Allow-listed keywords pass through
    ('BINARY', 'BINARY'),
    ('CHAR', 'CHAR'),
    ('DATE', 'DATE'),
    ('DATETIME', 'DATETIME'),
    ('SIGNED', 'SIGNED'),
    ('UNSIGNED', 'UNSIGNED'),
    ('TIME', 'TIME'),
    # Case-insensitive
    ('date', 'DATE'),
    ('unsigned', 'UNSIGNED'),
    # Bare NUMERIC becomes SIGNED
    ('NUMERIC', 'SIGNED'),
    ('numeric', 'SIGNED'),
    # Precision is kept
    ('NUMERIC(10)', 'NUMERIC(10)'),
    ('decimal(10,2)', 'DECIMAL(10,2)'),
    ('DECIMAL(10, 2)', 'DECIMAL(10, 2)'),
    ('DECIMAL', 'DECIMAL'),
    # Everything else is CHAR
    (None, 'CHAR'),
    ('', 'CHAR'),
    ('DROP TABLE', 'CHAR'),
    ('SIGNED) OR 1=1 --', 'CHAR'),
    ('DECIMAL(10,2', 'CHAR'),
    ('DECIMAL(10,  2)', 'CHAR'),
    ('INTEGER', 'CHAR'),
    ('CHAR\n', 'CHAR'),
    # Not a string at all
    (5, 'CHAR'),
    (1.5, 'CHAR'),
    (b'SIGNED', 'CHAR'),
    (['SIGNED'], 'CHAR'),
])
def test_cast_for(type_token: str, expected: str):
    cast_type = cast_for(type_token)
    assert isinstance(cast_type, CastType)
    assert cast_type == expected


def test_cast_type_allow_list():
    # Constants
    assert CHAR == 'CHAR'
    assert SIGNED == 'SIGNED'

    # Only allow-listed values can be constructed
    assert CastType('DECIMAL(5)') == 'DECIMAL(5)'

    with pytest.raises(ValueError):
        CastType('CHAR; DROP TABLE records')


def test_cast_as():
    column = sa.column('value')

    # Compiles into CAST(... AS ...), the value remains a parameter
    text, params = compile_condition(cast_as(column, cast_for('numeric')) < cast_as(sa.literal('10', sa.String), SIGNED))
    assert text == 'CAST(value AS SIGNED) < CAST(:param_1 AS SIGNED)'
    assert params == {'param_1': '10'}

    # Raw strings are not accepted as cast types
    with pytest.raises(TypeError):
        cast_as(column, 'SIGNED')
