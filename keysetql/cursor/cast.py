""" Cast types: allow-listed keywords for CAST(... AS ...) """

from __future__ import annotations

import re
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement


class CastType(str):
    """ An SQL type keyword that is safe to put into CAST(... AS <keyword>)

    Only allow-listed keywords can be constructed. Use cast_for() to convert free-form input.
    """
    __slots__ = ()

    def __new__(cls, keyword: str):
        if not CAST_TYPE_REX.fullmatch(keyword):
            raise ValueError(f'Not an allowed cast type: {keyword!r}')
        return super().__new__(cls, keyword)


def cast_for(type_token: Optional[str]) -> CastType:
    """ Get a cast type for a declared attribute type

    Example:
        cast_for('numeric') #-> 'SIGNED'
        cast_for('decimal(10,2)') #-> 'DECIMAL(10,2)'
        cast_for('DROP TABLE') #-> 'CHAR'
    """
    if not isinstance(type_token, str) or not type_token:
        return CHAR

    keyword = type_token.upper()
    if not CAST_TYPE_REX.fullmatch(keyword):
        return CHAR

    # Bare NUMERIC is not a valid CAST() target
    if keyword == 'NUMERIC':
        return SIGNED

    return CastType(keyword)


class cast_as(FunctionElement):
    """ CAST(<expr> AS <cast type>), rendered the same on every dialect

    SqlAlchemy's own cast() goes through dialect type compilers, which would rewrite or drop keywords like SIGNED.
    """
    name = 'cast_as'
    type = sa.types.NullType()
    inherit_cache = False  # `cast_type` is not part of the cache key

    def __init__(self, expr: sa.sql.ColumnElement, cast_type: CastType):
        if not isinstance(cast_type, CastType):
            raise TypeError(f'cast_as() expects a CastType, got {type(cast_type).__name__}')

        super().__init__(expr)
        self.cast_type = cast_type


@compiles(cast_as)
def _compile_cast_as(element: cast_as, compiler, **kw):
    return f'CAST({compiler.process(element.clauses, **kw)} AS {element.cast_type})'


# All supported cast types
CAST_TYPE_REX = re.compile(
    r'BINARY|CHAR|DATE|DATETIME|SIGNED|UNSIGNED|TIME|'
    r'NUMERIC(?:\(\d+(?:,\s?\d+)?\))?|'
    r'DECIMAL(?:\(\d+(?:,\s?\d+)?\))?'
)

# Cast types
BINARY = CastType('BINARY')
CHAR = CastType('CHAR')
DATE = CastType('DATE')
DATETIME = CastType('DATETIME')
SIGNED = CastType('SIGNED')
UNSIGNED = CastType('UNSIGNED')
TIME = CastType('TIME')
