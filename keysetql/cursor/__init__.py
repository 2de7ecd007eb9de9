""" Cursor-based pagination

A cursor is the identifier of a reference record.
The boundary predicate limits a query to records that go after (or before) that record in the chosen ordering.
"""

from .context import CursorContext
from .resolve import OrderingResolver, Binding, DirectField, Attribute, DateFallback, ATTRIBUTE_VALUE_KEY
from .predicate import PredicateBuilder, compile_condition
from .cast import CastType, cast_for, cast_as
from .encode import encode_cursor, decode_cursor
