from importlib.metadata import version

__version__ = version('keysetql')

from .settings import PaginationSettings, ComparisonDirection, SortingDirection
from .schema import RecordSchema
from .stores import RecordStore, AttributeStore, SessionRecordStore, SessionAttributeStore
from .cursor import CursorContext, encode_cursor, decode_cursor, cast_for, compile_condition

from . import exc


# TODO: tuple comparison for compound orderings: (a, b) > (:a, :b) is the only correct way to paginate with duplicates
