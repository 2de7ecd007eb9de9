from __future__ import annotations

import logging
from typing import Any, Optional

import sqlalchemy as sa

from keysetql.schema import RecordSchema
from keysetql.settings import PaginationSettings, ComparisonDirection
from keysetql.stores import RecordStore, AttributeStore
from keysetql.typing import Condition, ConditionList, CursorOffset

from .encode import decode_cursor
from .predicate import PredicateBuilder
from .resolve import OrderingResolver


logger = logging.getLogger(__name__)


class CursorContext:
    """ Boundary predicate for keyset pagination: records after (or before) the cursor record

    The cursor is a record identifier. The cursor record is loaded when the context is created,
    and its values are compared against with every ordering key:

        context = CursorContext(10, PaginationSettings(order_by={'title': 'ASC'}), schema, records=store)
        stmt = context.apply_to_statement(sa.select(Post))
        # -> SELECT ... WHERE posts.post_title > :post_title_1

    The context never raises on bad settings: everything falls back to a comparison by id or by date.
    Without a cursor record, or without any ordering, records are compared by id.

    Note that with multiple ordering keys, conditions are simply ANDed.
    This is not a tuple comparison: rows with duplicate values in the first key may be skipped.
    """

    # The cursor: identifier of the reference record
    offset: CursorOffset

    # The cursor record. None if not found
    cursor_record: Optional[Any]

    # Compare by id/date using this direction
    compare: ComparisonDirection

    def __init__(self,
                 offset: CursorOffset,
                 settings: PaginationSettings,
                 schema: RecordSchema,
                 *,
                 records: RecordStore,
                 attributes: Optional[AttributeStore] = None):
        self.offset = offset
        self.settings = settings
        self.schema = schema
        self.attributes = attributes
        self.compare = settings.get_compare()

        # Load the cursor record
        self.cursor_record = records.fetch_record(offset)
        if self.cursor_record is None:
            logger.debug(f'Cursor record {offset!r} not found: will compare by id')

    __slots__ = 'offset', 'settings', 'schema', 'attributes', 'compare', 'cursor_record'

    @classmethod
    def from_cursor(cls, cursor: str, settings: PaginationSettings, schema: RecordSchema, *, records: RecordStore, attributes: Optional[AttributeStore] = None) -> CursorContext:
        """ Create a context from an opaque cursor string

        Raises:
            exc.CursorError: the cursor is invalid
        """
        return cls(decode_cursor(cursor), settings, schema, records=records, attributes=attributes)

    def get_boundary_predicate(self) -> ConditionList:
        """ Get the list of conditions to AND into the WHERE clause """
        builder = PredicateBuilder(
            self.schema, self.settings, self.offset, self.cursor_record,
            attributes=self.attributes,
            compare=self.compare,
        )

        # No cursor record: just compare with the ids
        if self.cursor_record is None:
            return [builder.identifier_fallback()]

        # No ordering: compare with the ids
        ordering = self.settings.get_ordering()
        if not ordering:
            return [builder.identifier_fallback()]

        # Go through every ordering key
        resolver = OrderingResolver(self.schema, self.settings, self.cursor_record, has_attribute_store=self.attributes is not None)
        return [
            builder.build(resolver.resolve(key), direction)
            for key, direction in ordering
        ]

    def get_where(self) -> Condition:
        """ Get the boundary predicate as a single expression """
        return sa.and_(*self.get_boundary_predicate())

    def apply_to_statement(self, stmt: sa.sql.Select) -> sa.sql.Select:
        """ Modify the Select statement: add the boundary predicate to the WHERE clause """
        return stmt.where(*self.get_boundary_predicate())
