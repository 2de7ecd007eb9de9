""" Build boundary conditions for resolved ordering keys """

from __future__ import annotations

import operator
from collections import abc
from typing import Any, Optional

import sqlalchemy as sa

from keysetql.schema import RecordSchema
from keysetql.settings import PaginationSettings, ComparisonDirection, SortingDirection
from keysetql.stores import AttributeStore
from keysetql.typing import Condition, CursorOffset

from .cast import cast_for, cast_as
from .resolve import Binding, DirectField, Attribute, DateFallback


class PredicateBuilder:
    """ Build a parameterized boundary condition for a single ordering key

    Every value goes into the statement as a bound parameter.
    The only text that's put into the SQL as is: column names and cast types (see cast_for())
    """

    def __init__(self,
                 schema: RecordSchema,
                 settings: PaginationSettings,
                 offset: CursorOffset,
                 cursor_record: Any,
                 *,
                 attributes: Optional[AttributeStore],
                 compare: ComparisonDirection):
        self.schema = schema
        self.settings = settings
        self.offset = offset
        self.cursor_record = cursor_record
        self.attributes = attributes
        self.compare = compare

    __slots__ = 'schema', 'settings', 'offset', 'cursor_record', 'attributes', 'compare'

    def build(self, binding: Binding, direction: SortingDirection) -> Condition:
        if isinstance(binding, DirectField):
            return self.compare_with_field(binding, direction)
        elif isinstance(binding, Attribute):
            return self.compare_with_attribute(binding, direction)
        elif isinstance(binding, DateFallback):
            return self.compare_with_date()
        else:
            raise NotImplementedError(binding)

    def compare_with_field(self, binding: DirectField, direction: SortingDirection) -> Condition:
        """ field > value, or field < value """
        op = sorting_operator(direction)
        return op(binding.field.column, binding.value)

    def compare_with_attribute(self, binding: Attribute, direction: SortingDirection) -> Condition:
        """ key = name AND value > cursor value (cast to the declared type, if any) """
        assert self.attributes is not None, f'Ordering by attribute {binding.name!r} requires an attribute store'
        op = sorting_operator(direction)

        # The cursor record's attribute value. A missing value compares as an empty string
        value = self.attributes.fetch_attribute(self.offset, binding.name)
        if value is None:
            value = ''

        left: sa.sql.ColumnElement = self.schema.attribute_value_column
        right: sa.sql.ColumnElement = sa.literal(value, sa.String)

        # Cast both sides when the type is declared
        if self.settings.attribute_type:
            cast_type = cast_for(self.settings.attribute_type)
            left = cast_as(left, cast_type)
            right = cast_as(right, cast_type)

        return sa.and_(
            self.schema.attribute_key_column == binding.name,
            op(left, right),
        )

    def compare_with_date(self) -> Condition:
        """ date >= cursor date AND id != cursor id

        Uses the context direction, not the key's direction.
        Inclusive on the date: records with the same date are not skipped.
        """
        op = {
            ComparisonDirection.GREATER: operator.ge,
            ComparisonDirection.LESS: operator.le,
        }[self.compare]

        cursor_date = getattr(self.cursor_record, self.schema.date_column.key)
        return sa.and_(
            op(self.schema.date_column, cursor_date),
            self.schema.id_column != self.offset,
        )

    def identifier_fallback(self) -> Condition:
        """ id > cursor id, or id < cursor id """
        op = {
            ComparisonDirection.GREATER: operator.gt,
            ComparisonDirection.LESS: operator.lt,
        }[self.compare]
        return op(self.schema.id_column, self.offset)


def sorting_operator(direction: SortingDirection) -> abc.Callable[[Any, Any], Condition]:
    """ Get the comparison operator for a sorting direction: ASC is '>', DESC is '<' """
    return operator.gt if direction == SortingDirection.ASC else operator.lt


def compile_condition(condition: Condition, dialect: sa.engine.Dialect = None) -> tuple[str, dict]:
    """ Compile a condition into SQL text and parameters

    Example:
        compile_condition(Post.title > 'Apple')
        #-> ('posts.title > :title_1', {'title_1': 'Apple'})
    """
    compiled = condition.compile(dialect=dialect)
    return compiled.string, compiled.params
