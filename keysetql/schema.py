""" Record schema: which columns pagination works with """

from __future__ import annotations

import dataclasses
import operator
from collections import abc
from typing import Any, Optional

from keysetql.sainfo.columns import resolve_column_by_name, column_attribute_names
from keysetql.typing import SAModel, SAAttribute


@dataclasses.dataclass
class RecordSchema:
    """ Describes the record table and its attached attribute table

    Ordering keys are mapped to record fields by a naming convention: the key with `field_prefix` prepended.
    For instance, with `field_prefix='post_'`, the ordering key "title" maps to the `post_title` column.
    Keys that don't follow the convention can be listed in `fields`.

    The mapping is built once, when the schema is created, and every column is validated right away:
    an invalid column name raises exc.InvalidColumnError.

    Example:
        schema = RecordSchema(
            Post, PostMeta,
            field_prefix='post_',
            id_field='ID',
            date_field='post_date',
            attribute_record_id_field='post_id',
            attribute_key_field='meta_key',
            attribute_value_field='meta_value',
        )
    """
    # The record model
    Model: SAModel

    # The attribute model: key-value pairs attached to a record. Optional.
    attribute_Model: Optional[SAModel] = None

    # Ordering key => field name convention: the prefix to put before the key
    field_prefix: str = ''

    # Record: the identifier field
    id_field: str = 'id'

    # Record: the date field, used when an ordering key can't be resolved
    date_field: str = 'date'

    # Attribute model: the field that refers to the record
    attribute_record_id_field: str = 'record_id'

    # Attribute model: attribute name field
    attribute_key_field: str = 'key'

    # Attribute model: attribute value field
    attribute_value_field: str = 'value'

    # Explicit mapping: { ordering key => field name }, for keys that don't follow the naming convention
    fields: Optional[dict[str, str]] = None

    # Mapping: { ordering key => field accessor }. Built from the above.
    field_map: dict[str, FieldAccessor] = dataclasses.field(init=False, repr=False)

    def __post_init__(self):
        where = f'{type(self).__name__}'

        # Validate the special columns
        self.id_column = resolve_column_by_name(self.id_field, self.Model, where=f'{where}.id_field')
        self.date_column = resolve_column_by_name(self.date_field, self.Model, where=f'{where}.date_field')

        if self.attribute_Model is not None:
            self.attribute_record_id_column = resolve_column_by_name(self.attribute_record_id_field, self.attribute_Model, where=f'{where}.attribute_record_id_field')
            self.attribute_key_column = resolve_column_by_name(self.attribute_key_field, self.attribute_Model, where=f'{where}.attribute_key_field')
            self.attribute_value_column = resolve_column_by_name(self.attribute_value_field, self.attribute_Model, where=f'{where}.attribute_value_field')

        # Build the field map
        self.field_map = {
            key: FieldAccessor.for_column(key, resolve_column_by_name(field_name, self.Model, where=f'{where}.fields'))
            for key, field_name in self._iter_field_names()
        }

    @property
    def has_attributes(self) -> bool:
        """ Does this schema support ordering by attributes? """
        return self.attribute_Model is not None

    def get_field(self, key: str) -> Optional[FieldAccessor]:
        """ Get the record field for an ordering key, if there is one """
        return self.field_map.get(key)

    def _iter_field_names(self) -> abc.Iterator[tuple[str, str]]:
        """ Generate (ordering key, field name) pairs: by convention, then explicit ones """
        prefix = self.field_prefix
        for field_name in column_attribute_names(self.Model):
            if field_name.startswith(prefix) and len(field_name) > len(prefix):
                yield field_name[len(prefix):], field_name

        if self.fields:
            yield from self.fields.items()


@dataclasses.dataclass(frozen=True)
class FieldAccessor:
    """ A record field that an ordering key maps to """
    # The ordering key
    key: str

    # The column to compare with
    column: SAAttribute

    # Get the value from a record object
    get_value: abc.Callable[[Any], Any]

    __slots__ = 'key', 'column', 'get_value'

    @classmethod
    def for_column(cls, key: str, column: SAAttribute) -> FieldAccessor:
        return cls(key=key, column=column, get_value=operator.attrgetter(column.key))
