""" Resolve ordering keys: a record field, an attribute, or nothing """

from __future__ import annotations

import logging
from dataclasses import dataclass
from collections import abc
from decimal import Decimal
from typing import Any, Optional, Union

from keysetql.schema import RecordSchema, FieldAccessor
from keysetql.settings import PaginationSettings


logger = logging.getLogger(__name__)


# The ordering key that means: "order by the value of the attribute named in settings.attribute_key"
ATTRIBUTE_VALUE_KEY = 'attribute_value'


@dataclass(frozen=True)
class DirectField:
    """ The key maps to a record field, and the cursor record has a value for it """
    key: str
    field: FieldAccessor
    value: Any

    __slots__ = 'key', 'field', 'value'


@dataclass(frozen=True)
class Attribute:
    """ The key maps to an attached attribute """
    key: str
    name: str

    __slots__ = 'key', 'name'


@dataclass(frozen=True)
class DateFallback:
    """ The key maps to nothing: compare by date """
    key: str

    __slots__ = 'key',


Binding = Union[DirectField, Attribute, DateFallback]


class OrderingResolver:
    """ Find out what an ordering key refers to

    Precedence:
    1. A record field, if the cursor record has a non-empty value for it
    2. An attribute: either the generic "attribute_value" key, or a named attribute clause
    3. Nothing: fall back to the date
    """

    def __init__(self, schema: RecordSchema, settings: PaginationSettings, cursor_record: Any, *, has_attribute_store: bool = True):
        self.schema = schema
        self.settings = settings
        self.cursor_record = cursor_record
        self.has_attribute_store = has_attribute_store

    __slots__ = 'schema', 'settings', 'cursor_record', 'has_attribute_store'

    def resolve(self, key: str) -> Binding:
        binding: Binding

        field = self.schema.get_field(key)
        value = field.get_value(self.cursor_record) if field is not None else None
        attribute_name = self.get_attribute_name(key)

        if field is not None and not _is_empty(value):
            binding = DirectField(key=key, field=field, value=value)
        elif attribute_name:
            binding = Attribute(key=key, name=attribute_name)
        else:
            binding = DateFallback(key=key)

        logger.debug(f'Ordering key {key!r} resolved to {type(binding).__name__}')
        return binding

    def get_attribute_name(self, key: str) -> Optional[str]:
        """ Get the name of the attribute this key orders by, if any """
        if not self.schema.has_attributes or not self.has_attribute_store:
            return None

        if key == ATTRIBUTE_VALUE_KEY:
            return self.settings.attribute_key or None
        else:
            return self.settings.get_attribute_clause_key(key)


def _is_empty(value: Any) -> bool:
    """ Empty values: None, empty strings and collections, zero, and the string '0' """
    if isinstance(value, (str, int, float, Decimal, abc.Sized)) or value is None:
        return not value or value == '0'
    return False
