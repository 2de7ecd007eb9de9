""" Stores: read records and attribute values for the cursor """

from __future__ import annotations

from typing import Any, Optional, Protocol

import sqlalchemy as sa
import sqlalchemy.orm

from keysetql.schema import RecordSchema
from keysetql.sainfo.primary_key import primary_key_columns
from keysetql.typing import CursorOffset, SAInstance


class RecordStore(Protocol):
    def fetch_record(self, identifier: CursorOffset) -> Optional[Any]:
        """ Get a record by its identifier. None if not found """


class AttributeStore(Protocol):
    def fetch_attribute(self, identifier: CursorOffset, name: str) -> Optional[str]:
        """ Get a single attribute value of a record. None if not found """


class SessionRecordStore:
    """ Record store that loads records through an SqlAlchemy Session """

    def __init__(self, session: sa.orm.Session, schema: RecordSchema):
        self.session = session
        self.schema = schema

    __slots__ = 'session', 'schema'

    def fetch_record(self, identifier: CursorOffset) -> Optional[SAInstance]:
        return self.session.get(self.schema.Model, identifier)


class SessionAttributeStore:
    """ Attribute store that loads attribute values through an SqlAlchemy Session

    A record may have multiple values for the same attribute: the first one is used.
    """

    def __init__(self, session: sa.orm.Session, schema: RecordSchema):
        assert schema.has_attributes, 'The schema has no attribute model'
        self.session = session
        self.schema = schema

    __slots__ = 'session', 'schema'

    def fetch_attribute(self, identifier: CursorOffset, name: str) -> Optional[str]:
        return self.session.execute(self.statement(identifier, name)).scalar()

    def statement(self, identifier: CursorOffset, name: str) -> sa.sql.Select:
        """ The SELECT statement that loads an attribute value """
        schema = self.schema
        return (
            sa.select(schema.attribute_value_column)
            .where(
                schema.attribute_record_id_column == identifier,
                schema.attribute_key_column == name,
            )
            .order_by(*primary_key_columns(schema.attribute_Model))
            .limit(1)
        )
