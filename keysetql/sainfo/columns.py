from __future__ import annotations

from functools import cache

import sqlalchemy as sa
import sqlalchemy.orm
from sqlalchemy.orm import ColumnProperty, QueryableAttribute

from keysetql.sainfo.names import model_name
from keysetql.typing import SAModelOrAlias, SAAttribute
from keysetql import exc


def resolve_column_by_name(field_name: str, Model: SAModelOrAlias, *, where: str) -> QueryableAttribute:
    # As simple as it looks, this code invokes __getattr__() on sa.orm.AliasedClass which adapts the SQL expression
    # to make sure it uses the proper aliased name in queries
    try:
        attribute = getattr(Model, field_name)
    except AttributeError as e:
        raise exc.InvalidColumnError(model_name(Model), field_name, where=where) from e

    # Check that it actually is a column
    if not is_column_property(attribute):
        raise exc.InvalidColumnError(model_name(Model), field_name, where=where)

    # Done
    return attribute


def column_attribute_names(Model: SAModelOrAlias) -> tuple[str, ...]:
    """ Get the names of all column attributes of a model, in mapper order """
    return tuple(prop.key for prop in sa.orm.class_mapper(Model).column_attrs)


@cache
def is_column_property(attribute: SAAttribute) -> bool:
    return (
        isinstance(attribute, QueryableAttribute) and
        isinstance(attribute.property, ColumnProperty) and
        isinstance(attribute.expression, sa.Column)  # not an expression, but a real column
    )
