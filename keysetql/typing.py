from typing import Any, Union

import sqlalchemy as sa
import sqlalchemy.orm


# Annotation for SqlAlchemy models
SAModel = type

# Annotation for SqlAlchemy models or aliased classes
SAModelOrAlias = Union[SAModel, sa.orm.util.AliasedClass]

# Annotation for SqlAlchemy instances (objects)
SAInstance = object

# An SqlAlchemy attribute
# That is, the instrumented attribute you get when accessing <model>.<attribute>
SAAttribute = sa.orm.QueryableAttribute

# Cursor offset: the identifier of the reference record
CursorOffset = Any

# A single boundary condition: a parameterized SQL expression
Condition = sa.sql.ColumnElement

# A list of conditions to be ANDed into the WHERE clause
ConditionList = list[Condition]
