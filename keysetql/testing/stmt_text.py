""" Convert a SA SQL statement to readable text """

from typing import Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import psycopg2  # noqa: F401


# The dialect to use for compiling statements
DEFAULT_DIALECT: sa.engine.Dialect = postgresql.psycopg2.dialect()  # psycopg2: no bind casts


def stmt2sql(stmt: sa.sql.ClauseElement, dialect: sa.engine.Dialect = None) -> str:
    """ Convert an SqlAlchemy statement into a string """
    # See: http://stackoverflow.com/a/4617623/134904
    # This intentionally does not escape values!
    query = stmt.compile(dialect=dialect or DEFAULT_DIALECT)
    return _insert_query_params(query.string, query.params)


def assert_statement_lines(stmt: Union[str, sa.sql.ClauseElement], *expected_lines: str, dialect: sa.engine.Dialect = None):
    """ Find the provided lines inside a statement or fail """
    # Statement?
    if isinstance(stmt, sa.sql.ClauseElement):
        stmt = stmt2sql(stmt, dialect)

    # Test
    for line in expected_lines:
        assert line.strip() in stmt, f'{line!r} not found in {stmt!r}'

    # Done
    return True


def _insert_query_params(statement_str: str, parameters: dict):
    """ Compile a statement by inserting *unquoted* parameters into the query """
    return statement_str % parameters
