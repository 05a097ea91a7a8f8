"""Utilities for building descriptors from external sources.

SQLAlchemy converter
--------------------
:func:`descriptor_from_sqlalchemy` turns a *declared* SQLAlchemy
:class:`~sqlalchemy.schema.Table` into a
:class:`~reformql.schema.descriptor.View` or
:class:`~reformql.schema.descriptor.Table`.  It reads the table object you
already defined in code; it never reflects a live database.

Install the optional dependency before using this module::

    pip install "reformql[sqlalchemy]"

Example::

    from sqlalchemy import Column, Integer, MetaData, String, Table
    from reformql.schema.converters import descriptor_from_sqlalchemy

    people = Table(
        "people", MetaData(),
        Column("id", Integer, primary_key=True),
        Column("name", String),
    )
    table = descriptor_from_sqlalchemy(people)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from reformql.errors import DescriptorError
from reformql.schema.descriptor import Table, View

if TYPE_CHECKING:
    from sqlalchemy import Table as SATable


def descriptor_from_sqlalchemy(table: SATable) -> View:
    """Build a descriptor for a declared SQLAlchemy table.

    Columns keep their declaration order.  A table with exactly one
    primary-key column becomes a :class:`Table`; one without a primary key
    becomes a :class:`View`.

    Args:
        table: A :class:`sqlalchemy.schema.Table` instance.

    Returns:
        A :class:`Table` or :class:`View` descriptor.

    Raises:
        DescriptorError: If the table has a composite primary key.
    """
    columns = tuple(c.name for c in table.columns)
    pk_columns = [c.name for c in table.primary_key.columns]

    if len(pk_columns) > 1:
        raise DescriptorError(
            f"{table.fullname}: composite primary key {pk_columns} is not supported",
            table.fullname,
        )
    if not pk_columns:
        return View(name=table.name, columns=columns, schema_name=table.schema)
    return Table(
        name=table.name,
        columns=columns,
        schema_name=table.schema,
        pk_column_index=columns.index(pk_columns[0]),
    )
