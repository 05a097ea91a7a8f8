"""Bare SELECT surface: by primary key, by column, or with a caller tail.

Reads return fresh instances built with the mapped type's
``from_values()``.  Filtering beyond a single column is expressed as a raw
SQL tail written in the querier's dialect.
"""
from __future__ import annotations

from typing import Any, TypeVar

from reformql.errors import (
    DescriptorError,
    DriverError,
    NoPKError,
    NoRowsError,
    UnexpectedColumnsError,
)
from reformql.querier.base import QuerierBase
from reformql.querier.commands import as_view
from reformql.schema.descriptor import Table, View
from reformql.schema.record import Record, Struct

S = TypeVar("S", bound=Struct)


class SelectsMixin(QuerierBase):
    """Statement builders that read data."""

    def _select(self, view: View, tail: str) -> str:
        query = "SELECT {} FROM {}".format(
            ", ".join(self.qualified_columns(view)),
            self.qualified_view_name(view),
        )
        if tail:
            query += f" {tail}"
        return query

    def _where_column(self, view: View, column: str) -> str:
        if column not in view.columns:
            raise UnexpectedColumnsError([column])
        return f"{self.qualified_view_name(view)}.{self.quote_column(column)}"

    def select_one_from(self, cls: type[S], tail: str = "", *args: Any) -> S:
        """Return the first row of ``cls``'s view matching ``tail``.

        Raises:
            NoRowsError: If nothing matched.
        """
        row = self.query_row(self._select(cls.view(), tail), *args)
        if row is None:
            raise NoRowsError()
        return cls.from_values(row)

    def select_all_from(self, cls: type[S], tail: str = "", *args: Any) -> list[S]:
        """Return every row of ``cls``'s view matching ``tail``."""
        rows = self.query_rows(self._select(cls.view(), tail), *args)
        return [cls.from_values(row) for row in rows]

    def find_one_from(self, cls: type[S], column: str, arg: Any) -> S:
        """Return the row whose ``column`` equals ``arg``.

        Raises:
            UnexpectedColumnsError: If ``column`` is not in the view.
            NoRowsError: If nothing matched.
        """
        view = cls.view()
        tail = f"WHERE {self._where_column(view, column)} = {self.placeholder(1)}"
        return self.select_one_from(cls, tail, arg)

    def find_all_from(self, cls: type[S], column: str, *args: Any) -> list[S]:
        """Return rows whose ``column`` is one of ``args``.

        An empty ``args`` returns ``[]`` without querying.
        """
        view = cls.view()
        where = self._where_column(view, column)
        if not args:
            return []
        tail = "WHERE {} IN ({})".format(where, ", ".join(self.placeholders(1, len(args))))
        return self.select_all_from(cls, tail, *args)

    def find_by_primary_key_from(self, cls: type[S], pk: Any) -> S:
        """Return the row of ``cls``'s table with primary key ``pk``.

        Raises:
            DescriptorError: If ``cls`` is not mapped to a table.
            NoRowsError: If no such row exists.
        """
        table = cls.view()
        if not isinstance(table, Table):
            raise DescriptorError(f"{table.name} has no primary key", getattr(cls, "__name__", None))
        return self.find_one_from(cls, table.pk_column, pk)

    def reload(self, record: Record) -> None:
        """Refresh ``record`` in place from its row.

        Raises:
            NoPKError: If the primary key is not set.
            NoRowsError: If the row no longer exists.
        """
        if not record.has_pk():
            raise NoPKError()
        table = record.table()
        tail = "WHERE {} = {}".format(
            self._where_column(table, table.pk_column), self.placeholder(1)
        )
        row = self.query_row(self._select(table, tail), record.pk_value())
        if row is None:
            raise NoRowsError()
        record.set_values(row)

    def count(self, view: Any, tail: str = "", *args: Any) -> int:
        """Return ``COUNT(*)`` of ``view`` rows matching ``tail``."""
        descriptor = as_view(view)
        query = f"SELECT COUNT(*) FROM {self.qualified_view_name(descriptor)}"
        if tail:
            query += f" {tail}"
        row = self.query_row(query, *args)
        if row is None:
            raise DriverError("reform: COUNT(*) returned no row")
        return int(row[0])
