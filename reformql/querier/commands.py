"""INSERT / UPDATE / DELETE by primary key.

Row-count policy for statements scoped by primary key:

* 0 rows affected  -> :class:`~reformql.errors.NoRowsError` (expected outcome)
* 1 row affected   -> success
* >1 rows affected -> :class:`~reformql.errors.InvariantViolationError`

Driver errors propagate untouched; nothing is retried.
"""
from __future__ import annotations

from typing import Any

from reformql.dialects.base import LastInsertIdMethod
from reformql.drivers.base import Result
from reformql.errors import (
    DriverError,
    InvariantViolationError,
    MixedBatchError,
    NoPKError,
    NoRowsError,
)
from reformql.querier.base import QuerierBase
from reformql.querier.columns import check_aligned, cut_index, pick_columns
from reformql.schema.descriptor import View
from reformql.schema.interfaces import BeforeInserter, BeforeUpdater, RecordLike, StructLike


def as_view(target: Any) -> View:
    """Accept a descriptor or anything with a ``view()`` method."""
    if isinstance(target, View):
        return target
    return target.view()


class CommandsMixin(QuerierBase):
    """Statement builders that change data."""

    def insert(self, struct: StructLike) -> None:
        """Insert ``struct`` into its view or table.

        If ``struct`` is a record whose primary key is unset, the key column
        is left out so the database generates it, and the generated key is
        written back into the record.  Runs ``before_insert()`` first when
        the type defines it.
        """
        if isinstance(struct, BeforeInserter):
            struct.before_insert()

        view = struct.view()
        columns = list(view.columns)
        values = list(struct.values())
        record = struct if isinstance(struct, RecordLike) else None

        generated = False
        if record is not None:
            table = record.table()
            if not record.has_pk():
                columns, values = cut_index(columns, values, table.pk_column_index)
                generated = True
        else:
            check_aligned(columns, values)

        query = "INSERT INTO {} ({}) VALUES ({})".format(
            self.qualified_view_name(view),
            ", ".join(self.quote_column(c) for c in columns),
            ", ".join(self.placeholders(1, len(values))),
        )

        method = self.dialect.last_insert_id_method
        if method is LastInsertIdMethod.LAST_INSERT_ID:
            result = self.exec(query, *values)
            if record is not None and generated:
                if result.last_insert_id is None:
                    raise DriverError("reform: driver did not report the last insert id")
                record.set_pk(result.last_insert_id)

        elif method is LastInsertIdMethod.RETURNING:
            if record is not None:
                query += f" RETURNING {self.quote_column(table.pk_column)}"
                row = self.query_row(query, *values)
                if row is None:
                    raise NoRowsError()
                record.set_pk(row[0])
            else:
                self.exec(query, *values)

        else:
            raise InvariantViolationError(
                f"reform: unhandled last insert id method {method!r}"
            )

    def insert_multi(self, *structs: StructLike) -> None:
        """Insert several structs of the same view with one statement.

        Records must either all have a primary key or all lack one; in the
        latter case the key column is left out.  Generated keys are not
        written back.  ``before_insert()`` hooks run for every struct first.

        Raises:
            MixedBatchError: If the structs belong to different views, or
                only some records have a primary key.  No SQL is issued.
        """
        if not structs:
            return

        for s in structs:
            if isinstance(s, BeforeInserter):
                s.before_insert()

        view = structs[0].view()
        for s in structs[1:]:
            if s.view() != view:
                raise MixedBatchError(
                    f"reform: insert_multi needs structs of one view, "
                    f"got {view.name!r} and {s.view().name!r}"
                )

        records = [s for s in structs if isinstance(s, RecordLike)]
        cut_pk = False
        if records:
            with_pk = sum(1 for r in records if r.has_pk())
            if 0 < with_pk < len(records):
                raise MixedBatchError("reform: primary key is set for some records but not all")
            cut_pk = with_pk == 0

        columns = list(view.columns)
        rows: list[list[Any]] = []
        for s in structs:
            values = list(s.values())
            if cut_pk:
                cols, values = cut_index(view.columns, values, records[0].table().pk_column_index)
                columns = cols
            else:
                check_aligned(columns, values)
            rows.append(values)

        width = len(columns)
        groups = [
            "({})".format(", ".join(self.placeholders(i * width + 1, width)))
            for i in range(len(rows))
        ]
        query = "INSERT INTO {} ({}) VALUES {}".format(
            self.qualified_view_name(view),
            ", ".join(self.quote_column(c) for c in columns),
            ", ".join(groups),
        )
        args = [v for values in rows for v in values]
        self.exec(query, *args)

    # ------------------------------------------------------------------
    # UPDATE
    # ------------------------------------------------------------------

    def _before_update(self, record: RecordLike) -> None:
        if not record.has_pk():
            raise NoPKError()
        if isinstance(record, BeforeUpdater):
            record.before_update()

    def _update(self, record: RecordLike, columns: list[str], values: list[Any]) -> None:
        table = record.table()
        assignments = [
            f"{self.quote_column(c)} = {p}"
            for c, p in zip(columns, self.placeholders(1, len(columns)))
        ]
        query = "UPDATE {} SET {} WHERE {} = {}".format(
            self.qualified_view_name(table),
            ", ".join(assignments),
            self.quote_column(table.pk_column),
            self.placeholder(len(columns) + 1),
        )
        result = self.exec(query, *values, record.pk_value())
        self._check_single_row(result, "UPDATE")

    def update(self, record: RecordLike) -> None:
        """Update every non-key column of the row identified by the primary key.

        Runs ``before_update()`` first when the type defines it.

        Raises:
            NoPKError: If the primary key is not set; no SQL is issued.
            NoRowsError: If no row has that primary key.
        """
        self._before_update(record)
        table = record.table()
        columns, values = cut_index(table.columns, record.values(), table.pk_column_index)
        self._update(record, columns, values)

    def update_columns(self, record: RecordLike, *columns: str) -> None:
        """Update only ``columns`` of the row identified by the primary key.

        The primary-key column is never updated, even when named.

        Raises:
            NoPKError: If the primary key is not set.
            UnexpectedColumnsError: If a name is not a column of the table.
            NothingToUpdateError: If no updatable column was named.
            NoRowsError: If no row has that primary key.
        """
        self._before_update(record)
        table = record.table()
        picked_columns, picked_values = pick_columns(
            table.columns, record.values(), columns, skip=table.pk_column
        )
        self._update(record, picked_columns, picked_values)

    def save(self, record: RecordLike) -> None:
        """Update the record if its primary key is set and the row exists,
        insert it otherwise."""
        if record.has_pk():
            try:
                self.update(record)
                return
            except NoRowsError:
                pass
        self.insert(record)

    # ------------------------------------------------------------------
    # DELETE
    # ------------------------------------------------------------------

    def delete(self, record: RecordLike) -> None:
        """Delete the row identified by the record's primary key.

        Raises:
            NoPKError: If the primary key is not set; no SQL is issued.
            NoRowsError: If no row was deleted.
        """
        if not record.has_pk():
            raise NoPKError()

        table = record.table()
        query = "DELETE FROM {} WHERE {} = {}".format(
            self.qualified_view_name(table),
            self.quote_column(table.pk_column),
            self.placeholder(1),
        )
        result = self.exec(query, record.pk_value())
        self._check_single_row(result, "DELETE")

    def delete_from(self, view: Any, tail: str = "", *args: Any) -> int:
        """Delete rows from ``view`` matching a caller-supplied SQL tail.

        Args:
            view: A descriptor, or a mapped type / instance with ``view()``.
            tail: Raw SQL appended after the table name, e.g.
                ``"WHERE name = ?"``.  Written in the querier's dialect.
            *args: Positional arguments for the tail's placeholders.

        Returns:
            The number of deleted rows.  Zero is a normal result.
        """
        descriptor = as_view(view)
        query = f"DELETE FROM {self.qualified_view_name(descriptor)}"
        if tail:
            query += f" {tail}"
        result = self.exec(query, *args)
        if result.rows_affected is None:
            raise DriverError("reform: driver did not report rows affected")
        return result.rows_affected

    @staticmethod
    def _check_single_row(result: Result, statement: str) -> None:
        rows = result.rows_affected
        if rows is None:
            raise DriverError("reform: driver did not report rows affected")
        if rows == 0:
            raise NoRowsError()
        if rows > 1:
            raise InvariantViolationError(
                f"reform: {rows} rows by {statement} by primary key. Please report this bug."
            )
