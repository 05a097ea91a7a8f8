"""DB-API 2.0 (PEP 249) adapter."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from reformql.drivers.base import Result, Row


class DBAPIExecutor:
    """Executes statements on a PEP 249 connection.

    Works with ``sqlite3``, ``psycopg``, ``psycopg2``, ``PyMySQL`` and other
    compliant drivers.  Transaction control stays with the connection; wrap
    it in :class:`~reformql.tx.Transaction` to commit or roll back.

    ``rows_affected`` is the cursor's ``rowcount`` as the driver reports it.
    Raw PyMySQL and mysqlclient connections count *changed* rows for UPDATE,
    so an update that writes identical values looks like a missing row and
    ``save()`` falls through to INSERT.  Open those connections with
    ``client_flag=CLIENT.FOUND_ROWS`` (SQLAlchemy's MySQL dialects already
    set it)::

        from pymysql.constants import CLIENT

        conn = pymysql.connect(..., client_flag=CLIENT.FOUND_ROWS)

    Args:
        connection: An open DB-API connection.
    """

    def __init__(self, connection: Any) -> None:
        self.connection = connection

    def execute(self, query: str, args: Sequence[Any]) -> Result:
        cursor = self.connection.cursor()
        try:
            cursor.execute(query, tuple(args))
            rowcount = cursor.rowcount
            return Result(
                rows_affected=rowcount if rowcount is not None and rowcount >= 0 else None,
                last_insert_id=getattr(cursor, "lastrowid", None),
            )
        finally:
            cursor.close()

    def query_row(self, query: str, args: Sequence[Any]) -> Row | None:
        cursor = self.connection.cursor()
        try:
            cursor.execute(query, tuple(args))
            row = cursor.fetchone()
            return tuple(row) if row is not None else None
        finally:
            cursor.close()

    def query_rows(self, query: str, args: Sequence[Any]) -> list[Row]:
        cursor = self.connection.cursor()
        try:
            cursor.execute(query, tuple(args))
            return [tuple(row) for row in cursor.fetchall()]
        finally:
            cursor.close()
