"""SQLAlchemy adapters.

SQL built by the ``Querier`` is already dialect-specific, so it is passed
to the driver untouched with :meth:`sqlalchemy.engine.Connection.exec_driver_sql`.
SQLAlchemy contributes connection pooling and transaction handling.

Install the optional dependency before using this module::

    pip install "reformql[sqlalchemy]"
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from reformql.drivers.base import Result, Row

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, CursorResult, Engine


def _to_result(cursor_result: CursorResult) -> Result:
    rowcount = cursor_result.rowcount
    return Result(
        rows_affected=rowcount if rowcount is not None and rowcount >= 0 else None,
        last_insert_id=cursor_result.lastrowid,
    )


class SQLAlchemyExecutor:
    """Executes statements on an open SQLAlchemy ``Connection``.

    The connection's own transaction (explicit or autobegun) scopes every
    statement; committing is the caller's job.

    Args:
        connection: An open :class:`sqlalchemy.engine.Connection`.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def execute(self, query: str, args: Sequence[Any]) -> Result:
        return _to_result(self.connection.exec_driver_sql(query, tuple(args)))

    def query_row(self, query: str, args: Sequence[Any]) -> Row | None:
        row = self.connection.exec_driver_sql(query, tuple(args)).first()
        return tuple(row) if row is not None else None

    def query_rows(self, query: str, args: Sequence[Any]) -> list[Row]:
        return [tuple(row) for row in self.connection.exec_driver_sql(query, tuple(args)).all()]


class EngineExecutor:
    """Executes every statement in its own ``engine.begin()`` block.

    Each call checks a connection out of the pool, runs, commits (or rolls
    back on error) and returns the connection.  Rows are fully fetched
    before the connection is released.

    Args:
        engine: A :class:`sqlalchemy.engine.Engine`.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def execute(self, query: str, args: Sequence[Any]) -> Result:
        with self.engine.begin() as conn:
            return SQLAlchemyExecutor(conn).execute(query, args)

    def query_row(self, query: str, args: Sequence[Any]) -> Row | None:
        with self.engine.begin() as conn:
            return SQLAlchemyExecutor(conn).query_row(query, args)

    def query_rows(self, query: str, args: Sequence[Any]) -> list[Row]:
        with self.engine.begin() as conn:
            return SQLAlchemyExecutor(conn).query_rows(query, args)
