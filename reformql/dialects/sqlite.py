"""SQLite dialect."""
from __future__ import annotations

from reformql.dialects.base import Dialect, LastInsertIdMethod, double_quote


class SQLite3Dialect(Dialect):
    """SQLite-flavoured SQL.

    Parameter style: ``?`` – compatible with Python's built-in ``sqlite3``
    positional execution (``cursor.execute(sql, tuple)``).
    """

    @property
    def name(self) -> str:
        return "sqlite3"

    def quote_part(self, name: str) -> str:
        return double_quote(name)

    def placeholder(self, position: int) -> str:
        return "?"

    @property
    def last_insert_id_method(self) -> LastInsertIdMethod:
        return LastInsertIdMethod.LAST_INSERT_ID


SQLITE3 = SQLite3Dialect()
