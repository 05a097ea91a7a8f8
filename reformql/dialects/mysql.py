"""MySQL dialect."""

from __future__ import annotations

from reformql.dialects.base import Dialect, LastInsertIdMethod


class MySQLDialect(Dialect):
    """MySQL-flavoured SQL.

    Parameter style: ``%s`` – compatible with ``PyMySQL`` and ``mysqlclient``
    positional execution.  The same token is used for every position.

    Identifiers are quoted with backticks (`` ` ``) rather than double-quotes.
    Generated keys come from the driver (``LAST_INSERT_ID()``); note that
    MySQL reports *changed* rows for UPDATE unless the connection enables
    ``CLIENT.FOUND_ROWS``.
    """

    @property
    def name(self) -> str:
        return "mysql"

    def quote_part(self, name: str) -> str:
        escaped = name.replace("`", "``")
        return f"`{escaped}`"

    def placeholder(self, position: int) -> str:
        return "%s"

    @property
    def last_insert_id_method(self) -> LastInsertIdMethod:
        return LastInsertIdMethod.LAST_INSERT_ID


MYSQL = MySQLDialect()
