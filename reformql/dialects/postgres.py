"""PostgreSQL dialects."""

from __future__ import annotations

from reformql.dialects.base import Dialect, LastInsertIdMethod, double_quote


class PostgreSQLDialect(Dialect):
    """PostgreSQL-flavoured SQL with numbered placeholders.

    Parameter style: ``$1, $2, ...`` – the native PostgreSQL protocol
    numbering.  Generated keys are read back with ``RETURNING``.
    """

    @property
    def name(self) -> str:
        return "postgresql"

    def quote_part(self, name: str) -> str:
        return double_quote(name)

    def placeholder(self, position: int) -> str:
        return f"${position}"

    @property
    def last_insert_id_method(self) -> LastInsertIdMethod:
        return LastInsertIdMethod.RETURNING


class PsycopgDialect(PostgreSQLDialect):
    """PostgreSQL for DB-API drivers using the ``format`` paramstyle.

    Parameter style: ``%s`` – compatible with ``psycopg``, ``psycopg2`` and
    ``pg8000`` positional execution.  Literal ``%`` characters in
    caller-supplied tails must be written as ``%%``.
    """

    @property
    def name(self) -> str:
        return "psycopg"

    def placeholder(self, position: int) -> str:
        return "%s"


POSTGRESQL = PostgreSQLDialect()
PSYCOPG = PsycopgDialect()
