"""reformql dialect layer: quoting, placeholders and key retrieval."""
from reformql.dialects.base import Dialect, LastInsertIdMethod
from reformql.dialects.mysql import MYSQL, MySQLDialect
from reformql.dialects.postgres import POSTGRESQL, PSYCOPG, PostgreSQLDialect, PsycopgDialect
from reformql.dialects.registry import DialectFactory
from reformql.dialects.sqlite import SQLITE3, SQLite3Dialect

__all__ = [
    "Dialect",
    "DialectFactory",
    "LastInsertIdMethod",
    "MYSQL",
    "MySQLDialect",
    "POSTGRESQL",
    "PSYCOPG",
    "PostgreSQLDialect",
    "PsycopgDialect",
    "SQLITE3",
    "SQLite3Dialect",
]
