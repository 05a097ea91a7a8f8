"""reformql – a struct-to-table mapping layer for relational databases.

Describe a record type once; reformql builds and runs parameterized
INSERT / UPDATE / DELETE (and bare SELECT by key) in the right SQL dialect.

Public API
----------
``Querier``
    Builds statements for records and runs them through a ``DBTX``.

``Transaction``, ``DB``, ``open_db``
    Transaction scope, engine-bound querier, and configuration-driven setup.

``Struct``, ``Record``, ``Column``
    Pydantic base classes and the field marker that generate descriptors.

Re-exported types
-----------------
``View``, ``Table``, ``Dialect``, ``LastInsertIdMethod``, the built-in
dialect instances, the driver adapters, and all error classes.

Extensibility
-------------
New dialects can be registered via::

    from reformql.dialects.registry import DialectFactory

    DialectFactory.register("cockroach", CockroachDialect(), drivers=("cockroachdb",))

After registration, ``DB.from_engine`` and ``DialectFactory.for_driver``
pick it up automatically.
"""

from __future__ import annotations

from reformql.config import Settings, get_settings
from reformql.db import DB, open_db
from reformql.dialects.base import Dialect, LastInsertIdMethod
from reformql.dialects.mysql import MYSQL, MySQLDialect
from reformql.dialects.postgres import POSTGRESQL, PSYCOPG, PostgreSQLDialect, PsycopgDialect
from reformql.dialects.registry import DialectFactory
from reformql.dialects.sqlite import SQLITE3, SQLite3Dialect
from reformql.drivers import DBAPIExecutor, DBTX, EngineExecutor, Result, SQLAlchemyExecutor
from reformql.errors import (
    DescriptorError,
    DialectConfigError,
    DriverError,
    ErrorKind,
    InvariantViolationError,
    NoPKError,
    NoRowsError,
    MixedBatchError,
    NothingToUpdateError,
    ReformError,
    TransactionClosedError,
    UnexpectedColumnsError,
)
from reformql.logger import Logger, StructlogLogger, configure_logging
from reformql.querier import Querier
from reformql.schema.converters import descriptor_from_sqlalchemy
from reformql.schema.descriptor import Table, View
from reformql.schema.interfaces import BeforeInserter, BeforeUpdater, RecordLike, StructLike
from reformql.schema.record import Column, Record, Struct
from reformql.tx import Transaction

# ---------------------------------------------------------------------------
# Register built-in dialects with DialectFactory
# ---------------------------------------------------------------------------

DialectFactory.register(
    "postgresql",
    POSTGRESQL,
    drivers=("postgres", "pgx"),
)
DialectFactory.register(
    "psycopg",
    PSYCOPG,
    drivers=("psycopg2", "psycopg2cffi", "pg8000"),
)
DialectFactory.register(
    "mysql",
    MYSQL,
    drivers=("mariadb", "pymysql", "mysqldb", "mysqlconnector", "mymysql"),
)
DialectFactory.register(
    "sqlite3",
    SQLITE3,
    drivers=("sqlite", "pysqlite"),
)

__all__ = [
    # Engine
    "Querier",
    "Transaction",
    "DB",
    "open_db",
    # Descriptors and records
    "View",
    "Table",
    "Struct",
    "Record",
    "Column",
    "StructLike",
    "RecordLike",
    "BeforeInserter",
    "BeforeUpdater",
    "descriptor_from_sqlalchemy",
    # Dialects
    "Dialect",
    "DialectFactory",
    "LastInsertIdMethod",
    "MySQLDialect",
    "PostgreSQLDialect",
    "PsycopgDialect",
    "SQLite3Dialect",
    "MYSQL",
    "POSTGRESQL",
    "PSYCOPG",
    "SQLITE3",
    # Drivers
    "DBTX",
    "Result",
    "DBAPIExecutor",
    "SQLAlchemyExecutor",
    "EngineExecutor",
    # Logging and configuration
    "Logger",
    "StructlogLogger",
    "configure_logging",
    "Settings",
    "get_settings",
    # Errors
    "ErrorKind",
    "ReformError",
    "NoRowsError",
    "NoPKError",
    "UnexpectedColumnsError",
    "MixedBatchError",
    "NothingToUpdateError",
    "DialectConfigError",
    "DescriptorError",
    "DriverError",
    "TransactionClosedError",
    "InvariantViolationError",
]
