"""reformql execution adapters."""
from reformql.drivers.alchemy import EngineExecutor, SQLAlchemyExecutor
from reformql.drivers.base import DBTX, Result, Row, TXHandle
from reformql.drivers.dbapi import DBAPIExecutor

__all__ = [
    "DBAPIExecutor",
    "DBTX",
    "EngineExecutor",
    "Result",
    "Row",
    "SQLAlchemyExecutor",
    "TXHandle",
]
