"""The execution capability consumed by the ``Querier``.

Anything implementing :class:`DBTX` can back a ``Querier``: a DB-API
connection, a SQLAlchemy connection, an engine, or a test double.  The
engine is agnostic to the database behind it beyond the
:class:`~reformql.dialects.base.Dialect` it is paired with.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

Row = tuple[Any, ...]


@dataclass(frozen=True)
class Result:
    """Outcome of a statement execution.

    Attributes:
        rows_affected: Rows changed by the statement, or ``None`` if the
            driver cannot tell.
        last_insert_id: Id generated by the last INSERT, or ``None`` if the
            driver does not report one.
    """

    rows_affected: int | None = None
    last_insert_id: int | None = None


@runtime_checkable
class DBTX(Protocol):
    """Minimal statement execution interface.

    Driver errors must propagate unchanged; the ``Querier`` neither wraps
    nor retries them.
    """

    def execute(self, query: str, args: Sequence[Any]) -> Result: ...

    def query_row(self, query: str, args: Sequence[Any]) -> Row | None: ...

    def query_rows(self, query: str, args: Sequence[Any]) -> list[Row]: ...


@runtime_checkable
class TXHandle(Protocol):
    """Something that finishes a transaction: a DB-API connection or a
    SQLAlchemy ``Transaction``."""

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
