"""Test fixtures: sample record models, DDL, and a recording DBTX double."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from pathlib import Path
from typing import Annotated, Any, Literal

from reformql.drivers.base import Result, Row
from reformql.schema.record import Column, Record, Struct

_FIXTURES_DIR = Path(__file__).parent

# A fixed clock keeps hook-populated timestamps deterministic.
NOW = datetime(2024, 3, 1, 12, 30, 0)


class Person(Record):
    """Table with a generated integer key and insert/update hooks."""

    __tablename__ = "people"

    id: Annotated[int | None, Column("id", pk=True)] = None
    group_id: Annotated[int | None, Column("group_id")] = None
    name: Annotated[str, Column("name")] = ""
    email: Annotated[str | None, Column("email")] = None
    created_at: Annotated[datetime | None, Column("created_at")] = None
    updated_at: Annotated[datetime | None, Column("updated_at")] = None

    def before_insert(self) -> None:
        if self.created_at is None:
            self.created_at = NOW

    def before_update(self) -> None:
        self.updated_at = NOW


class Project(Record):
    """Table with a caller-assigned text key that is not the first column."""

    __tablename__ = "projects"

    name: Annotated[str, Column("name")]
    id: Annotated[str, Column("id", pk=True)] = ""
    start: Annotated[date, Column("start")]
    end: Annotated[date | None, Column("end")] = None


class PersonProject(Struct):
    """View without a primary key."""

    __tablename__ = "person_project"

    person_id: Annotated[int, Column("person_id")]
    project_id: Annotated[str, Column("project_id")]


class Audited(Record):
    """Schema-qualified table whose hooks always fail."""

    __tablename__ = "audit_log"
    __schemaname__ = "audit"

    id: Annotated[int | None, Column("id", pk=True)] = None
    message: Annotated[str, Column("message")] = ""

    def before_insert(self) -> None:
        raise RuntimeError("insert rejected")

    def before_update(self) -> None:
        raise RuntimeError("update rejected")


def load_ddl(target: Literal["sqlite", "postgres"] = "sqlite") -> str:
    """Return the sample DDL SQL string for the given backend.

    Args:
        target: ``'sqlite'`` (default) or ``'postgres'``.

    Returns:
        DDL string ready to execute against the target backend.
    """
    filename = f"ddl_{target}.sql"
    return (_FIXTURES_DIR / filename).read_text()


class FakeDBTX:
    """Records every call and returns canned results.

    Args:
        rows_affected: Value reported by ``execute``.
        last_insert_id: Value reported by ``execute``.
        row: Value returned by ``query_row``.
        rows: Value returned by ``query_rows``.
        error: If set, raised by every call after recording it.
    """

    def __init__(
        self,
        rows_affected: int | None = 1,
        last_insert_id: int | None = 1,
        row: Row | None = (1,),
        rows: list[Row] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.rows_affected = rows_affected
        self.last_insert_id = last_insert_id
        self.row = row
        self.rows = rows or []
        self.error = error
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []

    def _record(self, kind: str, query: str, args: Sequence[Any]) -> None:
        self.calls.append((kind, query, tuple(args)))
        if self.error is not None:
            raise self.error

    def execute(self, query: str, args: Sequence[Any]) -> Result:
        self._record("execute", query, args)
        return Result(rows_affected=self.rows_affected, last_insert_id=self.last_insert_id)

    def query_row(self, query: str, args: Sequence[Any]) -> Row | None:
        self._record("query_row", query, args)
        return self.row

    def query_rows(self, query: str, args: Sequence[Any]) -> list[Row]:
        self._record("query_rows", query, args)
        return self.rows

    @property
    def queries(self) -> list[str]:
        return [query for _, query, _ in self.calls]


class FakeHandle:
    """Transaction handle recording commit/rollback calls."""

    def __init__(
        self,
        error: Exception | None = None,
        rollback_error: Exception | None = None,
    ) -> None:
        self.actions: list[str] = []
        self.error = error
        self.rollback_error = rollback_error

    def commit(self) -> None:
        self.actions.append("commit")
        if self.error is not None:
            raise self.error

    def rollback(self) -> None:
        self.actions.append("rollback")
        if self.rollback_error is not None:
            raise self.rollback_error


class RecordingLogger:
    """Logger sink collecting before/after events."""

    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def before(self, query: str, args: Sequence[Any]) -> None:
        self.events.append(("before", query, tuple(args)))

    def after(
        self,
        query: str,
        args: Sequence[Any],
        duration: float,
        error: BaseException | None,
    ) -> None:
        self.events.append(("after", query, tuple(args), duration, error))
