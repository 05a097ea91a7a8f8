"""Shared pytest fixtures for reformql unit and integration tests."""
from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from reformql.dialects.base import Dialect
from reformql.dialects.mysql import MYSQL
from reformql.dialects.postgres import POSTGRESQL
from reformql.dialects.sqlite import SQLITE3
from reformql.drivers.dbapi import DBAPIExecutor
from reformql.querier import Querier
from tests.fixtures import FakeDBTX, RecordingLogger, load_ddl

ALL_DIALECTS: list[Dialect] = [POSTGRESQL, MYSQL, SQLITE3]


@pytest.fixture()
def fake() -> FakeDBTX:
    """Recording DBTX reporting one affected row and generated id 1."""
    return FakeDBTX()


@pytest.fixture()
def sink() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture()
def pg(fake: FakeDBTX, sink: RecordingLogger) -> Querier:
    """Querier speaking PostgreSQL over the fake DBTX."""
    return Querier(fake, POSTGRESQL, sink)


@pytest.fixture()
def sq(fake: FakeDBTX) -> Querier:
    """Querier speaking SQLite over the fake DBTX."""
    return Querier(fake, SQLITE3)


@pytest.fixture()
def my(fake: FakeDBTX) -> Querier:
    """Querier speaking MySQL over the fake DBTX."""
    return Querier(fake, MYSQL)


@pytest.fixture()
def sqlite_conn() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite database with the sample schema."""
    conn = sqlite3.connect(":memory:")
    conn.executescript(load_ddl("sqlite"))
    yield conn
    conn.close()


@pytest.fixture()
def sqlite_querier(sqlite_conn: sqlite3.Connection) -> Querier:
    return Querier(DBAPIExecutor(sqlite_conn), SQLITE3)


@pytest.fixture()
def sqlite_url(tmp_path: Path) -> str:
    """SQLAlchemy URL of a file-backed SQLite database with the sample schema."""
    path = tmp_path / "reform-test.sqlite3"
    conn = sqlite3.connect(path)
    conn.executescript(load_ddl("sqlite"))
    conn.close()
    return f"sqlite:///{path}"
