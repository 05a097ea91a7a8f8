"""Integration tests against a real PostgreSQL instance.

Uses REFORM_TEST_DATABASE_URL (a libpq connection string).  Skips all
tests if the env var is unset or the connection fails.  Every test runs
in one transaction that is rolled back afterwards.
"""
from __future__ import annotations

import os
from datetime import date

import pytest

from reformql.dialects.postgres import PSYCOPG
from reformql.drivers.dbapi import DBAPIExecutor
from reformql.errors import NoRowsError
from reformql.querier import Querier
from reformql.tx import Transaction
from tests.fixtures import NOW, Person, PersonProject, Project, RecordingLogger, load_ddl

psycopg = pytest.importorskip("psycopg", reason="psycopg required for Postgres integration tests")


@pytest.fixture()
def pg_conn():
    dsn = os.environ.get("REFORM_TEST_DATABASE_URL")
    if not dsn:
        pytest.skip("REFORM_TEST_DATABASE_URL not set")
    try:
        conn = psycopg.connect(dsn)
    except Exception as e:
        pytest.skip(f"Cannot connect to Postgres: {e}")
    with conn.cursor() as cur:
        cur.execute(load_ddl("postgres"))
    yield conn
    conn.rollback()
    conn.close()


@pytest.fixture()
def querier(pg_conn) -> Querier:
    return Querier(DBAPIExecutor(pg_conn), PSYCOPG)


def test_insert_returning_key(querier):
    alice = Person(name="Alice")
    querier.insert(alice)
    bob = Person(name="Bob")
    querier.insert(bob)

    assert bob.id == alice.id + 1
    loaded = querier.find_by_primary_key_from(Person, alice.id)
    assert loaded.name == "Alice"
    assert loaded.created_at == NOW


def test_quoted_reserved_column(querier):
    project = Project(id="apollo", name="Apollo", start=date(2024, 1, 1), end=date(2024, 6, 30))
    querier.insert(project)

    loaded = querier.find_one_from(Project, "end", date(2024, 6, 30))
    assert loaded.id == "apollo"


def test_update_delete_and_counts(querier):
    person = Person(name="Alice")
    querier.insert(person)
    querier.insert(Project(id="apollo", name="Apollo", start=date(2024, 1, 1)))
    querier.insert(PersonProject(person_id=person.id, project_id="apollo"))

    person.email = "alice@example.com"
    querier.update_columns(person, "email")
    querier.reload(person)
    assert person.email == "alice@example.com"

    assert querier.delete_from(PersonProject, "WHERE person_id = %s", person.id) == 1
    querier.delete(person)
    with pytest.raises(NoRowsError):
        querier.delete(person)


def test_insert_multi(querier):
    querier.insert_multi(Person(name="A"), Person(name="B"))
    assert querier.count(Person) == 2


def test_transaction_rollback_is_logged(pg_conn):
    sink = RecordingLogger()
    tx = Transaction(DBAPIExecutor(pg_conn), pg_conn, PSYCOPG, sink)
    tx.insert(Person(name="Alice"))
    tx.rollback()

    assert sink.events[-1][1] == "ROLLBACK"
    with pg_conn.cursor() as cur:
        cur.execute("SELECT to_regclass('people')")
        assert cur.fetchone() == (None,)
