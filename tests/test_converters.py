"""Unit tests for reformql.schema.converters.descriptor_from_sqlalchemy."""

from __future__ import annotations

import pytest
from sqlalchemy import Column, Date, Integer, MetaData, String, Table

from reformql.errors import DescriptorError
from reformql.schema.converters import descriptor_from_sqlalchemy
from reformql.schema.descriptor import Table as TableDescriptor
from reformql.schema.descriptor import View
from tests.fixtures import Project


def test_table_with_primary_key():
    projects = Table(
        "projects",
        MetaData(),
        Column("name", String, nullable=False),
        Column("id", String, primary_key=True),
        Column("start", Date, nullable=False),
        Column("end", Date),
    )

    descriptor = descriptor_from_sqlalchemy(projects)

    assert isinstance(descriptor, TableDescriptor)
    assert descriptor == Project.table()
    assert descriptor.pk_column == "id"


def test_table_without_primary_key_is_view():
    links = Table(
        "person_project",
        MetaData(),
        Column("person_id", Integer),
        Column("project_id", String),
    )

    descriptor = descriptor_from_sqlalchemy(links)

    assert type(descriptor) is View
    assert descriptor.columns == ("person_id", "project_id")
    assert descriptor.schema_name is None


def test_schema_is_kept():
    log = Table(
        "audit_log",
        MetaData(),
        Column("id", Integer, primary_key=True),
        Column("message", String),
        schema="audit",
    )

    descriptor = descriptor_from_sqlalchemy(log)

    assert descriptor.schema_name == "audit"
    assert descriptor.qualified_name == "audit.audit_log"


def test_composite_primary_key_rejected():
    pairs = Table(
        "pairs",
        MetaData(),
        Column("a", Integer, primary_key=True),
        Column("b", Integer, primary_key=True),
    )

    with pytest.raises(DescriptorError, match="composite primary key"):
        descriptor_from_sqlalchemy(pairs)
