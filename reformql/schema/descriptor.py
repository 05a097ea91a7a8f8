"""Pydantic models for the static View and Table descriptors.

A descriptor tells the ``Querier`` how a record type maps to a relation:
its (possibly schema-qualified) name, its ordered columns and, for tables,
which column is the primary key.  Column order is significant: it defines
the positional correspondence with a record's ``values()``.

Descriptors are produced once per type (see :mod:`reformql.schema.record`
and :mod:`reformql.schema.converters`) and are frozen afterwards.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class View(BaseModel):
    """Metadata for a relation without primary-key semantics.

    Attributes:
        name: Relation name.
        columns: Ordered column names.
        schema_name: Optional schema the relation lives in.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    columns: tuple[str, ...]
    schema_name: str | None = None

    @property
    def qualified_name(self) -> str:
        """Returns ``schema.name`` when a schema is set, else ``name``."""
        if self.schema_name:
            return f"{self.schema_name}.{self.name}"
        return self.name


class Table(View):
    """Metadata for a relation with a single-column primary key.

    Attributes:
        pk_column_index: Position of the primary-key column in ``columns``.
    """

    pk_column_index: int

    @model_validator(mode="after")
    def _check_pk_index(self) -> "Table":
        if not 0 <= self.pk_column_index < len(self.columns):
            raise ValueError(
                f"pk_column_index {self.pk_column_index} out of range "
                f"for {len(self.columns)} columns"
            )
        return self

    @property
    def pk_column(self) -> str:
        """Returns the primary-key column name."""
        return self.columns[self.pk_column_index]
