"""Dialect abstractions: the ``Dialect`` ABC and ``LastInsertIdMethod``.

The Template Method pattern (GoF) is used:
- ``Dialect`` defines the shared helpers (``placeholders``, qualified name
  quoting) on top of a few abstract primitives.
- ``PostgreSQLDialect``, ``MySQLDialect`` and ``SQLite3Dialect`` override the
  backend-specific steps (placeholder style, identifier quoting, the way a
  generated primary key is obtained after INSERT).

Dialects hold no mutable state; one instance per backend is shared
process-wide.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class LastInsertIdMethod(str, Enum):
    """How a database-generated primary key is learned after INSERT.

    Attributes:
        LAST_INSERT_ID: The driver reports the id of the inserted row
            (DB-API ``cursor.lastrowid``).
        RETURNING: The statement carries a ``RETURNING <pk>`` clause and the
            key is read from the single returned row.
    """

    LAST_INSERT_ID = "last_insert_id"
    RETURNING = "returning"


class Dialect(ABC):
    """Abstract base for SQL dialects.

    Subclasses implement the dialect-specific primitives; the ``Querier``
    uses this interface to build every statement.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the canonical dialect name (e.g. ``'postgresql'``)."""

    @abstractmethod
    def quote_part(self, name: str) -> str:
        """Return a single quoted identifier part.

        Args:
            name: Unquoted identifier without schema qualification.

        Returns:
            Quoted identifier.
        """

    @abstractmethod
    def placeholder(self, position: int) -> str:
        """Return the placeholder for the parameter at ``position``.

        Positions start at 1.  The result depends only on ``position``, so
        the same parameter always renders the same token.

        Args:
            position: 1-based parameter position within the statement.

        Returns:
            Dialect-specific placeholder string.
        """

    @property
    @abstractmethod
    def last_insert_id_method(self) -> LastInsertIdMethod:
        """Return the strategy used to obtain a generated primary key."""

    def quote_identifier(self, name: str) -> str:
        """Return a properly-quoted, possibly schema-qualified identifier.

        ``"public.people"`` is quoted part by part, so the result is
        ``"public"."people"`` rather than one identifier with a dot in it.
        """
        return ".".join(self.quote_part(part) for part in name.split("."))

    def placeholders(self, start: int, count: int) -> list[str]:
        """Return ``count`` placeholders beginning at position ``start``."""
        if start < 1:
            raise ValueError(f"placeholder positions start at 1, got {start}")
        return [self.placeholder(start + i) for i in range(count)]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


def double_quote(name: str) -> str:
    """ANSI identifier quoting shared by PostgreSQL and SQLite."""
    escaped = name.replace('"', '""')
    return f'"{escaped}"'
