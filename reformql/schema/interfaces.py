"""Capability protocols consumed by the ``Querier``.

The engine never depends on a concrete model base class.  Anything that
implements these protocols can be inserted, updated or deleted; the
:class:`~reformql.schema.record.Struct` and
:class:`~reformql.schema.record.Record` base classes are one implementation.

The hook protocols are opt-in per type: the engine checks for them with
``isinstance`` on every call and invokes them only when present.  A hook
signals failure by raising; the exception aborts the operation before any
SQL is built.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from reformql.schema.descriptor import Table, View


@runtime_checkable
class StructLike(Protocol):
    """A row of some view: ordered values matching ``view().columns``."""

    def view(self) -> View: ...

    def values(self) -> list[Any]: ...


@runtime_checkable
class RecordLike(StructLike, Protocol):
    """A row of a table, identified by its primary key."""

    def table(self) -> Table: ...

    def has_pk(self) -> bool: ...

    def pk_value(self) -> Any: ...

    def set_pk(self, value: Any) -> None: ...


@runtime_checkable
class Loadable(Protocol):
    """A mapped type that can be built from, or refreshed with, a row."""

    @classmethod
    def from_values(cls, values: Sequence[Any]) -> Any: ...

    def set_values(self, values: Sequence[Any]) -> None: ...


@runtime_checkable
class BeforeInserter(Protocol):
    """Optional hook run before INSERT."""

    def before_insert(self) -> None: ...


@runtime_checkable
class BeforeUpdater(Protocol):
    """Optional hook run before UPDATE."""

    def before_update(self) -> None: ...
