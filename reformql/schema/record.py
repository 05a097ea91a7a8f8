"""Pydantic base classes for mapped records, and the descriptor generator.

Declare a mapped type by subclassing :class:`Record` (table with primary key)
or :class:`Struct` (view without one) and marking fields with
:class:`Column`::

    from typing import Annotated

    from reformql import Column, Record

    class Person(Record):
        __tablename__ = "people"

        id: Annotated[int | None, Column("id", pk=True)] = None
        name: Annotated[str, Column("name")]
        email: Annotated[str | None, Column("email")] = None

    Person.table()   # Table(name='people', columns=('id', 'name', 'email'), ...)

The descriptor is generated exactly once, when the class is created, and
stored as an immutable :class:`~reformql.schema.descriptor.View` or
:class:`~reformql.schema.descriptor.Table`.  Nothing is introspected while
statements run.  Fields without a ``Column`` marker are not mapped.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel

from reformql.errors import DescriptorError, InvariantViolationError
from reformql.schema.descriptor import Table, View


@dataclass(frozen=True)
class Column:
    """Field marker: map this field to column ``name``.

    Attributes:
        name: Column name in the database.
        pk: Whether this field is the primary key.
    """

    name: str
    pk: bool = False


def generate_descriptor(
    name: str,
    columns: Sequence[tuple[str, Column]],
    *,
    schema_name: str | None = None,
    type_name: str | None = None,
) -> tuple[tuple[str, ...], View]:
    """Build a descriptor from ``(field_name, Column)`` pairs.

    Args:
        name: Relation name.
        columns: Mapped fields in declaration order.
        schema_name: Optional schema for the relation.
        type_name: Name of the mapped type, used in error messages.

    Returns:
        The field names in column order, and a :class:`Table` if exactly one
        column is marked as primary key, else a :class:`View`.

    Raises:
        DescriptorError: For duplicate column names, several primary keys,
            or no columns at all.
    """
    if not columns:
        raise DescriptorError(f"{type_name or name}: no mapped columns", type_name)

    seen: set[str] = set()
    pk_indexes: list[int] = []
    for i, (_, col) in enumerate(columns):
        if col.name in seen:
            raise DescriptorError(
                f"{type_name or name}: duplicate column name '{col.name}'", type_name
            )
        seen.add(col.name)
        if col.pk:
            pk_indexes.append(i)

    if len(pk_indexes) > 1:
        raise DescriptorError(
            f"{type_name or name}: multiple primary key columns "
            f"{[columns[i][1].name for i in pk_indexes]}; composite keys are not supported",
            type_name,
        )

    fields = tuple(field for field, _ in columns)
    column_names = tuple(col.name for _, col in columns)
    if pk_indexes:
        return fields, Table(
            name=name,
            columns=column_names,
            schema_name=schema_name,
            pk_column_index=pk_indexes[0],
        )
    return fields, View(name=name, columns=column_names, schema_name=schema_name)


def _is_zero(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (int, float, str, bytes)) and not isinstance(value, bool):
        return not value
    return False


class Struct(BaseModel):
    """Base class for types mapped to a view.

    Class attributes:
        __tablename__: Relation name; subclasses without it are abstract.
        __schemaname__: Optional schema name.
    """

    __tablename__: ClassVar[str | None] = None
    __schemaname__: ClassVar[str | None] = None
    __view__: ClassVar[View]
    __reform_fields__: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if "__tablename__" not in cls.__dict__:
            return

        mapped: list[tuple[str, Column]] = []
        for field_name, info in cls.model_fields.items():
            markers = [m for m in info.metadata if isinstance(m, Column)]
            if len(markers) > 1:
                raise DescriptorError(
                    f"{cls.__name__}.{field_name}: more than one Column marker",
                    cls.__name__,
                )
            if markers:
                mapped.append((field_name, markers[0]))

        fields, view = generate_descriptor(
            cls.__tablename__,
            mapped,
            schema_name=cls.__schemaname__,
            type_name=cls.__name__,
        )
        cls._check_descriptor(view)
        cls.__reform_fields__ = fields
        cls.__view__ = view

    @classmethod
    def _check_descriptor(cls, view: View) -> None:
        if isinstance(view, Table):
            raise DescriptorError(
                f"{cls.__name__}: primary key declared on a Struct; subclass Record instead",
                cls.__name__,
            )

    @classmethod
    def view(cls) -> View:
        """Returns the descriptor of this type."""
        try:
            return cls.__view__
        except AttributeError:
            raise DescriptorError(
                f"{cls.__name__} has no __tablename__ and is not mapped", cls.__name__
            ) from None

    def values(self) -> list[Any]:
        """Returns column values in descriptor order."""
        return [getattr(self, field) for field in self.__reform_fields__]

    @classmethod
    def from_values(cls, values: Sequence[Any]) -> Any:
        """Build an instance from a row in descriptor order."""
        if len(values) != len(cls.__reform_fields__):
            raise InvariantViolationError(
                f"reform: {cls.__name__} expects {len(cls.__reform_fields__)} values, "
                f"got {len(values)}"
            )
        return cls.model_validate(dict(zip(cls.__reform_fields__, values)))

    def set_values(self, values: Sequence[Any]) -> None:
        """Overwrite every mapped field from a row in descriptor order."""
        loaded = self.from_values(values)
        for field in self.__reform_fields__:
            setattr(self, field, getattr(loaded, field))


class Record(Struct):
    """Base class for types mapped to a table with a primary key."""

    __view__: ClassVar[Table]

    @classmethod
    def _check_descriptor(cls, view: View) -> None:
        if not isinstance(view, Table):
            raise DescriptorError(
                f"{cls.__name__}: Record requires exactly one primary key column",
                cls.__name__,
            )

    @classmethod
    def table(cls) -> Table:
        """Returns the table descriptor of this type."""
        return cls.view()  # type: ignore[return-value]

    def _pk_field(self) -> str:
        return self.__reform_fields__[self.table().pk_column_index]

    def has_pk(self) -> bool:
        """Returns ``True`` if the primary key holds a non-zero value."""
        return not _is_zero(self.pk_value())

    def pk_value(self) -> Any:
        """Returns the primary-key value."""
        return getattr(self, self._pk_field())

    def set_pk(self, value: Any) -> None:
        """Sets the primary-key value."""
        setattr(self, self._pk_field(), value)
