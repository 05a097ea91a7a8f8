"""Paired column/value sequence transforms.

Statement builders work on two parallel sequences, descriptor columns and
record values, whose positions must stay aligned.  These helpers are the
only place the pairs are cut or filtered.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from reformql.errors import (
    InvariantViolationError,
    NothingToUpdateError,
    UnexpectedColumnsError,
)


def check_aligned(columns: Sequence[str], values: Sequence[Any]) -> None:
    """Raise :class:`InvariantViolationError` unless both sequences have equal length."""
    if len(columns) != len(values):
        raise InvariantViolationError(
            f"reform: {len(columns)} columns but {len(values)} values; "
            "values() does not match the descriptor"
        )


def cut_index(
    columns: Sequence[str],
    values: Sequence[Any],
    index: int,
) -> tuple[list[str], list[Any]]:
    """Return copies of both sequences without position ``index``.

    Raises:
        InvariantViolationError: If the sequences are not the same length.
    """
    check_aligned(columns, values)
    cut_columns = [c for i, c in enumerate(columns) if i != index]
    cut_values = [v for i, v in enumerate(values) if i != index]
    check_aligned(cut_columns, cut_values)
    return cut_columns, cut_values


def pick_columns(
    columns: Sequence[str],
    values: Sequence[Any],
    requested: Iterable[str],
    *,
    skip: str | None = None,
) -> tuple[list[str], list[Any]]:
    """Select the ``requested`` columns and their values, in descriptor order.

    Args:
        columns: All descriptor columns.
        values: Values aligned with ``columns``.
        requested: Column names to keep; duplicates are ignored.
        skip: A column that is never selected even when requested
            (the primary key for UPDATE).

    Raises:
        UnexpectedColumnsError: If a requested name is not a descriptor
            column.  Every offending name is reported.
        NothingToUpdateError: If nothing is left to select.
    """
    check_aligned(columns, values)
    wanted = set(requested)
    unexpected = sorted(wanted - set(columns))
    if unexpected:
        raise UnexpectedColumnsError(unexpected)

    picked_columns: list[str] = []
    picked_values: list[Any] = []
    for column, value in zip(columns, values):
        if column in wanted and column != skip:
            picked_columns.append(column)
            picked_values.append(value)

    if not picked_values:
        raise NothingToUpdateError()
    return picked_columns, picked_values
