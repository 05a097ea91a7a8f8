"""Unit tests for the paired column/value transforms."""

from __future__ import annotations

import pytest

from reformql.errors import (
    ErrorKind,
    InvariantViolationError,
    NothingToUpdateError,
    ReformError,
    UnexpectedColumnsError,
)
from reformql.querier.columns import check_aligned, cut_index, pick_columns

COLUMNS = ["name", "id", "start", "end"]
VALUES = ["Alpha", "alpha", "2024-01-01", None]


def test_cut_index_keeps_pairs_aligned():
    columns, values = cut_index(COLUMNS, VALUES, 1)
    assert columns == ["name", "start", "end"]
    assert values == ["Alpha", "2024-01-01", None]


def test_cut_first_and_last():
    assert cut_index(COLUMNS, VALUES, 0) == (["id", "start", "end"], ["alpha", "2024-01-01", None])
    assert cut_index(COLUMNS, VALUES, 3) == (["name", "id", "start"], ["Alpha", "alpha", "2024-01-01"])


def test_cut_index_does_not_mutate_inputs():
    columns, values = list(COLUMNS), list(VALUES)
    cut_index(columns, values, 2)
    assert columns == COLUMNS
    assert values == VALUES


def test_cut_index_rejects_misaligned_sequences():
    with pytest.raises(InvariantViolationError):
        cut_index(COLUMNS, VALUES[:3], 0)


def test_invariant_violation_is_not_a_reform_error():
    with pytest.raises(InvariantViolationError) as exc_info:
        check_aligned(["a"], [])
    assert not isinstance(exc_info.value, ReformError)
    assert exc_info.value.kind is ErrorKind.INVARIANT


def test_pick_columns_in_descriptor_order():
    columns, values = pick_columns(COLUMNS, VALUES, ["end", "name"])
    assert columns == ["name", "end"]
    assert values == ["Alpha", None]


def test_pick_columns_ignores_duplicates():
    columns, _ = pick_columns(COLUMNS, VALUES, ["name", "name"])
    assert columns == ["name"]


def test_pick_columns_reports_every_unexpected_name():
    with pytest.raises(UnexpectedColumnsError) as exc_info:
        pick_columns(COLUMNS, VALUES, ["name", "owner", "budget"])
    assert exc_info.value.columns == ["budget", "owner"]
    assert exc_info.value.kind is ErrorKind.UNEXPECTED_COLUMNS


def test_pick_columns_skips_primary_key():
    columns, _ = pick_columns(COLUMNS, VALUES, ["id", "start"], skip="id")
    assert columns == ["start"]


def test_pick_only_skipped_column_is_nothing_to_update():
    with pytest.raises(NothingToUpdateError):
        pick_columns(COLUMNS, VALUES, ["id"], skip="id")


def test_pick_nothing_is_nothing_to_update():
    with pytest.raises(NothingToUpdateError):
        pick_columns(COLUMNS, VALUES, [])
